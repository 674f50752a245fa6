"""A buffer of frame transforms and lookup of the tool (TCP) pose."""

from __future__ import annotations

import copy
import logging
import threading
import time
from collections.abc import Callable

import numpy as np

from ur3views.interpolation import quaternion_from_matrix
from ur3views.messages import Header, Point, PoseStamped, Quaternion, TransformStamped

logger = logging.getLogger(__name__)


class TransformError(Exception):
    """A transform between two frames cannot be found."""


def _rotation_matrix(q: Quaternion) -> np.ndarray:
    norm = np.sqrt(q.w * q.w + q.x * q.x + q.y * q.y + q.z * q.z)
    if norm == 0.0:
        raise TransformError("rotation quaternion has zero length")
    w, x, y, z = q.w / norm, q.x / norm, q.y / norm, q.z / norm
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ]
    )


class TransformBuffer:
    """Holds the latest transform of every frame relative to its parent."""

    def __init__(self) -> None:
        self._by_child: dict[str, TransformStamped] = {}
        self._changed = threading.Condition()

    def set_transform(self, transform: TransformStamped) -> None:
        """Store ``transform`` as the current parent link of its child frame."""
        parent = transform.header.frame_id
        child = transform.child_frame_id
        if not parent or not child:
            raise TransformError("transform needs both a parent and a child frame")
        if parent == child:
            raise TransformError(f"frame {parent!r} cannot be its own parent")
        with self._changed:
            self._by_child[child] = copy.deepcopy(transform)
            self._changed.notify_all()

    def can_transform(self, target_frame: str, source_frame: str) -> bool:
        """Whether the transform is available now."""
        return self._await_transform(target_frame, source_frame, 0.0)

    def _await_transform(self, target_frame: str, source_frame: str, timeout: float) -> bool:
        deadline = time.monotonic() + timeout
        with self._changed:
            while True:
                try:
                    self._resolve(target_frame, source_frame)
                    return True
                except TransformError:
                    pass
                remaining = deadline - time.monotonic()
                if remaining <= 0.0:
                    return False
                self._changed.wait(remaining)

    def lookup_transform(self, target_frame: str, source_frame: str) -> TransformStamped:
        """Latest transform of ``source_frame`` expressed in ``target_frame``."""
        with self._changed:
            rotation, translation, stamp = self._resolve(target_frame, source_frame)
        return TransformStamped(
            header=Header(frame_id=target_frame, stamp=stamp),
            child_frame_id=source_frame,
            translation=Point(*(float(v) for v in translation)),
            rotation=quaternion_from_matrix(rotation),
        )

    def _known(self, frame: str) -> bool:
        return frame in self._by_child or any(
            tf.header.frame_id == frame for tf in self._by_child.values()
        )

    def _chain_to_root(self, frame: str):
        rotation = np.eye(3)
        translation = np.zeros(3)
        stamps: list[float] = []
        current = frame
        seen = {frame}
        while current in self._by_child:
            tf = self._by_child[current]
            r = _rotation_matrix(tf.rotation)
            t = np.array([tf.translation.x, tf.translation.y, tf.translation.z])
            translation = r @ translation + t
            rotation = r @ rotation
            stamps.append(tf.header.stamp)
            current = tf.header.frame_id
            if current in seen:
                raise TransformError(f"frame tree has a cycle through {current!r}")
            seen.add(current)
        return current, rotation, translation, stamps

    def _resolve(self, target_frame: str, source_frame: str):
        for frame in (target_frame, source_frame):
            if not frame:
                raise TransformError("frame name is empty")
        if target_frame == source_frame:
            return np.eye(3), np.zeros(3), 0.0
        for frame in (target_frame, source_frame):
            if not self._known(frame):
                raise TransformError(f"frame {frame!r} does not exist")
        root_s, rot_s, trans_s, stamps_s = self._chain_to_root(source_frame)
        root_t, rot_t, trans_t, stamps_t = self._chain_to_root(target_frame)
        if root_s != root_t:
            raise TransformError(
                f"frames {target_frame!r} and {source_frame!r} are not connected"
            )
        rotation = rot_t.T @ rot_s
        translation = rot_t.T @ (trans_s - trans_t)
        stamp = min(stamps_s + stamps_t, default=0.0)
        return rotation, translation, stamp


class PoseUtils:
    """Reads the current tool pose relative to the base frame."""

    def __init__(
        self,
        buffer: TransformBuffer,
        base_frame: str = "base_link",
        tcp_frame: str = "tool0",
        *,
        clock: Callable[[], float] = time.time,
        timeout: float = 0.1,
    ) -> None:
        self.buffer = buffer
        self.base_frame = base_frame
        self.tcp_frame = tcp_frame
        self.clock = clock
        self.timeout = timeout

    def current_tcp(self) -> PoseStamped:
        """The TCP pose in the base frame.

        If the transform is unavailable a warning is logged and an identity
        pose in the base frame, stamped now, is returned.
        """
        pose = PoseStamped(header=Header(frame_id=self.base_frame, stamp=float(self.clock())))
        try:
            available = self.buffer._await_transform(
                self.base_frame, self.tcp_frame, self.timeout
            )
            if not available:
                logger.warning(
                    "Transform %s->%s not available after %.0fms",
                    self.base_frame,
                    self.tcp_frame,
                    self.timeout * 1000.0,
                )
                return pose
            tf = self.buffer.lookup_transform(self.base_frame, self.tcp_frame)
        except TransformError as exc:
            logger.warning("TF lookup failed: %s", exc)
            return pose
        pose.header.stamp = tf.header.stamp
        pose.pose.position = Point(tf.translation.x, tf.translation.y, tf.translation.z)
        pose.pose.orientation = tf.rotation
        return pose