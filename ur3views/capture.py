"""Capture tool poses, fit a sphere through them and publish viewing poses."""

from __future__ import annotations

import copy
import logging
import time
from collections.abc import Callable
from typing import Any

from ur3views.interpolation import fit_sphere_ls, sample_sphere
from ur3views.messages import (
    ColorRGBA,
    Header,
    Marker,
    MarkerArray,
    MarkerType,
    Point,
    Pose,
    PoseArray,
    PoseStamped,
    TriggerResult,
)

logger = logging.getLogger(__name__)


def make_color(r: float, g: float, b: float, a: float) -> ColorRGBA:
    """An RGBA colour."""
    return ColorRGBA(r=float(r), g=float(g), b=float(b), a=float(a))


class CaptureInterpolateNode:
    """Collects TCP poses and turns them into viewing poses on a fitted sphere.

    ``pose_utils`` must provide ``current_tcp()`` and ``base_frame``. The
    ``publish_*`` callables, where given, receive the outgoing messages.
    """

    def __init__(
        self,
        pose_utils: Any,
        *,
        samples: int = 10,
        publish_views: Callable[[PoseArray], Any] | None = None,
        publish_captured: Callable[[PoseArray], Any] | None = None,
        publish_markers: Callable[[MarkerArray], Any] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.pose_utils = pose_utils
        self.samples = samples
        self.clock = clock
        self.poses: list[PoseStamped] = []
        self._publish_views = publish_views
        self._publish_captured = publish_captured
        self._publish_markers = publish_markers
        self.reference_sphere()
        logger.info("CaptureInterpolateNode ready.")

    @staticmethod
    def _emit(publisher: Callable[[Any], Any] | None, message: Any) -> None:
        if publisher is not None:
            publisher(message)

    def reference_sphere(self) -> MarkerArray:
        """Publish and return a translucent guide sphere in the base frame."""
        marker = Marker(
            header=Header(frame_id=self.pose_utils.base_frame, stamp=float(self.clock())),
            ns="reference",
            id=99,
            type=MarkerType.SPHERE,
            action=Marker.ADD,
            pose=Pose(position=Point(0.3, 0.3, 0.3)),
            scale=Point(0.40, 0.40, 0.40),
            color=make_color(1, 1, 0, 0.15),
        )
        markers = MarkerArray(markers=[marker])
        self._emit(self._publish_markers, markers)
        logger.info("Reference sphere published at (0.3,0.3,0.3) d=0.40")
        return markers

    def capture(self) -> TriggerResult:
        """Store the current TCP pose and publish all captured poses."""
        pose = self.pose_utils.current_tcp()
        self.poses.append(pose)
        self._emit(
            self._publish_captured,
            PoseArray(
                header=copy.deepcopy(pose.header),
                poses=[copy.deepcopy(p.pose) for p in self.poses],
            ),
        )
        pos = pose.pose.position
        logger.info(
            "Captured pose %d at [%.3f %.3f %.3f]", len(self.poses), pos.x, pos.y, pos.z
        )
        return TriggerResult(success=True, message=f"Pose captured ({len(self.poses)})")

    def compute_views(self) -> TriggerResult:
        """Fit a sphere to the captured poses and publish sampled views and markers."""
        try:
            centre, radius = fit_sphere_ls(self.poses)
        except ValueError:
            return TriggerResult(success=False, message="Need ≥4 poses to fit sphere")

        frame = self.poses[0].header.frame_id
        samples = sample_sphere(centre, radius, frame, self.clock, self.samples)

        self._emit(
            self._publish_views,
            PoseArray(
                header=Header(frame_id=frame, stamp=float(self.clock())),
                poses=[s.pose for s in samples],
            ),
        )

        stamp = float(self.clock())
        captured = Marker(
            header=Header(frame_id=frame, stamp=stamp),
            ns="captured",
            id=0,
            type=MarkerType.SPHERE_LIST,
            action=Marker.ADD,
            scale=Point(0.015, 0.015, 0.015),
            color=make_color(1, 0, 0, 1),
            points=[copy.deepcopy(p.pose.position) for p in self.poses],
        )
        sampled = copy.deepcopy(captured)
        sampled.ns = "sampled"
        sampled.id = 1
        sampled.color = make_color(0, 1, 0, 1)
        sampled.points = [copy.deepcopy(s.pose.position) for s in samples]

        diameter = radius * 2.0
        sphere = Marker(
            header=Header(frame_id=frame, stamp=stamp),
            ns="sphere",
            id=2,
            type=MarkerType.SPHERE,
            action=Marker.ADD,
            pose=Pose(position=Point(float(centre[0]), float(centre[1]), float(centre[2]))),
            scale=Point(diameter, diameter, diameter),
            color=make_color(0, 0, 1, 0.3),
        )
        self._emit(self._publish_markers, MarkerArray(markers=[captured, sampled, sphere]))

        logger.info(
            "Sphere centre [%.3f %.3f %.3f], radius %.3f, samples %d",
            centre[0],
            centre[1],
            centre[2],
            radius,
            self.samples,
        )
        return TriggerResult(
            success=True, message=f"Published {len(samples)} poses on sphere"
        )