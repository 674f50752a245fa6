"""Solve inverse kinematics for desired poses and send them one at a time."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable, Sequence
from typing import Any

from ur3views.messages import (
    FollowJointTrajectoryGoal,
    Header,
    JointTrajectory,
    JointTrajectoryPoint,
    PoseArray,
    PoseStamped,
    TriggerResult,
)
from ur3views.trajectory import JOINT_NAMES

logger = logging.getLogger(__name__)

JOINT_COUNT = 6


class IKError(Exception):
    """No inverse-kinematics solution was found."""


class IKSolver:
    """Inverse kinematics for a six-joint planning group.

    ``backend(pose, planning_group, timeout)`` returns joint positions, or
    ``None`` when no solution exists.
    """

    def __init__(
        self,
        backend: Callable[[Any, str, float], Sequence[float] | None],
        planning_group: str = "ur_manipulator",
        timeout: float = 0.05,
    ) -> None:
        if not planning_group:
            raise ValueError("IK solver needs a planning group")
        self.backend = backend
        self.planning_group = planning_group
        self.timeout = timeout

    def solve(self, pose: PoseStamped) -> tuple[float, ...]:
        """Joint positions reaching ``pose``; raises IKError if none exist."""
        solution = self.backend(pose.pose, self.planning_group, self.timeout)
        if solution is None:
            raise IKError("no IK solution for pose")
        joints = tuple(float(q) for q in solution)
        if len(joints) != JOINT_COUNT:
            raise ValueError(f"expected {JOINT_COUNT} joint values, got {len(joints)}")
        return joints


class IKQueueExecutor:
    """Queues IK solutions of incoming poses and executes them on request.

    ``action_client`` must offer ``wait_for_server(timeout) -> bool`` and
    ``send_goal(goal)``. ``ik`` may be assigned after construction.
    """

    def __init__(
        self,
        action_client: Any,
        *,
        ik: IKSolver | None = None,
        dt: float = 0.5,
        server_timeout: float = 1.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.action_client = action_client
        self.ik = ik
        self.dt = dt
        self.server_timeout = server_timeout
        self.clock = clock
        self._queue: deque[JointTrajectoryPoint] = deque()
        self._lock = threading.Lock()
        logger.info("IKQueueExecutor ready")

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def on_poses(self, msg: PoseArray) -> int:
        """Solve IK for each pose and queue the solutions; returns how many were added."""
        if self.ik is None:
            logger.warning("IK not ready yet")
            return 0
        added = 0
        with self._lock:
            for pose in msg.poses:
                stamped = PoseStamped(header=msg.header, pose=pose)
                try:
                    joints = self.ik.solve(stamped)
                except IKError:
                    logger.warning("IK failed - skipping pose")
                    continue
                self._queue.append(
                    JointTrajectoryPoint(positions=list(joints), time_from_start=self.dt)
                )
                added += 1
            size = len(self._queue)
        logger.info("Queued %d new trajectory points (queue size = %d)", added, size)
        return added

    def execute_next(self) -> TriggerResult:
        """Send the oldest queued point as a one-point trajectory."""
        if not self.action_client.wait_for_server(self.server_timeout):
            return TriggerResult(success=False, message="Action server not available")
        with self._lock:
            if not self._queue:
                return TriggerResult(success=False, message="Queue empty")
            point = self._queue.popleft()
            remaining = len(self._queue)
        trajectory = JointTrajectory(
            header=Header(stamp=float(self.clock())),
            joint_names=list(JOINT_NAMES),
            points=[point],
        )
        self.action_client.send_goal(FollowJointTrajectoryGoal(trajectory=trajectory))
        logger.info("Sent trajectory; remaining queue size = %d", remaining)
        return TriggerResult(success=True, message="Sent 1-point trajectory")