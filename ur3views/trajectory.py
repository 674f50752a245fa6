"""Joint trajectories that send a UR arm to its home configuration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ur3views.messages import (
    FollowJointTrajectoryGoal,
    JointTrajectory,
    JointTrajectoryPoint,
)

logger = logging.getLogger(__name__)

JOINT_NAMES = (
    "shoulder_pan_joint",
    "shoulder_lift_joint",
    "elbow_joint",
    "wrist_1_joint",
    "wrist_2_joint",
    "wrist_3_joint",
)
HOME_POSITIONS = (0.0, -1.57, 1.57, 0.0, 1.57, 0.0)
HOME_DURATION = 2.0
TRAJECTORY_TOPIC = "/joint_trajectory_controller/joint_trajectory"
ACTION_NAME = "/joint_trajectory_controller/follow_joint_trajectory"


def home_trajectory() -> JointTrajectory:
    """A one-point trajectory reaching the home configuration after two seconds."""
    return JointTrajectory(
        joint_names=list(JOINT_NAMES),
        points=[
            JointTrajectoryPoint(
                positions=list(HOME_POSITIONS), time_from_start=HOME_DURATION
            )
        ],
    )


def home_goal() -> FollowJointTrajectoryGoal:
    """A follow-trajectory goal wrapping :func:`home_trajectory`."""
    return FollowJointTrajectoryGoal(trajectory=home_trajectory())


def publish_home_trajectory(publish: Callable[[JointTrajectory], Any]) -> JointTrajectory:
    """Hand the home trajectory to ``publish`` and return it."""
    message = home_trajectory()
    publish(message)
    logger.info("Published trajectory message")
    return message


class TrajectoryActionClient:
    """Sends the home trajectory through a follow-joint-trajectory action client.

    ``client`` must offer ``wait_for_server(timeout) -> bool`` and
    ``send_goal(goal, on_goal_response, on_result)``.
    """

    def __init__(
        self,
        client: Any,
        *,
        server_timeout: float = 5.0,
        on_shutdown: Callable[[], Any] | None = None,
    ) -> None:
        self.client = client
        self.server_timeout = server_timeout
        self.on_shutdown = on_shutdown
        self.goal_accepted: bool | None = None
        self.result_code: int | None = None

    def send_home(self) -> FollowJointTrajectoryGoal:
        """Send the home goal; raises TimeoutError if the server never appears."""
        if not self.client.wait_for_server(self.server_timeout):
            logger.error("Action server not available")
            raise TimeoutError("Action server not available")
        goal = home_goal()
        self.client.send_goal(goal, self.on_goal_response, self.on_result)
        return goal

    def on_goal_response(self, handle: Any) -> bool:
        """Record whether the goal was accepted; ``None`` means rejected."""
        self.goal_accepted = handle is not None
        if self.goal_accepted:
            logger.info("Goal accepted")
        else:
            logger.error("Goal rejected")
        return self.goal_accepted

    def on_result(self, code: int) -> None:
        """Record the result code and shut down."""
        self.result_code = int(code)
        logger.info("Trajectory result received: %d", self.result_code)
        if self.on_shutdown is not None:
            self.on_shutdown()