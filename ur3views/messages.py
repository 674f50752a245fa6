"""Plain message types for poses, transforms, markers and joint trajectories."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar


@dataclass
class Point:
    """A point or 3-vector in space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Quaternion:
    """An orientation as a quaternion; defaults to the identity rotation."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass
class Pose:
    """A position together with an orientation."""

    position: Point = field(default_factory=Point)
    orientation: Quaternion = field(default_factory=Quaternion)


@dataclass
class Header:
    """Reference frame and time stamp (seconds) of a message."""

    frame_id: str = ""
    stamp: float = 0.0


@dataclass
class PoseStamped:
    """A pose expressed in the frame named by its header."""

    header: Header = field(default_factory=Header)
    pose: Pose = field(default_factory=Pose)


@dataclass
class PoseArray:
    """Several poses sharing one header."""

    header: Header = field(default_factory=Header)
    poses: list[Pose] = field(default_factory=list)


@dataclass
class TransformStamped:
    """Transform of ``child_frame_id`` expressed in ``header.frame_id``."""

    header: Header = field(default_factory=Header)
    child_frame_id: str = ""
    translation: Point = field(default_factory=Point)
    rotation: Quaternion = field(default_factory=Quaternion)


@dataclass
class ColorRGBA:
    """A colour with alpha, each channel in [0, 1]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0


class MarkerType(IntEnum):
    """Shapes a visualisation marker can take."""

    ARROW = 0
    CUBE = 1
    SPHERE = 2
    CYLINDER = 3
    LINE_STRIP = 4
    LINE_LIST = 5
    CUBE_LIST = 6
    SPHERE_LIST = 7
    POINTS = 8
    TEXT_VIEW_FACING = 9
    MESH_RESOURCE = 10
    TRIANGLE_LIST = 11


@dataclass
class Marker:
    """A visualisation marker."""

    ADD: ClassVar[int] = 0
    DELETE: ClassVar[int] = 2
    DELETEALL: ClassVar[int] = 3

    header: Header = field(default_factory=Header)
    ns: str = ""
    id: int = 0
    type: MarkerType = MarkerType.ARROW
    action: int = 0
    pose: Pose = field(default_factory=Pose)
    scale: Point = field(default_factory=Point)
    color: ColorRGBA = field(default_factory=ColorRGBA)
    points: list[Point] = field(default_factory=list)


@dataclass
class MarkerArray:
    """A batch of markers published together."""

    markers: list[Marker] = field(default_factory=list)


@dataclass
class JointTrajectoryPoint:
    """Joint positions to be reached ``time_from_start`` seconds into a trajectory."""

    positions: list[float] = field(default_factory=list)
    time_from_start: float = 0.0


@dataclass
class JointTrajectory:
    """A sequence of joint-space waypoints for named joints."""

    header: Header = field(default_factory=Header)
    joint_names: list[str] = field(default_factory=list)
    points: list[JointTrajectoryPoint] = field(default_factory=list)


@dataclass
class FollowJointTrajectoryGoal:
    """Goal asking a controller to follow a joint trajectory."""

    trajectory: JointTrajectory = field(default_factory=JointTrajectory)


@dataclass
class TriggerResult:
    """Outcome of a trigger request."""

    success: bool = False
    message: str = ""