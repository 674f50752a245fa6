"""Sphere fitting, viewpoint sampling and joint-trajectory queueing for a UR3 arm."""

__version__ = "0.1.0"

__all__ = ["capture", "ik_queue", "interpolation", "messages", "pose_utils", "trajectory"]