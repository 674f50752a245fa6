"""Sphere fitting and evenly spread viewing poses on a sphere."""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Sequence

import numpy as np

from ur3views.messages import Header, Point, Pose, PoseStamped, Quaternion

_UNIT_X = np.array([1.0, 0.0, 0.0])
_UNIT_Y = np.array([0.0, 1.0, 0.0])


def _position(sample: PoseStamped) -> np.ndarray:
    p = sample.pose.position
    return np.array([p.x, p.y, p.z], dtype=float)


def _normalized(vector: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vector)
    return vector / norm if norm > 0.0 else vector


def fit_sphere_ls(samples: Sequence[PoseStamped]) -> tuple[np.ndarray, float]:
    """Least-squares sphere through the sample positions.

    Returns ``(centre, radius)``; raises ValueError with fewer than four samples.
    """
    points = [_position(s) for s in samples]
    if len(points) < 4:
        raise ValueError(f"need at least 4 poses to fit a sphere, got {len(points)}")
    p0 = points[0]
    rest = np.array(points[1:])
    a = 2.0 * (rest - p0)
    b = np.einsum("ij,ij->i", rest, rest) - p0 @ p0
    centre, *_ = np.linalg.lstsq(a, b, rcond=None)
    radius = float(np.linalg.norm(p0 - centre))
    return centre, radius


def quaternion_from_matrix(matrix) -> Quaternion:
    """Quaternion of a 3x3 rotation matrix."""
    m = np.asarray(matrix, dtype=float)
    if m.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {m.shape}")
    diagonal_sum = float(m[0, 0] + m[1, 1] + m[2, 2])
    if diagonal_sum > 0.0:
        t = math.sqrt(diagonal_sum + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        return Quaternion(
            x=float((m[2, 1] - m[1, 2]) * t),
            y=float((m[0, 2] - m[2, 0]) * t),
            z=float((m[1, 0] - m[0, 1]) * t),
            w=w,
        )
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    xyz = [0.0, 0.0, 0.0]
    xyz[i] = 0.5 * t
    t = 0.5 / t
    w = (m[k, j] - m[j, k]) * t
    xyz[j] = (m[j, i] + m[i, j]) * t
    xyz[k] = (m[k, i] + m[i, k]) * t
    return Quaternion(x=float(xyz[0]), y=float(xyz[1]), z=float(xyz[2]), w=float(w))


def sample_sphere(
    centre,
    radius: float,
    frame_id: str,
    clock: Callable[[], float] = time.time,
    m: int = 10,
) -> list[PoseStamped]:
    """Spread ``m`` viewing poses over a sphere on a golden-angle spiral.

    Each pose's Z axis points at the centre; its X axis is built from world +Y.
    """
    c = np.asarray(centre, dtype=float).reshape(3)
    golden = math.pi * (3.0 - math.sqrt(5.0))
    poses = []
    for k in range(m):
        i = k + 0.5
        y = 1.0 - (2.0 * i) / m
        r = math.sqrt(1.0 - y * y)
        phi = golden * i
        direction = np.array([r * math.cos(phi), r * math.sin(phi), y])
        pos = c + radius * direction

        z_axis = _normalized(c - pos)
        x_axis = np.cross(z_axis, _UNIT_Y)
        if np.linalg.norm(x_axis) < 1e-6:
            x_axis = np.cross(z_axis, _UNIT_X)
        x_axis = _normalized(x_axis)
        y_axis = _normalized(np.cross(z_axis, x_axis))
        rotation = np.column_stack((x_axis, y_axis, z_axis))

        poses.append(
            PoseStamped(
                header=Header(frame_id=frame_id, stamp=float(clock())),
                pose=Pose(
                    position=Point(float(pos[0]), float(pos[1]), float(pos[2])),
                    orientation=quaternion_from_matrix(rotation),
                ),
            )
        )
    return poses