import math

import pytest

from ur3views.capture import CaptureInterpolateNode, make_color
from ur3views.messages import Header, MarkerType, Point, Pose, PoseStamped

CENTRE = (1.0, 2.0, 3.0)
RADIUS = 5.0
SPHERE_POINTS = [
    (6.0, 2.0, 3.0),
    (1.0, 7.0, 3.0),
    (1.0, 2.0, 8.0),
    (1.0, 2.0, -2.0),
]


class _FakePoseUtils:
    base_frame = "base_link"

    def __init__(self, positions):
        self._positions = iter(positions)

    def current_tcp(self):
        x, y, z = next(self._positions)
        return PoseStamped(
            header=Header(frame_id="base_link", stamp=1.0),
            pose=Pose(position=Point(x, y, z)),
        )


def _node(positions, **kwargs):
    out = {"views": [], "captured": [], "markers": []}
    node = CaptureInterpolateNode(
        _FakePoseUtils(positions),
        publish_views=out["views"].append,
        publish_captured=out["captured"].append,
        publish_markers=out["markers"].append,
        clock=lambda: 1.0,
        **kwargs,
    )
    return node, out


def test_make_color_channels():
    c = make_color(1, 0, 0, 1)
    assert (c.r, c.g, c.b, c.a) == (1.0, 0.0, 0.0, 1.0)


def test_reference_sphere_published_on_start():
    _, out = _node([])
    assert len(out["markers"]) == 1
    (marker,) = out["markers"][0].markers
    assert marker.ns == "reference"
    assert marker.id == 99
    assert marker.type == MarkerType.SPHERE
    assert marker.header.frame_id == "base_link"
    assert marker.scale.x == pytest.approx(0.40)
    assert marker.pose.position == Point(0.3, 0.3, 0.3)
    assert marker.color == make_color(1, 1, 0, 0.15)


def test_capture_counts_and_publishes():
    node, out = _node(SPHERE_POINTS)
    assert node.capture().message == "Pose captured (1)"
    result = node.capture()
    assert result.success is True
    assert result.message == "Pose captured (2)"
    assert len(out["captured"]) == 2
    latest = out["captured"][-1]
    assert [p.position for p in latest.poses] == [Point(*SPHERE_POINTS[0]), Point(*SPHERE_POINTS[1])]
    assert latest.header.frame_id == "base_link"


def test_compute_needs_four_poses():
    node, out = _node(SPHERE_POINTS)
    for _ in range(3):
        node.capture()
    result = node.compute_views()
    assert result.success is False
    assert result.message == "Need ≥4 poses to fit sphere"
    assert out["views"] == []


def test_compute_views_on_sphere():
    node, out = _node(SPHERE_POINTS)
    for _ in SPHERE_POINTS:
        node.capture()
    result = node.compute_views()
    assert result.success is True
    assert result.message == "Published 10 poses on sphere"
    (views,) = out["views"]
    assert len(views.poses) == 10
    assert views.header.frame_id == "base_link"
    for pose in views.poses:
        p = pose.position
        d = math.dist((p.x, p.y, p.z), CENTRE)
        assert d == pytest.approx(RADIUS, abs=1e-6)


def test_compute_views_markers():
    node, out = _node(SPHERE_POINTS)
    for _ in SPHERE_POINTS:
        node.capture()
    node.compute_views()
    captured, sampled, sphere = out["markers"][-1].markers
    assert (captured.ns, captured.id, captured.type) == ("captured", 0, MarkerType.SPHERE_LIST)
    assert captured.points == [Point(*p) for p in SPHERE_POINTS]
    assert captured.scale.x == pytest.approx(0.015)
    assert captured.color == make_color(1, 0, 0, 1)
    assert (sampled.ns, sampled.id) == ("sampled", 1)
    assert len(sampled.points) == 10
    assert sampled.color == make_color(0, 1, 0, 1)
    assert sphere.type == MarkerType.SPHERE
    pos = sphere.pose.position
    assert (pos.x, pos.y, pos.z) == pytest.approx(CENTRE, abs=1e-6)
    assert sphere.scale.x == pytest.approx(2 * RADIUS, abs=1e-6)


def test_sample_count_parameter():
    node, out = _node(SPHERE_POINTS, samples=6)
    for _ in SPHERE_POINTS:
        node.capture()
    result = node.compute_views()
    assert len(out["views"][0].poses) == 6
    assert result.message == "Published 6 poses on sphere"