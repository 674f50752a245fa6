import pytest

from ur3views.messages import FollowJointTrajectoryGoal, JointTrajectory
from ur3views.trajectory import (
    TrajectoryActionClient,
    home_goal,
    home_trajectory,
    publish_home_trajectory,
)

EXPECTED_JOINTS = [
    "shoulder_pan_joint",
    "shoulder_lift_joint",
    "elbow_joint",
    "wrist_1_joint",
    "wrist_2_joint",
    "wrist_3_joint",
]


class _FakeClient:
    def __init__(self, available=True):
        self.available = available
        self.sent = []
        self.timeouts = []

    def wait_for_server(self, timeout):
        self.timeouts.append(timeout)
        return self.available

    def send_goal(self, goal, on_goal_response=None, on_result=None):
        self.sent.append((goal, on_goal_response, on_result))


def test_home_trajectory_contents():
    traj = home_trajectory()
    assert traj.joint_names == EXPECTED_JOINTS
    assert len(traj.points) == 1
    assert traj.points[0].positions == [0.0, -1.57, 1.57, 0.0, 1.57, 0.0]
    assert traj.points[0].time_from_start == 2.0


def test_home_trajectory_returns_fresh_objects():
    first = home_trajectory()
    first.points[0].positions[0] = 9.0
    assert home_trajectory().points[0].positions[0] == 0.0


def test_home_goal_wraps_trajectory():
    goal = home_goal()
    assert isinstance(goal, FollowJointTrajectoryGoal)
    assert goal.trajectory == home_trajectory()


def test_publish_home_trajectory_calls_publisher():
    published = []
    msg = publish_home_trajectory(published.append)
    assert published == [msg]
    assert isinstance(msg, JointTrajectory)
    assert msg.joint_names == EXPECTED_JOINTS


def test_send_home_sends_goal_with_callbacks():
    fake = _FakeClient()
    client = TrajectoryActionClient(fake)
    goal = client.send_home()
    assert fake.timeouts == [5.0]
    assert len(fake.sent) == 1
    sent_goal, on_response, on_result = fake.sent[0]
    assert sent_goal == goal == home_goal()
    assert on_response == client.on_goal_response
    assert on_result == client.on_result


def test_send_home_without_server_raises():
    fake = _FakeClient(available=False)
    client = TrajectoryActionClient(fake)
    with pytest.raises(TimeoutError):
        client.send_home()
    assert fake.sent == []


def test_goal_response_accepted_and_rejected():
    client = TrajectoryActionClient(_FakeClient())
    assert client.on_goal_response(None) is False
    assert client.goal_accepted is False
    assert client.on_goal_response(object()) is True
    assert client.goal_accepted is True


def test_result_records_code_and_shuts_down():
    calls = []
    client = TrajectoryActionClient(_FakeClient(), on_shutdown=lambda: calls.append("down"))
    client.on_result(4)
    assert client.result_code == 4
    assert calls == ["down"]