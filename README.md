# ur3views

Tools for planning camera or tool viewpoints around an object with a UR3 arm.

The workflow is:

1. Move the arm by hand to a few poses on the surface of an imaginary sphere
   around the object and capture the tool-centre-point (TCP) pose each time.
2. Fit a sphere through the captured positions by least squares.
3. Sample evenly spread viewing poses on that sphere, each with its Z axis
   pointing at the centre.
4. Turn each viewing pose into joint positions with an inverse-kinematics
   solver, queue them, and send them one at a time to the arm as single-point
   joint trajectories.

## Modules

- `ur3views.messages` holds plain data classes for the messages that pass
  between the steps: `Point`, `Quaternion`, `Pose`, `Header`, `PoseStamped`,
  `PoseArray`, `TransformStamped`, `ColorRGBA`, `MarkerType`, `Marker`,
  `MarkerArray`, `JointTrajectoryPoint`, `JointTrajectory`,
  `FollowJointTrajectoryGoal` and `TriggerResult`. Time stamps and durations
  are plain floats in seconds.
- `ur3views.interpolation` does the geometry:
  - `fit_sphere_ls(samples)` fits a sphere through four or more stamped poses
    and returns `(centre, radius)`, the centre as a NumPy array. Fewer than
    four poses raises `ValueError`.
  - `sample_sphere(centre, radius, frame_id, clock=time.time, m=10)` places
    `m` poses on the sphere along a golden-angle spiral. Each pose looks at the
    centre, with its X axis built from the world +Y direction; each is stamped
    by calling `clock()`.
  - `quaternion_from_matrix(matrix)` turns a 3×3 rotation matrix into a
    `Quaternion`; any other shape raises `ValueError`.
- `ur3views.pose_utils` keeps the latest transform of each frame relative to
  its parent in a `TransformBuffer` (`set_transform`, `can_transform`,
  `lookup_transform`), chaining transforms through the frame tree.
  `lookup_transform` raises `TransformError` when a frame is unknown or the
  frames are not connected. `PoseUtils(buffer, base_frame="base_link",
  tcp_frame="tool0")` reads the TCP pose with `current_tcp()`: it waits up to
  `timeout` seconds (0.1 by default) for the transform, and if none comes it
  logs a warning and returns an identity pose stamped now in the base frame.
- `ur3views.capture` has `CaptureInterpolateNode`. It collects captured poses
  (`capture`), fits and samples the sphere (`compute_views`), and builds the
  visualisation markers: red captured points, green sampled points and a
  translucent blue fitted sphere. On construction it publishes a fixed
  yellow `reference_sphere`. `make_color` builds RGBA colours. Both
  `capture` and `compute_views` return a `TriggerResult`; `compute_views`
  reports failure when fewer than four poses have been captured.
- `ur3views.ik_queue` has `IKSolver`, `IKError` and `IKQueueExecutor`.
  `IKSolver.solve` asks a supplied backend for six joint positions and raises
  `IKError` when there is no solution. The executor solves each pose of an
  incoming `PoseArray` (`on_poses`), skips those without a solution, queues
  the rest, and sends the oldest as a one-point trajectory (`execute_next`).
- `ur3views.trajectory` builds the fixed "home" trajectory for the six UR3
  joints (`home_trajectory`, `home_goal`), hands it to a publish callable
  (`publish_home_trajectory`), and sends it as an action goal through
  `TrajectoryActionClient`, whose `send_home` raises `TimeoutError` when the
  action server does not appear in time.

## Example

```python
from ur3views.interpolation import fit_sphere_ls, sample_sphere
from ur3views.messages import Header, Point, Pose, PoseStamped


def at(x, y, z):
    return PoseStamped(header=Header(frame_id="world"), pose=Pose(position=Point(x, y, z)))


samples = [at(6, 2, 3), at(1, 7, 3), at(1, 2, 8), at(1, 2, -2)]
centre, radius = fit_sphere_ls(samples)
# centre is close to (1, 2, 3) and radius close to 5

views = sample_sphere(centre, radius, "world", m=20)
```

## What this package does not do

The package does not talk to a robot or to any messaging middleware by
itself. Publishing, action clients and the inverse-kinematics backend are
passed in as plain callables or objects: `CaptureInterpolateNode` takes
`publish_*` callables and an object providing `current_tcp()` and
`base_frame`, `IKQueueExecutor` and `TrajectoryActionClient` take an action
client with `wait_for_server` and `send_goal`, and `IKSolver` takes a
function that computes joint positions. It loads no robot model, provides
no IK solver of its own, and has no command-line programs.

## Tests

The test suite uses pytest. Install it with the `test` extra and run
`pytest`.