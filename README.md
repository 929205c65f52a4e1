# ballnav

`ballnav` holds the decision-making side of a ball-collecting robot watched by
an overhead camera. Given what was detected in one frame (the robot's front
and back markers, the balls, the goal, the outer walls, the arms of the cross
in the middle and an egg to avoid), it works out where the robot should go
next and turns that into a short text command for the robot.

It uses only the Python standard library.

## What is in the package

| Module | Contents |
| --- | --- |
| `ballnav.config` | `Config` and `load_config(path)`: tuning values read from a JSON object |
| `ballnav.vector` | `Vector`, `VectorWithStartPos` (a wall or cross segment) and `Egg` (a box made of four segments) |
| `ballnav.course_object` | `CourseObject` (a labelled box in image pixels) and `JourneyModel` (distance, angle, whether to collect) |
| `ballnav.command` | `Command`, turned into the text sent to the robot by `Command.format()` |
| `ballnav.math_util` | `angle_between`, `vector_to_object`, `robot_middle`, `correct_for_perspective` |
| `ballnav.object_counter` | `ObjectCounter`, a tally of detections per label |
| `ballnav.navigation_geometry` | `segments_intersect`, `check_collision`, `course_bounds`, `safe_spots`, `left_goal_point`, `right_goal_point`, `closest_blocking_vectors`, `distance_to_closest_ball`, `remove_balls_inside_robot`, `balls_outside_course` |
| `ballnav.processors` | `BallProcessor` and `WallProcessor`, which accept a detection only after it has been seen in enough recent frames |
| `ballnav.navigation` | `NavigationController`, which picks the next target and returns a `JourneyModel` |
| `ballnav.clients` | the `Client` base class, `TcpClient` (talks to the robot over TCP) and `MockClient` (prints and records) |
| `ballnav.client_controller` | `ClientController`, which can average several commands before sending one |
| `ballnav.main_controller` | `MainController`, `journey_to_command`, `find_max_value`, `find_min_value` |

## Geometry at a glance

```python
from ballnav.vector import Vector
from ballnav.math_util import angle_between

heading = Vector(10, 0)
to_ball = Vector(0, 10)

print(heading.length())                 # 10.0
print(angle_between(heading, to_ball))  # -90.0
```

Coordinates are image pixels with y growing downwards. `angle_between`
returns a signed angle in degrees; `journey_to_command` turns a positive
angle into a left turn (`"l"`) and a negative one into a right turn (`"r"`).

## One frame of navigation

1. Add what was detected. Course objects labelled `ball`, `robotFront`,
   `robotBack`, `egg` or `goal` go to `add_course_object`; any other label
   raises `ValueError`. Outer wall segments go to `add_blocking_object`, and
   the arms of the cross to `add_cross_object`.
2. Ask for the next move with `NavigationController.calculate_journey()`. It
   returns a `JourneyModel`, or `None` when there is nothing to do yet: no
   robot in view, the last command not yet completed, or a ball still being
   confirmed as the target over several frames.
3. Turn the journey into a `Command` with `journey_to_command(journey, config)`
   and hand it to a `ClientController`.
4. Call `clear_objects()` before the next frame.

`MainController` ties these steps together. `navigate_and_send_command()`
plans, clears the frame's objects, sends the command and returns it (or
`None`). `completed_command()` and `completed_goal_delivery()` tell it when
the robot has reported back; until `completed_command()` is called, no new
journey is planned.

```python
import io

from ballnav.clients import MockClient
from ballnav.config import load_config
from ballnav.course_object import CourseObject
from ballnav.main_controller import MainController

config = load_config("config.json")
output = io.StringIO()
controller = MainController(config, lambda _controller: MockClient(output))

controller.add_course_object(CourseObject(100, 100, 120, 120, "robotFront"))
controller.add_course_object(CourseObject(100, 150, 120, 170, "robotBack"))
controller.add_course_object(CourseObject(400, 300, 420, 320, "ball"))
command = controller.navigate_and_send_command()
```

Without a `client_factory`, `MainController` uses a `MockClient` that prints
to standard output. The factory receives the controller, so a `TcpClient` can
be wired to report back:

```python
from ballnav.clients import TcpClient

controller = MainController(
    config,
    lambda c: TcpClient(
        config,
        on_goal_delivery=c.completed_goal_delivery,
        on_command_completed=c.completed_command,
    ),
)
```

`TcpClient` connects to `RobotIP`:`RobotPort` when it is created, keeps only
the latest queued command, sends it from a background thread and waits for a
reply before sending the next. It can be used as a context manager, and
`close()` stops the thread and closes the socket.

## Commands

`Command.format()` gives the text sent to the robot (a newline is added by
the client): `"f 40 12.500000 in"` is action, speed, distance or angle, and
collector state. A command with `collect_balls=False` is sent as `"out"`,
which releases the balls at the goal. Actions are `f` (forward), `l` and `r`
(turn), and `s` (stop).

## Configuration

All tuning values come from a JSON object loaded with `load_config(path)`.
Read them with `Config.get_int`, `Config.get_bool` and `Config.get_str`, and
override one with `Config.set`. A missing key raises `KeyError` and a value of
the wrong type raises `TypeError`; there are no silent defaults.

| Used by | Keys |
| --- | --- |
| `NavigationController` | `RobotWidth`, `PerspectiveOffset`, `RobotLengthInMM`, `GoalSleepInMilli`, `TargetSameBeforeTargetSet`, `MaxDiffInSameCourseObject`, `DistanceBeforeTargetReached`, `DistanceBeforeToCloseToWall`, `DistanceToWallBeforeHandling`, `AngleDiffBeforeCornerBall`, `SingleWallShiftDiff`, `DistanceToShiftedPointBeforeTurning`, `CornerApproachAngle`, `ShiftDistanceOnCornerBall`, `goalIsLeft`, `middleXOnAxis`, `GoalIntermediatePointDistance`, `GoalShootingDistance`, `AllowedAngleDifference` |
| `journey_to_command` | `AllowedAngleDifference`, `MaxAngleBeforeSlowingDown`, `RotationSlowSpeed`, `RotationFastSpeed`, `FastSpeedMinimumDistance`, `ForwardFastSpeed`, `ForwardSlowSpeed`, `DistanceBeforeSmallBit`, `SmallBit` |
| `ClientController` | `ToAverageCommandsInClientController`, `AmountOfCommandsToAverage`, `MaxDifferenceInAngle`, `MaxDifferenceInDistance` |
| `BallProcessor`, `WallProcessor` | `ImagesToAverage`, `MaxDiffInSameCourseObject`, `AmountOfSeenBeforeCreate`, `WallSeenBeforeCreate` |
| `TcpClient` | `RobotIP`, `RobotPort` |

Progress messages go to the standard `logging` module under the `ballnav.*`
logger names.

## What the package does not do

- It captures no images and detects nothing in them: finding balls, walls,
  the cross, the egg and the robot markers in a camera frame is left to your
  own vision code, which feeds `ballnav` the results.
- It draws no overlays and opens no windows.
- It has no command-line program or main loop; you call it once per frame.
- There is no simulator.

## Testing

```
pip install -e ".[test]"
pytest
```

The tests need no camera, robot or network; `TcpClient` is exercised against
a local socket.