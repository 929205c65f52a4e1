"""Decide where the robot should drive next from the objects seen in a frame."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import replace

from ballnav.config import Config
from ballnav.course_object import CourseObject, JourneyModel
from ballnav.math_util import (
    angle_between,
    correct_for_perspective,
    robot_middle,
    vector_to_object,
)
from ballnav.navigation_geometry import (
    Point,
    check_collision,
    closest_blocking_vectors,
    distance_to_closest_ball,
    left_goal_point,
    remove_balls_inside_robot,
    right_goal_point,
    safe_spots,
)
from ballnav.vector import Egg, Vector, VectorWithStartPos

logger = logging.getLogger(__name__)

_IMAGE_WIDTH = 1920
_IMAGE_HEIGHT = 1080
_CORNER_OVERSHOOT = 1.32
_GOAL_BACK_OFF = -10
_FAR_BACK_UP = 30
_NEAR_BACK_UP = 10


class NavigationController:
    """Plans one journey per frame from the balls, walls, crosses and robot markers."""

    STABLE_THRESHOLD = 3

    def __init__(self, config: Config, clock: Callable[[], float] = time.monotonic) -> None:
        self._config = config
        self._clock = clock
        self._robot_width = config.get_int("RobotWidth")

        self._balls: list[CourseObject] = []
        self._goal: CourseObject | None = None
        self._robot_front: CourseObject | None = None
        self._robot_back: CourseObject | None = None
        self._blocking_objects: list[VectorWithStartPos] = []
        self._cross_objects: list[VectorWithStartPos] = []
        self._safe_spots: list[Point] = []
        self._amount_of_walls = 0

        self._target: CourseObject | None = None
        self._potential_target: CourseObject | None = None
        self._current_safe_spot_index = 0

        self._go_to_goal_count = 0
        self._has_delivered_balls_once = False
        self._sent_shoot_at_zero_balls = False
        self._to_collect_balls = True
        self._at_goal = False
        self._at_goal_time = 0.0
        self._navigated_to_goal_intermediate = False

        self._same_target_count = 0
        self._distance_to_back_up = 0
        self._last_sent_command_was_completed = True

    # -- read-only views -------------------------------------------------

    @property
    def balls(self) -> tuple[CourseObject, ...]:
        return tuple(self._balls)

    @property
    def goal(self) -> CourseObject | None:
        return self._goal

    @property
    def robot_front(self) -> CourseObject | None:
        return self._robot_front

    @property
    def robot_back(self) -> CourseObject | None:
        return self._robot_back

    @property
    def blocking_objects(self) -> tuple[VectorWithStartPos, ...]:
        return tuple(self._blocking_objects)

    @property
    def cross_objects(self) -> tuple[VectorWithStartPos, ...]:
        return tuple(self._cross_objects)

    @property
    def target(self) -> CourseObject | None:
        return self._target

    @property
    def amount_of_walls(self) -> int:
        return self._amount_of_walls

    # -- feeding objects -------------------------------------------------

    def add_course_object(self, course_object: CourseObject) -> None:
        """Store a detected object according to its label."""
        name = course_object.name
        if name == "ball":
            self._balls.append(course_object)
        elif name in ("robotFront", "robotBack"):
            middle = course_object.center()
            point = CourseObject(middle.x, middle.y, middle.x, middle.y, name)
            if name == "robotFront":
                self._robot_front = point
            else:
                self._robot_back = point
        elif name == "egg":
            self._blocking_objects.append(
                Egg(course_object.x1, course_object.y1, course_object.x2, course_object.y2)
            )
        elif name == "goal":
            if self._goal is None or _diagonal(course_object) > _diagonal(self._goal):
                self._goal = course_object
        else:
            raise ValueError("Invalid courseObject name" + name)

    def add_blocking_object(self, blocking_object: VectorWithStartPos) -> None:
        """Add a wall segment."""
        self._amount_of_walls += 1
        self._blocking_objects.append(blocking_object)

    def add_cross_object(self, cross_object: VectorWithStartPos) -> None:
        """Add a cross arm; it blocks routes and also counts as an obstacle."""
        self._blocking_objects.append(
            VectorWithStartPos(
                cross_object.start_x, cross_object.start_y, Vector(cross_object.x, cross_object.y)
            )
        )
        self._cross_objects.append(cross_object)

    def clear_objects(self) -> None:
        """Forget everything seen in the last frame."""
        self._balls.clear()
        self._blocking_objects.clear()
        self._cross_objects.clear()
        self._safe_spots.clear()
        self._goal = None
        self._robot_front = None
        self._robot_back = None
        self._amount_of_walls = 0

    # -- command feedback ------------------------------------------------

    def set_has_delivered_once(self) -> None:
        self._has_delivered_balls_once = True
        if not self._balls:
            self._sent_shoot_at_zero_balls = True

    def last_sent_command_was_completed(self) -> None:
        self._last_sent_command_was_completed = True

    def new_command_sent(self) -> None:
        self._last_sent_command_was_completed = False

    # -- planning --------------------------------------------------------

    def calculate_journey(self) -> JourneyModel | None:
        """Plan the next move, or return None when there is nothing to do yet."""
        if self._robot_front is None or self._robot_back is None:
            logger.info("No Robot")
            return None
        if not self._last_sent_command_was_completed:
            logger.info("Waiting for command Completion")
            return None

        cfg = self._config
        front, back = self._robot_front, self._robot_back
        correct_for_perspective(back, front, cfg.get_int("PerspectiveOffset"))
        self._safe_spots.extend(safe_spots(self._blocking_objects))
        middle = robot_middle(back, front)

        if not self._balls or (len(self._balls) <= 5 and not self._has_delivered_balls_once):
            self._go_to_goal_count += 1
        else:
            self._go_to_goal_count = 0

        if self._at_goal and (
            (self._has_delivered_balls_once and self._balls) or self._sent_shoot_at_zero_balls
        ):
            elapsed_ms = (self._clock() - self._at_goal_time) * 1000.0
            if elapsed_ms > cfg.get_int("GoalSleepInMilli"):
                self._at_goal = False
                self._navigated_to_goal_intermediate = False
                return JourneyModel(_GOAL_BACK_OFF, 0, True)
            return None

        if len(self._balls) > 5 and self._has_delivered_balls_once:
            self._has_delivered_balls_once = False

        if self._go_to_goal_count >= self.STABLE_THRESHOLD:
            return self._plan_goal_run(middle)

        if self._target is not None:
            return self._plan_target_run(middle)

        self._balls = remove_balls_inside_robot(self._balls, front, back)
        object_vector = self._find_closest_ball()
        self._to_collect_balls = True

        if object_vector.is_null():
            logger.info("objectVector = {0,0}, firstCheck")
            return None

        if self._same_target_count == cfg.get_int("TargetSameBeforeTargetSet"):
            self._target = self._potential_target
            self._potential_target = None
            if self._target is not None:
                nearest, second = closest_blocking_vectors(self._target, self._blocking_objects)
                too_close = cfg.get_int("DistanceBeforeToCloseToWall")
                if nearest.length() < too_close:
                    self._distance_to_back_up = (
                        _FAR_BACK_UP if second.length() < too_close else _NEAR_BACK_UP
                    )
        return None

    def _take_back_up(self) -> JourneyModel | None:
        if self._distance_to_back_up > 0:
            journey = JourneyModel(-self._distance_to_back_up, 0, True)
            self._distance_to_back_up = 0
            return journey
        return None

    def _plan_goal_run(self, middle: CourseObject) -> JourneyModel | None:
        cfg = self._config
        back_up = self._take_back_up()
        if back_up is not None:
            return back_up

        object_vector = self._navigate_to_goal()
        if self._goal is None:
            logger.info("No goal could be placed")
            return None

        assert self._robot_front is not None and self._robot_back is not None
        vector_to_robot_back = vector_to_object(self._robot_back, self._robot_front)
        goal_vector = vector_to_object(middle, self._goal)
        shooting_object = replace(self._goal)
        shooting_distance = cfg.get_int("GoalShootingDistance")
        goal_is_left = self._goal.x1 > cfg.get_int("middleXOnAxis")
        shooting_object.shift_x(-shooting_distance if goal_is_left else shooting_distance)
        shooting_vector = vector_to_object(middle, shooting_object)
        angle_diff = angle_between(goal_vector, vector_to_robot_back)
        reached = cfg.get_int("DistanceBeforeTargetReached")

        if object_vector.length() < reached or self._navigated_to_goal_intermediate:
            self._navigated_to_goal_intermediate = True
            if shooting_vector.length() < reached:
                if abs(angle_diff) > cfg.get_int("AllowedAngleDifference"):
                    return JourneyModel(0, -angle_diff, True)
                self._at_goal_time = self._clock()
                self._at_goal = True
                self._target = None
                logger.info("Shooting with angle: %f", angle_diff)
                return JourneyModel(0, 0, False)
            return self._make_journey(shooting_vector, True)

        if self._collides(object_vector):
            object_vector = self._navigate_to_safe_spot()
            if object_vector.is_null():
                logger.info("could not find a safe, safe spot")
                return None
            logger.info("Navigating to safe spot: %d %d", object_vector.x, object_vector.y)
        return self._make_journey(object_vector, True)

    def _plan_target_run(self, middle: CourseObject) -> JourneyModel | None:
        assert self._target is not None and self._robot_front is not None
        vector = self._handle_object_next_to_blocking(self._target, middle)
        direct = vector_to_object(self._robot_front, self._target)
        if direct.length() < self._config.get_int("DistanceBeforeTargetReached"):
            logger.info("target_ is now null")
            self._target = None
            self._same_target_count = 0
            return self._take_back_up()

        if self._collides(vector):
            vector = self._navigate_to_safe_spot()
            if vector.is_null():
                logger.info("could not find a safe, safe spot")
                return None
            logger.info("Navigating to safe spot: %d %d", vector.x, vector.y)
        return self._make_journey(vector, self._to_collect_balls)

    def _make_journey(self, object_vector: Vector, collect_balls: bool) -> JourneyModel:
        assert self._robot_front is not None and self._robot_back is not None
        front, back = self._robot_front, self._robot_back
        robot_vector = Vector(front.x1 - back.x1, front.y1 - back.y1)
        angle = angle_between(robot_vector, object_vector)
        robot_length = vector_to_object(front, back).length()
        length_cm = self._config.get_int("RobotLengthInMM") / 10
        scale = length_cm / robot_length if robot_length else math.inf
        return JourneyModel(object_vector.length() * scale, angle, collect_balls)

    def _navigate_to_goal(self) -> Vector:
        cfg = self._config
        if cfg.get_bool("goalIsLeft"):
            goal = left_goal_point(self._blocking_objects)
        else:
            goal = right_goal_point(self._blocking_objects)
        if goal is None or goal.x == -1:
            return Vector(0, 0)

        step = cfg.get_int("GoalIntermediatePointDistance")
        target_x = goal.x - step if goal.x > cfg.get_int("middleXOnAxis") else goal.x + step
        self._goal = CourseObject(goal.x, goal.y, goal.x, goal.y, "goal")
        local_goal = CourseObject(target_x, goal.y, target_x, goal.y, "goal")
        logger.info("Navigating to Goal: %d, %d", goal.x, goal.y)

        assert self._robot_front is not None and self._robot_back is not None
        middle = robot_middle(self._robot_back, self._robot_front)
        return vector_to_object(middle, local_goal)

    def _find_closest_ball(self) -> Vector:
        if not self._balls:
            return Vector(0, 0)
        assert self._robot_front is not None and self._robot_back is not None
        middle = robot_middle(self._robot_back, self._robot_front)

        shortest = Vector(5000, 5000)
        closest: CourseObject | None = None
        for ball in self._balls:
            to_ball = vector_to_object(middle, ball)
            if to_ball.length() < shortest.length() and not to_ball.is_null():
                shortest = to_ball
                closest = ball

        if closest is None:
            logger.info("Navigating to Ball: BUT NO BALLS FOUND")
            return Vector(0, 0)

        max_diff = self._config.get_int("MaxDiffInSameCourseObject")
        if self._potential_target is not None and self._potential_target.within_range(
            closest, max_diff
        ):
            logger.info("Same target count incremented to %d", self._same_target_count)
            self._same_target_count += 1
        else:
            logger.info('New Potential Target ("Ball")')
            self._potential_target = CourseObject(
                closest.x1, closest.y1, closest.x2, closest.y2, "ball"
            )
        logger.info("Navigating to Ball: %d, %d", closest.x1, closest.y1)
        return self._handle_object_next_to_blocking(closest, middle)

    def _handle_object_next_to_blocking(
        self, course_object: CourseObject, middle: CourseObject
    ) -> Vector:
        cfg = self._config
        nearest, second = closest_blocking_vectors(course_object, self._blocking_objects)
        angle_diff = angle_between(nearest, second)
        wall_distance = cfg.get_int("DistanceToWallBeforeHandling")
        if second.length() > wall_distance or abs(angle_diff) < cfg.get_int(
            "AngleDiffBeforeCornerBall"
        ):
            if nearest.length() > wall_distance:
                return vector_to_object(middle, course_object)
            return self._handle_object_near_wall(course_object, nearest, middle)
        return self._handle_object_near_corner(course_object, middle)

    def _handle_object_near_wall(
        self, course_object: CourseObject, vector_to_wall: Vector, middle: CourseObject
    ) -> Vector:
        shifted = replace(course_object)
        shift = self._config.get_int("SingleWallShiftDiff")
        if abs(vector_to_wall.x) > abs(vector_to_wall.y):
            shifted.shift_x(-shift if vector_to_wall.x > 0 else shift)
        else:
            shifted.shift_y(-shift if vector_to_wall.y > 0 else shift)

        to_shifted = vector_to_object(middle, shifted)
        if to_shifted.length() < self._config.get_int("DistanceToShiftedPointBeforeTurning"):
            return vector_to_object(middle, course_object)
        return to_shifted

    def _handle_object_near_corner(
        self, course_object: CourseObject, middle: CourseObject
    ) -> Vector:
        cfg = self._config
        center = course_object.center()
        direction_x = -1 if center.x > _IMAGE_WIDTH // 2 else 1
        direction_y = -1 if center.y > _IMAGE_HEIGHT // 2 else 1

        angle_rad = math.radians(cfg.get_int("CornerApproachAngle"))
        shift_dist = cfg.get_int("DistanceToShiftedPointBeforeTurning") * 6
        dx = math.tan(angle_rad) * shift_dist

        shifted = replace(course_object)
        shifted.shift_x(direction_x * dx)
        shifted.shift_y(direction_y * shift_dist)
        to_intermediate = vector_to_object(middle, shifted)

        if to_intermediate.length() < cfg.get_int("DistanceBeforeTargetReached"):
            local = replace(course_object)
            corner_shift = cfg.get_int("ShiftDistanceOnCornerBall")
            if course_object.x1 > cfg.get_int("middleXOnAxis"):
                local.shift_x(-corner_shift)
            else:
                local.shift_x(corner_shift)
            return vector_to_object(middle, local) * _CORNER_OVERSHOOT
        return to_intermediate

    def _collides(self, target_vector: Vector) -> bool:
        if self._robot_front is None or self._robot_back is None:
            return False
        middle = robot_middle(self._robot_back, self._robot_front)
        return check_collision(
            Vector(middle.x1, middle.y1), target_vector, self._cross_objects, self._robot_width
        )

    def _navigate_to_safe_spot(self) -> Vector:
        assert self._robot_front is not None and self._robot_back is not None
        middle = robot_middle(self._robot_back, self._robot_front)
        allowed = self._config.get_int("DistanceBeforeTargetReached")

        ordered = sorted(
            enumerate(self._safe_spots),
            key=lambda item: distance_to_closest_ball(item[1], self._balls),
        )
        for index, (spot_x, spot_y) in ordered:
            spot = CourseObject(spot_x, spot_y, spot_x, spot_y, "safeSpot")
            to_spot = vector_to_object(middle, spot)
            if to_spot.length() < allowed or self._collides(to_spot):
                continue
            self._current_safe_spot_index = index
            self._target = spot
            self._distance_to_back_up = 0
            return to_spot
        return Vector(0, 0)


def _diagonal(course_object: CourseObject) -> float:
    return Vector(
        course_object.x2 - course_object.x1, course_object.y2 - course_object.y1
    ).length()