"""Geometry helpers for robot navigation."""

from __future__ import annotations

import math

from ballnav.course_object import CourseObject, _half
from ballnav.vector import Vector

IMAGE_CENTER_X = 959
IMAGE_CENTER_Y = 539


def angle_between(first: Vector, second: Vector) -> float:
    """Signed angle in degrees from ``first`` to ``second``; negative when turning counter-clockwise."""
    dot = first.x * second.x + first.y * second.y
    first_length = first.length()
    second_length = second.length()
    if first_length == 0.0 or second_length == 0.0:
        return 0.0
    cos_theta = min(max(dot / (first_length * second_length), -1.0), 1.0)
    radians = math.acos(cos_theta)
    cross = first.x * second.y - first.y * second.x
    if cross > 0:
        radians = -radians
    return math.degrees(radians)


def vector_to_object(origin: CourseObject, target: CourseObject) -> Vector:
    """Vector from the centre of ``origin`` to the centre of ``target``."""
    return target.center() - origin.center()


def robot_middle(back: CourseObject, front: CourseObject) -> CourseObject:
    """Point object halfway between the robot's back and front markers."""
    mid_x1 = _half(front.x1 + back.x1)
    mid_x2 = _half(front.x2 + back.x2)
    mid_y1 = _half(front.y1 + back.y1)
    mid_y2 = _half(front.y2 + back.y2)
    mid_x = _half(mid_x1 + mid_x2)
    mid_y = _half(mid_y1 + mid_y2)
    return CourseObject(mid_x, mid_y, mid_x, mid_y, "")


def correct_for_perspective(
    back: CourseObject, front: CourseObject, offset_percent: int
) -> None:
    """Pull both markers toward the image centre by ``offset_percent`` percent."""
    for obj in (back, front):
        middle = obj.center()
        x_diff = IMAGE_CENTER_X - middle.x
        y_diff = IMAGE_CENTER_Y - middle.y
        obj.shift_x(x_diff * offset_percent * 0.01)
        obj.shift_y(y_diff * offset_percent * 0.01)