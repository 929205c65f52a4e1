"""Pure geometry used when planning routes around the course."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ballnav.course_object import CourseObject, _half
from ballnav.vector import Vector, VectorWithStartPos

Point = tuple[int, int]

NO_BALL_DISTANCE = 32767
_FAR_AWAY = Vector(5000, 5000)


def _orientation(a: Point, b: Point, c: Point) -> int:
    """0 when collinear, 1 when clockwise, 2 when counter-clockwise."""
    val = (b[1] - a[1]) * (c[0] - b[0]) - (b[0] - a[0]) * (c[1] - b[1])
    if val == 0:
        return 0
    return 1 if val > 0 else 2


def _on_segment(a: Point, b: Point, c: Point) -> bool:
    """True when ``c`` lies within the bounding box of segment ``a``-``b``."""
    return (
        min(a[0], b[0]) <= c[0] <= max(a[0], b[0])
        and min(a[1], b[1]) <= c[1] <= max(a[1], b[1])
    )


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """True when segment ``p1``-``p2`` meets segment ``p3``-``p4``."""
    o1 = _orientation(p1, p2, p3)
    o2 = _orientation(p1, p2, p4)
    o3 = _orientation(p3, p4, p1)
    o4 = _orientation(p3, p4, p2)

    if o1 != o2 and o3 != o4:
        return True
    return (
        (o1 == 0 and _on_segment(p1, p2, p3))
        or (o2 == 0 and _on_segment(p1, p2, p4))
        or (o3 == 0 and _on_segment(p3, p4, p1))
        or (o4 == 0 and _on_segment(p3, p4, p2))
    )


def check_collision(
    start: Vector,
    target_vector: Vector,
    crosses: Iterable[VectorWithStartPos],
    robot_width: int,
) -> bool:
    """True when a robot of ``robot_width`` driving ``target_vector`` from ``start`` hits a cross."""
    length = target_vector.length()
    if length == 0.0:
        return False

    half_width = robot_width / 2.0
    offset_x = -(target_vector.y / length) * half_width
    offset_y = (target_vector.x / length) * half_width

    start_x, start_y = start.x, start.y
    end_x = start_x + target_vector.x
    end_y = start_y + target_vector.y

    paths = [
        ((start_x, start_y), (end_x, end_y)),
        (
            (int(start_x + offset_x), int(start_y + offset_y)),
            (int(end_x + offset_x), int(end_y + offset_y)),
        ),
        (
            (int(start_x - offset_x), int(start_y - offset_y)),
            (int(end_x - offset_x), int(end_y - offset_y)),
        ),
    ]

    for blocker in crosses:
        b_start = (blocker.start_x, blocker.start_y)
        b_end = (blocker.start_x + blocker.x, blocker.start_y + blocker.y)
        if any(segments_intersect(a, b, b_start, b_end) for a, b in paths):
            return True
    return False


def course_bounds(
    blocking_objects: Iterable[VectorWithStartPos],
) -> tuple[int, int, int, int]:
    """Return ``(min_x, min_y, max_x, max_y)`` over the ends of every segment."""
    objects = list(blocking_objects)
    if not objects:
        raise ValueError("no blocking objects to bound the course")
    xs = [x for obj in objects for x in (obj.start_x, obj.start_x + obj.x)]
    ys = [y for obj in objects for y in (obj.start_y, obj.start_y + obj.y)]
    return min(xs), min(ys), max(xs), max(ys)


def safe_spots(blocking_objects: Iterable[VectorWithStartPos]) -> list[Point]:
    """Four points a fifth of the way in from each corner of the course.

    Ordered top-left, top-right, bottom-right, bottom-left. Empty when there
    are no blocking objects.
    """
    objects = list(blocking_objects)
    if not objects:
        return []
    min_x, min_y, max_x, max_y = course_bounds(objects)
    x_offset = (max_x - min_x) // 5
    y_offset = (max_y - min_y) // 5
    return [
        (min_x + x_offset, min_y + y_offset),
        (max_x - x_offset, min_y + y_offset),
        (max_x - x_offset, max_y - y_offset),
        (min_x + x_offset, max_y - y_offset),
    ]


def left_goal_point(blocking_objects: Iterable[VectorWithStartPos]) -> Vector | None:
    """Middle of the course's left edge, or None without blocking objects."""
    objects = list(blocking_objects)
    if not objects:
        return None
    min_x, min_y, _, max_y = course_bounds(objects)
    return Vector(min_x, _half(min_y + max_y))


def right_goal_point(blocking_objects: Iterable[VectorWithStartPos]) -> Vector | None:
    """Middle of the course's right edge, or None without blocking objects."""
    objects = list(blocking_objects)
    if not objects:
        return None
    _, min_y, max_x, max_y = course_bounds(objects)
    return Vector(max_x, _half(min_y + max_y))


def closest_blocking_vectors(
    course_object: CourseObject,
    blocking_objects: Iterable[VectorWithStartPos],
) -> tuple[Vector, Vector]:
    """The two shortest vectors from the object's centre to the blocking objects."""
    first = _FAR_AWAY
    second = _FAR_AWAY
    point = course_object.center()
    for blocker in blocking_objects:
        vector = blocker.closest_vector_from_point(point)
        if first.length() > vector.length():
            second = first
            first = vector
        elif second.length() > vector.length():
            second = vector
    return first, second


def distance_to_closest_ball(spot: Sequence[int], balls: Iterable[CourseObject]) -> float:
    """Distance from ``spot`` to the nearest ball's top-left corner."""
    closest = float(NO_BALL_DISTANCE)
    for ball in balls:
        distance = Vector(spot[0] - ball.x1, spot[1] - ball.y1).length()
        closest = min(closest, distance)
    return closest


def remove_balls_inside_robot(
    balls: Iterable[CourseObject], front: CourseObject, back: CourseObject
) -> list[CourseObject]:
    """Balls that do not overlap the box spanned by the robot's markers."""
    top_x = min(front.x1, back.x1)
    top_y = min(front.y1, back.y1)
    bottom_x = max(front.x2, back.x2)
    bottom_y = max(front.y2, back.y2)

    def inside(ball: CourseObject) -> bool:
        ball_top_x = min(ball.x1, ball.x2)
        ball_top_y = min(ball.y1, ball.y2)
        ball_bottom_x = max(ball.x1, ball.x2)
        ball_bottom_y = max(ball.y1, ball.y2)
        return (
            ball_bottom_x > top_x
            and ball_top_x < bottom_x
            and ball_bottom_y > top_y
            and ball_top_y < bottom_y
        )

    return [ball for ball in balls if not inside(ball)]


def balls_outside_course(
    balls: Iterable[CourseObject], blocking_objects: Iterable[VectorWithStartPos]
) -> list[CourseObject]:
    """Balls whose centre lies outside the bounds of the blocking objects."""
    objects = list(blocking_objects)
    if not objects:
        return []
    min_x = min(obj.lowest_x() for obj in objects)
    min_y = min(obj.lowest_y() for obj in objects)
    max_x = max(obj.max_x() for obj in objects)
    max_y = max(obj.max_y() for obj in objects)

    def outside(ball: CourseObject) -> bool:
        middle = ball.center()
        return not (min_x <= middle.x <= max_x and min_y <= middle.y <= max_y)

    return [ball for ball in balls if outside(ball)]