import pytest

from ballnav.course_object import CourseObject
from ballnav.math_util import (
    IMAGE_CENTER_X,
    IMAGE_CENTER_Y,
    angle_between,
    correct_for_perspective,
    robot_middle,
    vector_to_object,
)
from ballnav.vector import Vector


def test_angle_same_direction_is_zero():
    assert angle_between(Vector(3, 4), Vector(6, 8)) == pytest.approx(0.0)


def test_angle_opposite_is_half_turn():
    assert abs(angle_between(Vector(1, 0), Vector(-5, 0))) == pytest.approx(180.0)


def test_angle_sign_follows_cross_product():
    assert angle_between(Vector(1, 0), Vector(0, 1)) == pytest.approx(-90.0)


def test_angle_with_null_vector_is_zero():
    assert angle_between(Vector(0, 0), Vector(4, 2)) == 0.0
    assert angle_between(Vector(4, 2), Vector(0, 0)) == 0.0


@pytest.mark.parametrize(
    "a, b", [(Vector(3, 1), Vector(-2, 7)), (Vector(10, -4), Vector(1, 1))]
)
def test_angle_is_antisymmetric(a, b):
    assert angle_between(a, b) == pytest.approx(-angle_between(b, a))


def test_vector_to_object_antisymmetric():
    a = CourseObject(0, 0, 20, 20, "ball")
    b = CourseObject(105, 43, 111, 61, "ball")
    assert vector_to_object(a, b) == Vector(0, 0) - vector_to_object(b, a)
    assert vector_to_object(a, a).is_null()


def test_robot_middle_of_coincident_markers():
    marker = CourseObject(40, 60, 40, 60, "robotFront")
    middle = robot_middle(marker, marker)
    assert middle.center() == marker.center()
    assert middle.x1 == middle.x2
    assert middle.name == ""


def test_robot_middle_is_symmetric():
    back = CourseObject(100, 200, 100, 200, "robotBack")
    front = CourseObject(160, 230, 160, 230, "robotFront")
    assert robot_middle(back, front) == robot_middle(front, back)


def test_perspective_zero_offset_leaves_objects():
    back = CourseObject(10, 10, 30, 30, "robotBack")
    front = CourseObject(50, 10, 70, 30, "robotFront")
    correct_for_perspective(back, front, 0)
    assert back == CourseObject(10, 10, 30, 30, "robotBack")
    assert front == CourseObject(50, 10, 70, 30, "robotFront")


def test_perspective_full_offset_moves_to_image_center():
    back = CourseObject(49, 29, 69, 49, "robotBack")
    front = CourseObject(1500, 900, 1510, 910, "robotFront")
    correct_for_perspective(back, front, 100)
    assert back.center() == Vector(IMAGE_CENTER_X, IMAGE_CENTER_Y)
    assert front.center() == Vector(IMAGE_CENTER_X, IMAGE_CENTER_Y)


def test_perspective_at_center_is_fixed_point():
    obj = CourseObject(IMAGE_CENTER_X, IMAGE_CENTER_Y, IMAGE_CENTER_X, IMAGE_CENTER_Y, "x")
    other = CourseObject(IMAGE_CENTER_X, IMAGE_CENTER_Y, IMAGE_CENTER_X, IMAGE_CENTER_Y, "y")
    correct_for_perspective(obj, other, 37)
    assert obj.center() == Vector(IMAGE_CENTER_X, IMAGE_CENTER_Y)