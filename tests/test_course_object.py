from ballnav.course_object import CourseObject, JourneyModel
from ballnav.vector import Vector


def test_center_of_box():
    assert CourseObject(0, 0, 10, 20, "ball").center() == Vector(5, 10)


def test_center_truncates_toward_zero():
    assert CourseObject(-3, -3, 0, 0, "ball").center() == Vector(-1, -1)


def test_shift_keeps_size():
    obj = CourseObject(10, 20, 30, 50, "ball")
    obj.shift_x(7)
    obj.shift_y(-4)
    assert (obj.x1, obj.x2) == (10 + 7, 30 + 7)
    assert (obj.y1, obj.y2) == (20 - 4, 50 - 4)
    assert obj.x2 - obj.x1 == 20
    assert obj.y2 - obj.y1 == 30


def test_shift_truncates_fractions():
    obj = CourseObject(10, 10, 10, 10, "ball")
    obj.shift_x(2.9)
    assert obj.x1 == 12
    obj.shift_x(-2.9)
    assert obj.x1 == 10


def test_within_range():
    a = CourseObject(0, 0, 10, 10, "ball")
    assert a.within_range(CourseObject(0, 0, 10, 10, "ball"), 1)
    assert not a.within_range(CourseObject(100, 100, 110, 110, "ball"), 50)
    b = CourseObject(0, 30, 10, 40, "ball")
    assert a.within_range(b, 31)
    assert not a.within_range(b, 30)


def test_within_range_is_symmetric():
    a = CourseObject(5, 5, 15, 15, "ball")
    b = CourseObject(40, 22, 48, 30, "ball")
    assert a.within_range(b, 40) == b.within_range(a, 40)


def test_matches_rejects_other_name():
    a = CourseObject(0, 0, 10, 10, "ball")
    b = CourseObject(0, 20, 10, 30, "egg")
    assert not a.matches(b)


def test_matches_rejects_far_x():
    a = CourseObject(0, 0, 10, 10, "ball")
    b = CourseObject(11, 20, 21, 30, "ball")
    assert not a.matches(b)


def test_matches_accepts_lower_other():
    a = CourseObject(0, 0, 10, 10, "ball")
    b = CourseObject(5, 15, 15, 25, "ball")
    assert a.matches(b)


def test_journey_model_equality():
    assert JourneyModel(10.0, -5.0, True) == JourneyModel(10.0, -5.0, True)
    assert JourneyModel(10.0, -5.0, True) != JourneyModel(10.0, -5.0, False)