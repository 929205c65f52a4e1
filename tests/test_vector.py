import math

import pytest

from ballnav.vector import Egg, Vector, VectorWithStartPos


def test_add_then_subtract_round_trips():
    a = Vector(3, -7)
    b = Vector(-11, 4)
    assert (a + b) - b == a
    assert a + b == b + a


def test_multiply_scales_and_truncates():
    v = Vector(4, 6)
    assert (v * 0.5) * 2 == v
    assert v * 1 == v
    assert Vector(3, 5) * 0.5 == Vector(1, 2)


def test_str_format():
    assert str(Vector(3, -4)) == "(3, -4)"


def test_length_and_dot():
    assert Vector(3, 4).length() == 5.0
    v = Vector(-6, 13)
    assert v.dot(v) == pytest.approx(v.length() ** 2)
    assert Vector(1, 0).dot(Vector(0, 9)) == 0


def test_closest_point_lies_on_segment():
    segment = Vector(10, 0)
    start = Vector(0, 0)
    point = Vector(5, 5)
    result = segment.closest_vector_from_point(start, point)
    nearest = point + result
    assert nearest.y == 0
    assert 0 <= nearest.x <= 10
    assert result.dot(segment) == 0


def test_closest_point_clamps_to_end():
    segment = Vector(10, 0)
    start = Vector(2, 2)
    point = Vector(30, 5)
    result = segment.closest_vector_from_point(start, point)
    assert point + result == start + segment


def test_closest_point_for_null_vector_is_null():
    assert Vector(0, 0).closest_vector_from_point(Vector(1, 1), Vector(8, 9)).is_null()


def test_point_on_segment_gives_null():
    segment = Vector(0, 20)
    assert segment.closest_vector_from_point(Vector(4, 0), Vector(4, 10)).is_null()


@pytest.mark.parametrize("v", [Vector(6, 9), Vector(-12, 8), Vector(7, 0), Vector(3, 2)])
def test_normalize_keeps_direction(v):
    n = v.normalize()
    assert math.gcd(n.x, n.y) == 1
    assert n.x * v.y == n.y * v.x


def test_normalize_null():
    assert Vector(0, 0).normalize().is_null()
    assert Vector(3, 2).normalize() == Vector(3, 2)


def test_bounds_of_positive_segment():
    seg = VectorWithStartPos(10, 20, Vector(5, 8))
    assert seg.lowest_x() == 10
    assert seg.lowest_y() == 20
    assert seg.max_x() == 10 + 5
    assert seg.max_y() == 20 + 8


def test_bounds_of_negative_segment():
    seg = VectorWithStartPos(10, 20, Vector(-5, -8))
    assert seg.lowest_x() == 10 - 5
    assert seg.lowest_y() == 20 - 8
    assert seg.max_x() == 10
    assert seg.max_y() == 20
    low, high = seg.minimal_points(), seg.max_points()
    assert low.x <= high.x and low.y <= high.y


def test_is_same_vector_tolerance():
    base = VectorWithStartPos(100, 100, Vector(50, 0))
    assert base.is_same_vector(VectorWithStartPos(100, 100, Vector(50, 0)), 0)
    assert base.is_same_vector(VectorWithStartPos(105, 95, Vector(45, 5)), 5)
    assert not base.is_same_vector(VectorWithStartPos(106, 100, Vector(50, 0)), 5)
    assert not base.is_same_vector(VectorWithStartPos(100, 100, Vector(50, 6)), 5)


def test_anchored_closest_matches_plain_vector():
    seg = VectorWithStartPos(3, 4, Vector(20, 10))
    point = Vector(9, 30)
    assert seg.closest_vector_from_point(point) == Vector(20, 10).closest_vector_from_point(
        Vector(3, 4), point
    )


def test_egg_distance_to_outside_point():
    egg = Egg(10, 10, 60, 60)
    result = egg.closest_vector_from_point(Vector(3, 35))
    assert result == Vector(7, 0)


def test_egg_point_on_side_is_null():
    egg = Egg(10, 10, 60, 60)
    assert egg.closest_vector_from_point(Vector(60, 30)).is_null()


def test_egg_bounds_follow_corners():
    egg = Egg(10, 20, 60, 90)
    assert egg.minimal_points() == Vector(10, 20)
    assert egg.max_points() == Vector(60, 90)


def test_egg_closest_is_shortest_side_distance():
    egg = Egg(0, 0, 100, 40)
    point = Vector(50, 15)
    result = egg.closest_vector_from_point(point)
    sides = [
        VectorWithStartPos(0, 0, Vector(100, 0)),
        VectorWithStartPos(0, 40, Vector(100, 0)),
        VectorWithStartPos(0, 0, Vector(0, 40)),
        VectorWithStartPos(100, 0, Vector(0, 40)),
    ]
    assert all(result.length() <= s.closest_vector_from_point(point).length() for s in sides)