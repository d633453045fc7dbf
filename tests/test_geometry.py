import math

import pytest

from trake.geometry import (
    Aabb,
    Bounded,
    Vec2,
    angle_to,
    normalized_2pi,
    unit_vec,
)


def test_vec_arithmetic():
    a = Vec2(1.0, 2.0)
    b = Vec2(3.0, -1.0)
    assert a + b == Vec2(4.0, 1.0)
    assert a - b == Vec2(-2.0, 3.0)
    assert a * 2 == Vec2(2.0, 4.0)
    assert a * b == Vec2(3.0, -2.0)
    assert -a == Vec2(-1.0, -2.0)


def test_dot_and_length():
    assert Vec2(1.0, 0.0).dot(Vec2(0.0, 1.0)) == 0
    assert Vec2(3.0, 4.0).length() == pytest.approx(5.0)


def test_normalize():
    assert Vec2(0.0, 0.0).normalize_or_zero() == Vec2(0.0, 0.0)
    assert Vec2(7.0, -3.0).normalize_or_zero().length() == pytest.approx(1.0)


def test_arg_and_unit_vec_round_trip():
    for angle in (0.0, 0.5, 2.0, -1.2):
        v = unit_vec(angle)
        assert v.length() == pytest.approx(1.0)
        assert v.arg() == pytest.approx(angle)


def test_normalized_2pi_range():
    for angle in (-10.0, -math.pi / 2, 0.0, 7.0, 100.0):
        n = normalized_2pi(angle)
        assert 0 <= n < math.tau
        assert math.cos(n) == pytest.approx(math.cos(angle))


def test_angle_to_shortest():
    assert angle_to(0.1, math.tau - 0.1) == pytest.approx(-0.2)
    assert angle_to(1.0, 1.5) == pytest.approx(0.5)


def test_aabb_ops():
    box = Aabb.from_point(Vec2(1.0, 1.0)).extend_symmetric(Vec2(1.0, 2.0))
    assert box.center() == Vec2(1.0, 1.0)
    assert box.size() == Vec2(2.0, 4.0)
    left = box.extend_left(3.0)
    assert left.width() == box.width() + 3.0
    assert left.max == box.max
    up = box.extend_up(2.0)
    assert up.height() == box.height() + 2.0
    assert up.min == box.min
    corners = box.corners()
    assert corners[0] == box.min and corners[2] == box.max
    assert len(set(corners)) == 4


def test_bounded():
    b = Bounded.new_max(2.0)
    assert b.value == 2.0
    b.change(-5.0)
    assert b.is_min()
    b.set_ratio(1.0)
    assert b.value == 2.0
    b.change(10.0)
    assert b.value == 2.0


def test_bounded_invalid():
    with pytest.raises(ValueError):
        Bounded(0.0, 1.0, 0.0)