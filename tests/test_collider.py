import math

import pytest

from trake.collider import Circle, Collider, Rectangle, Transform
from trake.geometry import Aabb, Vec2


def square(x, y, size=1.0, rotation=0.0):
    return Collider(Vec2(x, y), Rectangle(size, size), rotation)


def test_transform_identity_and_lerp():
    a = Transform.identity()
    b = Transform(Vec2(2.0, 4.0), 1.0, 3.0)
    mid = a.lerp(b, 0.5)
    assert mid.translation == Vec2(1.0, 2.0)
    assert mid.rotation == pytest.approx(0.5)
    assert mid.scale == pytest.approx(2.0)
    assert Transform.scaled(2).scale == 2.0


def test_shape_scaled():
    assert Circle(1.0).scaled(3.0) == Circle(3.0)
    assert Rectangle(1.0, 2.0).scaled(2.0) == Rectangle(2.0, 4.0)


def test_from_aabb():
    box = Aabb(Vec2(0.0, 0.0), Vec2(2.0, 4.0))
    c = Collider.from_aabb(box)
    assert c.position == Vec2(1.0, 2.0)
    assert c.shape == Rectangle(2.0, 4.0)
    assert c.compute_aabb() == box


def test_rotated_aabb_grows():
    c = square(0.0, 0.0, rotation=math.pi / 4)
    box = c.compute_aabb()
    assert box.width() == pytest.approx(math.sqrt(2))


def test_check_rectangles():
    assert square(0.0, 0.0).check(square(0.5, 0.5))
    assert not square(0.0, 0.0).check(square(2.0, 0.0))
    assert square(0.0, 0.0).check(square(1.0, 0.0))


def test_contains():
    assert square(0.0, 0.0).contains(Vec2(0.2, -0.3))
    assert not square(0.0, 0.0).contains(Vec2(3.0, 0.0))


def test_collide_normal_points_away():
    hit = square(0.0, 0.0).collide(square(0.8, 0.0))
    assert hit is not None
    assert hit.normal.x == pytest.approx(1.0)
    assert hit.normal.y == pytest.approx(0.0)
    assert hit.penetration == pytest.approx(0.2)
    assert square(0.0, 0.0).collide(square(5.0, 0.0)) is None


def test_collide_symmetric_normals():
    a, b = Collider(Vec2(0.0, 0.0), Circle(1.0)), Collider(Vec2(0.0, 1.5), Circle(1.0))
    ab, ba = a.collide(b), b.collide(a)
    assert ab.normal.y > 0 and ba.normal.y < 0
    assert ab.penetration == pytest.approx(ba.penetration)