"""Colliders made of circles and rotated rectangles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from .geometry import Aabb, Vec2, angle_to

_EPS = 1e-9


@dataclass(frozen=True)
class Collision:
    """Contact info; the point is relative to the first collider's position."""

    point: Vec2
    normal: Vec2  # points away from the first body
    penetration: float


@dataclass(frozen=True)
class Transform:
    translation: Vec2 = Vec2(0.0, 0.0)
    rotation: float = 0.0
    scale: float = 1.0

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    @classmethod
    def scaled(cls, scale: float) -> Transform:
        return cls(scale=float(scale))

    def lerp(self, target: Transform, t: float) -> Transform:
        return Transform(
            translation=self.translation + (target.translation - self.translation) * t,
            rotation=self.rotation + angle_to(self.rotation, target.rotation) * t,
            scale=self.scale + (target.scale - self.scale) * t,
        )


class Shape:
    """Base class of collider shapes."""

    def scaled(self, scale: float) -> Shape:
        raise NotImplementedError


@dataclass(frozen=True)
class Circle(Shape):
    radius: float

    def scaled(self, scale: float) -> Circle:
        return Circle(self.radius * scale)


@dataclass(frozen=True)
class Rectangle(Shape):
    width: float
    height: float

    @classmethod
    def from_size(cls, size: Vec2) -> Rectangle:
        return cls(size.x, size.y)

    def scaled(self, scale: float) -> Rectangle:
        return Rectangle(self.width * scale, self.height * scale)


def _rotate(v: Vec2, angle: float) -> Vec2:
    c, s = math.cos(angle), math.sin(angle)
    return Vec2(v.x * c - v.y * s, v.x * s + v.y * c)


def _edge_axes(points: list[Vec2]) -> list[Vec2]:
    axes = []
    for a, b in zip(points, points[1:] + points[:1]):
        e = b - a
        n = Vec2(-e.y, e.x).normalize_or_zero()
        if n.length() > 0:
            axes.append(n)
    return axes


def _point_axis(point: Vec2, others: list[Vec2]) -> list[Vec2]:
    closest = min(others, key=lambda v: (v - point).length())
    axis = (closest - point).normalize_or_zero()
    return [axis] if axis.length() > 0 else []


def _project(points: list[Vec2], radius: float, axis: Vec2) -> tuple[float, float]:
    values = [p.dot(axis) for p in points]
    return min(values) - radius, max(values) + radius


@dataclass
class Collider:
    position: Vec2
    shape: Shape
    rotation: float = field(default=0.0)

    @classmethod
    def from_aabb(cls, aabb: Aabb) -> Collider:
        return cls(aabb.center(), Rectangle.from_size(aabb.size()))

    def _world(self) -> tuple[list[Vec2], float]:
        shape = self.shape
        if isinstance(shape, Circle):
            return [self.position], shape.radius
        if isinstance(shape, Rectangle):
            if shape.width == 0 or shape.height == 0:
                return [self.position], 0.0
            hw, hh = shape.width / 2, shape.height / 2
            local = [Vec2(-hw, -hh), Vec2(hw, -hh), Vec2(hw, hh), Vec2(-hw, hh)]
            return [self.position + _rotate(p, self.rotation) for p in local], 0.0
        raise TypeError(f"unsupported shape: {shape!r}")

    def compute_aabb(self) -> Aabb:
        points, radius = self._world()
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return Aabb(
            Vec2(min(xs) - radius, min(ys) - radius),
            Vec2(max(xs) + radius, max(ys) + radius),
        )

    def contains(self, point: Vec2) -> bool:
        """Check whether the collider contains the point."""
        return self.check(Collider(point, Circle(0.01)))

    def _separation(self, other: Collider) -> tuple[float, Vec2] | None:
        pa, ra = self._world()
        pb, rb = other._world()
        axes = []
        axes += _edge_axes(pa) if len(pa) >= 2 else _point_axis(pa[0], pb)
        axes += _edge_axes(pb) if len(pb) >= 2 else _point_axis(pb[0], pa)
        if not axes:
            axes = [Vec2(1.0, 0.0)]
        best: tuple[float, Vec2] | None = None
        for axis in axes:
            amin, amax = _project(pa, ra, axis)
            bmin, bmax = _project(pb, rb, axis)
            overlap = min(amax, bmax) - max(amin, bmin)
            if overlap < 0:
                return None
            if best is None or overlap < best[0]:
                best = (overlap, axis)
        return best

    def check(self, other: Collider) -> bool:
        """Check whether two colliders are intersecting."""
        return self._separation(other) is not None

    def collide(self, other: Collider) -> Collision | None:
        """Return the collision info if the two colliders are intersecting."""
        result = self._separation(other)
        if result is None:
            return None
        penetration, normal = result
        pa, ra = self._world()
        pb, _ = other._world()
        ca = sum(pa, Vec2(0.0, 0.0)) / len(pa)
        cb = sum(pb, Vec2(0.0, 0.0)) / len(pb)
        if normal.dot(cb - ca) < 0:
            normal = -normal
        top = max(p.dot(normal) for p in pa)
        support = [p for p in pa if p.dot(normal) >= top - _EPS]
        point = sum(support, Vec2(0.0, 0.0)) / len(support) + normal * ra
        return Collision(point - self.position, normal, penetration)

    def with_position(self, position: Vec2) -> Collider:
        return replace(self, position=position)