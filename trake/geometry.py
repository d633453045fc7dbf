"""Small 2D math primitives: vectors, angles, boxes and bounded values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: Number
    y: Number

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, other: Vec2 | Number) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        return Vec2(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other: Vec2 | Number) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        return Vec2(self.x / other, self.y / other)

    def __iter__(self):
        yield self.x
        yield self.y

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize_or_zero(self) -> Vec2:
        """Unit vector in the same direction, or zero for a zero vector."""
        length = self.length()
        if length == 0:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / length, self.y / length)

    def arg(self) -> float:
        """Angle of the vector in radians."""
        return math.atan2(self.y, self.x)


ZERO = Vec2(0.0, 0.0)


def unit_vec(angle: float) -> Vec2:
    """Unit vector pointing at the given angle (radians)."""
    return Vec2(math.cos(angle), math.sin(angle))


def normalized_2pi(angle: float) -> float:
    """Angle normalized into [0, 2*pi)."""
    result = math.fmod(angle, math.tau)
    if result < 0:
        result += math.tau
    if result >= math.tau:
        result -= math.tau
    return result


def angle_to(angle: float, target: float) -> float:
    """Shortest signed rotation from ``angle`` to ``target``, in (-pi, pi]."""
    delta = normalized_2pi(target - angle)
    if delta > math.pi:
        delta -= math.tau
    return delta


@dataclass(frozen=True)
class Aabb:
    """Axis-aligned bounding box."""

    min: Vec2
    max: Vec2

    @classmethod
    def from_point(cls, position: Vec2) -> Aabb:
        return cls(position, position)

    def extend_symmetric(self, half_size: Vec2) -> Aabb:
        return Aabb(self.min - half_size, self.max + half_size)

    def extend_left(self, amount: Number) -> Aabb:
        return Aabb(Vec2(self.min.x - amount, self.min.y), self.max)

    def extend_up(self, amount: Number) -> Aabb:
        return Aabb(self.min, Vec2(self.max.x, self.max.y + amount))

    def center(self) -> Vec2:
        return (self.min + self.max) / 2

    def size(self) -> Vec2:
        return Vec2(self.width(), self.height())

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def corners(self) -> list[Vec2]:
        """Corners counter-clockwise starting at the bottom left."""
        return [
            self.min,
            Vec2(self.max.x, self.min.y),
            self.max,
            Vec2(self.min.x, self.max.y),
        ]


@dataclass
class Bounded:
    """A value clamped to the range [min, max]."""

    value: float
    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError("min must not exceed max")
        self.value = max(self.min, min(self.max, self.value))

    @classmethod
    def new_max(cls, value: float) -> Bounded:
        """A value in [0, value], starting at its maximum."""
        return cls(value, 0.0, value)

    def change(self, delta: float) -> None:
        self.value = max(self.min, min(self.max, self.value + delta))

    def is_min(self) -> bool:
        return self.value <= self.min

    def is_max(self) -> bool:
        return self.value >= self.max

    def ratio(self) -> float:
        span = self.max - self.min
        return 0.0 if span == 0 else (self.value - self.min) / span

    def set_ratio(self, ratio: float) -> None:
        ratio = max(0.0, min(1.0, ratio))
        self.value = self.min + (self.max - self.min) * ratio