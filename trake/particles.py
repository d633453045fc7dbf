"""Particles and floating texts."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .entities import Resource
from .geometry import Aabb, Bounded, Vec2


class ParticleKind(Enum):
    STEAM = "Steam"
    WALL = "Wall"
    WAGON_DESTROYED = "WagonDestroyed"


@dataclass(frozen=True)
class CollectParticle:
    """Particle kind for a collected resource."""

    resource: Resource


@dataclass
class FloatingText:
    text: str
    position: Vec2
    velocity: Vec2
    size: float
    color: tuple[float, float, float, float]
    lifetime: Bounded


@dataclass
class Particle:
    kind: ParticleKind | CollectParticle
    position: Vec2
    radius: float
    velocity: Vec2
    lifetime: Bounded


def _extra(rng: random.Random, amount: float) -> int:
    return int(amount) + (1 if rng.random() < amount - math.floor(amount) else 0)


def _gen_circle(rng: random.Random, center: Vec2, radius: float) -> Vec2:
    r = radius * math.sqrt(rng.random())
    angle = rng.uniform(0.0, math.tau)
    return Vec2(center.x + r * math.cos(angle), center.y + r * math.sin(angle))


@dataclass(frozen=True)
class CircleDistribution:
    center: Vec2
    radius: float

    def sample(self, rng: random.Random, density: float) -> list[Vec2]:
        amount = _extra(rng, density * self.radius**2 * math.pi)
        return [_gen_circle(rng, self.center, self.radius) for _ in range(amount)]


@dataclass(frozen=True)
class AabbDistribution:
    aabb: Aabb

    def sample(self, rng: random.Random, density: float) -> list[Vec2]:
        box = self.aabb
        amount = _extra(rng, density * box.width() * box.height())
        return [
            Vec2(rng.uniform(box.min.x, box.max.x), rng.uniform(box.min.y, box.max.y))
            for _ in range(amount)
        ]


@dataclass
class SpawnParticles:
    kind: ParticleKind | CollectParticle = ParticleKind.STEAM
    density: float = 5.0
    distribution: CircleDistribution | AabbDistribution = field(
        default_factory=lambda: CircleDistribution(Vec2(0.0, 0.0), 0.5)
    )
    size: tuple[float, float] = (0.05, 0.15)
    velocity: Vec2 = Vec2(0.0, 0.0)
    lifetime: tuple[float, float] = (0.5, 1.5)


def spawn_particles(
    options: SpawnParticles, rng: random.Random | None = None
) -> Iterator[Particle]:
    """Generate particles as described by ``options``."""
    rng = rng or random.Random()
    for position in options.distribution.sample(rng, options.density):
        velocity = _gen_circle(rng, options.velocity, 0.2)
        radius = rng.uniform(*options.size)
        lifetime = rng.uniform(*options.lifetime)
        yield Particle(options.kind, position, radius, velocity, Bounded.new_max(lifetime))