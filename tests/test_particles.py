import random

from trake.entities import Resource
from trake.geometry import Aabb, Vec2
from trake.particles import (
    AabbDistribution,
    CircleDistribution,
    CollectParticle,
    ParticleKind,
    SpawnParticles,
    spawn_particles,
)


def test_aabb_sample_exact_count_and_bounds():
    box = Aabb(Vec2(0.0, 0.0), Vec2(2.0, 2.0))
    points = AabbDistribution(box).sample(random.Random(1), 1.0)
    assert len(points) == 4
    assert all(0 <= p.x <= 2 and 0 <= p.y <= 2 for p in points)


def test_circle_sample_within_radius():
    dist = CircleDistribution(Vec2(1.0, 1.0), 2.0)
    points = dist.sample(random.Random(2), 3.0)
    assert len(points) in (37, 38)
    assert all((p - Vec2(1.0, 1.0)).length() <= 2.0 + 1e-9 for p in points)


def test_zero_density_spawns_nothing():
    options = SpawnParticles(density=0.0)
    assert list(spawn_particles(options, random.Random(0))) == []


def test_spawn_particles_properties():
    options = SpawnParticles(
        kind=CollectParticle(Resource.COIN),
        density=10.0,
        size=(0.1, 0.2),
        lifetime=(1.0, 2.0),
    )
    particles = list(spawn_particles(options, random.Random(3)))
    assert particles
    for p in particles:
        assert p.kind == CollectParticle(Resource.COIN)
        assert 0.1 <= p.radius <= 0.2
        assert 1.0 <= p.lifetime.max <= 2.0
        assert p.lifetime.value == p.lifetime.max
        assert p.velocity.length() <= 0.2 + 1e-9


def test_default_spawn_options():
    options = SpawnParticles()
    assert options.kind is ParticleKind.STEAM
    assert options.distribution.radius == 0.5
    assert options.size == (0.05, 0.15)