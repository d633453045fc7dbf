"""Per-frame simulation: train movement, collection, collisions and particles."""

from __future__ import annotations

import dataclasses
import math
import random
from itertools import pairwise

from .collider import Collider, Rectangle
from .context import Color
from .entities import (
    Connections,
    Phase,
    PlayerInput,
    Rail,
    Resource,
    TrainBlock,
    TrainBlockKind,
    Vec2,
)
from .geometry import Bounded, normalized_2pi, unit_vec
from .particles import (
    AabbDistribution,
    CircleDistribution,
    CollectParticle,
    FloatingText,
    ParticleKind,
    SpawnParticles,
    spawn_particles,
)
from .world import World

_NINETY = math.pi / 2
_NEGATIVE_TEXT = dataclasses.astuple(Color.from_hex("#ff4f69"))
_POSITIVE_TEXT = dataclasses.astuple(Color.from_hex("#fff7f8"))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _div_trunc(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _side(angle: float) -> int:
    """Index of the side (0 right, 1 top, 2 left, 3 bottom) an angle points at."""
    return int(math.floor(math.degrees(normalized_2pi(angle)) / 90.0 + 0.5)) % 4


def _sides(rail: Rail) -> list[bool]:
    cons = Connections.from_orientation(rail.orientation)
    return [cons.right, cons.top, cons.left, cons.bottom]


def spawn_text(text: str, position: Vec2, rng: random.Random | None = None) -> FloatingText:
    """A floating score text drifting up from ``position``."""
    rng = rng or random.Random()
    angle = rng.uniform(1.0, 2.0)
    speed = rng.uniform(0.5, 1.0)
    return FloatingText(
        text=text,
        position=position,
        velocity=unit_vec(angle) * speed,
        size=0.75,
        color=_NEGATIVE_TEXT if text.startswith("-") else _POSITIVE_TEXT,
        lifetime=Bounded.new_max(1.5),
    )


class Model(World):
    """A world that can be advanced in time."""

    def update(self, delta_time: float, player_input: PlayerInput | None = None) -> None:
        """Advance the simulation by ``delta_time`` seconds."""
        player_input = player_input or PlayerInput()
        self.real_time += delta_time
        self.context.music.set_volume(_clamp(self.train.train_speed, 0.0, 1.0))

        if self.phase is Phase.RESOLUTION:
            self.round_time += delta_time
            self._move_train(delta_time, player_input)
            self._collect_resources()
            self._collide_train()

        self._passive_particles()
        self._process_particles(delta_time)

    def _rail_at(self, position: Vec2) -> Rail | None:
        return next(
            (
                item.rail
                for item in self.grid_items.values()
                if item.rail is not None and item.position == position
            ),
            None,
        )

    def _walls(self):
        return (item.wall for item in self.grid_items.values() if item.wall is not None)

    def _passive_particles(self) -> None:
        for wall in self._walls():
            if wall.collider.check(self.depo):
                continue
            self.particles_queue.append(
                SpawnParticles(
                    kind=ParticleKind.WALL,
                    density=0.5,
                    distribution=AabbDistribution(wall.collider.compute_aabb()),
                    size=(0.05, 0.1),
                )
            )

    def _process_particles(self, delta_time: float) -> None:
        for text in self.floating_texts:
            text.position = text.position + text.velocity * delta_time
            text.lifetime.change(-delta_time)
        self.floating_texts = [t for t in self.floating_texts if not t.lifetime.is_min()]

        for particle in self.particles:
            particle.position = particle.position + particle.velocity * delta_time
            particle.lifetime.change(-delta_time)
        self.particles = [p for p in self.particles if not p.lifetime.is_min()]

        queue, self.particles_queue = self.particles_queue, []
        for options in queue:
            self.particles.extend(spawn_particles(options, self.rng))

    def _collect_resources(self) -> None:
        collected = []
        for wagon in self.train.blocks:
            grid_pos = self.grid.world_to_grid(wagon.collider.position)
            collected.extend(
                item_id
                for item_id, item in self.grid_items.items()
                if item.resource is not None and item.position == grid_pos
            )

        if collected:
            self._add_wagon(TrainBlockKind.WAGON)
            self.context.play_sfx("clop2")

        for item_id in collected:
            item = self.grid_items.pop(item_id, None)
            if item is None or item.resource is None:
                continue
            resource = item.resource
            position = self.grid.grid_to_world(item.position)

            plus_score = 0
            plus_money = 0
            if resource is Resource.PLUS_CENT:
                plus_score += _div_trunc(self.round_score, 5)
                plus_money += _div_trunc(self.money, 10)
            elif resource is Resource.COIN:
                plus_money += self.rng.randint(8, 13)

            config = self.config.resources.get(resource)
            if config is not None:
                plus_score += config.value

            self.round_score += plus_score
            self.money += plus_money

            self.particles_queue.append(
                SpawnParticles(
                    kind=CollectParticle(resource),
                    density=10.0,
                    distribution=CircleDistribution(position, 0.5),
                    velocity=Vec2(0.0, 1.0),
                )
            )
            if plus_score != 0:
                self.floating_texts.append(spawn_text(f"{plus_score:+}", position, self.rng))

    def _collide_train(self) -> None:
        blocks = self.train.blocks
        if not blocks:
            return
        head = blocks[0]

        if head.collider.check(self.depo):
            # Wall collisions are ignored inside the depo
            if not self.train.in_depo:
                self.next_round()
            return
        self.train.in_depo = False

        if not any(head.collider.check(wall.collider) for wall in self._walls()):
            return

        block = blocks.popleft()
        plus_score = -math.ceil(self.round_score * self.rng.uniform(0.15, 0.25))
        self.round_score += plus_score
        if plus_score != 0:
            self.floating_texts.append(
                spawn_text(f"{plus_score:+}", block.collider.position, self.rng)
            )

        self.particles_queue.append(
            SpawnParticles(
                kind=ParticleKind.WAGON_DESTROYED,
                density=20.0,
                distribution=CircleDistribution(block.collider.position, 0.5),
                size=(0.1, 0.15),
                velocity=-unit_vec(block.collider.rotation)
                * _clamp(self.train.train_speed * 0.5, 0.5, 1.0),
            )
        )
        self.context.play_sfx("puff")

    def _add_wagon(self, kind: TrainBlockKind) -> None:
        if not self.train.blocks:
            return
        tail = self.train.blocks[-1]
        spacing = self.config.train.wagon_spacing + self.config.train.wagon_size.x
        space_left = spacing
        points = [tail.collider.position, *tail.path]
        for to, frm in pairwise(points):
            dist = (to - frm).length()
            if space_left <= dist:
                anchor, direction = to, (frm - to).normalize_or_zero()
                break
            space_left -= dist
        else:
            space_left = spacing
            anchor, direction = tail.collider.position, -unit_vec(tail.collider.rotation)

        self.train.blocks.append(
            TrainBlock(
                kind,
                Collider(
                    anchor + direction * space_left,
                    Rectangle.from_size(self.config.train.wagon_size),
                    (-direction).arg(),
                ),
            )
        )

    def _align(self, wagon: TrainBlock, rail_pos: Vec2, face_side: int) -> None:
        wagon.collider.rotation = _NINETY * face_side
        rail_dir = unit_vec(wagon.collider.rotation)
        wagon.collider.position = rail_pos + rail_dir * (
            (wagon.collider.position - rail_pos).dot(rail_dir)
        )

    def _move_head(self, wagon: TrainBlock, player_input: PlayerInput, delta_time: float) -> bool:
        """Move the locomotive; returns whether it is on a rail."""
        collider = wagon.collider
        move_dir = unit_vec(collider.rotation)
        pos = self.grid.world_to_grid(collider.position)
        rail = self._rail_at(pos)

        if rail is not None:
            cons = _sides(rail)
            rail_pos = self.grid.grid_to_world(pos)
            offset = collider.position - rail_pos
            face_side = _side(collider.rotation)
            back_side = (face_side + 2) % 4

            if cons[back_side] and offset.dot(move_dir) < 0:
                # Entering the rail
                self._align(wagon, rail_pos, face_side)
                if not wagon.entering_rail:
                    wagon.path.appendleft(collider.position)
                wagon.snapped_to_rail = True
                wagon.entering_rail = True
                on_rail = True
            else:
                # Leaving the rail
                rail_dir = _NINETY * face_side
                if wagon.snapped_to_rail and wagon.entering_rail and not cons[face_side]:
                    # Crossed the center of the rail: turn
                    if cons[(face_side + 1) % 4]:
                        turn = rail_dir + _NINETY
                    elif cons[(face_side + 3) % 4]:
                        turn = rail_dir - _NINETY
                    else:
                        turn = None
                    if turn is not None:
                        collider.rotation = turn
                        collider.position = rail_pos
                        wagon.path.appendleft(rail_pos)
                    on_rail = turn is not None
                elif cons[face_side]:
                    self._align(wagon, rail_pos, face_side)
                    if wagon.entering_rail:
                        wagon.path.appendleft(collider.position)
                    on_rail = True
                else:
                    on_rail = False
                wagon.snapped_to_rail = on_rail
                wagon.entering_rail = False
        else:
            collider.rotation += (
                self.config.train.turn_speed
                * player_input.turn
                * delta_time
                * min(self.train.train_speed, 1.0)
            )
            on_rail = False

        collider.position = (
            collider.position + unit_vec(collider.rotation) * self.train.train_speed * delta_time
        )
        return on_rail

    def _move_on(self, frm: Vec2, to: Vec2, space: float, wagon: TrainBlock) -> bool:
        delta = to - frm
        wagon.collider.position = to - delta.normalize_or_zero() * space
        new_rotation = delta.arg()
        if wagon.collider.rotation != new_rotation:
            wagon.collider.rotation = new_rotation
            wagon.path.appendleft(frm)

        pos = self.grid.world_to_grid(wagon.collider.position)
        rail = self._rail_at(pos)
        if rail is None:
            return False
        offset = wagon.collider.position - self.grid.grid_to_world(pos)
        return _sides(rail)[_side(offset.arg())]

    def _move_wagon(self, head: TrainBlock, wagon: TrainBlock) -> bool:
        """Pull ``wagon`` along the path of ``head``; returns whether it is on a rail."""
        space_left = self.config.train.wagon_spacing + self.config.train.wagon_size.x
        points = [head.collider.position, *head.path, wagon.collider.position]
        for i, (to, frm) in enumerate(pairwise(points)):
            dist = (to - frm).length()
            if space_left <= dist:
                while len(head.path) > i:
                    head.path.pop()
                return self._move_on(frm, to, space_left, wagon)
            space_left -= dist

        frm = wagon.collider.position
        to = head.path[-1] if head.path else head.collider.position
        return self._move_on(frm, to, space_left + (to - frm).length(), wagon)

    def _move_train(self, delta_time: float, player_input: PlayerInput) -> None:
        train = self.train
        config = self.config.train
        if not train.blocks:
            self.next_round()
            return

        blocks = list(train.blocks)
        head = blocks[0]
        facing = unit_vec(head.collider.rotation)
        self.particles_queue.append(
            SpawnParticles(
                kind=ParticleKind.STEAM,
                density=4.0 * _clamp(train.train_speed, 0.5, 5.0),
                distribution=CircleDistribution(
                    head.collider.position + facing * config.wagon_size.x / 2.5, 0.1
                ),
                size=(0.05, 0.15),
                velocity=-facing * _clamp(train.train_speed * 0.5, 0.1, 0.5),
            )
        )

        on_rail = int(self._move_head(head, player_input, delta_time))
        for block in blocks[1:]:
            on_rail += int(self._move_wagon(head, block))
            head = block

        # Acceleration
        count = len(blocks)
        train.target_speed = config.offrail_speed + (
            config.rail_speed - config.offrail_speed
        ) * (on_rail / count)
        slowdown_s = config.offrail_speed
        slowdown_t = slowdown_s / config.overtime_slowdown - (count - 1.0) * 2.0
        t = self.round_time / slowdown_t
        slowdown = t * t * t * slowdown_s
        target = max(train.target_speed - slowdown, 0.0)
        current = train.train_speed
        acceleration = config.acceleration if target > current else -config.deceleration
        limit = abs(target - current)
        train.train_speed = current + _clamp(acceleration * delta_time, -limit, limit)

        if train.train_speed == 0.0:
            self.next_round()