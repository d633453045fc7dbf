"""Game model entities and configuration."""

from __future__ import annotations

import math
import tomllib
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .collider import Collider, Rectangle
from .geometry import Aabb, Vec2


class Resource(Enum):
    COAL = "Coal"
    COIN = "Coin"
    DIAMOND = "Diamond"
    PLUS_CENT = "PlusCent"
    GHOST_FUEL = "GhostFuel"


class RailKind(Enum):
    STRAIGHT = "Straight"
    LEFT = "Left"


@dataclass(frozen=True)
class RailOrientation:
    kind: RailKind
    rotation: int = 0


@dataclass(frozen=True)
class Connections:
    left: bool
    bottom: bool
    right: bool
    top: bool

    @classmethod
    def from_orientation(cls, orientation: RailOrientation) -> Connections:
        if orientation.kind is RailKind.STRAIGHT:
            cons = [True, False, True, False]
        else:
            cons = [True, False, False, True]
        shift = orientation.rotation % len(cons)
        cons = cons[len(cons) - shift:] + cons[: len(cons) - shift]
        return cls(*cons)


@dataclass
class Rail:
    orientation: RailOrientation


@dataclass
class Wall:
    collider: Collider


@dataclass
class GridItem:
    position: Vec2
    rail: Rail | None = None
    resource: Resource | None = None
    wall: Wall | None = None


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


@dataclass
class Grid:
    cell_size: Vec2 = Vec2(1.0, 1.0)
    origin: Vec2 = Vec2(0.0, 0.0)

    def world_to_grid(self, world: Vec2) -> Vec2:
        grid = (world - self.origin) / self.cell_size
        return Vec2(_round_half_away(grid.x), _round_half_away(grid.y))

    def grid_to_world(self, grid: Vec2) -> Vec2:
        return self.gridf_to_world(Vec2(float(grid.x), float(grid.y)))

    def gridf_to_world(self, grid: Vec2) -> Vec2:
        return grid * self.cell_size + self.origin


@dataclass
class PlayerInput:
    turn: float = 0.0


class TrainBlockKind(Enum):
    LOCOMOTIVE = "Locomotive"
    WAGON = "Wagon"


@dataclass
class TrainConfig:
    overtime_slowdown: float
    turn_speed: float
    rail_speed: float
    offrail_speed: float
    acceleration: float
    deceleration: float
    wagon_size: Vec2
    wagon_spacing: float


@dataclass
class TrainBlock:
    kind: TrainBlockKind
    collider: Collider
    snapped_to_rail: bool = False
    entering_rail: bool = False
    path: deque[Vec2] = field(default_factory=deque)

    @classmethod
    def new(cls, config: TrainConfig, position: Vec2, kind: TrainBlockKind) -> TrainBlock:
        box = Aabb.from_point(position).extend_symmetric(config.wagon_size / 2)
        return cls(kind, Collider.from_aabb(box))

    @classmethod
    def new_locomotive(cls, config: TrainConfig, position: Vec2) -> TrainBlock:
        return cls.new(config, position, TrainBlockKind.LOCOMOTIVE)

    @classmethod
    def new_wagon(cls, config: TrainConfig, position: Vec2) -> TrainBlock:
        return cls.new(config, position, TrainBlockKind.WAGON)


@dataclass
class Train:
    in_depo: bool = False
    target_speed: float = 0.0
    train_speed: float = 0.0
    blocks: deque[TrainBlock] = field(default_factory=deque)


class Phase(Enum):
    SETUP = "Setup"
    RESOLUTION = "Resolution"


@dataclass
class Deck:
    resources: list[Resource] = field(default_factory=list)
    rails: list[RailKind] = field(default_factory=list)


class Upgrade(Enum):
    SPEED = "Speed"
    FEATHER = "Feather"
    TURNING = "Turning"


@dataclass(frozen=True)
class ResourceUpgrade:
    """An upgrade that adds a resource to the deck."""

    resource: Resource


@dataclass
class ShopItem:
    upgrade: Upgrade | ResourceUpgrade
    price: int
    can_purchase: bool = True


@dataclass
class ResourceConfig:
    value: int
    rarity: float


def _vec(value: Any, convert=float) -> Vec2:
    if isinstance(value, dict):
        return Vec2(convert(value["x"]), convert(value["y"]))
    x, y = value
    return Vec2(convert(x), convert(y))


@dataclass
class Config:
    map_size: Vec2
    depo_size: Vec2
    deck: Deck
    train: TrainConfig
    resources: dict[Resource, ResourceConfig]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        try:
            train = data["train"]
            return cls(
                map_size=_vec(data["map_size"], int),
                depo_size=_vec(data["depo_size"]),
                deck=Deck(
                    resources=[Resource(r) for r in data["deck"]["resources"]],
                    rails=[RailKind(r) for r in data["deck"]["rails"]],
                ),
                train=TrainConfig(
                    overtime_slowdown=float(train["overtime_slowdown"]),
                    turn_speed=float(train["turn_speed"]),
                    rail_speed=float(train["rail_speed"]),
                    offrail_speed=float(train["offrail_speed"]),
                    acceleration=float(train["acceleration"]),
                    deceleration=float(train["deceleration"]),
                    wagon_size=_vec(train["wagon_size"]),
                    wagon_spacing=float(train["wagon_spacing"]),
                ),
                resources={
                    Resource(name): ResourceConfig(int(cfg["value"]), float(cfg["rarity"]))
                    for name, cfg in data.get("resources", {}).items()
                },
            )
        except (KeyError, TypeError, ValueError) as err:
            raise ValueError(f"invalid config: {err}") from err

    @classmethod
    def load(cls, path: str | Path) -> Config:
        with open(path, "rb") as f:
            return cls.from_dict(tomllib.load(f))