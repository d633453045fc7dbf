"""Game world state: map generation, rounds, quotas and the shop."""

from __future__ import annotations

import copy
import itertools
import math
import random
from collections import deque

from .collider import Collider
from .context import Context
from .entities import (
    Config,
    Grid,
    GridItem,
    Phase,
    Rail,
    RailOrientation,
    Resource,
    ResourceUpgrade,
    ShopItem,
    Train,
    TrainBlock,
    Upgrade,
    Wall,
)
from .geometry import Aabb, Vec2
from .particles import FloatingText, Particle, SpawnParticles

_SHOP_SIZE = 2
_SHOP_OPTIONS = [
    (Upgrade.SPEED, 15),
    (Upgrade.FEATHER, 10),
    (Upgrade.TURNING, 10),
    (ResourceUpgrade(Resource.GHOST_FUEL), 20),
    (ResourceUpgrade(Resource.PLUS_CENT), 20),
]
_DISCOUNTS = [(0.0, 4.0), (0.1, 3.0), (0.25, 2.0), (0.5, 1.0)]


class QuotaFailed(Exception):
    """Raised when the quota was not met in time; the game is over."""

    def __init__(self, total_score: int) -> None:
        super().__init__(f"you failed, final score: {total_score}")
        self.total_score = total_score


def _round_half_away(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _div_trunc(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


class World:
    """The state of a game in progress."""

    def __init__(self, context: Context, config: Config, rng: random.Random | None = None) -> None:
        self.context = context
        self.config = copy.deepcopy(config)
        self.rng = rng or random.Random()

        self.camera_center = Vec2(0.0, 0.0)
        self.camera_rotation = 0.0
        self.camera_fov = 16.0
        self.grid = Grid()

        self.real_time = 0.0
        self.round_time = 0.0

        self.quotas_completed = 0
        self.total_score = 0
        self.current_quota = 0
        self.quota_score = 0
        self.quota_day = 0
        self.round_score = 0
        self.money = 0

        self.phase = Phase.SETUP
        self.deck = copy.deepcopy(config.deck)
        self.train = Train()
        self.depo = Collider.from_aabb(Aabb.from_point(Vec2(0.0, 0.0)))
        self.shop: list[ShopItem] = []

        self.grid_items: dict[int, GridItem] = {}
        self._ids = itertools.count()
        self.particles_queue: list[SpawnParticles] = []
        self.particles: list[Particle] = []
        self.floating_texts: list[FloatingText] = []

        self.init()

    def add_item(self, item: GridItem) -> int:
        """Insert a grid item and return its id."""
        item_id = next(self._ids)
        self.grid_items[item_id] = item
        return item_id

    def init(self) -> None:
        """Set up the camera and the surrounding walls, then start a round."""
        size = self.config.map_size
        self.camera_center = self.grid.grid_to_world(Vec2(size.x // 2 + 1, size.y // 2 + 1))

        self.grid_items = {}
        for x in range(size.x + 2):
            self._set_wall_at(Vec2(x, 0))
            self._set_wall_at(Vec2(x, size.y + 1))
        for y in range(1, size.y + 1):
            self._set_wall_at(Vec2(0, y))
            self._set_wall_at(Vec2(size.x + 1, y))

        self.next_round()

    def _set_wall_at(self, position: Vec2) -> None:
        box = Aabb.from_point(self.grid.grid_to_world(position)).extend_symmetric(
            self.grid.cell_size * (0.9 / 2.0)
        )
        self.add_item(GridItem(position, wall=Wall(Collider.from_aabb(box))))

    def next_round(self) -> None:
        """Settle the finished round and generate the next one."""
        rng = self.rng
        self.round_time = 0.0

        self._settle_score()
        self.money += int(
            max(
                0.0,
                _round_half_away(
                    self.round_score / 3.0 * rng.uniform(0.9, 1.1) + rng.uniform(-1.0, 3.0)
                ),
            )
        )
        self.round_score = 0

        self._place_depo()
        self.train = Train(
            in_depo=True,
            blocks=deque([TrainBlock.new_locomotive(self.config.train, self.depo.position)]),
        )

        self.grid_items = {
            item_id: item for item_id, item in self.grid_items.items() if item.wall is not None
        }
        self._spawn_items()
        self._restock_shop()
        self.phase = Phase.SETUP

    def _settle_score(self) -> None:
        self.quota_day += 1
        if self.quota_day == 1 and self.quotas_completed == 0:
            self.current_quota = 15
            return
        self.total_score += self.round_score
        self.quota_score += self.round_score
        if self.quota_score >= self.current_quota:
            self.quotas_completed += 1
            self.money += _div_trunc(self.quota_score, 5)
            noise = self.rng.uniform(0.9, 1.1)
            self.current_quota += int(20.0 * (self.quotas_completed**2 / 5.0) * noise)
            self.quota_score = 0
            self.quota_day = 1
        elif self.quota_day > 3:
            raise QuotaFailed(self.total_score)

    def _place_depo(self) -> None:
        size = self.config.depo_size
        map_size = self.config.map_size
        grid_min = self.grid.gridf_to_world(Vec2(0.5, 0.5))
        grid_max = self.grid.gridf_to_world(Vec2(map_size.x - 0.5, map_size.y - 0.5))
        y = self.rng.uniform(grid_min.y, grid_max.y - size.y)
        box = Aabb.from_point(Vec2(grid_min.x, y)).extend_left(size.x).extend_up(size.y)
        self.depo = Collider.from_aabb(box)

    def _spawn_items(self) -> None:
        size = self.config.map_size
        positions = [
            Vec2(x, y) for x in range(1, size.x + 1) for y in range(1, size.y + 1)
        ]
        self.rng.shuffle(positions)
        for resource in self.deck.resources:
            if positions:
                self.add_item(GridItem(positions.pop(), resource=resource))
        for kind in self.deck.rails:
            orientation = RailOrientation(kind, self.rng.randint(0, 3))
            if positions:
                self.add_item(GridItem(positions.pop(), rail=Rail(orientation)))

    def _restock_shop(self) -> None:
        rng = self.rng
        discount = rng.choices(
            [d for d, _ in _DISCOUNTS], weights=[w for _, w in _DISCOUNTS]
        )[0]
        discount_i = rng.randrange(_SHOP_SIZE)
        chosen = rng.sample(_SHOP_OPTIONS, _SHOP_SIZE)
        self.shop = []
        for i, (upgrade, price) in enumerate(chosen):
            if i == discount_i:
                price -= math.ceil(price * discount)
            self.shop.append(ShopItem(upgrade, price, True))

    def buy_shop(self, index: int) -> None:
        """Buy the shop item at ``index`` if it is available and affordable."""
        if not 0 <= index < len(self.shop):
            return
        item = self.shop[index]
        if not item.can_purchase or self.money < item.price:
            return
        self.money -= item.price
        item.can_purchase = False
        train = self.config.train
        upgrade = item.upgrade
        if isinstance(upgrade, ResourceUpgrade):
            self.deck.resources.append(upgrade.resource)
        elif upgrade is Upgrade.SPEED:
            train.rail_speed *= 1.2
            train.offrail_speed *= 1.2
        elif upgrade is Upgrade.FEATHER:
            train.overtime_slowdown *= 0.9
        elif upgrade is Upgrade.TURNING:
            limit = 4.0
            train.turn_speed = limit + (train.turn_speed - limit) * 0.75

    def launch_train(self) -> None:
        """Start the resolution phase with the train at rail speed."""
        if self.phase is not Phase.SETUP:
            return
        speed = self.config.train.rail_speed
        self.train.target_speed = speed
        self.train.train_speed = speed
        self.phase = Phase.RESOLUTION
        self.context.play_sfx("choochoo")

    def place_rail(self, position: Vec2, orientation: RailOrientation) -> bool:
        """Place a rail on a free cell; returns whether it was placed."""
        if any(item.position == position for item in self.grid_items.values()):
            return False
        self.add_item(GridItem(position, rail=Rail(orientation)))
        return True