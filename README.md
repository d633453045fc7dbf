# trake

trake holds the rules of a small arcade game. A train leaves its depot and
rides rails laid on a grid. It picks up resources, and each pickup adds a
wagon. The round ends when the train returns to the depot or comes to a stop.
Each round earns score towards a quota and money to spend in an upgrade shop.

## Modules

- `trake.geometry`: the `Vec2`, `Aabb` and `Bounded` types, plus the angle
  helpers `unit_vec`, `normalized_2pi` and `angle_to`. Angles are in radians.
- `trake.collider`: `Collider` built from `Circle` or `Rectangle` shapes, with
  an optional rotation.
  - `check` and `contains` test for overlap.
  - `collide` returns a `Collision` holding the point, normal and penetration.
  - `compute_aabb` returns the bounding box.
  - `Transform` offers `identity`, `scaled` and `lerp`.
- `trake.entities`: the pieces of a game.
  - Grid items: `GridItem`, `Rail`, `Wall`, `Resource`.
  - Rails: `RailKind` and `RailOrientation`. `Connections.from_orientation`
    gives a rail's open sides.
  - `Grid`: conversions between world and grid coordinates.
  - The train: `Train`, `TrainBlock`.
  - The shop: `ShopItem`, with `Upgrade` and `ResourceUpgrade`.
  - `Config`: built with `Config.from_dict`, or read from a TOML file with
    `Config.load`. Either one raises `ValueError` on bad data.
- `trake.particles`: `Particle`, `FloatingText`, the spawn areas
  `CircleDistribution` and `AabbDistribution`, and
  `spawn_particles(options, rng)`.
- `trake.music`: `Sound`, `SoundEffect`, `Music` and `MusicManager`. They
  track playback state and volume only.
- `trake.context`:
  - `Color.from_hex` and the `Theme` / `ThemeColor` pair.
  - The player's `Options`.
  - `OptionsStore`, which saves options as JSON at a path, or keeps them in
    memory when no path is given.
  - `Context`, which ties options, sounds and music together. Its `play_sfx`
    takes a sound name: `choochoo`, `click`, `clop`, `clop2`, `puff` or
    `tootuh`.
- `trake.world`: `World` runs a game between frames.
  - It lays out the walls and generates each round with `next_round`.
  - It tracks quota days and stocks a two-item shop.
  - It provides `buy_shop(index)`, `launch_train()` and
    `place_rail(position, orientation)`. `place_rail` returns `False` if the
    cell is taken.
  - It raises `QuotaFailed` (carrying `total_score`) once the quota is still
    unmet after three days.
- `trake.simulation`: `Model` extends `World`. Its
  `update(delta_time, player_input)` does the following:
  - moves the train along rails, or steers it by `PlayerInput.turn` when off a
    rail;
  - collects resources and adds a wagon;
  - drops the front block when it hits a wall;
  - ends the round at the depot or when the train stops;
  - advances particles and floating texts.
- `trake.game`: the actions `LaunchTrain` and `BuyShop(index)`, applied with
  `execute(model, action)`.

## Configuration

`Config.load` reads a TOML file like this one:

```toml
map_size = [10, 8]
depo_size = [1.0, 2.0]

[deck]
resources = ["Coal", "Coal", "Coin", "Diamond"]
rails = ["Straight", "Straight", "Left"]

[train]
overtime_slowdown = 0.1
turn_speed = 2.0
rail_speed = 1.5
offrail_speed = 1.0
acceleration = 1.0
deceleration = 1.0
wagon_size = [0.8, 0.6]
wagon_spacing = 0.2

[resources.Coal]
value = 1
rarity = 1.0

[resources.Diamond]
value = 5
rarity = 0.2
```

Vectors may be written as `[x, y]` or as `{ x = ..., y = ... }`.

## Example

```python
import random

from trake.context import Context
from trake.entities import Config, PlayerInput
from trake.game import LaunchTrain, execute
from trake.simulation import Model
from trake.world import QuotaFailed

config = Config.load("config.toml")
model = Model(Context(), config, random.Random(1))

execute(model, LaunchTrain())
try:
    for _ in range(600):
        model.update(1 / 60, PlayerInput(turn=0.0))
except QuotaFailed as err:
    print("game over, score", err.total_score)

print(model.round_score, model.money, len(model.train.blocks))
```

## What it does not do

There is no window, drawing, keyboard or mouse handling, and no audio output.
`Sound` and `MusicManager` only record which effects would play and at what
volume. No command is installed. A front end is expected to do three things:

- call `Model.update` every frame;
- turn input into `PlayerInput` and the `LaunchTrain` / `BuyShop` actions;
- draw from the model's public state: `grid_items`, `train`, `depo`,
  `particles`, `floating_texts`, `shop`.

## Tests

```
pip install -e .[test]
pytest
```