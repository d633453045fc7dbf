"""Player actions and their execution against the model."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchTrain:
    """Send the train out of the depo."""


@dataclass(frozen=True)
class BuyShop:
    """Buy the shop item at ``index``."""

    index: int


def execute(model: World, action: LaunchTrain | BuyShop) -> None:
    """Apply a player action to the model."""
    logger.debug("Executing %r", action)
    match action:
        case LaunchTrain():
            model.launch_train()
        case BuyShop(index=index):
            model.buy_shop(index)
        case _:
            raise TypeError(f"unknown action: {action!r}")