"""
Food kinds and the timed spawn state machine they share.

Every food kind is a ``FoodItem`` parameterized by a ``FoodSpec``. A timed
item is in one of three states:

    absent-cooling  (not active, cooldown > 0)
    absent-ready    (not active, cooldown == 0; rolls a spawn each tick)
    active          (on the board; counts down its lifetime if it has one)

Regular food has no timer at all: it is always on the board and is moved
as soon as it is eaten.
"""

import logging
from dataclasses import dataclass
from random import Random
from typing import Callable, Optional

from .constants import (
    REGULAR_POINTS,
    BONUS_POINTS, BONUS_SPAWN_CHANCE, BONUS_LIFETIME, BONUS_COOLDOWN,
    HAZARD_PENALTY, HAZARD_SPAWN_CHANCE, HAZARD_COOLDOWN, HAZARD_SHRINK,
)
from .geometry import Position

logger = logging.getLogger(__name__)

# Food kinds
REGULAR = "regular"
BONUS = "bonus"
HAZARD = "hazard"


@dataclass(frozen=True)
class FoodSpec:
    kind: str
    points: int
    spawn_chance: int = 0
    lifetime: Optional[int] = None
    cooldown: int = 0
    grows: bool = True
    shrink: int = 0
    always_present: bool = False


REGULAR_SPEC = FoodSpec(kind=REGULAR, points=REGULAR_POINTS, always_present=True)
BONUS_SPEC = FoodSpec(
    kind=BONUS,
    points=BONUS_POINTS,
    spawn_chance=BONUS_SPAWN_CHANCE,
    lifetime=BONUS_LIFETIME,
    cooldown=BONUS_COOLDOWN,
)
HAZARD_SPEC = FoodSpec(
    kind=HAZARD,
    points=-HAZARD_PENALTY,
    spawn_chance=HAZARD_SPAWN_CHANCE,
    cooldown=HAZARD_COOLDOWN,
    grows=False,
    shrink=HAZARD_SHRINK,
)


class FoodItem:
    """
    Presence and timers for one food kind.

    Attributes:
        spec: the kind's constants
        active: whether the item is on the board
        position: cell occupied while active (stale otherwise)
        remaining_lifetime: ticks left before an active item expires
        cooldown: ticks left before an absent item may roll a spawn
    """

    def __init__(self, spec: FoodSpec):
        self.spec = spec
        self.active = False
        self.position = Position(0, 0)
        self.remaining_lifetime = 0
        self.cooldown = 0
        self.reset()

    @property
    def kind(self) -> str:
        return self.spec.kind

    @property
    def ready(self) -> bool:
        """Absent with no cooldown left."""
        return not self.active and self.cooldown <= 0

    def reset(self) -> None:
        self.active = False
        self.remaining_lifetime = 0
        self.cooldown = self.spec.cooldown

    def place(self, position: Position) -> None:
        self.active = True
        self.position = position
        self.remaining_lifetime = self.spec.lifetime or 0

    def consume(self) -> None:
        """Take the item off the board and restart its cooldown."""
        self.active = False
        self.remaining_lifetime = 0
        self.cooldown = self.spec.cooldown

    def occupies(self, pos) -> bool:
        return self.active and self.position == pos

    def try_spawn(self, rng: Random, place: Callable[[], Position]) -> bool:
        """
        Roll for a spawn if the item is absent-ready.

        ``place`` is only called when the roll succeeds.
        """
        if not self.ready:
            return False
        if rng.randrange(100) >= self.spec.spawn_chance:
            return False
        self.place(place())
        logger.debug(f"{self.kind} food spawned at {self.position}")
        return True

    def advance(self, rng: Random, place: Callable[[], Position]) -> None:
        """Run one tick of the timer state machine."""
        if self.active:
            if self.spec.lifetime is None:
                return
            self.remaining_lifetime -= 1
            if self.remaining_lifetime <= 0:
                logger.debug(f"{self.kind} food at {self.position} expired")
                self.consume()
        elif self.cooldown > 0:
            self.cooldown -= 1
        else:
            self.try_spawn(rng, place)

    def __repr__(self):
        if self.active:
            return f"<FoodItem {self.kind} at {self.position} life={self.remaining_lifetime}>"
        return f"<FoodItem {self.kind} absent cooldown={self.cooldown}>"
