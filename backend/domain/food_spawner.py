"""
Food placement and the three food items on the board.
"""

import logging
from random import Random
from typing import Dict, List, Optional

from .constants import MAX_PLACEMENT_ATTEMPTS
from .food import (
    FoodItem, REGULAR_SPEC, BONUS_SPEC, HAZARD_SPEC,
)
from .geometry import Board, Position
from .snake import Snake

logger = logging.getLogger(__name__)


class NoPlacementAvailable(RuntimeError):
    """Raised when every interior cell is taken by the snake or food."""


class FoodSpawner:
    """
    Owns the regular, bonus and hazard food items and places them on free
    interior cells.

    The snake is looked up through ``snake_getter`` so the spawner keeps
    working after the game swaps in a fresh snake.
    """

    def __init__(self, board: Board, rng: Random, snake_getter):
        self.board = board
        self.rng = rng
        self._snake_getter = snake_getter
        self.regular = FoodItem(REGULAR_SPEC)
        self.bonus = FoodItem(BONUS_SPEC)
        self.hazard = FoodItem(HAZARD_SPEC)

    @property
    def items(self) -> List[FoodItem]:
        """Items in pickup priority order."""
        return [self.bonus, self.hazard, self.regular]

    def active_positions(self) -> Dict[str, Position]:
        return {item.kind: item.position for item in self.items if item.active}

    def _is_free(self, pos: Position, snake: Snake, ignore: Optional[FoodItem]) -> bool:
        if pos in snake.positions:
            return False
        return not any(
            item.occupies(pos) for item in self.items if item is not ignore
        )

    def generate_food(self, for_item: Optional[FoodItem] = None) -> Position:
        """
        Return a random interior cell not covered by the snake or by any
        other active food.

        ``for_item`` is the item being (re)placed; its current cell does not
        count as taken.

        Raises:
            NoPlacementAvailable: if the interior has no free cell.
        """
        snake = self._snake_getter()
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            pos = Position(
                self.rng.randint(1, self.board.width - 2),
                self.rng.randint(1, self.board.height - 2),
            )
            if self._is_free(pos, snake, for_item):
                return pos

        # Crowded board: pick from what is actually left
        free = [p for p in self.board.interior_cells() if self._is_free(p, snake, for_item)]
        if not free:
            raise NoPlacementAvailable(
                f"No free cell on {self.board!r} for snake of length {len(snake)}"
            )
        logger.info(f"Random placement gave up; choosing among {len(free)} free cells")
        return self.rng.choice(free)

    def relocate_regular(self) -> None:
        self.regular.place(self.generate_food(self.regular))

    def _placer(self, item: FoodItem):
        return lambda: self.generate_food(item)

    def advance_timers(self) -> None:
        """Per-tick timer step for the timed kinds (bonus, then hazard)."""
        self.bonus.advance(self.rng, self._placer(self.bonus))
        self.hazard.advance(self.rng, self._placer(self.hazard))

    def roll_extra_spawns(self) -> None:
        """Extra spawn chance for the timed kinds after regular food is eaten."""
        self.bonus.try_spawn(self.rng, self._placer(self.bonus))
        self.hazard.try_spawn(self.rng, self._placer(self.hazard))

    def reset(self) -> None:
        """Back to defaults: timed kinds absent and cooling, regular re-placed."""
        self.bonus.reset()
        self.hazard.reset()
        self.regular.active = False
        self.relocate_regular()
