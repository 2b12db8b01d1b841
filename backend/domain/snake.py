"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Callable, Iterable, Optional, Tuple

from .constants import DIRECTION_VECTORS, RIGHT
from .geometry import Position

UNIT_VECTORS = set(DIRECTION_VECTORS.values())


class Snake:
    """
    Represents the player's snake on the board.

    Attributes:
        positions: deque of Position from head at index 0 to tail at the end
        direction: current heading, one of the unit vectors in DIRECTION_VECTORS
    """

    def __init__(
        self,
        positions: Iterable[Tuple[int, int]],
        direction: Tuple[int, int] = DIRECTION_VECTORS[RIGHT]
    ):
        self.positions = deque(Position(x, y) for x, y in positions)
        if not self.positions:
            raise ValueError("A snake needs at least one segment.")
        self._direction = tuple(direction)

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def direction(self) -> Tuple[int, int]:
        return self._direction

    def __len__(self) -> int:
        return len(self.positions)

    def set_direction(
        self,
        direction: Tuple[int, int],
        wrap: Optional[Callable[[Position], Position]] = None
    ) -> bool:
        """
        Change heading, ignoring turns that are not allowed.

        A turn is rejected if it is not a unit vector, or if (for a snake
        longer than one cell) the next head would land on the neck segment.
        ``wrap`` maps the raw next head into the board when the board wraps.

        Returns:
            True if the heading was replaced.
        """
        direction = tuple(direction)
        if direction not in UNIT_VECTORS:
            return False

        if len(self.positions) > 1:
            candidate = self.head.offset(direction)
            if wrap is not None:
                candidate = wrap(candidate)
            if candidate == self.positions[1]:
                return False

        self._direction = direction
        return True

    def next_head(self) -> Position:
        return self.head.offset(self._direction)

    def advance(self, new_head: Tuple[int, int], grow: bool) -> None:
        """Prepend ``new_head``; drop the tail unless growing."""
        self.positions.appendleft(Position(*new_head))
        if not grow:
            self.positions.pop()

    def hits_self(self, pos: Tuple[int, int]) -> bool:
        """True if ``pos`` is on any segment other than the head."""
        return any(segment == pos for i, segment in enumerate(self.positions) if i > 0)

    def shrink(self, count: int) -> None:
        """Remove up to ``count`` tail segments, keeping at least the head."""
        for _ in range(count):
            if len(self.positions) <= 1:
                break
            self.positions.pop()

    def __repr__(self):
        return f"<Snake len={len(self.positions)} head={self.head} dir={self._direction}>"
