"""
Grid geometry: cell positions and the fixed, walled board.
"""

from typing import Iterator, NamedTuple, Tuple

from .constants import BOARD_WIDTH, BOARD_HEIGHT


class Position(NamedTuple):
    x: int
    y: int

    def offset(self, direction: Tuple[int, int]) -> "Position":
        """Return the cell one step away along ``direction``."""
        dx, dy = direction
        return Position(self.x + dx, self.y + dy)


class Board:
    """
    A rectangular board whose outer ring of cells is wall.

    Playable (interior) cells span x in 1..width-2 and y in 1..height-2.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT):
        if width < 3 or height < 3:
            raise ValueError(f"Board {width}x{height} has no interior.")
        self.width = width
        self.height = height

    @property
    def center(self) -> Position:
        return Position(self.width // 2, self.height // 2)

    def contains(self, pos: Tuple[int, int]) -> bool:
        """True if ``pos`` is an interior cell (not wall, not outside)."""
        x, y = pos
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def wrap(self, pos: Tuple[int, int]) -> Position:
        """
        Fold a position back into the interior.

        Leaving through one edge re-enters on the opposite interior edge;
        the wall ring itself is never returned.
        """
        x, y = pos
        inner_w = self.width - 2
        inner_h = self.height - 2
        return Position((x - 1) % inner_w + 1, (y - 1) % inner_h + 1)

    def interior_cells(self) -> Iterator[Position]:
        for y in range(1, self.height - 1):
            for x in range(1, self.width - 1):
                yield Position(x, y)

    def __repr__(self):
        return f"<Board {self.width}x{self.height}>"
