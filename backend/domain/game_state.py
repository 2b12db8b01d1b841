"""
GameState entity - a read-only snapshot of the game at a point in time.
"""

from typing import Dict, List, Tuple

from .constants import (
    WALL, SNAKE_HEAD, SNAKE_BODY, SNAKE_BODY_ALT, FOOD, BONUS_FOOD, HAZARD_FOOD, EMPTY,
    SpeedTier,
)
from .food import REGULAR, BONUS, HAZARD

FOOD_GLYPHS = {
    REGULAR: FOOD,
    BONUS: BONUS_FOOD,
    HAZARD: HAZARD_FOOD,
}


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        width, height: board dimensions, wall ring included
        snake_positions: list of (x, y), head first
        direction: current heading vector
        foods: dict of food kind -> (x, y) for every food on the board
        score, high_score, level, foods_eaten: progress counters
        game_over, paused: run state
        easy_mode, wrap_mode, speed_tier: session mode flags
        tick_count: ticks since reset (drives the body animation only)
        new_high_score: the finished game beat the previous best
    """

    def __init__(
        self,
        width: int,
        height: int,
        snake_positions: List[Tuple[int, int]],
        direction: Tuple[int, int],
        foods: Dict[str, Tuple[int, int]],
        score: int,
        high_score: int,
        level: int,
        foods_eaten: int,
        game_over: bool,
        paused: bool,
        easy_mode: bool = False,
        wrap_mode: bool = False,
        speed_tier: SpeedTier = SpeedTier.NORMAL,
        tick_count: int = 0,
        new_high_score: bool = False
    ):
        self.width = width
        self.height = height
        self.snake_positions = snake_positions
        self.direction = direction
        self.foods = foods
        self.score = score
        self.high_score = high_score
        self.level = level
        self.foods_eaten = foods_eaten
        self.game_over = game_over
        self.paused = paused
        self.easy_mode = easy_mode
        self.wrap_mode = wrap_mode
        self.speed_tier = speed_tier
        self.tick_count = tick_count
        self.new_high_score = new_high_score

    def print_board(self) -> str:
        """
        Returns the framed board as a string, one line per row:
        # = wall
        @ = snake head
        O / o = snake body (alternates with tick parity)
        * = food, $ = bonus food, X = hazard food
        (0,0) is the top-left wall corner.
        """
        # Walls around an empty interior
        board = [[EMPTY for _ in range(self.width)] for _ in range(self.height)]
        for x in range(self.width):
            board[0][x] = WALL
            board[self.height - 1][x] = WALL
        for y in range(self.height):
            board[y][0] = WALL
            board[y][self.width - 1] = WALL

        # Place food
        for kind, (fx, fy) in self.foods.items():
            board[fy][fx] = FOOD_GLYPHS[kind]

        # Place snake body, then the head on top
        body_glyph = SNAKE_BODY if self.tick_count % 2 == 0 else SNAKE_BODY_ALT
        for x, y in self.snake_positions[1:]:
            board[y][x] = body_glyph
        if self.snake_positions:
            hx, hy = self.snake_positions[0]
            board[hy][hx] = SNAKE_HEAD

        return "\n".join("".join(row) for row in board)

    @property
    def length(self) -> int:
        return len(self.snake_positions)

    def __repr__(self):
        return (
            f"<GameState score={self.score}, level={self.level}, foods={self.foods}, "
            f"length={len(self.snake_positions)}, over={self.game_over}>"
        )
