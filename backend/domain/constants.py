"""
Game constants for the terminal snake game.
"""

from enum import IntEnum

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Row 0 is the top of the screen, so UP => y - 1
DIRECTION_VECTORS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Board (fixed; the outer ring is wall)
BOARD_WIDTH = 30
BOARD_HEIGHT = 20

# Glyphs
WALL = '#'
SNAKE_HEAD = '@'
SNAKE_BODY = 'O'
SNAKE_BODY_ALT = 'o'
FOOD = '*'
BONUS_FOOD = '$'
HAZARD_FOOD = 'X'
EMPTY = ' '

# Scoring and progression
REGULAR_POINTS = 10
BONUS_POINTS = 50
HAZARD_PENALTY = 20
HAZARD_SHRINK = 3
EASY_MODE_PENALTY = 30
FOODS_PER_LEVEL = 5

# Timed food spawning (ticks / percent)
BONUS_SPAWN_CHANCE = 20
BONUS_LIFETIME = 30
BONUS_COOLDOWN = 50
HAZARD_SPAWN_CHANCE = 10
HAZARD_COOLDOWN = 80

# Random draws before falling back to scanning for free cells
MAX_PLACEMENT_ATTEMPTS = 1000

# Tick timing (seconds)
BASE_INTERVAL = 0.150
LEVEL_STEP = 0.005
MIN_INTERVAL = 0.050
# Terminal cells are taller than wide, so vertical movement looks faster
VERTICAL_FACTOR = 1.8

# Leaderboard
MAX_SCORE_ENTRIES = 10


class SpeedTier(IntEnum):
    SLOW = 0
    NORMAL = 1
    FAST = 2


SPEED_MULTIPLIERS = {
    SpeedTier.SLOW: 1.5,
    SpeedTier.NORMAL: 1.0,
    SpeedTier.FAST: 0.7,
}
