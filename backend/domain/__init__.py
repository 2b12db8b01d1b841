"""
Domain entities for the terminal snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (terminal, files, configuration).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_VECTORS, SpeedTier
from .geometry import Position, Board
from .snake import Snake
from .food import FoodSpec, FoodItem, REGULAR, BONUS, HAZARD
from .food_spawner import FoodSpawner, NoPlacementAvailable
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTION_VECTORS', 'SpeedTier',
    'Position', 'Board',
    'Snake',
    'FoodSpec', 'FoodItem', 'REGULAR', 'BONUS', 'HAZARD',
    'FoodSpawner', 'NoPlacementAvailable',
    'GameState',
]
