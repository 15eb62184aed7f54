"""
Domain entities for the Snake Arcade game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, web, rendering).
"""

from .constants import (
    Direction, RunningState, TickOutcome, UNIT_SIZE, BOARD_WIDTH, BOARD_HEIGHT,
    INITIAL_LENGTH, DEFAULT_SPEED, SPEED_LEVELS, BEST_SCORE_KEY
)
from .snake import Snake, Cell
from .game_state import GameState

__all__ = [
    'Direction', 'RunningState', 'TickOutcome', 'UNIT_SIZE', 'BOARD_WIDTH', 'BOARD_HEIGHT',
    'INITIAL_LENGTH', 'DEFAULT_SPEED', 'SPEED_LEVELS', 'BEST_SCORE_KEY',
    'Snake', 'Cell',
    'GameState',
]
