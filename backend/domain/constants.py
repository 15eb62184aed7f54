"""
Game constants for Snake Arcade.
"""

from enum import Enum


class Direction(Enum):
    """Movement directions as (dx, dy) unit steps. Screen y grows downward."""

    LEFT = (-1, 0)
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """Look up a direction by name, case-insensitively. Raises ValueError."""
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown direction: {name!r}")


class RunningState(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


# Board settings (pixels)
UNIT_SIZE = 25
BOARD_WIDTH = 500
BOARD_HEIGHT = 500
INITIAL_LENGTH = 5

# Tick periods in milliseconds
DEFAULT_SPEED = 90
SPEED_LEVELS = {
    "easy": 150,
    "normal": 90,
    "hard": 60,
    "insane": 35,
}

# Persisted best score key
BEST_SCORE_KEY = "snakeBestScore"


class TickOutcome(Enum):
    """What a single tick did."""

    MOVED = "moved"
    ATE = "ate"
    GAME_OVER = "game_over"
    IDLE = "idle"
