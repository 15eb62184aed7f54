"""
Game session: one GameLoop, its scheduler, renderer and best-score store.

This is what a long-running process (the web server) holds on to.
"""

import os
import random
import logging
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv

from domain.constants import BOARD_WIDTH, BOARD_HEIGHT, UNIT_SIZE, DEFAULT_SPEED, SPEED_LEVELS
from main import GameLoop
from services.board_renderer import BoardRenderer
from services.tick_scheduler import TickScheduler

load_dotenv()

logger = logging.getLogger(__name__)


def _setting(value: Optional[int], env_name: str, default: int) -> int:
    """Explicit value if given (even 0), else the environment, else default."""
    if value is not None:
        return value
    return int(os.getenv(env_name, default))


class GameSession:
    """Wire a GameLoop to a TickScheduler and expose the player actions."""

    def __init__(
        self,
        width: int = BOARD_WIDTH,
        height: int = BOARD_HEIGHT,
        unit: int = UNIT_SIZE,
        speed: int = DEFAULT_SPEED,
        best_score_store=None,
        rng: Optional[random.Random] = None,
        wait: Optional[Callable[[float], bool]] = None,
        renderer: Optional[BoardRenderer] = None
    ):
        self.game = GameLoop(
            width=width,
            height=height,
            unit=unit,
            speed=speed,
            best_score_store=best_score_store,
            rng=rng
        )
        self.scheduler = TickScheduler(self.game, wait=wait)
        self.renderer = renderer or BoardRenderer()

    @classmethod
    def from_env(
        cls,
        width: Optional[int] = None,
        height: Optional[int] = None,
        unit: Optional[int] = None,
        speed: Optional[int] = None
    ) -> "GameSession":
        """
        Build a session from SNAKE_* environment variables, with explicit
        arguments taking precedence, backed by the SQLite best score.
        """
        from database import init_database
        from data_access import BestScoreStore

        init_database()
        return cls(
            width=_setting(width, "SNAKE_BOARD_WIDTH", BOARD_WIDTH),
            height=_setting(height, "SNAKE_BOARD_HEIGHT", BOARD_HEIGHT),
            unit=_setting(unit, "SNAKE_UNIT_SIZE", UNIT_SIZE),
            speed=_setting(speed, "SNAKE_DEFAULT_SPEED", DEFAULT_SPEED),
            best_score_store=BestScoreStore()
        )

    def start(self) -> bool:
        """Begin ticking the current game. False if already ticking."""
        return self.scheduler.start()

    def reset(self) -> None:
        """Restart the game and make sure exactly one scheduler drives it."""
        with self.game.lock:
            self.game.reset()
            self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.stop(timeout=1.0)

    def set_direction(self, direction) -> bool:
        return self.game.set_direction(direction)

    def set_speed(self, period: Optional[int] = None, level: Optional[str] = None) -> int:
        """
        Change speed by explicit period (ms) or by level name.

        Returns:
            The tick period now in effect.
        """
        if level is not None:
            return self.game.set_level(level)
        if period is None:
            raise ValueError("Provide either a speed level or a period.")
        self.game.set_speed(period)
        return period

    def state(self) -> Dict[str, Any]:
        return self.game.get_current_state().to_dict()

    def frame_png(self) -> bytes:
        return self.renderer.render_png(self.game.get_current_state())

    @staticmethod
    def levels() -> Dict[str, int]:
        return dict(SPEED_LEVELS)
