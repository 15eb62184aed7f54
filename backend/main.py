import os
import math
import random
import logging
import argparse
import threading
from typing import Optional, Tuple, Union

from dotenv import load_dotenv

from domain.constants import (
    Direction,
    RunningState,
    TickOutcome,
    UNIT_SIZE,
    BOARD_WIDTH,
    BOARD_HEIGHT,
    INITIAL_LENGTH,
    DEFAULT_SPEED,
    SPEED_LEVELS,
)
from domain.snake import Snake, Cell
from domain.game_state import GameState

load_dotenv()

logger = logging.getLogger(__name__)


class GameLoop:
    """
    Owns every piece of mutable game state:
      - Snake body
      - Velocity
      - Food
      - Score and best score
      - Running state
      - Tick period (speed)

    tick() is driven from outside (see services.tick_scheduler). All public
    mutators hold self.lock so input arriving between ticks is applied whole.
    """
    def __init__(
        self,
        width: int = BOARD_WIDTH,
        height: int = BOARD_HEIGHT,
        unit: int = UNIT_SIZE,
        speed: int = DEFAULT_SPEED,
        best_score_store=None,
        rng: Optional[random.Random] = None
    ):
        if unit <= 0:
            raise ValueError(f"Grid unit must be positive, got {unit}.")
        if width % unit or height % unit:
            raise ValueError(f"Board {width}x{height} is not a multiple of the grid unit {unit}.")
        if width < unit * INITIAL_LENGTH or height < unit:
            raise ValueError(f"Board {width}x{height} cannot hold the initial snake.")
        self._validate_speed(speed)

        self.width = width
        self.height = height
        self.unit = unit
        self.speed = speed
        self.rng = rng or random.Random()
        self.lock = threading.RLock()

        self.best_score_store = best_score_store
        self.best_score = self._load_best_score()

        self.snake: Snake
        self.velocity: Tuple[int, int]
        self.food: Cell
        self.score = 0
        self.tick_number = 0
        self.running_state = RunningState.RUNNING
        self.death_reason: Optional[str] = None

        self.start()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Put a fresh 5-cell snake on the top row, moving right."""
        with self.lock:
            self.snake = Snake.horizontal(INITIAL_LENGTH, self.unit)
            self.velocity = (self.unit, 0)
            self.score = 0
            self.tick_number = 0
            self.death_reason = None
            self.create_food()
            self.running_state = RunningState.RUNNING
            logger.info(f"Game started: head={self.snake.head}, food={self.food}, speed={self.speed}ms")

    def reset(self) -> None:
        self.start()

    @property
    def is_running(self) -> bool:
        return self.running_state is RunningState.RUNNING

    # ------------------------------------------------------------------
    # Update step
    # ------------------------------------------------------------------

    def tick(self) -> TickOutcome:
        """
        Advance the game by one step:
          1) New head = head + velocity, prepended to the body
          2) Eat food (grow, score, respawn food) or drop the tail
          3) Check for wall or self collision
        """
        with self.lock:
            if not self.is_running:
                return TickOutcome.IDLE

            hx, hy = self.snake.head
            vx, vy = self.velocity
            new_head = (hx + vx, hy + vy)

            ate = new_head == self.food
            self.snake.advance(new_head, grow=ate)
            self.tick_number += 1

            if ate:
                self.score += 1
                logger.debug(f"Food eaten at {new_head}, score={self.score}")
                if self.score > self.best_score:
                    self.best_score = self.score
                    self._save_best_score()
                self.create_food()

            reason = self.check_game_over()
            if reason is not None:
                self.running_state = RunningState.GAME_OVER
                self.death_reason = reason
                logger.info(
                    f"Game over ({reason}) at tick {self.tick_number}: "
                    f"head={new_head}, score={self.score}, best={self.best_score}"
                )
                return TickOutcome.GAME_OVER

            return TickOutcome.ATE if ate else TickOutcome.MOVED

    def check_game_over(self) -> Optional[str]:
        """Return 'wall' or 'self' if the current head is fatal, else None."""
        x, y = self.snake.head
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return "wall"
        if self.snake.hits_body(self.snake.head):
            return "self"
        return None

    def create_food(self) -> None:
        """
        Drop food on a random grid-aligned cell. The snake body is not
        avoided, so food can land under it.
        """
        self.food = (
            self._random_grid_position(0, self.width - self.unit),
            self._random_grid_position(0, self.height - self.unit)
        )

    def _random_grid_position(self, low: int, high: int) -> int:
        # Round half up to the nearest unit
        value = self.rng.random() * (high - low) + low
        return int(math.floor(value / self.unit + 0.5)) * self.unit

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_direction(self, direction: Union[Direction, str]) -> bool:
        """
        Request a new heading for the next tick.

        Reversals are ignored: the exact opposite of the current velocity,
        or any heading that would put the head on the second segment.

        Returns:
            True if the velocity now points in the requested direction.
        """
        if not isinstance(direction, Direction):
            direction = Direction.from_name(direction)

        dx, dy = direction.value
        new_velocity = (dx * self.unit, dy * self.unit)

        with self.lock:
            vx, vy = self.velocity
            if new_velocity == (-vx, -vy):
                return False
            hx, hy = self.snake.head
            if len(self.snake) > 1 and (hx + new_velocity[0], hy + new_velocity[1]) == self.snake.neck:
                return False
            self.velocity = new_velocity
            return True

    def set_speed(self, period: int) -> None:
        """Change the tick period in ms; nothing else is touched."""
        self._validate_speed(period)
        with self.lock:
            if period != self.speed:
                logger.info(f"Speed changed: {self.speed}ms -> {period}ms")
            self.speed = period

    def set_level(self, level: str) -> int:
        """Apply a named speed level. Returns the new period."""
        try:
            period = SPEED_LEVELS[level.lower()]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown speed level: {level!r}. Choose from {sorted(SPEED_LEVELS)}.")
        self.set_speed(period)
        return period

    @staticmethod
    def _validate_speed(period) -> None:
        if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
            raise ValueError(f"Tick period must be a positive integer of milliseconds, got {period!r}.")

    # ------------------------------------------------------------------
    # Best score
    # ------------------------------------------------------------------

    def _load_best_score(self) -> int:
        if self.best_score_store is None:
            return 0
        try:
            return self.best_score_store.load()
        except Exception as e:
            logger.warning(f"Could not load best score, starting from 0: {e}")
            return 0

    def _save_best_score(self) -> None:
        logger.info(f"New best score: {self.best_score}")
        if self.best_score_store is None:
            return
        try:
            self.best_score_store.save(self.best_score)
        except Exception as e:
            logger.warning(f"Could not persist best score {self.best_score}: {e}")

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        with self.lock:
            return GameState(
                tick_number=self.tick_number,
                snake=list(self.snake.positions),
                food=self.food,
                velocity=self.velocity,
                score=self.score,
                best_score=self.best_score,
                running_state=self.running_state,
                width=self.width,
                height=self.height,
                unit=self.unit,
                speed=self.speed,
                death_reason=self.death_reason
            )

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.get_current_state().print_board() + "\n")


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Serve the Snake game in the browser."
    )
    parser.add_argument("--host", type=str, default="127.0.0.1",
                        help="Interface to bind")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "5000")),
                        help="Port to listen on")
    parser.add_argument("--width", type=int, default=None,
                        help="Board width in pixels")
    parser.add_argument("--height", type=int, default=None,
                        help="Board height in pixels")
    parser.add_argument("--unit", type=int, default=None,
                        help="Grid unit in pixels")
    parser.add_argument("--speed", type=int, default=None,
                        help="Initial tick period in milliseconds")

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    from services.game_session import GameSession
    from app import create_app

    session = GameSession.from_env(
        width=args.width,
        height=args.height,
        unit=args.unit,
        speed=args.speed
    )
    session.start()

    app = create_app(session)
    try:
        app.run(host=args.host, port=args.port, threaded=True)
    finally:
        session.stop()


if __name__ == "__main__":
    main()
