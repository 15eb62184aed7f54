"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Tuple, Dict, Any, Optional

from .constants import RunningState


class GameState:
    """
    A snapshot of the game at a specific tick.

    Attributes:
        tick_number: ticks applied since the last start (0-based)
        snake: list of (x, y) pixel cells, head first
        food: (x, y) pixel cell of the food
        velocity: (dx, dy) in pixels per tick
        score, best_score: current and best score
        running_state: RunningState
        width, height, unit: board dimensions in pixels and the grid unit
        speed: current tick period in milliseconds
        death_reason: 'wall' or 'self' once the game is over
    """

    def __init__(
        self,
        tick_number: int,
        snake: List[Tuple[int, int]],
        food: Tuple[int, int],
        velocity: Tuple[int, int],
        score: int,
        best_score: int,
        running_state: RunningState,
        width: int,
        height: int,
        unit: int,
        speed: int,
        death_reason: Optional[str] = None
    ):
        self.tick_number = tick_number
        self.snake = snake
        self.food = food
        self.velocity = velocity
        self.score = score
        self.best_score = best_score
        self.running_state = running_state
        self.width = width
        self.height = height
        self.unit = unit
        self.speed = speed
        self.death_reason = death_reason

    @property
    def is_game_over(self) -> bool:
        return self.running_state is RunningState.GAME_OVER

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        o = snake body
        Rows run top to bottom, matching screen coordinates.
        """
        columns = self.width // self.unit
        rows = self.height // self.unit
        board = [['.' for _ in range(columns)] for _ in range(rows)]

        fx, fy = self.food[0] // self.unit, self.food[1] // self.unit
        if 0 <= fx < columns and 0 <= fy < rows:
            board[fy][fx] = 'F'

        # Draw the tail first so the head wins on overlap
        for pos_idx in range(len(self.snake) - 1, -1, -1):
            x, y = self.snake[pos_idx][0] // self.unit, self.snake[pos_idx][1] // self.unit
            if 0 <= x < columns and 0 <= y < rows:
                board[y][x] = 'H' if pos_idx == 0 else 'o'

        return "\n".join(' '.join(row) for row in board)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "tick_number": self.tick_number,
            "snake": [list(cell) for cell in self.snake],
            "food": list(self.food),
            "velocity": list(self.velocity),
            "score": self.score,
            "best_score": self.best_score,
            "running": self.running_state is RunningState.RUNNING,
            "state": self.running_state.value,
            "death_reason": self.death_reason,
            "board": {"width": self.width, "height": self.height, "unit": self.unit},
            "speed": self.speed,
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, head={self.snake[0] if self.snake else None}, "
            f"food={self.food}, score={self.score}, state={self.running_state.value}>"
        )
