"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple

Cell = Tuple[int, int]


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
    """

    def __init__(self, positions: List[Cell]):
        if not positions:
            raise ValueError("Snake needs at least one segment.")
        self.positions = deque(positions)

    @property
    def head(self) -> Cell:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def neck(self) -> Cell:
        """Second segment, or the head for a one-cell snake."""
        return self.positions[1] if len(self.positions) > 1 else self.positions[0]

    def advance(self, new_head: Cell, grow: bool = False) -> None:
        """Prepend a new head; drop the tail unless growing."""
        self.positions.appendleft(new_head)
        if not grow:
            self.positions.pop()

    def hits_body(self, cell: Cell) -> bool:
        """True if cell overlaps any non-head segment."""
        return any(cell == part for i, part in enumerate(self.positions) if i > 0)

    def __len__(self) -> int:
        return len(self.positions)

    @classmethod
    def horizontal(cls, length: int, unit: int) -> "Snake":
        """A line along the top row with the head on the right."""
        return cls([(unit * i, 0) for i in range(length - 1, -1, -1)])
