"""Player entity implementation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from . import constants
from .grid import DIRECTIONS, Cell, opposite


@dataclass
class Player:
    """Authoritative state of one connected player and its snake."""

    id: int
    color: str
    snake: List[Cell]
    direction: str = constants.DEFAULT_DIRECTION
    score: int = 0

    def __post_init__(self) -> None:
        if not self.snake:
            raise ValueError("A snake needs at least one cell")

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def body(self) -> List[Cell]:
        """Every cell behind the head."""

        return self.snake[1:]

    def turn(self, direction: str) -> bool:
        """Change heading unless it would reverse the snake onto itself.

        Returns ``True`` when the heading was updated.
        """

        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction {direction!r}")
        if direction == opposite(self.direction):
            return False
        self.direction = direction
        return True

    def advance(self, head: Cell, grow: bool = False) -> None:
        """Push ``head`` to the front and drop the tail unless growing."""

        self.snake.insert(0, head)
        if not grow:
            self.snake.pop()

    def respawn(self, cell: Cell) -> None:
        """Reset to a single cell at ``cell`` with default properties."""

        self.snake = [cell]
        self.direction = constants.DEFAULT_DIRECTION
        self.score = 0

    def to_snapshot(self) -> dict:
        """Return a snapshot representation for clients."""

        return {
            "id": self.id,
            "snake": [cell.to_dict() for cell in self.snake],
            "direction": self.direction,
            "score": self.score,
            "color": self.color,
        }
