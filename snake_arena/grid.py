"""Coordinate primitives for the toroidal arena."""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Dict, Tuple

from . import constants

DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

_OPPOSITES: Dict[str, str] = {
    "up": "down",
    "down": "up",
    "left": "right",
    "right": "left",
}


@dataclass(frozen=True)
class Cell:
    """A single grid cell addressed by its top-left pixel coordinate.

    Both coordinates are multiples of the grid's cell size, which is shared
    with the browser renderer. Cells are immutable and hashable so they can
    be collected into occupancy sets.
    """

    x: int
    y: int

    def to_dict(self) -> dict[str, int]:
        """Serialise the cell to a JSON friendly dictionary."""

        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Grid:
    """Dimensions of the wrap-around playing field."""

    width: int = constants.ARENA_WIDTH
    height: int = constants.ARENA_HEIGHT
    cell_size: int = constants.CELL_SIZE

    def __post_init__(self) -> None:
        if self.cell_size <= 0 or self.width <= 0 or self.height <= 0:
            raise ValueError("Grid dimensions must be positive")
        if self.width % self.cell_size or self.height % self.cell_size:
            raise ValueError(
                f"Arena {self.width}x{self.height} is not a multiple of cell size {self.cell_size}"
            )

    @property
    def columns(self) -> int:
        return self.width // self.cell_size

    @property
    def rows(self) -> int:
        return self.height // self.cell_size

    @property
    def capacity(self) -> int:
        """Total number of cells on the grid."""

        return self.columns * self.rows

    def contains(self, cell: Cell) -> bool:
        """Return ``True`` if ``cell`` is a valid, aligned on-grid cell."""

        return (
            0 <= cell.x < self.width
            and 0 <= cell.y < self.height
            and cell.x % self.cell_size == 0
            and cell.y % self.cell_size == 0
        )


def opposite(direction: str) -> str:
    """Return the heading pointing the other way."""

    return _OPPOSITES[direction]


def step(cell: Cell, direction: str, grid: Grid) -> Cell:
    """Move ``cell`` one unit towards ``direction`` and wrap each axis."""

    dx, dy = DIRECTIONS[direction]
    # Python's modulo is non-negative for a positive divisor, so -cell_size
    # lands on width - cell_size.
    x = (cell.x + dx * grid.cell_size) % grid.width
    y = (cell.y + dy * grid.cell_size) % grid.height
    return Cell(x, y)


def random_cell(grid: Grid, rng: random.Random) -> Cell:
    """Return a uniformly random on-grid cell."""

    return Cell(
        rng.randrange(grid.columns) * grid.cell_size,
        rng.randrange(grid.rows) * grid.cell_size,
    )
