"""Placement of the shared food cell."""

from __future__ import annotations

import random
from typing import AbstractSet, Optional

from .grid import Cell, Grid, random_cell


class GridFullError(RuntimeError):
    """Raised when no free cell was found within the allowed attempts."""


def spawn(
    occupied: AbstractSet[Cell],
    grid: Grid,
    rng: random.Random,
    max_attempts: Optional[int] = None,
) -> Cell:
    """Return a random cell that is not part of ``occupied``.

    Cells are sampled uniformly until a free one turns up. Without
    ``max_attempts`` this never gives up, so a completely saturated grid
    makes the call loop forever; pass a bound to get a :class:`GridFullError`
    instead.
    """

    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        cell = random_cell(grid, rng)
        if cell not in occupied:
            return cell
    raise GridFullError(f"No free cell found after {attempts} attempts")
