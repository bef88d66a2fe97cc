"""Mapping from connection identity to player state."""

from __future__ import annotations

import itertools
import random
from typing import Dict, Iterator, Set

from . import constants
from .grid import Cell, Grid, random_cell
from .player import Player


class PlayerNotFound(KeyError):
    """Raised when an identity does not belong to a connected player."""


class PlayerRegistry:
    """Creates, looks up and removes players.

    Identities come from a counter starting at 1 and are never handed out
    twice, even after the owning connection went away. Iteration follows
    admission order.
    """

    def __init__(self, grid: Grid, rng: random.Random) -> None:
        self.grid = grid
        self.rng = rng
        self._players: Dict[int, Player] = {}
        self._id_counter = itertools.count(1)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def __iter__(self) -> Iterator[Player]:
        return iter(list(self._players.values()))

    def _random_color(self) -> str:
        hue = self.rng.uniform(0, 360)
        return f"hsl({hue:.1f}, {constants.COLOR_SATURATION}%, {constants.COLOR_LIGHTNESS}%)"

    def admit(self) -> Player:
        player = Player(
            id=next(self._id_counter),
            color=self._random_color(),
            snake=[random_cell(self.grid, self.rng)],
        )
        self._players[player.id] = player
        return player

    def get(self, player_id: int) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise PlayerNotFound(player_id) from None

    def remove(self, player_id: int) -> None:
        self._players.pop(player_id, None)

    def set_direction(self, player_id: int, direction: str) -> bool:
        """Apply a heading change; reversals are ignored and return ``False``."""

        return self.get(player_id).turn(direction)

    def reset(self, player_id: int) -> Player:
        """Start ``player_id`` over while keeping its identity and color."""

        player = self.get(player_id)
        self.respawn(player)
        return player

    def respawn(self, player: Player) -> None:
        player.respawn(random_cell(self.grid, self.rng))

    def occupied_cells(self) -> Set[Cell]:
        """Return the union of every snake's cells, heads included."""

        return {cell for player in self._players.values() for cell in player.snake}
