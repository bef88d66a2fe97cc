"""Collision helpers for the game server."""

from __future__ import annotations

from typing import Iterable, List

from .player import Player


def hits_own_body(player: Player) -> bool:
    """Return ``True`` if the head overlaps any other cell of the same snake."""

    return player.head in player.body


def players_hit(attacker: Player, players: Iterable[Player]) -> List[Player]:
    """Return every other player whose snake contains ``attacker``'s head.

    Heads count as well as bodies, so two heads meeting on the same cell
    is a hit for whichever of them is checked.
    """

    head = attacker.head
    return [other for other in players if other is not attacker and head in other.snake]
