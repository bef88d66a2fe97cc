"""JSON protocol helpers for the websocket transport."""

from __future__ import annotations

import json
from typing import Any, Iterable, Union

from .grid import DIRECTIONS, Cell
from .player import Player

CLIENT_MESSAGE_TYPES = ("direction", "reset")


class ProtocolError(ValueError):
    """Raised for inbound messages that cannot be acted upon."""


def parse_client_message(message: Union[str, bytes]) -> dict:
    """Parse and validate a raw client ``message``.

    Only ``direction`` messages carrying one of the four headings and
    ``reset`` messages are accepted.
    """

    try:
        payload = json.loads(message)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise ProtocolError("Invalid client message") from exc
    if not isinstance(payload, dict):
        raise ProtocolError("Client message must be a JSON object")
    message_type = payload.get("type")
    if not isinstance(message_type, str) or message_type not in CLIENT_MESSAGE_TYPES:
        raise ProtocolError(f"Unknown message type {message_type!r}")
    direction = payload.get("direction")
    if message_type == "direction" and not (isinstance(direction, str) and direction in DIRECTIONS):
        raise ProtocolError(f"Invalid direction {direction!r}")
    return payload


def encode_init(player_id: int, food: Cell, players: Iterable[Player]) -> str:
    """Encode the payload sent to a freshly admitted connection."""

    return json.dumps(
        {
            "type": "init",
            "playerId": player_id,
            "food": food.to_dict(),
            "players": [player.to_snapshot() for player in players],
        }
    )


def encode_player_join(player: Player, online_count: int) -> str:
    return json.dumps(
        {"type": "playerJoin", "player": player.to_snapshot(), "onlineCount": online_count}
    )


def encode_player_update(player_id: int, **changes: Any) -> str:
    """Encode a partial player update carrying only the ``changes``."""

    player = {"id": player_id}
    for key, value in changes.items():
        if key == "snake":
            value = [cell.to_dict() for cell in value]
        player[key] = value
    return json.dumps({"type": "playerUpdate", "player": player})


def encode_player_leave(player_id: int, online_count: int) -> str:
    return json.dumps({"type": "playerLeave", "playerId": player_id, "onlineCount": online_count})


def encode_game_state(food: Cell, players: Iterable[Player]) -> str:
    """Encode the per-tick world snapshot broadcast to everyone."""

    return json.dumps(
        {
            "type": "gameState",
            "food": food.to_dict(),
            "players": [player.to_snapshot() for player in players],
        }
    )
