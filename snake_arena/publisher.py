"""Fan-out of outbound messages to every open connection."""

from __future__ import annotations

from typing import Set

from websockets.asyncio.server import ServerConnection, broadcast


class Publisher:
    """The set of connections that receive broadcasts.

    :func:`websockets.asyncio.server.broadcast` writes to each connection
    without awaiting, skips connections that are not open and logs, rather
    than raises, per-connection failures, so a slow or broken client never
    holds up the tick.
    """

    def __init__(self) -> None:
        self.connections: Set[ServerConnection] = set()

    def __len__(self) -> int:
        return len(self.connections)

    def add(self, connection: ServerConnection) -> None:
        self.connections.add(connection)

    def discard(self, connection: ServerConnection) -> None:
        self.connections.discard(connection)

    def publish(self, message: str) -> None:
        if self.connections:
            broadcast(self.connections, message)
