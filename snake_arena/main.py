"""Entry point for the asyncio based game server."""

from __future__ import annotations

import argparse
import asyncio
from http import HTTPStatus
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote, urlsplit

import websockets
from websockets.asyncio.server import ServerConnection, serve
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from . import protocol
from .config import ArenaConfig
from .protocol import ProtocolError
from .publisher import Publisher
from .registry import PlayerNotFound
from .world import World

logger = logging.getLogger(__name__)


def schedule_next(next_tick: float, now: float, interval: float) -> float:
    """Return the deadline following ``next_tick``.

    A tick that overran its slot restarts the schedule from ``now`` instead
    of firing the missed ticks back to back.
    """

    next_tick += interval
    return next_tick if next_tick >= now else now


class GameServer:
    """High level orchestration of the world simulation and websocket IO."""

    def __init__(
        self,
        config: ArenaConfig,
        world: Optional[World] = None,
        publisher: Optional[Publisher] = None,
    ) -> None:
        self.config = config
        self.world = world if world is not None else World(config.grid(), config.food_reward)
        self.publisher = publisher if publisher is not None else Publisher()
        self.static_root = Path(config.static_dir).resolve() if config.static_dir else None

    async def start(self) -> None:
        """Start the websocket server and the world update loop."""

        process_request = self._serve_static if self.static_root else None
        async with serve(
            self._handle_client,
            self.config.host,
            self.config.port,
            process_request=process_request,
        ):
            logger.info("Server listening on %s:%s", self.config.host, self.config.port)
            if self.static_root:
                logger.info("Serving static files from %s", self.static_root)
            await self._run_game_loop()

    async def _run_game_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            self.run_tick()
            next_tick = schedule_next(next_tick, loop.time(), self.config.tick_interval)
            await asyncio.sleep(next_tick - loop.time())

    def run_tick(self) -> None:
        """Advance the world once and broadcast the resulting state."""

        if not len(self.world.registry):
            return
        try:
            self.world.update()
        except Exception:
            logger.exception("Tick %s failed", self.world.tick)
            return
        self.publisher.publish(self.world.snapshot())

    def snapshot(self) -> str:
        return self.world.snapshot()

    @property
    def online_count(self) -> int:
        return len(self.world.registry)

    async def on_admit(self, connection: ServerConnection) -> int:
        """Register a player for ``connection`` and announce it."""

        registry = self.world.registry
        player = registry.admit()
        try:
            await connection.send(protocol.encode_init(player.id, self.world.food, registry))
        except websockets.ConnectionClosed:
            registry.remove(player.id)
            raise
        self.publisher.add(connection)
        self.publisher.publish(protocol.encode_player_join(player, self.online_count))
        logger.info("Player %s connected, online: %s", player.id, self.online_count)
        return player.id

    def on_message(self, player_id: int, message: Union[str, bytes]) -> None:
        """Apply a direction change or reset requested by ``player_id``."""

        try:
            payload = protocol.parse_client_message(message)
        except ProtocolError as exc:
            logger.warning("Ignoring message from player %s: %s", player_id, exc)
            return

        registry = self.world.registry
        try:
            if payload["type"] == "direction":
                if registry.set_direction(player_id, payload["direction"]):
                    self.publisher.publish(
                        protocol.encode_player_update(player_id, direction=payload["direction"])
                    )
            elif payload["type"] == "reset":
                player = registry.reset(player_id)
                self.publisher.publish(
                    protocol.encode_player_update(
                        player_id,
                        snake=player.snake,
                        direction=player.direction,
                        score=player.score,
                    )
                )
        except PlayerNotFound:
            logger.debug("Dropping %s from departed player %s", payload["type"], player_id)

    def on_disconnect(self, player_id: int) -> None:
        self.world.registry.remove(player_id)
        logger.info("Player %s disconnected, online: %s", player_id, self.online_count)
        self.publisher.publish(protocol.encode_player_leave(player_id, self.online_count))

    async def _handle_client(self, connection: ServerConnection) -> None:
        try:
            player_id = await self.on_admit(connection)
        except websockets.ConnectionClosed:
            logger.info("Connection closed before the player could join")
            return
        try:
            async for message in connection:
                self.on_message(player_id, message)
        except websockets.ConnectionClosed as exc:
            logger.info("Player %s connection lost: %s", player_id, exc)
        finally:
            self.publisher.discard(connection)
            self.on_disconnect(player_id)

    def _serve_static(self, connection: ServerConnection, request: Request) -> Optional[Response]:
        """Answer plain HTTP requests with files from the static directory."""

        root = self.static_root
        if root is None or request.headers.get("Upgrade", "").lower() == "websocket":
            return None
        relative = unquote(urlsplit(request.path).path).lstrip("/") or "index.html"
        target = (root / relative).resolve()
        if not target.is_relative_to(root) or not target.is_file():
            return connection.respond(HTTPStatus.NOT_FOUND, "Not found\n")
        body = target.read_bytes()
        content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        return Response(
            HTTPStatus.OK.value,
            HTTPStatus.OK.phrase,
            Headers(
                [
                    ("Content-Type", content_type),
                    ("Content-Length", str(len(body))),
                    ("Access-Control-Allow-Origin", "*"),
                    ("Connection", "close"),
                ]
            ),
            body,
        )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    defaults = ArenaConfig.from_env()
    parser = argparse.ArgumentParser(description="Run the snake arena server")
    parser.add_argument("--host", default=defaults.host, help="Host interface to bind to")
    parser.add_argument("--port", type=int, default=defaults.port, help="Port to listen on")
    parser.add_argument(
        "--tick-interval",
        type=float,
        default=defaults.tick_interval,
        help="Seconds between simulation ticks",
    )
    parser.add_argument(
        "--static-dir",
        default=defaults.static_dir,
        help="Directory with the browser client to serve over HTTP",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args(argv)
    args.config = ArenaConfig(
        host=args.host,
        port=args.port,
        tick_interval=args.tick_interval,
        cell_size=defaults.cell_size,
        width=defaults.width,
        height=defaults.height,
        food_reward=defaults.food_reward,
        static_dir=args.static_dir,
    )
    return args


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="[%(levelname)s] %(message)s")
    server = GameServer(args.config)
    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logger.info("Server stopped")


if __name__ == "__main__":
    main()
