import asyncio

import pytest
from websockets.asyncio.client import connect
from websockets.asyncio.server import serve

from snake_arena import publisher as publisher_module
from snake_arena.publisher import Publisher


def test_publish_fans_out_to_every_connection(monkeypatch):
    calls = []
    monkeypatch.setattr(
        publisher_module, "broadcast", lambda connections, message: calls.append((set(connections), message))
    )
    publisher = Publisher()
    first, second = object(), object()
    publisher.add(first)
    publisher.add(second)

    publisher.publish("hello")

    assert calls == [({first, second}, "hello")]


def test_publish_without_connections_is_noop(monkeypatch):
    calls = []
    monkeypatch.setattr(publisher_module, "broadcast", lambda *args: calls.append(args))
    publisher = Publisher()
    connection = object()
    publisher.add(connection)
    publisher.discard(connection)

    publisher.publish("hello")

    assert calls == []
    assert len(publisher) == 0


@pytest.mark.asyncio
async def test_closed_connection_does_not_block_the_others():
    publisher = Publisher()
    joined = asyncio.Queue()

    async def handler(connection):
        publisher.add(connection)
        await joined.put(connection)
        await connection.wait_closed()

    async with serve(handler, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        uri = f"ws://127.0.0.1:{port}"
        async with connect(uri) as healthy:
            await asyncio.wait_for(joined.get(), 5)
            departed = await connect(uri)
            departed_server_side = await asyncio.wait_for(joined.get(), 5)
            await departed.close()
            await asyncio.wait_for(departed_server_side.wait_closed(), 5)

            publisher.publish("tick")

            assert await asyncio.wait_for(healthy.recv(), 5) == "tick"
            assert departed_server_side in publisher.connections
