"""Pytest configuration and fixtures for the arena server tests."""

import json
import random

import pytest

from snake_arena.grid import Cell, Grid
from snake_arena.world import World


class FakeConnection:
    """Stands in for a websocket connection."""

    def __init__(self, incoming=()):
        self.incoming = list(incoming)
        self.sent = []

    async def send(self, message):
        self.sent.append(json.loads(message))

    async def _iterate(self):
        for message in self.incoming:
            yield message

    def __aiter__(self):
        return self._iterate()

    def respond(self, status, text):
        return ("respond", int(status), text)


class FakePublisher:
    """Records broadcasts instead of writing to sockets."""

    def __init__(self):
        self.connections = set()
        self.published = []

    def __len__(self):
        return len(self.connections)

    def add(self, connection):
        self.connections.add(connection)

    def discard(self, connection):
        self.connections.discard(connection)

    def publish(self, message):
        self.published.append(json.loads(message))

    def of_type(self, message_type):
        return [message for message in self.published if message["type"] == message_type]


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def grid():
    return Grid(800, 600, 20)


@pytest.fixture
def world(grid, seeded_rng):
    """A world with its food parked far from the cells the tests use."""
    world = World(grid, rng=seeded_rng)
    world.food = Cell(780, 580)
    return world


@pytest.fixture
def publisher():
    return FakePublisher()
