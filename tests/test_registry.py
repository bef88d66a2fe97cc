import re

import pytest

from snake_arena.grid import Cell
from snake_arena.registry import PlayerNotFound, PlayerRegistry


@pytest.fixture
def registry(grid, seeded_rng):
    return PlayerRegistry(grid, seeded_rng)


def test_admit_creates_default_player(registry, grid):
    player = registry.admit()
    assert player.id == 1
    assert len(player.snake) == 1
    assert grid.contains(player.head)
    assert player.direction == "right"
    assert player.score == 0
    assert re.fullmatch(r"hsl\(\d+(\.\d+)?, 80%, 50%\)", player.color)
    assert registry.get(1) is player


def test_identities_are_never_reused(registry):
    first, second, third = registry.admit(), registry.admit(), registry.admit()
    registry.remove(second.id)
    registry.remove(third.id)
    registry.remove(first.id)
    assert registry.admit().id == 4
    assert len(registry) == 1


def test_lookup_after_remove_fails(registry):
    player = registry.admit()
    registry.remove(player.id)
    assert player.id not in registry
    with pytest.raises(PlayerNotFound):
        registry.get(player.id)
    with pytest.raises(KeyError):
        registry.set_direction(player.id, "up")


def test_remove_unknown_player_is_noop(registry):
    registry.admit()
    registry.remove(99)
    assert len(registry) == 1


def test_set_direction_rejects_reversal(registry):
    player = registry.admit()
    assert registry.set_direction(player.id, "left") is False
    assert player.direction == "right"
    assert registry.set_direction(player.id, "up") is True
    assert player.direction == "up"


def test_direction_change_then_reversal_is_ignored(registry):
    player = registry.admit()
    player.direction = "up"
    assert registry.set_direction(player.id, "left") is True
    assert registry.set_direction(player.id, "right") is False
    assert player.direction == "left"


def test_same_direction_is_accepted(registry):
    player = registry.admit()
    assert registry.set_direction(player.id, "right") is True


def test_set_direction_rejects_unknown_heading(registry):
    player = registry.admit()
    with pytest.raises(ValueError):
        registry.set_direction(player.id, "sideways")


def test_reset_keeps_identity_and_color(registry):
    player = registry.admit()
    color = player.color
    player.snake = [Cell(100, 100), Cell(80, 100), Cell(60, 100)]
    player.direction = "down"
    player.score = 40

    assert registry.reset(player.id) is player
    assert player.id == 1
    assert player.color == color
    assert len(player.snake) == 1
    assert player.direction == "right"
    assert player.score == 0


def test_occupied_cells_covers_every_segment(registry):
    first = registry.admit()
    second = registry.admit()
    first.snake = [Cell(0, 0), Cell(20, 0)]
    second.snake = [Cell(100, 100)]
    assert registry.occupied_cells() == {Cell(0, 0), Cell(20, 0), Cell(100, 100)}


def test_iteration_follows_admission_order(registry):
    players = [registry.admit() for _ in range(3)]
    assert [player.id for player in registry] == [player.id for player in players]
