"""Authoritative game world simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
from typing import List, Optional

from . import collision, constants, food, protocol
from .grid import Cell, Grid, step
from .registry import PlayerRegistry

logger = logging.getLogger(__name__)


@dataclass
class Crash:
    """One crash resolved during a tick."""

    player_id: int
    # Empty for a self-crash.
    victims: List[int] = field(default_factory=list)


@dataclass
class TickReport:
    """What happened during a single call to :meth:`World.update`."""

    tick: int
    eaten: List[int] = field(default_factory=list)
    crashes: List[Crash] = field(default_factory=list)


class World:
    """Holds the registry, the shared food cell and the RNG.

    :meth:`update` is the only code that moves snakes or replaces the food.
    """

    def __init__(
        self,
        grid: Optional[Grid] = None,
        food_reward: int = constants.FOOD_REWARD,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.grid = grid or Grid()
        self.food_reward = food_reward
        self.rng = rng or random.Random()
        self.tick: int = 0
        self.registry = PlayerRegistry(self.grid, self.rng)
        self.food: Cell = food.spawn(set(), self.grid, self.rng)

    def update(self) -> TickReport:
        """Advance every player by one cell and resolve food and crashes."""

        self.tick += 1
        report = TickReport(tick=self.tick)
        food_consumed = False

        for player in self.registry:
            head = step(player.head, player.direction, self.grid)
            ate = not food_consumed and head == self.food
            player.advance(head, grow=ate)
            if ate:
                player.score += self.food_reward
                food_consumed = True
                report.eaten.append(player.id)

            self_crash = collision.hits_own_body(player)
            victims = collision.players_hit(player, self.registry)
            if not (self_crash or victims):
                continue
            self.registry.respawn(player)
            for victim in victims:
                self.registry.respawn(victim)
            report.crashes.append(Crash(player.id, [victim.id for victim in victims]))

        if food_consumed:
            # Placed against the settled positions so it cannot land on a
            # snake that moved later in the same tick.
            self.food = food.spawn(self.registry.occupied_cells(), self.grid, self.rng)

        for crash in report.crashes:
            if crash.victims:
                logger.debug("Player %s crashed into %s", crash.player_id, crash.victims)
            else:
                logger.debug("Player %s crashed into itself", crash.player_id)
        if report.eaten:
            logger.debug("Player %s ate the food, new food at %s", report.eaten[0], self.food)
        return report

    def snapshot(self) -> str:
        return protocol.encode_game_state(self.food, self.registry)
