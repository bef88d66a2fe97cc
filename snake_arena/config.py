"""Process-wide settings, read from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping, Optional

from . import constants
from .grid import Grid


@dataclass(frozen=True)
class ArenaConfig:
    """Server settings shared by every connection."""

    host: str = constants.DEFAULT_HOST
    port: int = constants.DEFAULT_PORT
    tick_interval: float = constants.TICK_INTERVAL
    cell_size: int = constants.CELL_SIZE
    width: int = constants.ARENA_WIDTH
    height: int = constants.ARENA_HEIGHT
    food_reward: int = constants.FOOD_REWARD
    static_dir: Optional[str] = None

    def __post_init__(self) -> None:
        if self.tick_interval <= 0:
            raise ValueError("Tick interval must be positive")
        if self.food_reward < 0:
            raise ValueError("Food reward must not be negative")
        # Validates the geometry.
        self.grid()

    def grid(self) -> Grid:
        return Grid(self.width, self.height, self.cell_size)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ArenaConfig":
        """Build a config from ``PORT``, ``HOST``, ``TICK_INTERVAL`` and friends."""

        env = os.environ if environ is None else environ
        return cls(
            host=env.get("HOST", constants.DEFAULT_HOST),
            port=int(env.get("PORT", constants.DEFAULT_PORT)),
            tick_interval=float(env.get("TICK_INTERVAL", constants.TICK_INTERVAL)),
            cell_size=int(env.get("CELL_SIZE", constants.CELL_SIZE)),
            width=int(env.get("ARENA_WIDTH", constants.ARENA_WIDTH)),
            height=int(env.get("ARENA_HEIGHT", constants.ARENA_HEIGHT)),
            food_reward=int(env.get("FOOD_REWARD", constants.FOOD_REWARD)),
            static_dir=env.get("STATIC_DIR") or None,
        )
