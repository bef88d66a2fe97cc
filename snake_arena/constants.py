"""Gameplay and network defaults shared across the server modules."""

TICK_INTERVAL: float = 0.1
CELL_SIZE: int = 20
ARENA_WIDTH: int = 800
ARENA_HEIGHT: int = 600
FOOD_REWARD: int = 10

DEFAULT_DIRECTION: str = "right"
COLOR_SATURATION: int = 80
COLOR_LIGHTNESS: int = 50

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8080
