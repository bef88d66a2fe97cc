"""Authoritative game server for the snake arena."""

__all__ = [
    "collision",
    "config",
    "constants",
    "food",
    "grid",
    "main",
    "player",
    "protocol",
    "publisher",
    "registry",
    "world",
]
