"""Protocol module for redistypes."""

from .commands import BLOCKING_COMMANDS, Adjacency, Command

__all__ = [
    "Adjacency",
    "BLOCKING_COMMANDS",
    "Command",
]
