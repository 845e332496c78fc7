"""Network module for redistypes."""

from .connection import Connection, RedisConnection, dial

__all__ = ["Connection", "RedisConnection", "dial"]
