"""
redistypes: Redis data types as Python handles

Lists, sets and HyperLogLogs stored in a Redis-compatible server, each
exposed as a handle bound to a key name and a shared connection.
"""

from .datatypes import HyperLogLog, List, Set
from .errors import (
    ArgumentError,
    PrecisionLossError,
    ProtocolError,
    RedisTypesError,
    RemoteError,
    TransportError,
)
from .key import Key
from .network.connection import Connection, RedisConnection, dial
from .protocol.commands import Adjacency
from .singleflight import Group

__version__ = "1.0.0"

__all__ = [
    "Adjacency",
    "ArgumentError",
    "Connection",
    "Group",
    "HyperLogLog",
    "Key",
    "List",
    "PrecisionLossError",
    "ProtocolError",
    "RedisConnection",
    "RedisTypesError",
    "RemoteError",
    "Set",
    "TransportError",
    "dial",
]
