"""
HyperLogLog Data Type

A probabilistic structure held by the remote store that estimates the
number of unique items added to it. The client only issues PFADD, PFCOUNT
and PFMERGE; counting happens remotely.
"""

import logging
from typing import Any

from ..errors import ArgumentError
from ..key import Key
from ..network.connection import Connection
from ..protocol.commands import Command
from ..protocol.replies import as_bool, as_int, as_ok
from ..singleflight import Group

logger = logging.getLogger(__name__)


class HyperLogLog:
    """
    Handle for a remote HyperLogLog.

    count() and merge() are coalesced: concurrent calls on the same handle
    share one request. For merge() the call is identified by the
    destination name and the other handle's name, so merges into different
    destinations still run independently.

    Usage:
        visitors = HyperLogLog(conn, "visitors:today")
        visitors.add("alice", "bob")   # True
        visitors.count()               # 2

    Attributes:
        base: Key handle with the operations common to every type
    """

    def __init__(self, conn: Connection, name: str):
        self.base = Key(conn, name)
        self._group = Group()

    @property
    def name(self) -> str:
        return self.base.name

    def add(self, *items: Any) -> bool:
        """
        Add items (PFADD).

        Returns:
            True if at least one internal register was altered

        Raises:
            ArgumentError: If no items are given
        """
        if not items:
            raise ArgumentError("add requires at least one item")
        return as_bool(self.base.execute(Command.PFADD, *items))

    def count(self) -> int:
        """Return the estimated number of unique items added (PFCOUNT)."""
        return self._group.do(
            Command.PFCOUNT.value,
            lambda: as_int(self.base.execute(Command.PFCOUNT)),
        )

    def merge(self, name: str, other: "HyperLogLog") -> "HyperLogLog":
        """
        Merge this HyperLogLog with other into a new key (PFMERGE).

        Args:
            name: Key name of the merged HyperLogLog
            other: HyperLogLog to merge with

        Returns:
            Handle for the merged HyperLogLog. Callers coalesced into the
            same merge all receive the same handle object.
        """
        conn = self.base.conn

        def run():
            as_ok(conn.execute(Command.PFMERGE, name, self.name, other.name))
            logger.debug(f"Merged {self.name!r} and {other.name!r} into {name!r}")
            return HyperLogLog(conn, name)

        return self._group.do(merge_signature(name, other.name), run)

    def __repr__(self) -> str:
        return f"HyperLogLog({self.name!r})"


def merge_signature(destination: str, source: str) -> str:
    """
    Single-flight signature of a merge into destination with source.

    Names may contain any character, so the destination is length-prefixed
    to keep every (destination, source) pair distinct.
    """
    return f"PFMERGE:{len(destination)}:{destination}:{source}"
