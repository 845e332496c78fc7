"""Set Data Type: remote unordered collections of unique members."""

from typing import Any

from ..errors import ArgumentError
from ..key import Key
from ..network.connection import Connection
from ..protocol.commands import Command
from ..protocol.replies import as_int
from ..singleflight import Group


class Set:
    """
    Handle for a remote set.

    Membership and cardinality are computed by the remote store.
    Concurrent cardinality() calls on one handle share a single SCARD.

    Attributes:
        base: Key handle with the operations common to every type
    """

    def __init__(self, conn: Connection, name: str):
        self.base = Key(conn, name)
        self._group = Group()

    @property
    def name(self) -> str:
        return self.base.name

    def add(self, *values: Any) -> int:
        """
        Add values to the set (SADD).

        Returns:
            Number of values that were not already members

        Raises:
            ArgumentError: If no values are given
        """
        if not values:
            raise ArgumentError("add requires at least one value")
        return as_int(self.base.execute(Command.SADD, *values))

    def cardinality(self) -> int:
        """Return the number of members (SCARD); 0 if the set does not exist."""
        return self._group.do(
            Command.SCARD.value,
            lambda: as_int(self.base.execute(Command.SCARD)),
        )

    def __repr__(self) -> str:
        return f"Set({self.name!r})"
