"""
List Data Type

Remote ordered sequences. Pushes and pops go straight to the connection,
one request per call, in the order they are made. Range reads are
coalesced: concurrent range() calls with the same start and stop share a
single LRANGE.

Blocking pops take a timeout in whole seconds; 0 blocks until an element
arrives. A timeout that is not a whole number of seconds is refused before
anything is sent. A blocking pop that times out returns None.
"""

from typing import Any, List as ListType, Optional, Union

from ..duration import Duration, to_seconds
from ..errors import ArgumentError
from ..key import Key
from ..network.connection import Connection
from ..protocol.commands import Adjacency, Command
from ..protocol.replies import as_int, as_list, as_ok, as_popped_value, as_value
from ..singleflight import Group


class List:
    """
    Handle for a remote list.

    Usage:
        tasks = List(conn, "tasks")
        tasks.right_push("a", "b", "c")
        tasks.range(0, -1)        # ["a", "b", "c"]
        tasks.left_pop()          # "a"

    Attributes:
        base: Key handle with the operations common to every type
    """

    def __init__(self, conn: Connection, name: str):
        self.base = Key(conn, name)
        self._group = Group()

    @property
    def name(self) -> str:
        return self.base.name

    def left_push(self, *values: Any) -> int:
        """
        Insert values at the head of the list (LPUSH).

        Values are pushed one after the other, so left_push("a", "b")
        leaves "b" at the head.

        Returns:
            Length of the list after the push

        Raises:
            ArgumentError: If no values are given
        """
        if not values:
            raise ArgumentError("left_push requires at least one value")
        return as_int(self.base.execute(Command.LPUSH, *values))

    def right_push(self, *values: Any) -> int:
        """
        Append values at the tail of the list (RPUSH).

        Raises:
            ArgumentError: If no values are given
        """
        if not values:
            raise ArgumentError("right_push requires at least one value")
        return as_int(self.base.execute(Command.RPUSH, *values))

    def left_push_x(self, value: Any) -> int:
        """
        Insert value at the head only if the list already exists (LPUSHX).

        Returns:
            Length after the push, or 0 if the list does not exist
        """
        return as_int(self.base.execute(Command.LPUSHX, value))

    def right_push_x(self, value: Any) -> int:
        """Append value only if the list already exists (RPUSHX)."""
        return as_int(self.base.execute(Command.RPUSHX, value))

    def left_pop(self) -> Optional[Any]:
        """Remove and return the first element, or None if the list is empty."""
        return as_value(self.base.execute(Command.LPOP))

    def right_pop(self) -> Optional[Any]:
        """Remove and return the last element, or None if the list is empty."""
        return as_value(self.base.execute(Command.RPOP))

    def blocking_left_pop(self, timeout: Duration) -> Optional[Any]:
        """
        Remove and return the first element, waiting for one if needed (BLPOP).

        Args:
            timeout: Whole seconds to wait; 0 waits forever

        Returns:
            The element, or None if the timeout expired

        Raises:
            PrecisionLossError: If timeout is not a whole number of seconds
        """
        seconds = to_seconds(timeout)
        return as_popped_value(self.base.execute(Command.BLPOP, seconds))

    def blocking_right_pop(self, timeout: Duration) -> Optional[Any]:
        """Remove and return the last element, waiting for one if needed (BRPOP)."""
        seconds = to_seconds(timeout)
        return as_popped_value(self.base.execute(Command.BRPOP, seconds))

    def right_pop_left_push(self, destination: Union["List", str]) -> Optional[Any]:
        """
        Move the last element of this list to the head of destination (RPOPLPUSH).

        destination may be this list itself, which rotates it.

        Returns:
            The moved element, or None if this list is empty
        """
        return as_value(self.base.execute(Command.RPOPLPUSH, _name_of(destination)))

    def blocking_right_pop_left_push(
            self,
            destination: Union["List", str],
            timeout: Duration,
    ) -> Optional[Any]:
        """
        Blocking variant of right_pop_left_push (BRPOPLPUSH).

        Args:
            destination: List (or key name) receiving the element
            timeout: Whole seconds to wait; 0 waits forever

        Returns:
            The moved element, or None if the timeout expired

        Raises:
            PrecisionLossError: If timeout is not a whole number of seconds
        """
        seconds = to_seconds(timeout)
        reply = self.base.execute(Command.BRPOPLPUSH, _name_of(destination), seconds)
        return as_value(reply)

    def index(self, index: int) -> Optional[Any]:
        """
        Return the element at index (LINDEX); negative indexes count from the end.

        Returns:
            The element, or None if index is out of range
        """
        return as_value(self.base.execute(Command.LINDEX, index))

    def insert(self, adjacency: Adjacency, pivot: Any, value: Any) -> int:
        """
        Insert value before or after the first occurrence of pivot (LINSERT).

        Returns:
            Length after the insert, -1 if pivot was not found, or 0 if the
            list does not exist
        """
        if not isinstance(adjacency, Adjacency):
            raise ArgumentError(f"adjacency must be an Adjacency, not {type(adjacency).__name__}")
        return as_int(self.base.execute(Command.LINSERT, adjacency, pivot, value))

    def length(self) -> int:
        """Return the length of the list (LLEN); 0 if it does not exist."""
        return as_int(self.base.execute(Command.LLEN))

    def set(self, index: int, value: Any) -> None:
        """
        Replace the element at index (LSET).

        Raises:
            RemoteError: If index is out of range or the list does not exist
        """
        as_ok(self.base.execute(Command.LSET, index, value))

    def remove(self, count: int, value: Any) -> int:
        """
        Remove occurrences of value (LREM).

        count > 0 removes from head to tail, count < 0 from tail to head and
        count == 0 removes every occurrence.

        Returns:
            Number of elements removed
        """
        return as_int(self.base.execute(Command.LREM, count, value))

    def range(self, start: int, stop: int) -> ListType[Any]:
        """
        Return the elements from start to stop, both inclusive (LRANGE).

        Negative indexes count from the end; range(0, -1) is the whole list.
        Concurrent calls with the same start and stop share one request.

        Returns:
            A new list of elements (empty if the list does not exist)
        """
        def fetch():
            return tuple(as_list(self.base.execute(Command.LRANGE, start, stop)))

        return list(self._group.do(f"LRANGE:{start}:{stop}", fetch))

    def __repr__(self) -> str:
        return f"List({self.name!r})"


def _name_of(destination: Union[List, str]) -> str:
    if isinstance(destination, List):
        return destination.name
    return destination
