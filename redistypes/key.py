"""
Key Handle Module

This module implements the operations every remote data type supports.
They act on the key named by the handle and do not depend on the type of
value stored under it.

Every data type handle (List, Set, HyperLogLog) holds a Key and exposes it
as its ``base``.
"""

import logging
from typing import Any

from .duration import Duration, quantize, to_milliseconds
from .network.connection import Connection
from .protocol.commands import Command
from .protocol.replies import as_bool, as_ok

logger = logging.getLogger(__name__)


class Key:
    """
    Handle for one named key in the remote store.

    The connection is shared with other handles and is never closed by the
    handle. The name only changes when a rename succeeds.

    Usage:
        key = Key(conn, "session:42")
        key.expire(timedelta(minutes=5))
        key.rename("session:43")
        key.name  # "session:43"

    Attributes:
        conn: The Connection used for every request
    """

    def __init__(self, conn: Connection, name: str):
        """
        Initialize the handle.

        Args:
            conn: Connection to the remote store
            name: Name of the key
        """
        self.conn = conn
        self._name = name

    @property
    def name(self) -> str:
        """Current name of the key."""
        return self._name

    def execute(self, command: Command, *args: Any) -> Any:
        """Send command with this key as the first argument."""
        return self.conn.execute(command, self._name, *args)

    def exists(self) -> bool:
        """
        Check if the key exists (EXISTS).

        Returns:
            True if the key exists, False otherwise
        """
        return as_bool(self.execute(Command.EXISTS))

    def delete(self) -> bool:
        """
        Delete the key (DEL).

        Returns:
            True if the key existed and was deleted, False if it did not exist
        """
        return as_bool(self.execute(Command.DEL))

    def expire(self, timeout: Duration) -> bool:
        """
        Set a timeout after which the key is deleted automatically.

        Whole-second timeouts are sent with EXPIRE; timeouts that are a whole
        number of milliseconds but not of seconds are sent with PEXPIRE.
        Anything finer is refused rather than rounded.

        Args:
            timeout: timedelta or number of seconds

        Returns:
            True if the key exists and the timeout was set, False otherwise

        Raises:
            PrecisionLossError: If timeout has a sub-millisecond remainder
                (nothing is sent)
        """
        command, amount = quantize(timeout)
        return as_bool(self.execute(command, amount))

    def pexpire(self, timeout: Duration) -> bool:
        """
        Set a timeout with millisecond precision (PEXPIRE).

        Raises:
            PrecisionLossError: If timeout has a sub-millisecond remainder
                (nothing is sent)
        """
        millis = to_milliseconds(timeout)
        return as_bool(self.execute(Command.PEXPIRE, millis))

    def persist(self) -> bool:
        """
        Remove the timeout from the key (PERSIST).

        Returns:
            True if a timeout was removed, False if the key has none or
            does not exist
        """
        return as_bool(self.execute(Command.PERSIST))

    def rename(self, newkey: str) -> None:
        """
        Rename the key to newkey, in the handle and in the remote store.

        If newkey already exists in the remote store it is overwritten.

        Raises:
            RemoteError: If the key does not exist; the handle keeps its name
        """
        as_ok(self.execute(Command.RENAME, newkey))
        logger.debug(f"Renamed {self._name!r} to {newkey!r}")
        self._name = newkey

    def rename_nx(self, newkey: str) -> bool:
        """
        Rename the key to newkey only if newkey does not exist yet.

        Returns:
            True if the key was renamed, False if newkey already exists
        """
        renamed = as_bool(self.execute(Command.RENAMENX, newkey))
        if renamed:
            logger.debug(f"Renamed {self._name!r} to {newkey!r}")
            self._name = newkey
        return renamed

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"
