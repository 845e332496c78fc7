"""
Connection Module

This module implements the blocking request/response channel used by every
data type handle, on top of a single redis-py connection.

A connection sends one command at a time and waits for its single reply.
Requests from several threads sharing a connection are serialized: the
lock is held for the full write and read of a request, so frames of
different requests never interleave on the wire. Blocking list commands
hold the connection until the remote side replies.

Nothing here retries or reconnects. After a transport failure the
connection is closed and every later request fails with TransportError.
"""

import logging
import threading
from enum import Enum
from typing import Any, Optional, Protocol

import redis
from redis import exceptions as redis_errors
from redis.backoff import NoBackoff
from redis.retry import Retry

from ..config.settings import host_and_port, settings
from ..errors import ArgumentError, ProtocolError, RemoteError, TransportError
from ..protocol.commands import Command

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Anything that can execute one command and return its reply."""

    def execute(self, command: Command, *args: Any) -> Any:
        """Send command with args and return the decoded reply."""
        ...


class RedisConnection:
    """
    Connection to a Redis-compatible store over one redis-py connection.

    Replies are returned raw, without redis-py's per-command response
    callbacks, and converted by the data type handles.

    Usage:
        with dial("localhost:6379") as conn:
            conn.execute(Command.LLEN, "mylist")

    Attributes:
        address: "host:port" of the remote store
    """

    def __init__(self, connection: redis.Connection, address: str = ""):
        """
        Wrap a redis-py connection.

        Args:
            connection: redis.Connection configured with the read timeout
            address: Remote address, used for logging and stats
        """
        self.address = address

        self._conn: Optional[redis.Connection] = connection
        self._lock = threading.Lock()
        self._total_requests = 0

    def execute(self, command: Command, *args: Any) -> Any:
        """
        Send a command and wait for its reply.

        Args:
            command: The command verb
            *args: Arguments in wire order (the key first, where there is one)

        Returns:
            The decoded reply.

        Raises:
            ArgumentError: If an argument cannot be encoded (nothing is sent)
            TransportError: If the connection is closed or fails mid-request
            RemoteError: If the remote store answers with an error reply
        """
        name = command.value if isinstance(command, Command) else str(command)
        blocking = isinstance(command, Command) and command.is_blocking
        wire_args = [_wire_value(arg) for arg in args]

        with self._lock:
            if self._conn is None:
                raise TransportError("connection is closed")

            self._total_requests += 1
            logger.debug(f"{self.address} <- {name} ({len(args)} args)")

            try:
                self._conn.send_command(name, *wire_args)
                if blocking:
                    # wait past the read timeout; the server enforces the command's own
                    self._conn.can_read(timeout=None)
                return self._conn.read_response()
            except redis_errors.DataError as exc:
                raise ArgumentError(str(exc)) from exc
            except redis_errors.ResponseError as exc:
                logger.debug(f"{self.address} -> {name} error: {exc}")
                raise RemoteError(str(exc)) from exc
            except redis_errors.InvalidResponse as exc:
                self._abort(f"{name} failed: {exc}")
                raise ProtocolError(f"{name}: {exc}") from exc
            except (redis_errors.ConnectionError, redis_errors.TimeoutError, OSError) as exc:
                self._abort(f"{name} failed: {exc}")
                raise TransportError(f"{name}: {exc}") from exc

    def _abort(self, reason: str) -> None:
        """Close after a failure; the reply stream is no longer trustworthy."""
        logger.warning(f"Closing connection to {self.address}: {reason}")
        self._disconnect()

    def _disconnect(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            conn.disconnect()

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        with self._lock:
            self._disconnect()

    @property
    def closed(self) -> bool:
        """Check if the connection has been closed."""
        return self._conn is None

    def get_stats(self) -> dict:
        """
        Get connection statistics.

        Returns:
            Dictionary with the remote address, whether the connection is
            still open, and how many requests were sent on it.
        """
        return {
            "address": self.address,
            "connected": not self.closed,
            "total_requests": self._total_requests,
        }

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _wire_value(arg: Any) -> Any:
    """Send enum arguments (such as Adjacency) as their wire value."""
    if isinstance(arg, Enum):
        return arg.value
    return arg


def dial(
        address: Optional[str] = None,
        connect_timeout: Optional[float] = None,
        read_timeout: Optional[float] = None,
        decode_responses: Optional[bool] = None,
) -> RedisConnection:
    """
    Open a connection to the remote store.

    Args:
        address: "host:port" (default from settings.ADDRESS)
        connect_timeout: Seconds to establish the connection
            (default from settings.CONNECT_TIMEOUT)
        read_timeout: Seconds to wait for a non-blocking reply
            (default from settings.READ_TIMEOUT)
        decode_responses: Decode bulk replies to str
            (default from settings.DECODE_RESPONSES)

    Returns:
        A connected RedisConnection.

    Raises:
        TransportError: If the connection cannot be established
    """
    host, port = host_and_port(address)
    connect_timeout = connect_timeout if connect_timeout is not None else settings.CONNECT_TIMEOUT
    read_timeout = read_timeout if read_timeout is not None else settings.READ_TIMEOUT
    decode_responses = (
        decode_responses if decode_responses is not None else settings.DECODE_RESPONSES
    )

    connection = redis.Connection(
        host=host,
        port=port,
        socket_connect_timeout=connect_timeout,
        socket_timeout=read_timeout,
        socket_read_size=settings.READ_BUFFER_SIZE,
        encoding=settings.ENCODING,
        decode_responses=decode_responses,
        retry=Retry(NoBackoff(), 0),
        lib_name=None,
        lib_version=None,
    )
    try:
        connection.connect()
    except (redis_errors.ConnectionError, redis_errors.TimeoutError) as exc:
        raise TransportError(f"cannot connect to {host}:{port}: {exc}") from exc

    logger.debug(f"Connected to {host}:{port}")
    return RedisConnection(connection, address=f"{host}:{port}")
