"""
Tests for the Redis connection

These tests verify RedisConnection and dial():
- Requests and replies round trip through the test server
- Error replies surface as RemoteError and leave the connection usable
- Transport failures close the connection for good
- Concurrent requests on a shared connection are serialized

Run with: python -m pytest tests/test_connection.py -v
"""

import threading
import time

import pytest

from redistypes.config.settings import host_and_port
from redistypes.errors import ArgumentError, RemoteError, TransportError
from redistypes.network.connection import RedisConnection, dial
from redistypes.protocol.commands import Adjacency, Command
from tests.conftest import find_free_port


class TestDial:
    """Test establishing connections."""

    def test_dial_connects(self, server):
        """Test dial() returns an open connection to the address."""
        with dial(server.address) as connection:
            assert isinstance(connection, RedisConnection)
            assert connection.closed is False
            assert connection.address == server.address

    def test_dial_refused(self):
        """Test dialing a port nobody listens on raises TransportError."""
        with pytest.raises(TransportError):
            dial(f"127.0.0.1:{find_free_port()}", connect_timeout=1.0)

    def test_context_manager_closes(self, server):
        """Test leaving the with block closes the connection."""
        with dial(server.address) as connection:
            pass
        assert connection.closed is True

    def test_close_twice(self, conn):
        """Test close() can be called repeatedly."""
        conn.close()
        conn.close()
        assert conn.closed is True


class TestHostAndPort:
    """Test endpoint address parsing."""

    def test_host_and_port(self):
        """Test host:port is split."""
        assert host_and_port("redis.local:7000") == ("redis.local", 7000)

    def test_default_port(self):
        """Test a bare host uses port 6379."""
        assert host_and_port("redis.local") == ("redis.local", 6379)

    def test_empty_host(self):
        """Test :port means localhost."""
        assert host_and_port(":7000") == ("localhost", 7000)

    def test_bad_port(self):
        """Test a non-numeric port raises ValueError."""
        with pytest.raises(ValueError):
            host_and_port("redis.local:abc")


class TestExecute:
    """Test sending commands."""

    def test_integer_reply(self, conn, server):
        """Test a command reaches the server with its arguments."""
        assert conn.execute(Command.RPUSH, "k", "a", "b") == 2
        assert server.commands[-1] == ("RPUSH", ("k", "a", "b"))

    def test_bulk_and_null_replies(self, conn):
        """Test bulk values decode to str and missing values to None."""
        conn.execute(Command.RPUSH, "k", "hello")

        assert conn.execute(Command.LPOP, "k") == "hello"
        assert conn.execute(Command.LPOP, "k") is None

    def test_bytes_replies(self, server):
        """Test decode_responses=False keeps values as bytes."""
        with dial(server.address, decode_responses=False) as connection:
            connection.execute(Command.RPUSH, "k", "v")
            assert connection.execute(Command.LRANGE, "k", 0, -1) == [b"v"]

    def test_remote_error(self, conn):
        """Test an error reply raises RemoteError and the connection stays usable."""
        with pytest.raises(RemoteError, match="no such key"):
            conn.execute(Command.RENAME, "missing", "other")

        assert conn.closed is False
        assert conn.execute(Command.EXISTS, "missing") == 0

    def test_argument_error_sends_nothing(self, conn, server):
        """Test an unencodable argument fails before anything is written."""
        with pytest.raises(ArgumentError):
            conn.execute(Command.SADD, "k", object())

        assert server.commands == []
        assert conn.execute(Command.SCARD, "k") == 0

    @pytest.mark.parametrize("value", [True, None, object(), [1, 2]])
    def test_unsupported_argument_types(self, conn, server, value):
        """Test arguments without a wire form raise ArgumentError before sending."""
        with pytest.raises(ArgumentError):
            conn.execute(Command.SADD, "k", value)

        assert server.commands == []
        assert conn.closed is False

    def test_argument_types_on_the_wire(self, conn, server):
        """Test str, bytes, int, float and enum arguments reach the server as strings."""
        conn.execute(Command.RPUSH, "k", "a", b"b", 7, 1.5, -1)
        conn.execute(Command.LINSERT, "k", Adjacency.AFTER, "a", "x")

        assert server.commands[0] == ("RPUSH", ("k", "a", "b", "7", "1.5", "-1"))
        assert server.commands[1] == ("LINSERT", ("k", "AFTER", "a", "x"))

    def test_unicode_values(self, conn):
        """Test non-ASCII values survive the round trip."""
        conn.execute(Command.RPUSH, "k", "é\r\nü")
        assert conn.execute(Command.LPOP, "k") == "é\r\nü"

    def test_stats(self, conn):
        """Test get_stats counts requests sent."""
        conn.execute(Command.EXISTS, "a")
        conn.execute(Command.EXISTS, "b")

        stats = conn.get_stats()
        assert stats["total_requests"] == 2
        assert stats["connected"] is True


class TestTransportFailures:
    """Test behavior when the connection breaks."""

    def test_closed_connection(self, conn):
        """Test requests on a closed connection raise TransportError."""
        conn.close()
        with pytest.raises(TransportError, match="closed"):
            conn.execute(Command.EXISTS, "k")

    def test_server_goes_away(self, conn, server):
        """Test a dropped server surfaces as TransportError and the connection closes."""
        conn.execute(Command.EXISTS, "k")
        server.stop()

        with pytest.raises(TransportError):
            conn.execute(Command.EXISTS, "k")
        assert conn.closed is True

        # No reconnect
        with pytest.raises(TransportError):
            conn.execute(Command.EXISTS, "k")


class TestSerialization:
    """Test concurrent use of one connection."""

    def test_concurrent_pushes(self, conn):
        """Test many threads pushing on one connection never interleave frames."""
        errors = []

        def push(worker: int):
            try:
                for i in range(50):
                    conn.execute(Command.RPUSH, "shared", f"{worker}:{i}")
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=push, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert errors == []
        assert conn.execute(Command.LLEN, "shared") == 400

    def test_pushes_from_one_thread_keep_order(self, conn):
        """Test sequential pushes are applied in the order they were made."""
        for i in range(20):
            conn.execute(Command.RPUSH, "ordered", i)

        assert conn.execute(Command.LRANGE, "ordered", 0, -1) == [str(i) for i in range(20)]


@pytest.mark.slow
class TestBlockingCommands:
    """Test that blocking verbs are not cut off by the read timeout."""

    def test_blocking_pop_outlives_read_timeout(self, server):
        """Test BLPOP waits for the server even with a short read timeout."""
        with dial(server.address, read_timeout=0.2) as connection:
            started = time.monotonic()
            assert connection.execute(Command.BLPOP, "empty", 1) is None
            assert time.monotonic() - started >= 0.9
            assert connection.closed is False
