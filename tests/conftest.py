"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import socket
import threading
import time
import uuid
from contextlib import closing
from typing import Any, Callable, Generator, List, Tuple

import pytest

from redistypes.config.logs import setup_logging
from redistypes.network.connection import RedisConnection, dial
from tests.memory_server import MemoryServer


def find_free_port() -> int:
    """Find a port with nothing listening on it."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


# ============================================================================
# Server Fixtures
# ============================================================================

@pytest.fixture
def server() -> Generator[MemoryServer, None, None]:
    """
    Start an in-memory RESP server for the test.

    This fixture:
    1. Creates a MemoryServer on a free port
    2. Runs it in a background thread
    3. Yields the server for testing
    4. Stops it after the test
    """
    srv = MemoryServer()
    srv.start()

    yield srv

    srv.stop()


# ============================================================================
# Connection Fixtures
# ============================================================================

@pytest.fixture
def conn(server: MemoryServer) -> Generator[RedisConnection, None, None]:
    """Create a connection to the test server."""
    connection = dial(server.address, read_timeout=5.0)

    yield connection

    connection.close()


@pytest.fixture
def conn_factory(server: MemoryServer):
    """
    Factory fixture to open extra connections to the test server.

    Usage:
        def test_something(conn_factory):
            other = conn_factory()
    """
    opened: List[RedisConnection] = []

    def factory() -> RedisConnection:
        connection = dial(server.address, read_timeout=5.0)
        opened.append(connection)
        return connection

    yield factory

    for connection in opened:
        connection.close()


@pytest.fixture
def key_factory() -> Callable[[], str]:
    """
    Factory fixture returning unique key names for the test.

    Usage:
        def test_something(key_factory):
            name = key_factory()
    """
    prefix = f"testkey:{uuid.uuid4().hex[:8]}"
    counter = iter(range(1_000_000))

    def factory() -> str:
        return f"{prefix}:{next(counter)}"

    return factory


# ============================================================================
# Stub Connections
# ============================================================================

class RecordingConnection:
    """
    Connection stub that records commands and returns scripted replies.

    Usage:
        conn = RecordingConnection(replies=[1])
        Key(conn, "k").exists()
        conn.calls  # [("EXISTS", ("k",))]
    """

    def __init__(self, replies: List[Any] = None, default: Any = 1):
        self.replies = list(replies or [])
        self.default = default
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def execute(self, command, *args):
        self.calls.append((command.value, args))
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, BaseException):
            raise reply
        return reply


class GatedConnection:
    """
    Connection wrapper that holds every request until released.

    entered is set once the first request reaches the wrapper, so a test
    can make sure a call is in flight before starting more callers.
    """

    def __init__(self, inner):
        self.inner = inner
        self.entered = threading.Event()
        self.release = threading.Event()
        self.calls = 0
        self._lock = threading.Lock()

    def execute(self, command, *args):
        with self._lock:
            self.calls += 1
        self.entered.set()
        if not self.release.wait(timeout=10):
            raise RuntimeError("gated request was never released")
        return self.inner.execute(command, *args)


def run_wave(call: Callable[[], Any], gated: GatedConnection, group, signature: str,
             callers: int) -> Tuple[List[Any], List[BaseException]]:
    """
    Run callers concurrent invocations of call so they coalesce into one wave.

    The first caller is held inside the gated connection until every other
    caller is parked on the group, then the request is released.

    Returns:
        Tuple of (results, errors) collected from all callers
    """
    results: List[Any] = []
    errors: List[BaseException] = []
    lock = threading.Lock()

    def invoke():
        try:
            value = call()
        except Exception as exc:
            with lock:
                errors.append(exc)
        else:
            with lock:
                results.append(value)

    threads = [threading.Thread(target=invoke)]
    threads[0].start()
    assert gated.entered.wait(timeout=5)

    threads += [threading.Thread(target=invoke) for _ in range(callers - 1)]
    for thread in threads[1:]:
        thread.start()
    deadline = time.monotonic() + 5
    while group.pending(signature) < callers - 1:
        assert time.monotonic() < deadline, "callers never joined the wave"
        time.sleep(0.005)

    gated.release.set()
    for thread in threads:
        thread.join(timeout=5)
    return results, errors


@pytest.fixture
def recording_conn() -> RecordingConnection:
    """Create a RecordingConnection that answers 1 to everything."""
    return RecordingConnection()


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure logging and custom pytest markers."""
    setup_logging()
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )

