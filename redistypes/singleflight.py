"""
Single-flight call coordination.

A Group collapses concurrent calls that share a signature into one
underlying call. The first caller for a signature runs the function; every
caller arriving while it is in flight waits for that run and receives the
same value, or the same exception. Once the run finishes the signature is
forgotten, so the next caller starts a fresh wave.

Values are shared between callers as-is. Functions passed to do() should
return immutable values (tuples, ints, strings, handles) so that no caller
can alter what another caller receives.

A shared exception is re-raised from the leader's traceback in every
waiter; its __traceback__ shows whichever caller raised it last.
"""

import logging
import threading
from types import TracebackType
from typing import Any, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Call:
    """An in-flight or just-finished call for one signature."""

    __slots__ = ("done", "value", "error", "traceback", "waiters")

    def __init__(self):
        self.done = threading.Event()
        self.value: Any = None
        self.error: Optional[BaseException] = None
        self.traceback: Optional[TracebackType] = None
        self.waiters = 0


class Group:
    """
    Deduplicates concurrent calls keyed by a signature string.

    Usage:
        group = Group()
        count = group.do("PFCOUNT", lambda: conn.execute(Command.PFCOUNT, name))

    Invariant: for one Group at most one call per signature runs at a time.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._calls: Dict[str, _Call] = {}

    def do(self, signature: str, fn: Callable[[], T]) -> T:
        """
        Run fn once for all concurrent callers using signature.

        Args:
            signature: Identifies the logical request
            fn: Zero-argument function performing exactly one request

        Returns:
            The value returned by the single run of fn.

        Raises:
            Whatever fn raised, re-raised in every caller of the wave.
        """
        with self._lock:
            call = self._calls.get(signature)
            if call is not None:
                call.waiters += 1
                leader = False
            else:
                call = _Call()
                self._calls[signature] = call
                leader = True

        if not leader:
            logger.debug(f"Joining in-flight call {signature!r}")
            call.done.wait()
            if call.error is not None:
                # each waiter's traceback starts from the leader's
                raise call.error.with_traceback(call.traceback)
            return call.value

        try:
            call.value = fn()
        except BaseException as exc:
            call.error = exc
            call.traceback = exc.__traceback__
            raise
        finally:
            with self._lock:
                del self._calls[signature]
            if call.waiters:
                logger.debug(f"Call {signature!r} shared with {call.waiters} waiters")
            call.done.set()

        return call.value

    def pending(self, signature: str) -> int:
        """Number of callers waiting on the in-flight call for signature."""
        with self._lock:
            call = self._calls.get(signature)
            return call.waiters if call is not None else 0

    def in_flight(self, signature: str) -> bool:
        """Check if a call for signature is currently running."""
        with self._lock:
            return signature in self._calls
