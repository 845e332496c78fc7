"""
Duration quantization.

Expiry and blocking commands only accept whole seconds or whole
milliseconds. These helpers convert a duration to such a count and raise
PrecisionLossError instead of rounding when the duration has a remainder
below the requested unit. A 1.5 s expiry never silently becomes 1 s.

Accepted durations are ``datetime.timedelta`` values and ``int``/``float``
counts of seconds. Floats are read through their shortest decimal form, so
``1.5`` is exactly 1.5 seconds and ``0.1`` is exactly 100 milliseconds.
"""

from datetime import timedelta
from decimal import Decimal
from typing import Tuple, Union

from .errors import ArgumentError, PrecisionLossError
from .protocol.commands import Command

Duration = Union[timedelta, int, float]

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND


def to_nanoseconds(duration: Duration) -> int:
    """
    Convert a duration to an exact integer count of nanoseconds.

    Raises:
        ArgumentError: If duration is not a timedelta, int or float
        PrecisionLossError: If a float has a remainder below one nanosecond
    """
    if isinstance(duration, timedelta):
        seconds = duration.days * 86400 + duration.seconds
        return seconds * SECOND + duration.microseconds * MICROSECOND
    if isinstance(duration, bool):
        raise ArgumentError("duration must be a timedelta or a number of seconds, not bool")
    if isinstance(duration, int):
        return duration * SECOND
    if isinstance(duration, float):
        exact = Decimal(repr(duration)) * SECOND
        if not exact.is_finite():
            raise ArgumentError(f"duration must be finite, got {duration!r}")
        if exact != exact.to_integral_value():
            raise PrecisionLossError(f"{duration!r}s is not a whole number of nanoseconds")
        return int(exact)
    raise ArgumentError(
        f"duration must be a timedelta or a number of seconds, not {type(duration).__name__}"
    )


def _truncate(nanoseconds: int, unit: int) -> Tuple[int, int]:
    """Integral count of units truncated toward zero, and the remainder."""
    count = abs(nanoseconds) // unit
    if nanoseconds < 0:
        count = -count
    return count, nanoseconds - count * unit


def to_seconds(duration: Duration) -> int:
    """
    Quantize a duration to whole seconds.

    Raises:
        PrecisionLossError: If the duration is not a multiple of one second
    """
    count, remainder = _truncate(to_nanoseconds(duration), SECOND)
    if remainder != 0:
        raise PrecisionLossError(f"{_describe(duration)} is not a multiple of one second")
    return count


def to_milliseconds(duration: Duration) -> int:
    """
    Quantize a duration to whole milliseconds.

    Raises:
        PrecisionLossError: If the duration is not a multiple of one millisecond
    """
    count, remainder = _truncate(to_nanoseconds(duration), MILLISECOND)
    if remainder != 0:
        raise PrecisionLossError(f"{_describe(duration)} is not a multiple of one millisecond")
    return count


def quantize(duration: Duration) -> Tuple[Command, int]:
    """
    Pick the coarsest expiry command that represents duration exactly.

    Returns:
        (Command.EXPIRE, seconds) for whole seconds, otherwise
        (Command.PEXPIRE, milliseconds) for whole milliseconds.

    Raises:
        PrecisionLossError: If the duration has a sub-millisecond remainder
    """
    nanoseconds = to_nanoseconds(duration)
    seconds, remainder = _truncate(nanoseconds, SECOND)
    if remainder == 0:
        return Command.EXPIRE, seconds

    millis, remainder = _truncate(nanoseconds, MILLISECOND)
    if remainder == 0:
        return Command.PEXPIRE, millis

    raise PrecisionLossError(f"{_describe(duration)} is not a multiple of one millisecond")


def _describe(duration: Duration) -> str:
    if isinstance(duration, timedelta):
        return f"timedelta({duration})"
    return f"{duration!r}s"
