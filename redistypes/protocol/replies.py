"""
Reply coercion helpers.

Each helper checks that a reply has the shape a command is documented to
return and converts it to the Python type exposed by the data types.
"""

from typing import Any, List, Optional

from ..errors import ProtocolError


def as_bool(reply: Any) -> bool:
    """Convert an integer 0/1 reply to bool."""
    if isinstance(reply, int) and not isinstance(reply, bool):
        return reply != 0
    raise ProtocolError(f"expected integer reply, got {type(reply).__name__}")


def as_int(reply: Any) -> int:
    """Return an integer reply unchanged."""
    if isinstance(reply, int) and not isinstance(reply, bool):
        return reply
    raise ProtocolError(f"expected integer reply, got {type(reply).__name__}")


def as_ok(reply: Any) -> None:
    """Check for the +OK status reply (str, or bytes when replies are not decoded)."""
    if reply not in ("OK", b"OK"):
        raise ProtocolError(f"expected OK status reply, got {reply!r}")


def as_value(reply: Any) -> Optional[Any]:
    """Return a bulk reply (str or bytes) or None."""
    if reply is None or isinstance(reply, (str, bytes)):
        return reply
    raise ProtocolError(f"expected bulk reply, got {type(reply).__name__}")


def as_list(reply: Any) -> List[Any]:
    """Return an array reply as a list; a null array becomes an empty list."""
    if reply is None:
        return []
    if isinstance(reply, list):
        return reply
    raise ProtocolError(f"expected array reply, got {type(reply).__name__}")


def as_popped_value(reply: Any) -> Optional[Any]:
    """
    Extract the value from a BLPOP/BRPOP reply.

    The remote store answers [key, value] when an element was popped and a
    null array when the timeout expired.
    """
    if reply is None:
        return None
    if isinstance(reply, list) and len(reply) == 2:
        return as_value(reply[1])
    raise ProtocolError(f"expected [key, value] reply, got {reply!r}")
