"""
Error types raised by redistypes.

Local argument problems (ArgumentError, PrecisionLossError) are raised
before anything is written to the connection. TransportError and
RemoteError carry failures of the connection and of the remote store.
"""


class RedisTypesError(Exception):
    """Base class for every error raised by this package."""


class ArgumentError(RedisTypesError, ValueError):
    """A call was rejected locally because of its arguments."""


class PrecisionLossError(ArgumentError):
    """A duration cannot be represented at the required granularity."""


class TransportError(RedisTypesError, ConnectionError):
    """The connection failed while dialing, writing or reading."""


class ProtocolError(TransportError):
    """The remote side sent a malformed frame or an unexpected reply shape."""


class RemoteError(RedisTypesError):
    """The remote store answered with an error reply."""
