"""
redistypes Configuration Settings

This module contains all configuration constants for the redistypes client.
Every value can be overridden through the environment.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class Settings:
    """Client configuration settings."""

    # Network settings
    ADDRESS: str = os.environ.get("REDISTYPES_ADDR", "localhost:6379")
    CONNECT_TIMEOUT: float = float(os.environ.get("REDISTYPES_CONNECT_TIMEOUT", "1.0"))
    READ_TIMEOUT: float = float(os.environ.get("REDISTYPES_READ_TIMEOUT", "1.0"))
    READ_BUFFER_SIZE: int = 4096

    # Reply decoding
    ENCODING: str = "utf-8"
    DECODE_RESPONSES: bool = True

    # Logging settings
    DEBUG: bool = os.environ.get("REDISTYPES_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("REDISTYPES_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()


DEFAULT_PORT = 6379


def host_and_port(address: Optional[str] = None) -> Tuple[str, int]:
    """
    Split a ``host:port`` address into its parts.

    Args:
        address: Address to split (default from settings.ADDRESS)

    Returns:
        (host, port) tuple. A missing port falls back to 6379.

    Raises:
        ValueError: If the port is not an integer
    """
    address = address if address is not None else settings.ADDRESS
    host, sep, port = address.rpartition(":")
    if not sep:
        return address or "localhost", DEFAULT_PORT
    return host or "localhost", int(port)
