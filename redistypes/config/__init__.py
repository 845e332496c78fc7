"""Configuration module for redistypes."""

from .logs import setup_logging
from .settings import Settings, host_and_port, settings

__all__ = ["Settings", "host_and_port", "settings", "setup_logging"]
