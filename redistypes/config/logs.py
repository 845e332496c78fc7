"""Logging setup for applications and test runs using redistypes."""

import logging
import sys
from typing import Optional

from .settings import settings


def setup_logging(debug: Optional[bool] = None) -> None:
    """Configure logging based on debug flag (default from settings.DEBUG)."""
    debug = settings.DEBUG if debug is None else debug
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )
