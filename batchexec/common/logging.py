"""Logging configuration for batch scripts."""

import logging
import sys
from typing import Optional

from ..core.config import get_settings


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure plain-text logging for a batch script.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to the LOG_LEVEL setting when omitted.
    """
    if log_level is None:
        log_level = get_settings().log_level

    # Unknown names fall back to INFO
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )
