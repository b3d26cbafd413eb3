"""Logging setup shared by every entry point."""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from config.constants import LOG_FORMAT, LOG_LEVEL_ENV

load_dotenv()


def configure_logging(filename: Optional[str] = None, level: Optional[str | int] = None) -> None:
    """Configure root logging once.

    Entry points call this before building a Container, or pass
    ``log_file`` to the Container to have it done there.

    Args:
        filename: Log file (stderr if None)
        level: Level name or number (if None, reads SOURDOUGH_LOG_LEVEL, default INFO)
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        filename=filename,
        level=level,
        format=LOG_FORMAT,
    )
