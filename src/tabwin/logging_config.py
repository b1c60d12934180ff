from __future__ import annotations

import os
import sys

from loguru import logger

from tabwin.config import LOG_LEVEL_ENV


def configure_logging(*, verbose: bool = False) -> None:
    logger.remove()
    level = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not level:
        level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
