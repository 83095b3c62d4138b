"""Process-level logging setup for the command line."""

import os
import sys
from typing import Optional

from loguru import logger

LOG_LEVEL_ENV = "SMALLSTEP_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "<level>{level: <8}</level> | {name}:{line} | {message}"


def resolve_log_level(level: Optional[str] = None) -> str:
    """Explicit level, else SMALLSTEP_LOG_LEVEL, else WARNING."""
    if level:
        return level.upper()
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: Optional[str] = None) -> str:
    """
    Route smallstep's loguru records to stderr at the resolved level.

    Returns the level that was applied.
    """
    resolved = resolve_log_level(level)
    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    logger.enable("smallstep")
    return resolved
