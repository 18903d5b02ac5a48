"""Logging configuration for the command-line entry point.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, once, by the CLI.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level_from_env() -> int:
    level_name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    return getattr(logging, level_name, logging.WARNING)


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the ``storefront`` logger.

    ``verbose`` forces DEBUG; otherwise ``LOG_LEVEL`` applies (default
    WARNING). Calling again only adjusts the level.
    """
    level = logging.DEBUG if verbose else _level_from_env()
    logger = logging.getLogger("storefront")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
