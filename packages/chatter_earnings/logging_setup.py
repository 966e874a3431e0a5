"""Logging for ``chatter_earnings``.

Modules log through children of the ``chatter_earnings`` logger obtained with
:func:`get_logger`. That logger carries a ``NullHandler`` from import time,
so embedding applications see nothing unless they opt in. The CLI calls
:func:`configure_logging` with the level from
:attr:`~chatter_earnings.config.Settings.log_level`.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

ROOT_LOGGER = "chatter_earnings"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


class _ConsoleHandler(logging.StreamHandler):
    # Tagged so a second configure_logging() swaps it instead of stacking.
    pass


def configure_logging(
    level: int | str = logging.INFO,
    *,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Send package logs at ``level`` and above to ``stream`` (stderr).

    Safe to call repeatedly; each call replaces the previous console handler.
    """

    logger = logging.getLogger(ROOT_LOGGER)
    for h in [h for h in logger.handlers if isinstance(h, _ConsoleHandler)]:
        logger.removeHandler(h)

    handler = _ConsoleHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["LOG_FORMAT", "ROOT_LOGGER", "configure_logging", "get_logger"]
