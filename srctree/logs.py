"""Logging setup for the ``srctree`` logger hierarchy.

Modules log through ``logging.getLogger(__name__)``. The report is written to
stdout, so log records always go to stderr.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "srctree"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Install (or reconfigure) the stderr handler; DEBUG when ``verbose``."""
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
    logger.propagate = False

    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)
    _handler.setLevel(level)
    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
