"""Logging configuration for apksweep."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "apksweep-console"


def _build_console_handler(level: int) -> logging.Handler:
    """Return a :class:`logging.StreamHandler` that writes to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    return handler


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure (once) and return the root logger.

    Calling again replaces the console handler instead of stacking a
    second one, so repeated CLI invocations in one process log each line once.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
    root.addHandler(_build_console_handler(level))
    root.setLevel(level)
    return root


__all__ = ["setup_logging"]
