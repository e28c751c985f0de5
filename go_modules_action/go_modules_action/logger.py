"""
Logging setup for the go-modules-action runtime.
"""

from __future__ import annotations

import sys

from loguru import logger as _logger

_LOG_INITIALISED = False
LOG_FORMAT = "<level>{level: <8}</level> | {name}:{function}:{line} - {message}"


def configure(debug: bool = False, *, force: bool = False) -> None:
    """
    Configure loguru for the action.

    CI runners are ephemeral, so the only sink is stderr, which is the step's
    diagnostic stream. Configuration happens once unless ``force`` is set.
    """
    global _LOG_INITIALISED
    if _LOG_INITIALISED and not force:
        return

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(
            sys.stderr,
            level="DEBUG" if debug else "INFO",
            format=LOG_FORMAT,
            colorize=False,
            backtrace=debug,
            diagnose=False,
        )
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger instance."""
    configure()
    return _logger
