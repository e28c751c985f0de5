"""
Environment-backed configuration for the go-modules-action runtime.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from go_modules_action.go_modules_action import logger as app_logger

_LOGGER = app_logger.get_logger()

RUNNER_DEBUG_ENV = "RUNNER_DEBUG"
_TRUE_VALUES = {"1", "true"}
_FALSE_VALUES = {"0", "false", ""}


@dataclass(eq=True)
class ActionSettings:
    debug: bool = False


class ActionSettingsManager:
    """Loads settings from the process environment and ignores invalid data."""

    def __init__(self, *, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def read_settings(self) -> ActionSettings:
        return ActionSettings(debug=self._read_bool(RUNNER_DEBUG_ENV, False))

    def _read_bool(self, name: str, default: bool) -> bool:
        raw = self._environ.get(name)
        if raw is None:
            return default
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        _LOGGER.warning("Environment value {}={!r} is not a boolean; using {}.", name, raw, default)
        return default
