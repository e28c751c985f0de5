"""
Publishes discovered modules to the GitHub Actions step output file.
"""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

from shared.module_definition import ModuleDefinition
from go_modules_action.go_modules_action import logger as app_logger

_LOGGER = app_logger.get_logger()

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"
OUTPUT_KEY = "modules"


class PublishFailure(Enum):
    CONFIG_MISSING = "ConfigMissing"
    IO_FAILURE = "IOFailure"


class PublishError(RuntimeError):
    """Raised when the module list cannot be written to the output sink."""

    def __init__(self, message: str, *, reason: PublishFailure) -> None:
        super().__init__(message)
        self.reason = reason


def serialize_modules(modules: Iterable[ModuleDefinition]) -> str:
    """
    Encode modules as a compact JSON array of ``{"name", "dir"}`` objects.

    Undecodable filename bytes (surrogate-escaped by the filesystem layer)
    are written as U+FFFD so the result is always valid UTF-8.
    """
    encoded = json.dumps(
        [module.to_dict() for module in modules],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return encoded.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def resolve_output_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the sink path named by GITHUB_OUTPUT."""
    env = os.environ if environ is None else environ
    output = env.get(GITHUB_OUTPUT_ENV)
    if not output:
        raise PublishError(f"{GITHUB_OUTPUT_ENV} not set", reason=PublishFailure.CONFIG_MISSING)
    return Path(output)


def publish_modules(
    modules: Iterable[ModuleDefinition],
    *,
    environ: Optional[Mapping[str, str]] = None,
    opener: Callable = open,
) -> Path:
    """
    Append ``modules=<json>`` to the output file and return its path.

    The sink is resolved before any filesystem access. A failure to close the
    file after the line was flushed is logged and does not fail the publish.
    """
    try:
        payload = f"{OUTPUT_KEY}={serialize_modules(modules)}"
    except UnicodeError as exc:
        raise PublishError(
            f"failed to encode modules: {exc}",
            reason=PublishFailure.IO_FAILURE,
        ) from exc
    output_path = resolve_output_path(environ)

    try:
        handle = opener(output_path, "a", encoding="utf-8")
    except OSError as exc:
        raise PublishError(
            f"failed to open output file {output_path}: {exc}",
            reason=PublishFailure.IO_FAILURE,
        ) from exc

    try:
        handle.write(payload)
        handle.flush()
    except (OSError, UnicodeError) as exc:
        raise PublishError(
            f"failed to write output file {output_path}: {exc}",
            reason=PublishFailure.IO_FAILURE,
        ) from exc
    finally:
        try:
            handle.close()
        except OSError as exc:
            _LOGGER.error("failed to close output file {}: {}", output_path, exc)

    _LOGGER.debug("Wrote {} to {}", payload, output_path)
    return output_path
