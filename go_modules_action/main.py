"""
Entry point for the go-modules-action CI step.
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from core.module_locator import DiscoveryError, locate_modules
from core.result_publisher import PublishError, publish_modules
from core.settings import ActionSettingsManager
from go_modules_action.go_modules_action import APP_NAME, APP_VERSION
from go_modules_action.go_modules_action import logger as app_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Report Go modules in the repository root and pkg/* as GitHub Actions step output.",
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Discover modules and publish them; return the process exit code."""
    _build_parser().parse_args(argv)

    settings = ActionSettingsManager().read_settings()
    app_logger.configure(settings.debug, force=True)
    logger = app_logger.get_logger()

    try:
        modules = locate_modules()
    except DiscoveryError as exc:
        logger.error("could not find modules: {}", exc)
        return 1

    try:
        output_path = publish_modules(modules)
    except PublishError as exc:
        logger.error("could not write modules: {}", exc)
        return 1

    logger.info("Published {} module(s) to {}", len(modules), output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
