"""
Module discovery for the repository being built.

Scans the repository root and the immediate subdirectories of ``pkg`` for
go.mod files.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from shared.gomod_schema import GoModError, find_gomod
from shared.module_definition import ModuleDefinition
from go_modules_action.go_modules_action import logger as app_logger

_LOGGER = app_logger.get_logger()

DEFAULT_ROOT_DIR = "."
PACKAGES_DIR_NAME = "pkg"
DESCRIPTOR_SEARCH_DEPTH = 1


class DiscoveryError(RuntimeError):
    """Raised when a module descriptor or the packages directory cannot be read."""

    def __init__(self, message: str, *, directory: Optional[str] = None) -> None:
        super().__init__(message)
        self.directory = directory


def locate_modules(root_dir: Union[str, Path] = DEFAULT_ROOT_DIR) -> List[ModuleDefinition]:
    """
    Return the root module followed by one module per directory under ``pkg``.

    A missing ``pkg`` directory yields the root module alone. Any failure
    aborts the whole scan; partial results are never returned.
    """
    root = Path(root_dir)

    try:
        root_module = find_module(root)
    except DiscoveryError as exc:
        raise DiscoveryError(
            f"failed to find module in root directory {root.as_posix()!r}: {exc}",
            directory=exc.directory,
        ) from exc

    modules: List[ModuleDefinition] = [root_module]

    packages_dir = root / PACKAGES_DIR_NAME
    try:
        # Symlinked entries are skipped, even when they point at a directory.
        package_dirs = sorted(
            p for p in packages_dir.iterdir() if p.is_dir() and not p.is_symlink()
        )
    except FileNotFoundError:
        _LOGGER.debug("No {} directory under {}; only the root module is reported.", PACKAGES_DIR_NAME, root)
        return modules
    except OSError as exc:
        raise DiscoveryError(
            f"failed to read package directory {packages_dir.as_posix()}: {exc}",
            directory=packages_dir.as_posix(),
        ) from exc

    for package_dir in package_dirs:
        try:
            module = find_module(package_dir)
        except DiscoveryError as exc:
            raise DiscoveryError(
                f"failed to find module in {package_dir.as_posix()!r}: {exc}",
                directory=exc.directory,
            ) from exc
        modules.append(module)

    return modules


def find_module(directory: Union[str, Path]) -> ModuleDefinition:
    """Resolve the module declared by the go.mod file in ``directory``."""
    directory = Path(directory)
    try:
        gomod = find_gomod(directory, DESCRIPTOR_SEARCH_DEPTH)
    except GoModError as exc:
        raise DiscoveryError(str(exc), directory=directory.as_posix()) from exc

    if not gomod.module_path or not gomod.module_path.strip():
        raise DiscoveryError(
            f"file {gomod.path.as_posix()!r} does not contain a module",
            directory=directory.as_posix(),
        )

    module = ModuleDefinition.from_directory(gomod.module_path, directory)
    _LOGGER.debug("Found module {} in {}", module.name, module.directory)
    return module
