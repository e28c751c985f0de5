"""
Shared representation of a discovered Go module.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union


@dataclass(frozen=True, slots=True)
class ModuleDefinition:
    """
    A module found during a scan: the path declared in its go.mod and the
    directory the descriptor was found in.
    """

    name: str
    directory: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Module name must be a non-empty string.")

    @classmethod
    def from_directory(cls, name: str, directory: Union[str, Path]) -> "ModuleDefinition":
        return cls(name=name, directory=Path(directory).as_posix())

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "dir": self.directory}
