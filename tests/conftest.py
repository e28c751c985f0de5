from __future__ import annotations

from pathlib import Path

import pytest


def write_gomod(directory: Path, module: str, *, extra: str = "") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "go.mod"
    path.write_text(f"module {module}\n\ngo 1.22\n{extra}", encoding="utf-8")
    return path


@pytest.fixture
def sample_repo(tmp_path, monkeypatch):
    """
    Repository with a root module ``a``, packages ``pkg/x`` (``b``) and
    ``pkg/y`` (``c``) and a stray ``pkg/README`` file. The working directory
    is switched to the repository root.
    """
    write_gomod(tmp_path, "a")
    write_gomod(tmp_path / "pkg" / "x", "b")
    write_gomod(tmp_path / "pkg" / "y", "c")
    (tmp_path / "pkg" / "README").write_text("not a module\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
