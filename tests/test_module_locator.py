from __future__ import annotations

import os
import sys

import pytest

from core.module_locator import DiscoveryError, find_module, locate_modules
from shared.module_definition import ModuleDefinition

from .conftest import write_gomod


def test_root_only_when_pkg_missing(tmp_path):
    write_gomod(tmp_path, "example.com/root")

    modules = locate_modules(tmp_path)

    assert modules == [ModuleDefinition("example.com/root", tmp_path.as_posix())]


def test_root_first_then_packages(sample_repo):
    modules = locate_modules()

    assert [m.to_dict() for m in modules] == [
        {"name": "a", "dir": "."},
        {"name": "b", "dir": "pkg/x"},
        {"name": "c", "dir": "pkg/y"},
    ]


def test_n_package_directories_yield_n_plus_one_modules(tmp_path):
    write_gomod(tmp_path, "root")
    for idx in range(4):
        write_gomod(tmp_path / "pkg" / f"p{idx}", f"root/p{idx}")

    modules = locate_modules(tmp_path)

    assert len(modules) == 5
    assert modules[0].name == "root"


def test_empty_pkg_directory(tmp_path):
    write_gomod(tmp_path, "root")
    (tmp_path / "pkg").mkdir()

    assert [m.name for m in locate_modules(tmp_path)] == ["root"]


def test_stray_files_under_pkg_are_skipped(tmp_path):
    write_gomod(tmp_path, "root")
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "notes.txt").write_text("x", encoding="utf-8")

    assert [m.name for m in locate_modules(tmp_path)] == ["root"]


def test_missing_root_descriptor_fails(tmp_path):
    with pytest.raises(DiscoveryError, match="failed to find module in root directory") as exc_info:
        locate_modules(tmp_path)
    assert exc_info.value.directory == tmp_path.as_posix()


def test_root_descriptor_without_module_fails(tmp_path):
    (tmp_path / "go.mod").write_text("go 1.22\n", encoding="utf-8")

    with pytest.raises(DiscoveryError, match="does not contain a module"):
        locate_modules(tmp_path)


def test_malformed_root_descriptor_fails(tmp_path):
    (tmp_path / "go.mod").write_text("module a\nmodule b\n", encoding="utf-8")

    with pytest.raises(DiscoveryError, match="repeated module statement"):
        locate_modules(tmp_path)


def test_invalid_package_aborts_whole_scan(tmp_path):
    write_gomod(tmp_path, "root")
    write_gomod(tmp_path / "pkg" / "good", "root/good")
    (tmp_path / "pkg" / "bad").mkdir()

    with pytest.raises(DiscoveryError) as exc_info:
        locate_modules(tmp_path)

    assert "pkg/bad" in str(exc_info.value)
    assert exc_info.value.directory == (tmp_path / "pkg" / "bad").as_posix()


def test_pkg_that_is_a_file_fails(tmp_path):
    write_gomod(tmp_path, "root")
    (tmp_path / "pkg").write_text("not a directory", encoding="utf-8")

    with pytest.raises(DiscoveryError, match="failed to read package directory"):
        locate_modules(tmp_path)


def test_duplicate_module_names_are_kept(tmp_path):
    write_gomod(tmp_path, "same")
    write_gomod(tmp_path / "pkg" / "copy", "same")

    assert [m.name for m in locate_modules(tmp_path)] == ["same", "same"]


def test_find_module_does_not_look_in_parent(tmp_path):
    write_gomod(tmp_path, "root")
    (tmp_path / "child").mkdir()

    with pytest.raises(DiscoveryError, match="go.mod not found"):
        find_module(tmp_path / "child")


def test_blank_module_path_fails_discovery(tmp_path):
    (tmp_path / "go.mod").write_text('module "  "\n', encoding="utf-8")

    with pytest.raises(DiscoveryError, match="does not contain a module") as exc_info:
        locate_modules(tmp_path)

    assert exc_info.value.directory == tmp_path.as_posix()


def test_root_failure_names_the_root_directory(tmp_path):
    with pytest.raises(DiscoveryError) as exc_info:
        locate_modules(tmp_path)

    assert repr(tmp_path.as_posix()) in str(exc_info.value)


@pytest.mark.skipif(not hasattr(os, "symlink") or sys.platform == "win32", reason="needs POSIX symlinks")
def test_symlinked_package_directories_are_skipped(tmp_path):
    write_gomod(tmp_path, "root")
    write_gomod(tmp_path / "pkg" / "real", "root/real")
    os.symlink(tmp_path / "pkg" / "real", tmp_path / "pkg" / "alias", target_is_directory=True)

    assert [m.to_dict() for m in locate_modules(tmp_path)] == [
        {"name": "root", "dir": tmp_path.as_posix()},
        {"name": "root/real", "dir": (tmp_path / "pkg" / "real").as_posix()},
    ]
