"""
Go module file (go.mod) discovery and parsing utilities.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

GOMOD_FILENAME = "go.mod"

_KNOWN_VERBS = frozenset(
    {
        "module",
        "go",
        "toolchain",
        "godebug",
        "require",
        "exclude",
        "replace",
        "retract",
        "tool",
        "ignore",
    }
)

_TOKEN_PATTERN = re.compile(
    r'(?P<comment>//.*)'
    r'|(?P<quoted>"(?:[^"\\]|\\.)*")'
    r'|(?P<raw>`[^`]*`)'
    r'|(?P<paren>[()])'
    r'|(?P<word>(?:(?!//)[^\s()"`])+)'
    r'|(?P<bad>\S)'
)


class GoModError(ValueError):
    """Base error for go.mod lookup and parsing failures."""


class GoModNotFoundError(GoModError):
    """Raised when no go.mod file exists within the search depth."""


class GoModParseError(GoModError):
    """Raised when a go.mod file cannot be read or is malformed."""


@dataclass(frozen=True)
class ModuleRequirement:
    path: str
    version: str
    indirect: bool = False


@dataclass(slots=True)
class GoModFile:
    """Parsed contents of a go.mod file."""

    path: Path
    module_path: Optional[str] = None
    go_version: Optional[str] = None
    toolchain: Optional[str] = None
    requires: List[ModuleRequirement] = field(default_factory=list)


def find_gomod(directory: Path, max_depth: int) -> GoModFile:
    """
    Locate and parse the go.mod file for ``directory``.

    The directory itself is checked first, then up to ``max_depth - 1`` of its
    parents. Raises GoModNotFoundError when nothing is found within the depth
    and GoModParseError when the file found is malformed.
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    candidate_dir = Path(directory)
    for _ in range(max_depth):
        candidate = candidate_dir / GOMOD_FILENAME
        if candidate.is_file():
            return load_and_parse_gomod(candidate)
        parent = candidate_dir.parent
        if parent == candidate_dir:
            break
        candidate_dir = parent

    raise GoModNotFoundError(
        f"{GOMOD_FILENAME} not found in {directory} (max depth {max_depth})"
    )


def load_and_parse_gomod(path: Path) -> GoModFile:
    """Read a go.mod file from disk and parse it."""
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise GoModNotFoundError(f"{GOMOD_FILENAME} file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise GoModParseError(f"Unable to read {GOMOD_FILENAME}: {path}") from exc

    return parse_gomod(contents, path=path)


def parse_gomod(contents: str, *, path: Path) -> GoModFile:
    """
    Parse go.mod text into a GoModFile.

    Only the directives needed to identify the module are interpreted; the
    remaining verbs are checked for shape and otherwise ignored.
    """
    gomod = GoModFile(path=path)
    block_verb: Optional[str] = None
    block_start = 0

    for lineno, line in enumerate(contents.splitlines(), start=1):
        tokens, comment = _tokenize(line, path=path, lineno=lineno)
        if not tokens:
            continue

        if block_verb is not None:
            if tokens == [")"]:
                block_verb = None
                continue
            if "(" in tokens or ")" in tokens:
                raise _error(path, lineno, "unexpected parenthesis inside block")
            _apply_directive(gomod, block_verb, tokens, comment, path=path, lineno=lineno)
            continue

        verb, args = tokens[0], tokens[1:]
        if verb not in _KNOWN_VERBS:
            raise _error(path, lineno, f"unknown directive: {verb}")

        if args == ["("]:
            block_verb = verb
            block_start = lineno
            continue
        if "(" in args or ")" in args:
            raise _error(path, lineno, "unexpected parenthesis")

        _apply_directive(gomod, verb, args, comment, path=path, lineno=lineno)

    if block_verb is not None:
        raise _error(path, block_start, f"unterminated {block_verb} block")

    return gomod


def _apply_directive(
    gomod: GoModFile,
    verb: str,
    args: List[str],
    comment: str,
    *,
    path: Path,
    lineno: int,
) -> None:
    if verb == "module":
        if gomod.module_path is not None:
            raise _error(path, lineno, "repeated module statement")
        gomod.module_path = _single_argument(verb, args, path=path, lineno=lineno)
        if not gomod.module_path:
            raise _error(path, lineno, "module path must be a non-empty string")
        return

    if verb == "go":
        if gomod.go_version is not None:
            raise _error(path, lineno, "repeated go statement")
        gomod.go_version = _single_argument(verb, args, path=path, lineno=lineno)
        return

    if verb == "toolchain":
        if gomod.toolchain is not None:
            raise _error(path, lineno, "repeated toolchain statement")
        gomod.toolchain = _single_argument(verb, args, path=path, lineno=lineno)
        return

    if verb == "require":
        if len(args) != 2:
            raise _error(path, lineno, "usage: require module/path v1.2.3")
        indirect = comment.strip() == "indirect" or comment.strip().startswith("indirect;")
        gomod.requires.append(
            ModuleRequirement(path=args[0], version=args[1], indirect=indirect)
        )
        return

    if not args:
        raise _error(path, lineno, f"{verb} directive requires arguments")


def _single_argument(verb: str, args: List[str], *, path: Path, lineno: int) -> str:
    if len(args) != 1:
        raise _error(path, lineno, f"{verb} directive expects exactly one argument")
    return args[0]


def _tokenize(line: str, *, path: Path, lineno: int) -> Tuple[List[str], str]:
    """Split a line into tokens, returning them with any trailing comment text."""
    tokens: List[str] = []
    comment = ""
    for match in _TOKEN_PATTERN.finditer(line):
        kind = match.lastgroup
        text = match.group()
        if kind == "comment":
            comment = text[2:]
            break
        if kind == "bad":
            raise _error(path, lineno, f"unexpected character {text!r}")
        if kind == "quoted":
            tokens.append(_unquote(text))
        elif kind == "raw":
            tokens.append(text[1:-1])
        else:
            tokens.append(text)
    return tokens, comment


def _unquote(text: str) -> str:
    return re.sub(r"\\(.)", r"\1", text[1:-1])


def _error(path: Path, lineno: int, message: str) -> GoModParseError:
    return GoModParseError(f"{path}:{lineno}: {message}")
