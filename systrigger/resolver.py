"""Expand a handler's interest globs against the filesystem."""

from __future__ import annotations

import glob
import os
import stat
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from systrigger.errors import PatternError


class PathKind(str, Enum):
    """Classification of a matched path."""

    DIRECTORY = "directory"
    FILE = "file"
    OTHER = "other"
    ABSENT = "absent"


@dataclass(frozen=True)
class Match:
    """An existing path that matched one of a handler's interest globs."""

    path: Path
    kind: PathKind


def classify(path: Path | str) -> PathKind:
    """Return the kind of *path*, following symlinks."""
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return PathKind.ABSENT
    if stat.S_ISDIR(mode):
        return PathKind.DIRECTORY
    if stat.S_ISREG(mode):
        return PathKind.FILE
    return PathKind.OTHER


def check_pattern(pattern: str) -> None:
    """Raise :class:`PatternError` if *pattern* cannot be used as an interest glob."""
    if not pattern or not pattern.strip():
        raise PatternError(pattern, "pattern is empty")
    if not pattern.startswith("/"):
        raise PatternError(pattern, "pattern must be an absolute path")
    if ".." in Path(pattern).parts:
        raise PatternError(pattern, "'..' segments are not allowed")

    in_class = False
    for char in pattern:
        if char == "[" and not in_class:
            in_class = True
        elif char == "]" and in_class:
            in_class = False
    if in_class:
        raise PatternError(pattern, "unterminated '[' character class")


def expand(pattern: str, root: Path | str) -> list[str]:
    """Return the existing paths matching absolute *pattern* under *root*, sorted.

    Only *pattern* is treated as a glob; wildcard characters in *root* are
    taken literally.
    """
    relative = pattern.lstrip("/")
    if glob.has_magic(relative):
        matches = glob.glob(relative, root_dir=root)
        return sorted(os.path.join(str(root), m) for m in matches)
    rooted = os.path.join(str(root), relative)
    return [rooted] if os.path.lexists(rooted) else []


class PathResolver(Protocol):
    """Structural type for path resolvers used by the dispatcher."""

    def validate(self, patterns: Iterable[str]) -> None: ...

    def resolve(self, patterns: Iterable[str], root: Path) -> Iterator[Match]: ...


class GlobResolver:
    """Resolve interest globs with :mod:`glob`, confined to the run root.

    Matches are produced lazily. A path matched by several globs of the same
    handler is yielded once, at its first position.
    """

    def validate(self, patterns: Iterable[str]) -> None:
        for pattern in patterns:
            check_pattern(pattern)

    def resolve(self, patterns: Iterable[str], root: Path) -> Iterator[Match]:
        seen: set[str] = set()
        for pattern in patterns:
            for candidate in expand(pattern, root):
                if candidate in seen:
                    continue
                seen.add(candidate)
                yield Match(path=Path(candidate), kind=classify(candidate))
