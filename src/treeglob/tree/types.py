"""Types describing the directory trees that globs are matched against."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Entry:
    """A single directory entry: its base name and whether it is a directory."""

    name: str
    is_dir: bool


class Tree(Protocol):
    """
    A read-only directory tree. Paths are `/`-separated and relative to the
    root of the tree, with `.` naming the root itself.

    Both methods raise `OSError`: `FileNotFoundError` when the path does not
    exist, and `NotADirectoryError` when `read_dir` is given a file.
    """

    def read_dir(self, path: str) -> list[Entry]: ...

    def stat(self, path: str) -> Entry: ...


def join_path(directory: str, name: str) -> str:
    """Join a tree path and a name, returning a clean path (`.` for the root)."""
    return posixpath.normpath(posixpath.join(directory, name))
