"""Gitignore handling for filesystem trees, using pathspec."""

from __future__ import annotations

import errno
import os
import posixpath
from pathlib import Path

import pathspec

from treeglob.tree.os_tree import OSTree
from treeglob.tree.types import Entry, join_path


def _read_ignore_file(path: Path) -> pathspec.PathSpec | None:
    """
    Compile the ignore file at `path`, or return `None` if it is missing,
    unreadable, not UTF-8, or has no patterns.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    spec = pathspec.PathSpec.from_lines("gitignore", text.splitlines())
    # Blank and comment lines compile to patterns with no effect.
    if not any(p.include is not None for p in spec.patterns):
        return None
    return spec


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """Read `.gitignore` in the given directory, if there is one."""
    return _read_ignore_file(directory / ".gitignore")


class GitignoreTree(OSTree):
    """
    An `OSTree` that hides entries ignored by `.gitignore` files. When listing
    a directory, the `.gitignore` of every directory from the tree root down
    to the listed one applies, each relative to its own directory.

    Ignore files are read at most once per directory per `GitignoreTree`.
    """

    def __init__(self, root: str | Path = ".") -> None:
        super().__init__(root)
        self._gitignore_cache: dict[str, pathspec.PathSpec | None] = {}

    def __repr__(self) -> str:
        return f"GitignoreTree({str(self.root)!r})"

    def _get_gitignore(self, path: str) -> pathspec.PathSpec | None:
        if path not in self._gitignore_cache:
            self._gitignore_cache[path] = load_gitignore(self.os_path(path))
        return self._gitignore_cache[path]

    def _gitignore_chain(self, path: str) -> list[tuple[str, pathspec.PathSpec]]:
        """Collect `(directory, spec)` pairs from the root down to `path` (inclusive)."""
        dirs = ["."]
        current = "."
        for part in path.split("/"):
            if part in ("", "."):
                continue
            current = join_path(current, part)
            dirs.append(current)

        chain: list[tuple[str, pathspec.PathSpec]] = []
        for d in dirs:
            spec = self._get_gitignore(d)
            if spec is not None:
                chain.append((d, spec))
        return chain

    def is_ignored(self, path: str, is_dir: bool) -> bool:
        """Report whether the entry at `path` is ignored by any applicable `.gitignore`."""
        path = join_path(".", path)
        parent = posixpath.dirname(path) or "."
        for d, spec in self._gitignore_chain(parent):
            rel = posixpath.relpath(path, d)
            if spec.match_file(rel + "/" if is_dir else rel):
                return True
        return False

    def read_dir(self, path: str) -> list[Entry]:
        entries = super().read_dir(path)
        return [e for e in entries if not self.is_ignored(join_path(path, e.name), e.is_dir)]

    def stat(self, path: str) -> Entry:
        """
        Like `OSTree.stat`, but an ignored entry, or one inside an ignored
        directory, is reported as missing.
        """
        entry = super().stat(path)
        path = join_path(".", path)
        ancestors: list[str] = []
        current = posixpath.dirname(path)
        while current not in ("", "."):
            ancestors.append(current)
            current = posixpath.dirname(current)

        if path != "." and (
            self.is_ignored(path, entry.is_dir)
            or any(self.is_ignored(d, is_dir=True) for d in reversed(ancestors))
        ):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        return entry
