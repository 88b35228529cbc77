"""An in-memory tree, for tests and for matching against listings from elsewhere."""

from __future__ import annotations

import errno
import os
from collections.abc import Iterable

from treeglob.tree.types import Entry, join_path


def _not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


class MemoryTree:
    """
    A tree built from a list of paths. A path ending in `/` names a directory;
    any other path names a file. Parent directories are created implicitly.

        tree = MemoryTree(["a/x.txt", "a/sub/", "b/x.txt"])
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._dirs: dict[str, dict[str, bool]] = {".": {}}
        for p in paths:
            self.add(p)

    def add(self, path: str) -> None:
        """Add a file, or a directory if `path` ends in `/`."""
        is_dir = path.endswith("/")
        path = join_path(".", path)
        if path == ".":
            return
        parent, _, name = path.rpartition("/")
        parent = parent or "."
        if parent != ".":
            self.add(parent + "/")
        siblings = self._dirs[parent]
        existing = siblings.get(name)
        if existing is not None and existing != is_dir:
            kind = "directory" if existing else "file"
            raise ValueError(f"Path is already a {kind}: {path}")
        siblings[name] = is_dir
        if is_dir:
            self._dirs.setdefault(path, {})

    def read_dir(self, path: str) -> list[Entry]:
        path = join_path(".", path)
        children = self._dirs.get(path)
        if children is None:
            self.stat(path)
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        return [Entry(name, children[name]) for name in sorted(children)]

    def stat(self, path: str) -> Entry:
        path = join_path(".", path)
        if path == ".":
            return Entry("", True)
        parent, _, name = path.rpartition("/")
        siblings = self._dirs.get(parent or ".")
        if siblings is None or name not in siblings:
            raise _not_found(path)
        return Entry(name, siblings[name])
