"""A tree backed by a directory on the local filesystem."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from treeglob.tree.types import Entry


class OSTree:
    """
    Exposes the directory `root` as a `Tree`. Entries are listed sorted by
    name. Symlinks are reported by `read_dir` as files, so a walk never
    follows them, but `stat` follows them like `os.stat` does.
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root: Path = Path(root)

    def __repr__(self) -> str:
        return f"OSTree({str(self.root)!r})"

    def os_path(self, path: str) -> Path:
        """The filesystem location of a tree path."""
        if path in ("", "."):
            return self.root
        return self.root / path

    def read_dir(self, path: str) -> list[Entry]:
        with os.scandir(self.os_path(path)) as it:
            entries = [Entry(e.name, e.is_dir(follow_symlinks=False)) for e in it]
        entries.sort(key=lambda e: e.name)
        return entries

    def stat(self, path: str) -> Entry:
        location = self.os_path(path)
        st = os.stat(location)
        return Entry(location.name, stat.S_ISDIR(st.st_mode))
