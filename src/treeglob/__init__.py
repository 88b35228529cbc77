"""
Match include/exclude glob patterns against a directory tree, reading only the
directories that might contain a match.

Usage::

    from treeglob import OSTree, new_glob

    glob = new_glob(["src/**/*.py"], ["**/test_*"])
    for path, error in glob.match(OSTree("."), include_dirs=False):
        ...
    glob.match_path("src/pkg/mod.py")  # True
"""

from treeglob.errors import GlobSyntaxError, PatternSyntaxError, TreeglobError
from treeglob.glob import AllGlob, Glob, NoneGlob, PatternGlob, new_glob
from treeglob.tree import Entry, GitignoreTree, MemoryTree, OSTree, Tree
from treeglob.walker import MatchResult

__all__ = [
    "AllGlob",
    "Entry",
    "GitignoreTree",
    "Glob",
    "GlobSyntaxError",
    "MatchResult",
    "MemoryTree",
    "NoneGlob",
    "OSTree",
    "PatternGlob",
    "PatternSyntaxError",
    "Tree",
    "TreeglobError",
    "new_glob",
]
