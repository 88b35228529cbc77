"""
Directory trees for glob matching.

A glob never touches the filesystem directly. It walks a `Tree`, any object
with `read_dir` and `stat` methods, so the same glob can be matched against a
real directory (`OSTree`, or `GitignoreTree` to honor `.gitignore` files) or
an in-memory listing (`MemoryTree`).
"""

from treeglob.tree.gitignore import GitignoreTree, load_gitignore
from treeglob.tree.memory import MemoryTree
from treeglob.tree.os_tree import OSTree
from treeglob.tree.types import Entry, Tree, join_path

__all__ = [
    "Entry",
    "GitignoreTree",
    "MemoryTree",
    "OSTree",
    "Tree",
    "join_path",
    "load_gitignore",
]
