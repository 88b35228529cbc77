"""
Globs: include and exclude pattern lists compiled once, then matched against
any number of trees or paths.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence

from treeglob.errors import GlobSyntaxError, PatternSyntaxError
from treeglob.patterns import LEVELS_WILDCARD, Pattern, compile_patterns, split_path
from treeglob.tree.types import Tree
from treeglob.walker import MatchResult, all_step, match_step


class Glob(ABC):
    """
    Matches paths in a tree against a set of include and exclude patterns.

    A path matches if any include pattern matches it and no exclude pattern
    matches it or any of its parent directories. Globs are immutable and can
    be used for several walks at once.
    """

    @abstractmethod
    def match(
        self, tree: Tree, start_dir: str = ".", include_dirs: bool = False
    ) -> Iterator[MatchResult]:
        """
        Lazily yield a `MatchResult` for each matching path under `start_dir`.

        The `error` of a result is only set when its path is a directory that
        could not be read. If `include_dirs` is set, matching directories are
        yielded ahead of their contents.
        """

    @abstractmethod
    def match_path(self, path: str) -> bool:
        """Report whether `path` matches, without reading anything from a tree."""


class AllGlob(Glob):
    """Matches every path."""

    def __repr__(self) -> str:
        return "AllGlob()"

    def match(
        self, tree: Tree, start_dir: str = ".", include_dirs: bool = False
    ) -> Iterator[MatchResult]:
        return all_step(tree, start_dir, False, include_dirs)

    def match_path(self, path: str) -> bool:
        return True


class NoneGlob(Glob):
    """Matches nothing, and never reads the tree."""

    def __repr__(self) -> str:
        return "NoneGlob()"

    def match(
        self, tree: Tree, start_dir: str = ".", include_dirs: bool = False
    ) -> Iterator[MatchResult]:
        return iter(())

    def match_path(self, path: str) -> bool:
        return False


class PatternGlob(Glob):
    """A glob built from compiled include and exclude patterns."""

    def __init__(self, include: Sequence[Pattern], exclude: Sequence[Pattern]) -> None:
        self.include: tuple[Pattern, ...] = tuple(include)
        self.exclude: tuple[Pattern, ...] = tuple(exclude)

    def __repr__(self) -> str:
        include = [str(p) for p in self.include]
        exclude = [str(p) for p in self.exclude]
        return f"PatternGlob(include={include!r}, exclude={exclude!r})"

    def match(
        self, tree: Tree, start_dir: str = ".", include_dirs: bool = False
    ) -> Iterator[MatchResult]:
        return match_step(
            tree, start_dir, False, include_dirs, list(self.include), list(self.exclude)
        )

    def match_path(self, path: str) -> bool:
        names = split_path(path)
        if not names:
            return False

        include, exclude = list(self.include), list(self.exclude)
        for name in names[:-1]:
            next_include: list[Pattern] = []
            next_exclude: list[Pattern] = []
            if any(p.match_dir(name, next_exclude) for p in exclude):
                return False
            for p in include:
                p.match_dir(name, next_include)
            if not next_include:
                return False
            include, exclude = next_include, next_exclude

        last = names[-1]
        scratch: list[Pattern] = []
        if any(p.match_dir(last, scratch) for p in exclude):
            return False
        return any(p.match_dir(last, scratch) for p in include)


def new_glob(includes: Sequence[str], excludes: Sequence[str] = ()) -> Glob:
    """
    Create a glob from lists of include and exclude pattern strings.

    An exclude of `**` excludes everything, whatever the includes are. All
    malformed patterns, in either list, are reported together in a single
    `GlobSyntaxError`.
    """
    if not excludes and LEVELS_WILDCARD in includes:
        return AllGlob()
    if not includes or LEVELS_WILDCARD in excludes:
        return NoneGlob()

    errors: list[PatternSyntaxError] = []
    include: list[Pattern] = []
    exclude: list[Pattern] = []
    try:
        include = compile_patterns(includes)
    except GlobSyntaxError as e:
        errors.extend(e.errors)
    try:
        exclude = compile_patterns(excludes)
    except GlobSyntaxError as e:
        errors.extend(e.errors)
    if errors:
        raise GlobSyntaxError(errors)
    return PatternGlob(include, exclude)
