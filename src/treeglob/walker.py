"""
Tree traversal for compiled globs.

The walker advances the active include and exclude pattern sets one directory
level at a time. A directory is only listed when some include pattern may still
match beneath it, and a directory matched outright by an exclude pattern is
never entered.

Both walks are generators: nothing is read until the caller asks for the next
result, and closing the generator stops the walk without further I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import NamedTuple

from treeglob.patterns import LEVELS_WILDCARD, Pattern, always, literal
from treeglob.tree.types import Tree, join_path

log = logging.getLogger(__name__)


class MatchResult(NamedTuple):
    """
    A matched path. `error` is only set when `path` is a directory whose
    contents could not be read, or whose child named by a literal pattern
    term could not be probed. In the second case `path` is the parent, not the
    child. That part of the walk is then skipped.
    """

    path: str
    error: OSError | None = None


def all_step(
    tree: Tree, directory: str, yield_dir: bool, include_dirs: bool
) -> Iterator[MatchResult]:
    """Yield everything under `directory` with no pattern evaluation."""
    try:
        entries = tree.read_dir(directory)
    except OSError as e:
        log.debug("Could not list %s: %s", directory, e)
        yield MatchResult(directory, e)
        return
    if yield_dir and include_dirs:
        yield MatchResult(directory)

    for entry in entries:
        if entry.is_dir:
            yield from all_step(tree, join_path(directory, entry.name), True, include_dirs)
        else:
            yield MatchResult(join_path(directory, entry.name))


def _literal_step(
    tree: Tree,
    directory: str,
    include_dirs: bool,
    name: str,
    next_include: list[Pattern],
    exclude: list[Pattern],
) -> Iterator[MatchResult]:
    """Resolve a single literal include with one `stat` instead of a listing."""
    if any(p.match_file(name) for p in exclude):
        return

    entry_path = join_path(directory, name)
    log.debug("Probing literal path %s", entry_path)
    try:
        info = tree.stat(entry_path)
    except FileNotFoundError:
        return
    except OSError as e:
        yield MatchResult(directory, e)
        return

    if not info.is_dir:
        # A file has no children to carry the rest of the pattern.
        if not next_include:
            yield MatchResult(entry_path)
        return

    next_exclude: list[Pattern] = []
    for p in exclude:
        p.match_dir(name, next_exclude)
    if next_include and not always(next_exclude):
        # A directory named on the way down is yielded ahead of its contents.
        yield from match_step(tree, entry_path, True, include_dirs, next_include, next_exclude)
        return
    if include_dirs:
        yield MatchResult(entry_path)


def match_step(
    tree: Tree,
    directory: str,
    yield_dir: bool,
    include_dirs: bool,
    include: list[Pattern],
    exclude: list[Pattern],
) -> Iterator[MatchResult]:
    """
    Yield the entries of `directory` matched by the active `include` patterns
    and by none of the active `exclude` patterns, then recurse into any
    subdirectory where includes remain active.

    If `yield_dir` and `include_dirs` are both set, `directory` itself is
    yielded first, once it has been listed successfully.
    """
    if always(include):
        if not exclude:
            yield from all_step(tree, directory, yield_dir, include_dirs)
            return
        include = [Pattern((LEVELS_WILDCARD,))]
    else:
        resolved = literal(include)
        if resolved is not None:
            name, next_include = resolved
            yield from _literal_step(tree, directory, include_dirs, name, next_include, exclude)
            return

    try:
        entries = tree.read_dir(directory)
    except OSError as e:
        log.debug("Could not list %s: %s", directory, e)
        yield MatchResult(directory, e)
        return
    if yield_dir and include_dirs:
        yield MatchResult(directory)

    for entry in entries:
        entry_path = join_path(directory, entry.name)

        if not entry.is_dir:
            if any(p.match_file(entry.name) for p in exclude):
                continue
            if any(p.match_file(entry.name) for p in include):
                yield MatchResult(entry_path)
            continue

        next_exclude: list[Pattern] = []
        if any(p.match_dir(entry.name, next_exclude) for p in exclude):
            log.debug("Excluded %s", entry_path)
            continue

        next_include: list[Pattern] = []
        included = False
        for p in include:
            if p.match_dir(entry.name, next_include):
                included = include_dirs

        if next_include and not always(next_exclude):
            # The recursive step yields the directory itself, ahead of its contents.
            yield from match_step(
                tree, entry_path, included, include_dirs, next_include, next_exclude
            )
            continue
        if not next_include:
            log.debug("Pruned %s", entry_path)
        if included:
            yield MatchResult(entry_path)
