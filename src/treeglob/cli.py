#!/usr/bin/env python3
"""
treeglob: List the files in a directory tree matching include/exclude globs

Common usage:
  treeglob -i '**/*.py' .
  treeglob -i 'src/**' -e '**/__pycache__' --dirs .
  treeglob -i '**/*.md' --check docs/index.md

Patterns are matched one path level at a time; `**` matches any number of
levels. Directories that cannot contain a match are never read.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from treeglob.config import find_config_file, load_config, merge_cli_with_config
from treeglob.errors import GlobSyntaxError
from treeglob.glob import new_glob
from treeglob.tree import GitignoreTree, OSTree

DEFAULT_INCLUDES: list[str] = ["**"]


@dataclass
class Options:
    """Command-line options for the treeglob tool."""

    directory: str
    include: list[str] | None
    exclude: list[str] | None
    include_dirs: bool | None
    respect_gitignore: bool | None
    check: list[str]
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns the options and the set of option names the user explicitly passed
    (for config merge precedence). Flags that were not passed are left as `None`.
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to match against (default: current directory)",
    )
    parser.add_argument(
        "-i",
        "--include",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Pattern of paths to include (default: '**'). Can be repeated",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Pattern of paths to exclude, along with everything beneath them. Can be repeated",
    )
    parser.add_argument(
        "-d",
        "--dirs",
        action="store_true",
        default=None,
        dest="include_dirs",
        help="Also list matching directories, ahead of their contents",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_false",
        default=None,
        dest="respect_gitignore",
        help="Do not hide files ignored by .gitignore",
    )
    parser.add_argument(
        "--check",
        action="append",
        default=[],
        metavar="PATH",
        help="Test PATH against the patterns without reading the tree; matching paths "
        "are printed and the exit code is 1 unless all match. Can be repeated",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log traversal decisions to stderr"
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    explicit_flags = {
        name
        for name in ("include", "exclude", "include_dirs", "respect_gitignore")
        if getattr(opts, name) is not None
    }
    return (
        Options(
            directory=opts.directory,
            include=opts.include,
            exclude=opts.exclude,
            include_dirs=opts.include_dirs,
            respect_gitignore=opts.respect_gitignore,
            check=opts.check,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _check_paths(options: Options, paths: list[str]) -> int:
    glob = new_glob(options.include or DEFAULT_INCLUDES, options.exclude or [])
    status = 0
    for p in paths:
        if glob.match_path(p):
            print(p)
        else:
            status = 1
    return status


def _list_matches(options: Options) -> int:
    glob = new_glob(options.include or DEFAULT_INCLUDES, options.exclude or [])
    root = Path(options.directory)
    tree = GitignoreTree(root) if options.respect_gitignore is not False else OSTree(root)

    status = 0
    for path, error in glob.match(tree, ".", include_dirs=bool(options.include_dirs)):
        if error is not None:
            print(f"Error: {root / path}: {error.strerror or error}", file=sys.stderr)
            status = 1
            continue
        print(root / path)
    return status


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the treeglob CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for unreadable directories or failed checks,
        2 for bad patterns)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("treeglob")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if options.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
        )

    config_path = find_config_file(Path.cwd())
    if config_path:
        config = load_config(config_path)
        merge_cli_with_config(options, config, explicit_flags)

    try:
        if options.check:
            return _check_paths(options, options.check)
        if not Path(options.directory).is_dir():
            print(f"Error: Not a directory: {options.directory}", file=sys.stderr)
            return 1
        return _list_matches(options)
    except GlobSyntaxError as e:
        for err in e.errors:
            print(f"Error: {err}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
