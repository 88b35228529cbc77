"""Exception types raised by treeglob."""

from __future__ import annotations


class TreeglobError(Exception):
    """Base class for all treeglob errors."""


class PatternSyntaxError(TreeglobError, ValueError):
    """
    A single pattern string is malformed: an unterminated or empty character
    class, an unescaped `-` or `]` inside a class, or a trailing backslash.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern: str = pattern
        self.reason: str = reason
        super().__init__(f"syntax error in pattern {pattern!r}: {reason}")


class GlobSyntaxError(TreeglobError, ValueError):
    """
    All the syntax errors found while compiling a glob, reported together so
    that a caller sees every bad pattern at once.
    """

    def __init__(self, errors: list[PatternSyntaxError]) -> None:
        self.errors: list[PatternSyntaxError] = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))
