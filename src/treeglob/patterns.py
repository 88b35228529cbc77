"""
Pattern compilation and per-level pattern advancement.

A pattern string such as `src/**/*.py` is compiled into a `Pattern`: a tuple
with one term per directory level. The first term of a pattern applies to the
entries of the directory being examined and the remaining terms apply to the
children of a matched entry, so a walk consumes patterns left to right as it
descends. Patterns are never mutated, only sliced.

Term syntax (each term must match a whole name):

    '**'        as a whole term, any sequence of directory levels (including none)
    '*'         any sequence of non-/ characters
    '?'         any single non-/ character
    '[' [ '^' ] { range } ']'
                character class (must be non-empty)
    '\\' c      the character c
    c           the character c (c != '*', '?', '\\', '[')

    range:
    c           the character c (c != '\\', '-', ']')
    '\\' c      the character c
    lo '-' hi   any character between lo and hi inclusive
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import cache

from treeglob.errors import GlobSyntaxError, PatternSyntaxError

LEVELS_WILDCARD = "**"
"""The term matching any number of whole directory levels, including zero."""

# Characters that make a term a wildcard rather than a literal name.
_META_CHARS = frozenset("*?[\\")

_STAR = "[^/]*"


def _class_char(term: str, i: int) -> tuple[str, int]:
    """Read one (possibly escaped) character of a character class."""
    if i >= len(term):
        raise PatternSyntaxError(term, "unterminated character class")
    c = term[i]
    if c in "-]":
        raise PatternSyntaxError(term, f"unescaped {c!r} in character class")
    if c == "\\":
        i += 1
        if i >= len(term):
            raise PatternSyntaxError(term, "trailing backslash")
        c = term[i]
    return c, i + 1


def _translate_class(term: str, i: int) -> tuple[str, int]:
    """
    Translate the character class starting just after `[` at index `i`.
    Returns the regex fragment and the index just past the closing `]`.
    """
    negate = False
    if i < len(term) and term[i] == "^":
        negate = True
        i += 1

    ranges: list[tuple[str, str]] = []
    count = 0
    while True:
        if i >= len(term):
            raise PatternSyntaxError(term, "unterminated character class")
        if term[i] == "]" and count > 0:
            i += 1
            break
        lo, i = _class_char(term, i)
        hi = lo
        if i < len(term) and term[i] == "-":
            hi, i = _class_char(term, i + 1)
        count += 1
        # An inverted range is legal but matches nothing.
        if lo <= hi:
            ranges.append((lo, hi))

    if not ranges:
        return ("." if negate else "(?!)"), i

    body = "".join(
        re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}" for lo, hi in ranges
    )
    return f"[{'^' if negate else ''}{body}]", i


@cache
def _compile_term(term: str) -> re.Pattern[str]:
    """Translate a single term into a compiled regular expression."""
    parts: list[str] = []
    i = 0
    while i < len(term):
        c = term[i]
        i += 1
        if c == "*":
            if not parts or parts[-1] != _STAR:
                parts.append(_STAR)
        elif c == "?":
            parts.append("[^/]")
        elif c == "\\":
            if i >= len(term):
                raise PatternSyntaxError(term, "trailing backslash")
            parts.append(re.escape(term[i]))
            i += 1
        elif c == "[":
            fragment, i = _translate_class(term, i)
            parts.append(fragment)
        else:
            parts.append(re.escape(c))
    return re.compile("".join(parts), re.DOTALL)


def match_term(term: str, name: str) -> bool:
    """
    Report whether `term` matches all of `name`. The term must already have
    been validated by `compile_pattern`.
    """
    return _compile_term(term).fullmatch(name) is not None


def has_meta(term: str) -> bool:
    """Report whether `term` contains any wildcard or escape characters."""
    return any(c in _META_CHARS for c in term)


class Pattern(tuple[str, ...]):
    """
    One matching obligation: an ordered, non-empty sequence of terms, one per
    directory level.
    """

    __slots__ = ()

    def __str__(self) -> str:
        return "/".join(self)

    def __repr__(self) -> str:
        return f"Pattern({str(self)!r})"

    @property
    def rest(self) -> Pattern:
        """The terms that apply to the children of a matched entry."""
        return Pattern(self[1:])

    def match_dir(self, name: str, patterns: list[Pattern]) -> bool:
        """
        Match the first term against the directory `name`.

        Returns True if the pattern ends at this directory. If the pattern
        continues into the directory's children, the continuation is appended
        to `patterns` instead. A leading `**` always appends the pattern
        itself, since it may consume any number of further levels.
        """
        step = self[0]
        if step == LEVELS_WILDCARD:
            patterns.append(self)
        elif not match_term(step, name):
            return False

        if len(self) == 1:
            return True

        patterns.append(self.rest)
        return False

    def match_file(self, name: str) -> bool:
        """Files have no children, so only a single remaining term can match them."""
        return len(self) == 1 and (self[0] == LEVELS_WILDCARD or match_term(self[0], name))


def split_path(text: str) -> list[str]:
    """Split a `/`-separated string into its non-empty components."""
    return [s for s in text.split("/") if s]


def compile_pattern(text: str) -> list[Pattern]:
    """
    Compile one pattern string. Usually this gives a single pattern, but a
    pattern starting with `**` also gives its suffix, so that `**/foo` can
    match `foo` with no intervening levels. A `**` further along always
    consumes at least one level.
    """
    steps = split_path(text) or [""]
    for step in steps:
        try:
            _compile_term(step)
        except PatternSyntaxError as e:
            raise PatternSyntaxError(text, e.reason) from e

    patterns = [Pattern(steps)]
    if steps[0] == LEVELS_WILDCARD and len(steps) > 1:
        patterns.append(Pattern(steps[1:]))
    return patterns


def compile_patterns(texts: Iterable[str]) -> list[Pattern]:
    """
    Compile a list of pattern strings. Every string is checked, and all the
    syntax errors are raised together as a `GlobSyntaxError`.
    """
    patterns: list[Pattern] = []
    errors: list[PatternSyntaxError] = []
    for text in texts:
        try:
            patterns.extend(compile_pattern(text))
        except PatternSyntaxError as e:
            errors.append(e)
    if errors:
        raise GlobSyntaxError(errors)
    return patterns


def always(patterns: Iterable[Pattern]) -> bool:
    """Report whether the set contains a bare `**`, which matches everything below."""
    return any(len(p) == 1 and p[0] == LEVELS_WILDCARD for p in patterns)


def literal(patterns: list[Pattern]) -> tuple[str, list[Pattern]] | None:
    """
    If the set is a single pattern whose next term is a plain name, return that
    name and the set that applies beneath it. Otherwise return None.
    """
    if len(patterns) != 1:
        return None

    p = patterns[0]
    if has_meta(p[0]):
        return None

    next_patterns = [p.rest] if len(p) > 1 else []
    return p[0], next_patterns
