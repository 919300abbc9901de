"""Ignore-file style path patterns.

Layer membership and scanner exclusions are both written as gitignore
patterns and matched case-insensitively against project-relative paths:

    src/ui/          the directory src/ui and everything beneath it
    /src/main.ts     exactly that file, anchored at the project root
    generated        any file or directory named "generated", at any depth
    src/**/*.spec.ts spec files anywhere below src
    !keep.ts         re-include a path excluded by an earlier pattern

A path is matched when the path itself, or any of its parent directories,
is matched by the last applicable pattern. Once a parent directory is
matched, nothing beneath it can be re-included.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Sequence

from .paths import normalize_relative


@dataclass(frozen=True)
class PathRule:
    """A single compiled pattern line."""

    pattern: str
    regex: Pattern[str]
    negated: bool = False
    dir_only: bool = False

    def applies_to(self, candidate: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        return self.regex.match(candidate) is not None


def _trim_trailing_spaces(line: str) -> str:
    """Drop trailing spaces unless escaped with a backslash."""
    end = len(line)
    while end > 0 and line[end - 1] == " ":
        if end >= 2 and line[end - 2] == "\\":
            break
        end -= 1
    return line[:end]


def _class_end(pattern: str, start: int) -> int:
    """Index of the ``]`` closing the class opened at ``start``, or -1."""
    j = start + 1
    if j < len(pattern) and pattern[j] in "!^":
        j += 1
    if j < len(pattern) and pattern[j] == "]":
        j += 1
    while j < len(pattern) and pattern[j] != "]":
        j += 1
    return j if j < len(pattern) else -1


def _translate_class(body: str) -> str:
    body = body.replace("\\", "\\\\")
    if body[0] in "!^":
        return f"(?!/)[^{body[1:]}]"
    return f"[{body}]"


def _translate(pattern: str) -> str:
    """Translate the glob body of a pattern line into a regex fragment."""
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            at_segment_start = i == 0 or pattern[i - 1] == "/"
            at_segment_end = j == n or pattern[j] == "/"
            if j - i >= 2 and at_segment_start and at_segment_end:
                if j == n:
                    out.append(".*")
                else:
                    # "**/" spans zero or more whole directories
                    out.append("(?:.*/)?")
                    j += 1
            else:
                out.append("[^/]*")
            i = j
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "[":
            end = _class_end(pattern, i)
            if end < 0:
                out.append(re.escape(c))
                i += 1
            else:
                out.append(_translate_class(pattern[i + 1 : end]))
                i = end + 1
        elif c == "\\" and i + 1 < n:
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(c))
            i += 1
    return "".join(out)


def parse_rule(line: str) -> Optional[PathRule]:
    """Compile one pattern line, or return None for blanks and comments."""
    text = _trim_trailing_spaces(line)
    if not text or text.startswith("#"):
        return None

    negated = text.startswith("!")
    if negated:
        text = text[1:]

    dir_only = text.endswith("/")
    body = text.rstrip("/")
    if not body:
        return None

    # A slash anywhere but the end anchors the pattern at the root
    anchored = "/" in body
    body = body.lstrip("/")
    if not body:
        return None

    prefix = "" if anchored else "(?:.*/)?"
    regex = re.compile(f"^{prefix}{_translate(body)}$", re.IGNORECASE | re.DOTALL)
    return PathRule(pattern=line, regex=regex, negated=negated, dir_only=dir_only)


class PatternSet:
    """An ordered, compiled list of ignore-style patterns."""

    def __init__(self, patterns: Iterable[str]):
        self.patterns: tuple[str, ...] = tuple(patterns)
        self.rules: tuple[PathRule, ...] = tuple(
            rule for rule in (parse_rule(p) for p in self.patterns) if rule is not None
        )

    def __repr__(self) -> str:
        return f"PatternSet({list(self.patterns)!r})"

    def _state(self, candidate: str, is_dir: bool) -> Optional[bool]:
        """Last-match-wins verdict for one candidate; None if nothing applied."""
        state: Optional[bool] = None
        for rule in self.rules:
            if rule.applies_to(candidate, is_dir):
                state = not rule.negated
        return state

    def matches(self, path: str) -> bool:
        """Return whether ``path`` or one of its parent directories matches."""
        is_dir = path.endswith("/")
        normalized = normalize_relative(path)
        if normalized is None:
            return False

        segments = normalized.split("/")
        for depth in range(1, len(segments)):
            if self._state("/".join(segments[:depth]), is_dir=True):
                return True
        return bool(self._state(normalized, is_dir=is_dir))


@lru_cache(maxsize=1024)
def compile_patterns(patterns: tuple[str, ...]) -> PatternSet:
    """Compile and memoise a pattern tuple."""
    return PatternSet(patterns)


def matches(path: str, patterns: Sequence[str]) -> bool:
    """Return whether ``path`` matches the ignore-style ``patterns``.

    Args:
        path: Project-relative, forward-slash path
        patterns: Ordered pattern lines

    Returns:
        True if the last applicable pattern for the path, or for one of its
        parent directories, is a non-negated match
    """
    return compile_patterns(tuple(patterns)).matches(path)
