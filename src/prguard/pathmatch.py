"""Path-aware glob matching for exclude patterns.

Braces are expanded first, so `**/*.{snap,lock}` is two patterns and
`{src,lib}/**` may span segments. Each expanded pattern is then matched
one path segment at a time with `fnmatch`:

  - `*`, `?` and `[...]` never cross a `/`
  - a segment that is exactly `**` matches zero or more whole segments
  - wildcards skip segments starting with `.` unless the pattern segment
    starts with `.` too (so `**/*.js` does not reach into `.github/`)

Matching is case-sensitive on every platform.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable

GLOBSTAR = "**"


def expand_braces(pattern: str) -> list[str]:
    """Expand `{a,b}` alternatives, nested groups included.

    A group without a top-level comma, or an unclosed `{`, stays literal.
    """
    depth = 0
    start = 0
    for i, ch in enumerate(pattern):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth:
                continue
            alternatives = _split_alternatives(pattern[start + 1:i])
            if len(alternatives) < 2:
                continue
            prefix, suffix = pattern[:start], pattern[i + 1:]
            return [
                expanded
                for alt in alternatives
                for expanded in expand_braces(prefix + alt + suffix)
            ]
    return [pattern]


def _split_alternatives(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = ""
    for ch in body:
        if ch == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        if ch == "{":
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
        current += ch
    parts.append(current)
    return parts


def split_pattern(pattern: str) -> list[str]:
    """Split a glob into segments, collapsing repeated `**` segments."""
    if pattern.startswith("./"):
        pattern = pattern[2:]
    parts: list[str] = []
    for part in pattern.split("/"):
        if part == GLOBSTAR and parts and parts[-1] == GLOBSTAR:
            continue
        parts.append(part)
    return parts


def match_path(pattern: str, path: str) -> bool:
    """Return True if `path` matches the glob `pattern`."""
    segments = path.split("/")
    return any(_match(split_pattern(p), segments) for p in expand_braces(pattern))


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    return any(match_path(p, path) for p in patterns)


def _match(pattern: list[str], segments: list[str]) -> bool:
    if not pattern:
        return not segments

    head, rest = pattern[0], pattern[1:]

    if head == GLOBSTAR:
        for i in range(len(segments) + 1):
            if _match(rest, segments[i:]):
                return True
            if i < len(segments) and segments[i].startswith("."):
                return False
        return False

    if not segments:
        return False
    if not _match_segment(head, segments[0]):
        return False
    return _match(rest, segments[1:])


def _match_segment(pattern: str, segment: str) -> bool:
    if segment.startswith(".") and not pattern.startswith("."):
        return False
    return fnmatch.fnmatchcase(segment, pattern)
