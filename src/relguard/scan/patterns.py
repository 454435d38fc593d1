"""Selection pattern parsing.

Patterns use dot notation: ``"posts"`` selects one relation, ``"posts.comments"``
selects a chain, and the bare ``"*"`` selects every relation at its level.
"""

from __future__ import annotations

from collections.abc import Iterable

from relguard.core.errors import GuardError
from relguard.scan.models import WILDCARD, PatternPath


def parse_pattern(pattern: str) -> PatternPath:
    if pattern == WILDCARD:
        return PatternPath(wildcard=True)
    if not pattern:
        raise GuardError.invalid_pattern(pattern, "pattern is empty")
    segments = tuple(pattern.split("."))
    if any(not segment for segment in segments):
        raise GuardError.invalid_pattern(pattern, "empty path segment")
    if WILDCARD in segments[:-1]:
        raise GuardError.invalid_pattern(pattern, "'*' is only allowed as the last segment")
    return PatternPath(segments=segments)


def parse_patterns(patterns: Iterable[str | PatternPath]) -> tuple[PatternPath, ...]:
    """Parse patterns once per scan; already-parsed paths pass through."""
    parsed: list[PatternPath] = []
    for pattern in patterns:
        if isinstance(pattern, PatternPath):
            parsed.append(pattern)
        elif isinstance(pattern, str):
            parsed.append(parse_pattern(pattern))
        else:
            raise GuardError.invalid_pattern(repr(pattern), "pattern must be a string")
    return tuple(parsed)


def has_wildcard(patterns: tuple[PatternPath, ...]) -> bool:
    return any(p.wildcard for p in patterns)


def is_wanted(relation_name: str, patterns: tuple[PatternPath, ...]) -> bool:
    """A relation is wanted if a wildcard or any pattern's first segment names it."""
    return any(p.wildcard or p.head == relation_name for p in patterns)


def child_patterns(relation_name: str, patterns: tuple[PatternPath, ...]) -> tuple[PatternPath, ...]:
    """Patterns applying beneath ``relation_name``.

    A wildcard carries down unchanged. Otherwise only the tails of patterns
    headed by this relation remain; an empty result selects nothing below.
    """
    if has_wildcard(patterns):
        return (PatternPath(wildcard=True),)
    tails: list[PatternPath] = []
    for p in patterns:
        if p.head != relation_name:
            continue
        tail = p.tail()
        if tail is not None:
            tails.append(tail)
    return tuple(tails)
