#!/usr/bin/env python3
"""Composite matchers (logical OR over an ordered list of matchers).

build_composite() picks the result type from the static capability of its
inputs:

- no matchers at all: EMPTY_MATCHER
- every matcher pattern-capable: CompositePatternMatcher
- anything else: CompositeMatcher, which cannot export patterns

Pattern capability is all-or-nothing. Exporting the patterns of only some
members would under-report ignore rules to the image build.

Example:
    >>> tmp = IgnoreFileMatcher("/r", ["*.tmp"])
    >>> build_composite([tmp, IgnoreFileMatcher("/r", ["dist"])]).as_patterns()
    ['*.tmp', 'dist']
    >>> build_composite([tmp, GlobMatcher("*.log")]).pattern_capable
    False
"""

from typing import Iterable, List, Sequence, Tuple

from devwatch.core.constants import MatcherCapability
from devwatch.matching.base import EMPTY_MATCHER, EmptyMatcher, PathMatcher, PatternMatcher


class CompositeMatcher(PathMatcher):
    """Matches if any constituent matches, evaluated in order.

    The first match short-circuits. An exception raised by a constituent
    aborts the scan and propagates to the caller.
    """

    def __init__(self, matchers: Sequence[PathMatcher]):
        self._matchers: Tuple[PathMatcher, ...] = tuple(matchers)

    @property
    def matchers(self) -> Tuple[PathMatcher, ...]:
        return self._matchers

    def matches(self, path: str, is_dir: bool = False) -> bool:
        for matcher in self._matchers:
            if matcher.matches(path, is_dir):
                return True
        return False

    def __len__(self) -> int:
        return len(self._matchers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._matchers)!r})"


class CompositePatternMatcher(CompositeMatcher, PatternMatcher):
    """Composite whose constituents are all pattern-capable."""

    capability = MatcherCapability.PATTERN

    def __init__(self, matchers: Sequence[PatternMatcher]):
        super().__init__(matchers)
        self._pattern_matchers: Tuple[PatternMatcher, ...] = tuple(matchers)

    def as_patterns(self) -> List[str]:
        """Concatenate constituent patterns in order, without deduplication."""
        result: List[str] = []
        for matcher in self._pattern_matchers:
            result.extend(matcher.as_patterns())
        return result


def build_composite(matchers: Iterable[PathMatcher]) -> PathMatcher:
    """Combine matchers into one that matches if any of them does.

    Empty matchers are dropped since they cannot change the result.

    Args:
        matchers: Matchers in evaluation order

    Returns:
        EMPTY_MATCHER, a CompositeMatcher or a CompositePatternMatcher
    """
    members = [m for m in matchers if not isinstance(m, EmptyMatcher)]
    if not members:
        return EMPTY_MATCHER

    if all(m.capability is MatcherCapability.PATTERN for m in members):
        return CompositePatternMatcher(members)  # type: ignore[arg-type]

    return CompositeMatcher(members)
