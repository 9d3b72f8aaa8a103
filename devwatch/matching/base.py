#!/usr/bin/env python3
"""Matcher interfaces and the empty matcher.

Every matcher is an immutable predicate over absolute paths:

- PathMatcher answers "does this path match"
- PatternMatcher can additionally export itself as ignore patterns
  suitable for a .dockerignore file

Which of the two a matcher is gets declared statically through its
``capability`` attribute, so composition can decide the result type up front.

Example:
    >>> EMPTY_MATCHER.matches("/repo/main.go")
    False
    >>> EMPTY_MATCHER.as_patterns()
    []
"""

from abc import ABC, abstractmethod
from typing import List

from devwatch.core.constants import MatcherCapability


class PathMatcher(ABC):
    """Predicate over absolute filesystem paths.

    Implementations must be immutable once constructed. ``is_dir`` is a hint
    from the watcher; current matchers accept it without using it.
    """

    capability: MatcherCapability = MatcherCapability.PLAIN

    @abstractmethod
    def matches(self, path: str, is_dir: bool = False) -> bool:
        """Check whether an absolute path matches.

        Args:
            path: Absolute path to test
            is_dir: Whether the path is known to be a directory

        Returns:
            True if the path matches

        Raises:
            MatchError: If the matcher cannot answer. This is never a non-match.
        """

    @property
    def pattern_capable(self) -> bool:
        """Return True if this matcher can export ignore patterns."""
        return self.capability is MatcherCapability.PATTERN


class PatternMatcher(PathMatcher):
    """PathMatcher that can be expressed as a list of glob patterns."""

    capability = MatcherCapability.PATTERN

    @abstractmethod
    def as_patterns(self) -> List[str]:
        """Express this matcher as ordered ignore patterns.

        Returns:
            Patterns suitable for a .dockerignore file
        """


class EmptyMatcher(PatternMatcher):
    """Matcher that matches nothing. Use the EMPTY_MATCHER instance."""

    def matches(self, path: str, is_dir: bool = False) -> bool:
        return False

    def as_patterns(self) -> List[str]:
        return []

    def __repr__(self) -> str:
        return "EmptyMatcher()"


EMPTY_MATCHER = EmptyMatcher()
