#!/usr/bin/env python3
"""Leaf path matchers.

- ExactSetMatcher: path is one of a fixed set (relative paths resolved
  against the cwd at construction)
- SetOrDescendantMatcher: path is one of a fixed set or lies below one
  (relative paths resolved against a base directory)
- GlobMatcher: path satisfies one of a list of glob patterns

All three resolve and compile eagerly; nothing is resolved at query time.

Example:
    >>> matcher = SetOrDescendantMatcher("/repo", "src", "go.mod")
    >>> matcher.matches("/repo/src/main.go")
    True
    >>> matcher.matches("/repo/srcgen/main.go")
    False
"""

from typing import FrozenSet, List, Pattern, Sequence, Tuple

from devwatch.core import ospath
from devwatch.matching.base import PathMatcher
from devwatch.matching.errors import PathResolutionError
from devwatch.matching.glob import compile_glob


class ExactSetMatcher(PathMatcher):
    """Matches paths that are exactly one of a fixed set of files."""

    def __init__(self, *paths: str):
        """Initialize exact set matcher.

        Args:
            *paths: Absolute paths, or paths relative to the cwd

        Raises:
            PathResolutionError: If a relative path cannot be made absolute
        """
        resolved = set()
        for path in paths:
            try:
                resolved.add(ospath.abs_path(path))
            except OSError as e:
                raise PathResolutionError(path, e) from e
        self._paths: FrozenSet[str] = frozenset(resolved)

    @property
    def paths(self) -> FrozenSet[str]:
        """Resolved absolute paths."""
        return self._paths

    def matches(self, path: str, is_dir: bool = False) -> bool:
        return path in self._paths

    def __repr__(self) -> str:
        return f"ExactSetMatcher({sorted(self._paths)!r})"


class SetOrDescendantMatcher(PathMatcher):
    """Matches paths in a fixed set or anywhere below one of them.

    With paths {"foo.bar", "baz/"} under base "/r" this matches
    "/r/foo.bar" exactly and "/r/baz/qux" as a child of "/r/baz".
    """

    def __init__(self, base_dir: str, *paths: str):
        """Initialize matcher.

        Args:
            base_dir: Absolute directory that relative paths are relative to
            *paths: Absolute paths, or paths relative to base_dir
        """
        self._base_dir = base_dir
        self._paths: FrozenSet[str] = frozenset(ospath.join_base(base_dir, p) for p in paths)

    @property
    def base_dir(self) -> str:
        return self._base_dir

    @property
    def paths(self) -> FrozenSet[str]:
        """Resolved absolute paths."""
        return self._paths

    def matches(self, path: str, is_dir: bool = False) -> bool:
        if path in self._paths:
            return True

        for member in self._paths:
            if ospath.is_child(member, path):
                return True

        return False

    def __repr__(self) -> str:
        return f"SetOrDescendantMatcher({self._base_dir!r}, {sorted(self._paths)!r})"


class GlobMatcher(PathMatcher):
    """Matches paths satisfying any of a list of glob patterns.

    Plain, not pattern-capable: the glob dialect matches absolute paths and
    has alternation, neither of which an ignore file can express.
    """

    def __init__(self, *patterns: str):
        """Initialize glob matcher.

        Args:
            *patterns: Glob patterns (see devwatch.matching.glob)

        Raises:
            InvalidPatternError: If any pattern is malformed
        """
        compiled: List[Tuple[str, Pattern[str]]] = []
        for pattern in patterns:
            compiled.append((pattern, compile_glob(pattern)))
        self._globs: Tuple[Tuple[str, Pattern[str]], ...] = tuple(compiled)

    @property
    def patterns(self) -> Sequence[str]:
        return tuple(pattern for pattern, _ in self._globs)

    def matches(self, path: str, is_dir: bool = False) -> bool:
        for _, regex in self._globs:
            if regex.match(path):
                return True
        return False

    def __repr__(self) -> str:
        return f"GlobMatcher({list(self.patterns)!r})"
