#!/usr/bin/env python3
"""Path sets used as live update triggers."""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterable, Sequence, Tuple

from devwatch.matching.matchers import SetOrDescendantMatcher


@dataclass(frozen=True)
class PathSet:
    """One or more paths plus the directory relative paths are relative to.

    A changed path matches the set if it is one of the paths or lies below one.
    """

    paths: Tuple[str, ...] = field(default_factory=tuple)
    base_directory: str = "/"

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable one
        object.__setattr__(self, "paths", tuple(self.paths))

    @classmethod
    def of(cls, paths: Sequence[str], base_directory: str) -> "PathSet":
        return cls(paths=tuple(paths), base_directory=base_directory)

    def is_empty(self) -> bool:
        return len(self.paths) == 0

    @cached_property
    def matcher(self) -> SetOrDescendantMatcher:
        """Matcher equivalent to this set, built on first use."""
        return SetOrDescendantMatcher(self.base_directory, *self.paths)

    def any_match(self, paths: Iterable[str]) -> Tuple[bool, str]:
        """Check whether any of the given paths falls within this set.

        Candidates are tried in the order given, so the reported path is the
        first candidate that matched.

        Args:
            paths: Absolute candidate paths in priority order

        Returns:
            (True, first matching candidate) or (False, "")

        Raises:
            MatchError: If the matcher fails; the scan stops immediately
        """
        matcher = self.matcher
        for path in paths:
            if matcher.matches(path, False):
                return True, path
        return False, ""
