"""devwatch Path Matching Engine.

Immutable predicates over absolute paths, built once at configuration load
and queried for every filesystem event:
- EmptyMatcher, ExactSetMatcher, SetOrDescendantMatcher, GlobMatcher
- CompositeMatcher / CompositePatternMatcher via build_composite()
- PathSet for live update triggers
- IgnoreFileMatcher and ignore file rendering
"""

from .base import EMPTY_MATCHER, EmptyMatcher, PathMatcher, PatternMatcher
from .composite import CompositeMatcher, CompositePatternMatcher, build_composite
from .errors import (
    IgnoreFileError,
    InvalidPatternError,
    MatcherError,
    MatchError,
    PathResolutionError,
    PatternExportError,
)
from .glob import compile_glob
from .ignore import IgnoreFileMatcher, load_ignore_file, render_ignore_file
from .matchers import ExactSetMatcher, GlobMatcher, SetOrDescendantMatcher
from .pathset import PathSet

__all__ = [
    # Interfaces
    "PathMatcher",
    "PatternMatcher",
    # Matchers
    "EmptyMatcher",
    "EMPTY_MATCHER",
    "ExactSetMatcher",
    "SetOrDescendantMatcher",
    "GlobMatcher",
    "CompositeMatcher",
    "CompositePatternMatcher",
    "build_composite",
    "compile_glob",
    "PathSet",
    # Ignore files
    "IgnoreFileMatcher",
    "load_ignore_file",
    "render_ignore_file",
    # Errors
    "MatcherError",
    "PathResolutionError",
    "InvalidPatternError",
    "MatchError",
    "IgnoreFileError",
    "PatternExportError",
]
