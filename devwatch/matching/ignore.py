#!/usr/bin/env python3
"""Ignore files: loading them as matchers and rendering them from matchers.

Ignore files follow .dockerignore rules: every pattern is anchored at the
build context root (``*.log`` matches ``debug.log`` but not ``web/debug.log``;
use ``**/*.log`` for any depth), a pattern naming a directory also covers
everything below it, trailing and leading slashes are insignificant, and
``!`` re-includes. Evaluation goes through pathspec with each pattern anchored
before compilation, so the exported patterns read the same way to Docker.

Example:
    >>> matcher = IgnoreFileMatcher("/repo", ["node_modules/", "**/*.log"])
    >>> matcher.matches("/repo/node_modules/react/index.js")
    True
    >>> matcher.matches("/repo/web/node_modules/react/index.js")
    False
    >>> print(render_ignore_file(matcher, resource="web"), end="")
    # Generated by devwatch for resource 'web'. Do not edit.
    node_modules/
    **/*.log
"""

import os
import posixpath
from pathlib import Path
from typing import Iterable, List, Optional, Union

import jinja2
from pathspec import GitIgnoreSpec

from devwatch.core import ospath
from devwatch.matching.base import PathMatcher, PatternMatcher
from devwatch.matching.errors import IgnoreFileError, InvalidPatternError, PatternExportError

IGNORE_FILE_TEMPLATE = """\
# Generated by devwatch{% if resource %} for resource '{{ resource }}'{% endif %}. Do not edit.
{% for pattern in patterns %}
{{ pattern }}
{% endfor %}
"""

_environment = jinja2.Environment(
    autoescape=False,
    trim_blocks=True,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
)


def _clean_lines(lines: Iterable[str]) -> List[str]:
    """Drop blank lines and comments, keep everything else verbatim."""
    patterns = []
    for line in lines:
        line = line.rstrip("\r\n")
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        patterns.append(stripped)
    return patterns


def _anchor_pattern(pattern: str) -> Optional[str]:
    """Rewrite a .dockerignore pattern as a root-anchored gitignore pattern.

    Args:
        pattern: Cleaned ignore file line

    Returns:
        Anchored pattern, or None if the pattern can never match a path
        inside the context

    Raises:
        InvalidPatternError: For a bare ``!``
    """
    negate = pattern.startswith("!")
    body = pattern[1:] if negate else pattern
    if not body:
        raise InvalidPatternError(pattern, "exclusion without a pattern")

    body = posixpath.normpath(body.replace(os.sep, "/")).lstrip("/")
    if not body or body == ".":
        return None

    return ("!" if negate else "") + "/" + body


class IgnoreFileMatcher(PatternMatcher):
    """Matches paths excluded by .dockerignore patterns under a base directory.

    Paths outside the base directory never match, and neither does the base
    directory itself.
    """

    def __init__(self, base_dir: str, patterns: Iterable[str], source: Optional[str] = None):
        """Initialize ignore file matcher.

        Args:
            base_dir: Absolute context directory the patterns are anchored at
            patterns: Ignore file lines; blanks and comments are skipped
            source: Ignore file the patterns came from, for messages

        Raises:
            InvalidPatternError: If a pattern cannot be compiled
        """
        self._base_dir = base_dir
        self._source = source
        self._patterns = _clean_lines(patterns)

        anchored = []
        for pattern in self._patterns:
            line = _anchor_pattern(pattern)
            if line is None:
                continue
            try:
                GitIgnoreSpec.from_lines([line])
            except ValueError as e:
                raise InvalidPatternError(pattern, str(e)) from e
            anchored.append(line)

        self._spec = GitIgnoreSpec.from_lines(anchored)
        self._has_rules = bool(anchored)

    @property
    def base_dir(self) -> str:
        return self._base_dir

    @property
    def source(self) -> Optional[str]:
        return self._source

    def matches(self, path: str, is_dir: bool = False) -> bool:
        if not self._has_rules:
            return False

        relative = ospath.try_as_child(self._base_dir, path)
        if relative is None or relative == ".":
            return False

        return self._spec.match_file(relative.replace(os.sep, "/"))

    def as_patterns(self) -> List[str]:
        return list(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"IgnoreFileMatcher({self._base_dir!r}, {self._patterns!r})"


def load_ignore_file(
    path: Union[str, Path], base_dir: Optional[str] = None
) -> IgnoreFileMatcher:
    """Load an ignore file as a matcher.

    A missing file is not an error: it yields a matcher with no patterns.

    Args:
        path: Absolute path of the ignore file
        base_dir: Directory patterns apply to (default: the file's directory)

    Returns:
        Matcher over the file's patterns

    Raises:
        IgnoreFileError: If the file exists but cannot be read
        InvalidPatternError: If a pattern cannot be compiled
    """
    path = Path(path)
    if base_dir is None:
        base_dir = str(path.parent)

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        lines = []
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreFileError(str(path), e) from e

    return IgnoreFileMatcher(base_dir, lines, source=str(path))


def render_ignore_file(matcher: PathMatcher, resource: Optional[str] = None) -> str:
    """Render a matcher as ignore file content.

    Args:
        matcher: Pattern-capable matcher
        resource: Resource name for the header comment

    Returns:
        Ignore file content, one pattern per line

    Raises:
        PatternExportError: If the matcher cannot export patterns
    """
    if not matcher.pattern_capable:
        description = f"ignore rules of resource '{resource}'" if resource else repr(matcher)
        raise PatternExportError(description)

    template = _environment.from_string(IGNORE_FILE_TEMPLATE)
    patterns = matcher.as_patterns()  # type: ignore[attr-defined]
    return template.render(resource=resource, patterns=patterns)
