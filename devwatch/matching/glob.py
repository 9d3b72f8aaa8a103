#!/usr/bin/env python3
"""Glob pattern compilation.

Translates glob patterns into anchored regular expressions:

- ``*`` and ``**`` match any run of characters, separators included
- ``?`` matches a single character
- ``[a-z]``, ``[!a-z]`` and ``[^a-z]`` are character classes
- ``{src,lib}`` is alternation and may nest
- ``\\`` escapes the following character

Malformed patterns raise InvalidPatternError instead of compiling to
something that silently never matches.

Example:
    >>> regex = compile_glob("*.{go,mod}")
    >>> bool(regex.match("/repo/go.mod"))
    True
"""

import re
from typing import List, Pattern, Tuple

from devwatch.core.constants import Limits
from devwatch.matching.errors import InvalidPatternError


def compile_glob(pattern: str) -> Pattern[str]:
    """Compile a glob pattern.

    Args:
        pattern: Glob pattern

    Returns:
        Compiled regex matching whole paths

    Raises:
        InvalidPatternError: If the pattern is malformed
    """
    if not isinstance(pattern, str):
        raise InvalidPatternError(repr(pattern), f"must be a string, got {type(pattern).__name__}")

    if len(pattern) > Limits.MAX_PATTERN_LENGTH:
        raise InvalidPatternError(pattern, f"exceeds maximum length ({Limits.MAX_PATTERN_LENGTH})")

    regex, _ = _translate(pattern, 0, in_braces=False)
    return re.compile(r"\A(?:" + regex + r")\Z", re.DOTALL)


def _translate(pattern: str, i: int, in_braces: bool) -> Tuple[str, int]:
    """Translate pattern from index i up to the end or the closing brace.

    Returns:
        Regex fragment and the index just past what was consumed
    """
    n = len(pattern)
    alternatives: List[List[str]] = []
    current: List[str] = []

    while i < n:
        c = pattern[i]

        if c == "\\":
            if i + 1 >= n:
                raise InvalidPatternError(pattern, "trailing escape character")
            current.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "*":
            while i < n and pattern[i] == "*":
                i += 1
            current.append(".*")
        elif c == "?":
            current.append(".")
            i += 1
        elif c == "[":
            fragment, i = _translate_class(pattern, i)
            current.append(fragment)
        elif c == "{":
            fragment, i = _translate(pattern, i + 1, in_braces=True)
            current.append(fragment)
        elif c == "," and in_braces:
            alternatives.append(current)
            current = []
            i += 1
        elif c == "}" and in_braces:
            alternatives.append(current)
            joined = "|".join("".join(alt) for alt in alternatives)
            return "(?:" + joined + ")", i + 1
        else:
            current.append(re.escape(c))
            i += 1

    if in_braces:
        raise InvalidPatternError(pattern, "unterminated '{'")

    return "".join(current), i


def _class_char(pattern: str, j: int) -> Tuple[str, int]:
    """Read one (possibly escaped) character inside a class."""
    if pattern[j] == "\\":
        if j + 1 >= len(pattern):
            raise InvalidPatternError(pattern, "unterminated '['")
        return pattern[j + 1], j + 2
    return pattern[j], j + 1


def _translate_class(pattern: str, i: int) -> Tuple[str, int]:
    """Translate the character class opening at pattern[i]."""
    n = len(pattern)
    j = i + 1
    negate = False
    if j < n and pattern[j] in "!^":
        negate = True
        j += 1

    items: List[str] = []
    while j < n and pattern[j] != "]":
        low, j = _class_char(pattern, j)

        if j + 1 < n and pattern[j] == "-" and pattern[j + 1] != "]":
            high, j = _class_char(pattern, j + 1)
            if high < low:
                raise InvalidPatternError(pattern, f"invalid range '{low}-{high}'")
            items.append(f"{re.escape(low)}-{re.escape(high)}")
        else:
            items.append(re.escape(low))

    if j >= n:
        raise InvalidPatternError(pattern, "unterminated '['")
    if not items:
        raise InvalidPatternError(pattern, "empty character class")

    return ("[^" if negate else "[") + "".join(items) + "]", j + 1
