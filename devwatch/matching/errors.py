#!/usr/bin/env python3
"""Exceptions raised by the path matching engine."""

from typing import Optional

from devwatch.core.constants import ErrorCode


class MatcherError(Exception):
    """Base exception for matcher construction and query failures."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize MatcherError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class PathResolutionError(MatcherError):
    """A path could not be made absolute while building a matcher."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        message = f"cannot resolve path {path!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, ErrorCode.NOT_FOUND)
        self.path = path


class InvalidPatternError(MatcherError):
    """A glob or ignore pattern is malformed."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"invalid pattern {pattern!r}: {reason}", ErrorCode.INVALID_INPUT)
        self.pattern = pattern
        self.reason = reason


class MatchError(MatcherError):
    """A matcher failed while answering a query."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot match {path!r}: {reason}", ErrorCode.INTERNAL_ERROR)
        self.path = path


class IgnoreFileError(MatcherError):
    """An ignore file exists but could not be read."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"cannot read ignore file {path!r}: {cause}", ErrorCode.PERMISSION_DENIED)
        self.path = path


class PatternExportError(MatcherError):
    """A matcher without pattern capability was asked for patterns."""

    def __init__(self, description: str):
        super().__init__(
            f"{description} cannot be expressed as ignore patterns",
            ErrorCode.DEPENDENCY_ERROR,
        )
