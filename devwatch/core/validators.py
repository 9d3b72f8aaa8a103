"""
devwatch Core: Input Validators.

This module provides validation for the devwatch configuration: resource
declarations, paths and glob patterns. Every error names the resource and the
offending field so it can be reported as a configuration failure.
"""
import re
from typing import Any, Dict, List, Union

from devwatch.core.constants import ConfigKey, ErrorCode, Limits
from devwatch.matching.errors import InvalidPatternError
from devwatch.matching.glob import compile_glob


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def resource_label(resource: Any, index: int) -> str:
    """Describe a resource declaration for error messages."""
    if isinstance(resource, dict) and isinstance(resource.get(ConfigKey.RESOURCE_NAME), str):
        return f"resource '{resource[ConfigKey.RESOURCE_NAME]}'"
    return f"resource at index {index}"


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate devwatch configuration structure.

    Args:
        config: Contents of the top-level ``devwatch`` key

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.VERSION not in config:
        raise ValidationError("Configuration must have 'version' field")

    validate_version(config[ConfigKey.VERSION])

    if config.get(ConfigKey.BASE_DIR) is not None:
        validate_path(config[ConfigKey.BASE_DIR])

    resources = config.get(ConfigKey.RESOURCES, [])
    if not isinstance(resources, list):
        raise ValidationError("Resources must be a list")

    seen = set()
    for i, resource in enumerate(resources):
        try:
            validate_resource_config(resource)
        except ValidationError as e:
            raise ValidationError(f"{resource_label(resource, i)}: {e}", e.error_code)

        name = resource[ConfigKey.RESOURCE_NAME]
        if name in seen:
            raise ValidationError(f"Duplicate resource name: {name}", ErrorCode.CONFLICT)
        seen.add(name)

    dispatch = config.get(ConfigKey.DISPATCH)
    if dispatch is not None:
        if not isinstance(dispatch, dict):
            raise ValidationError("Dispatch must be a dictionary")
        if ConfigKey.MAX_WORKERS in dispatch:
            validate_max_workers(dispatch[ConfigKey.MAX_WORKERS])

    return True


def validate_resource_config(resource: Dict[str, Any]) -> bool:
    """Validate a single resource declaration.

    Args:
        resource: Resource configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If the resource is invalid
    """
    if not isinstance(resource, dict):
        raise ValidationError("Resource must be a dictionary")

    if ConfigKey.RESOURCE_NAME not in resource:
        raise ValidationError("Resource must have 'name' field")
    validate_resource_name(resource[ConfigKey.RESOURCE_NAME])

    if resource.get(ConfigKey.RESOURCE_BASE_DIR) is not None:
        validate_path(resource[ConfigKey.RESOURCE_BASE_DIR])

    for key in (
        ConfigKey.RESOURCE_DEPS,
        ConfigKey.RESOURCE_IGNORE_FILES,
        ConfigKey.RESOURCE_IGNORE_PATHS,
    ):
        if key in resource:
            validate_path_list(resource[key], key)

    if ConfigKey.RESOURCE_IGNORE in resource:
        patterns = as_list(resource[ConfigKey.RESOURCE_IGNORE], ConfigKey.RESOURCE_IGNORE)
        for pattern in patterns:
            validate_glob(pattern, field=ConfigKey.RESOURCE_IGNORE)

    if resource.get(ConfigKey.RESOURCE_LIVE_UPDATE) is not None:
        validate_live_update_config(resource[ConfigKey.RESOURCE_LIVE_UPDATE])

    return True


def validate_live_update_config(live_update: Dict[str, Any]) -> bool:
    """Validate a live update block.

    Args:
        live_update: Live update configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If the block is invalid
    """
    if not isinstance(live_update, dict):
        raise ValidationError("live_update must be a dictionary")

    if ConfigKey.FALL_BACK_ON in live_update:
        validate_path_list(live_update[ConfigKey.FALL_BACK_ON], ConfigKey.FALL_BACK_ON)

    syncs = live_update.get(ConfigKey.SYNC, [])
    if not isinstance(syncs, list):
        raise ValidationError("live_update.sync must be a list")
    for i, sync in enumerate(syncs):
        if not isinstance(sync, dict):
            raise ValidationError(f"live_update.sync[{i}] must be a dictionary")
        for key in (ConfigKey.SYNC_LOCAL, ConfigKey.SYNC_REMOTE):
            if key not in sync:
                raise ValidationError(f"live_update.sync[{i}] must have '{key}' field")
            validate_path(sync[key])

    runs = live_update.get(ConfigKey.RUN, [])
    if not isinstance(runs, list):
        raise ValidationError("live_update.run must be a list")
    for i, run in enumerate(runs):
        if not isinstance(run, dict):
            raise ValidationError(f"live_update.run[{i}] must be a dictionary")
        cmd = run.get(ConfigKey.RUN_CMD)
        if not isinstance(cmd, str) or not cmd.strip():
            raise ValidationError(f"live_update.run[{i}] must have a non-empty 'cmd' field")
        if ConfigKey.RUN_TRIGGER in run:
            validate_path_list(run[ConfigKey.RUN_TRIGGER], f"run[{i}].trigger")

    return True


def as_list(value: Any, field: str) -> List[Any]:
    """Accept a single string where a list is expected."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValidationError(f"'{field}' must be a list, got {type(value).__name__}")
    return value


def validate_path_list(value: Union[str, List[Any]], field: str) -> bool:
    """Validate a list of paths (a single string is accepted).

    Raises:
        ValidationError: If any entry is invalid
    """
    for path in as_list(value, field):
        try:
            validate_path(path)
        except ValidationError as e:
            raise ValidationError(f"invalid {field} entry: {e}")
    return True


def validate_path(path: str) -> bool:
    """Validate that a path is usable.

    Relative paths and ``..`` are allowed; they are resolved against the
    resource's base directory.

    Args:
        path: Path to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    if not isinstance(path, str):
        raise ValidationError(f"Path must be string, got {type(path).__name__}")

    if not path:
        raise ValidationError("Path cannot be empty")

    # Check length
    if len(path) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"Path exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    # Check for null bytes
    if "\0" in path:
        raise ValidationError("Path contains null bytes")

    # Check for control characters
    if any(ord(c) < 32 for c in path):
        raise ValidationError("Path contains control characters")

    return True


def validate_glob(pattern: str, field: str = "pattern") -> bool:
    """Validate a glob pattern by compiling it.

    Args:
        pattern: Glob pattern string
        field: Configuration field the pattern came from

    Returns:
        True if valid

    Raises:
        ValidationError: If pattern is invalid
    """
    if not isinstance(pattern, str):
        raise ValidationError(f"invalid {field} pattern: must be string, got {type(pattern).__name__}")

    if not pattern:
        raise ValidationError(f"invalid {field} pattern: cannot be empty")

    try:
        compile_glob(pattern)
    except InvalidPatternError as e:
        raise ValidationError(f"invalid {field} pattern '{pattern}': {e.reason}")

    return True


def validate_resource_name(name: str) -> bool:
    """Validate resource name.

    Args:
        name: Resource name to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If name is invalid
    """
    if not name:
        raise ValidationError("Resource name cannot be empty")

    if not isinstance(name, str):
        raise ValidationError(f"Resource name must be string, got {type(name).__name__}")

    if not re.match(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$", name):
        raise ValidationError(
            f"Invalid resource name '{name}': must start with a letter or digit and contain "
            "only letters, digits, underscore, dot and hyphen"
        )

    if len(name) > Limits.MAX_RESOURCE_NAME_LENGTH:
        raise ValidationError(
            f"Resource name exceeds maximum length ({Limits.MAX_RESOURCE_NAME_LENGTH})"
        )

    return True


def validate_version(version: str) -> bool:
    """Validate version string format.

    Args:
        version: Version string to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If version is invalid
    """
    if not version:
        raise ValidationError("Version cannot be empty")

    if not isinstance(version, str):
        raise ValidationError(f"Version must be string, got {type(version).__name__}")

    # Simple semantic version check (X.Y or X.Y.Z)
    if not re.match(r"^\d+\.\d+(\.\d+)?$", version):
        raise ValidationError(f"Invalid version format: {version}. Expected X.Y or X.Y.Z")

    return True


def validate_max_workers(workers: Any) -> bool:
    """Validate the dispatch worker count.

    Raises:
        ValidationError: If the value is not an integer in range
    """
    if isinstance(workers, bool) or not isinstance(workers, int):
        raise ValidationError(f"max_workers must be an integer, got {type(workers).__name__}")

    if workers < 1 or workers > Limits.MAX_WORKERS:
        raise ValidationError(f"max_workers must be in range 1-{Limits.MAX_WORKERS}, got {workers}")

    return True
