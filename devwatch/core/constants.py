"""
devwatch Core: Constants and Type Definitions

This module provides system-wide constants, error codes, and type definitions.
"""
from enum import Enum, IntEnum
from typing import TypeAlias

# Version information
DEVWATCH_VERSION = "1.0.0"
CONFIG_VERSION = "1.0"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for devwatch operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, invalid configuration
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    CONFLICT = 4  # Conflicting declarations
    DEPENDENCY_ERROR = 5  # Missing capability (pattern export)
    INTERNAL_ERROR = 6  # Bug in devwatch


# Type aliases for clarity
FilePath: TypeAlias = str
Pattern: TypeAlias = str
ResourceName: TypeAlias = str


class Limits:
    """System resource limits and default values."""

    # Path limits
    MAX_PATH_LENGTH = 4096
    MAX_PATTERN_LENGTH = 4096

    # Resource limits
    MAX_RESOURCE_NAME_LENGTH = 63

    # Dispatch
    DEFAULT_MAX_WORKERS = 1
    MAX_WORKERS = 64


class MatcherCapability(Enum):
    """Statically known capability of a path matcher."""

    PLAIN = "plain"  # Answers matches() only
    PATTERN = "pattern"  # Can also export itself as ignore patterns


class ChangeAction(Enum):
    """Outcome of evaluating a change batch against a resource."""

    NONE = "none"  # Nothing the resource watches changed
    FULL_REBUILD = "full_rebuild"  # Rebuild image and redeploy
    LIVE_UPDATE = "live_update"  # Sync files into the running container


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    ROOT = "devwatch"
    VERSION = "version"
    BASE_DIR = "base_dir"
    RESOURCES = "resources"
    LOGGING = "logging"
    DISPATCH = "dispatch"

    # Resource configuration
    RESOURCE_NAME = "name"
    RESOURCE_BASE_DIR = "base_dir"
    RESOURCE_DEPS = "deps"
    RESOURCE_IGNORE = "ignore"
    RESOURCE_IGNORE_FILES = "ignore_files"
    RESOURCE_IGNORE_PATHS = "ignore_paths"
    RESOURCE_LIVE_UPDATE = "live_update"

    # Live update configuration
    FALL_BACK_ON = "fall_back_on"
    SYNC = "sync"
    SYNC_LOCAL = "local"
    SYNC_REMOTE = "remote"
    RUN = "run"
    RUN_CMD = "cmd"
    RUN_TRIGGER = "trigger"

    # Dispatch configuration
    MAX_WORKERS = "max_workers"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.VERSION: CONFIG_VERSION,
    ConfigKey.BASE_DIR: None,
    ConfigKey.RESOURCES: [],
    ConfigKey.LOGGING: {
        "level": "INFO",
        "file": None,
    },
    ConfigKey.DISPATCH: {
        ConfigKey.MAX_WORKERS: Limits.DEFAULT_MAX_WORKERS,
    },
}
