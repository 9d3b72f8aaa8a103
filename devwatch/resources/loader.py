#!/usr/bin/env python3
"""Build resources and their matcher trees from configuration.

Matchers are built exactly once here; the dispatcher only queries them.
Validation and construction failures surface as ConfigError naming the
resource and the offending pattern or path.

Example:
    >>> config = ConfigManager("devwatch.yaml")
    >>> resources = load_resources(config)
    >>> [r.name for r in resources]
    ['api', 'web']
"""

from typing import Any, Dict, List, Optional

from devwatch.core import ospath
from devwatch.core.constants import ConfigKey
from devwatch.core.validators import ValidationError, as_list, resource_label, validate_config
from devwatch.infrastructure.config_manager import ConfigError, ConfigManager
from devwatch.infrastructure.logger import Logger, get_logger
from devwatch.matching.base import PathMatcher
from devwatch.matching.composite import build_composite
from devwatch.matching.errors import InvalidPatternError, MatcherError
from devwatch.matching.ignore import IgnoreFileMatcher, load_ignore_file
from devwatch.matching.matchers import GlobMatcher, SetOrDescendantMatcher
from devwatch.matching.pathset import PathSet
from devwatch.resources.model import LiveUpdate, Resource, RunStep, SyncStep


def build_ignore_matcher(resource: Dict[str, Any], base_dir: str) -> PathMatcher:
    """Combine a resource's ignore declarations into one matcher.

    Ignore files are anchored at the resource base directory, the build
    context, wherever they live. Only they are pattern-capable: inline globs
    and ignore_paths make the result impossible to export as an ignore file.

    Raises:
        InvalidPatternError: If a glob or ignore file pattern is malformed
        IgnoreFileError: If an ignore file cannot be read
    """
    matchers: List[PathMatcher] = []

    ignores = as_list(resource.get(ConfigKey.RESOURCE_IGNORE, []), ConfigKey.RESOURCE_IGNORE)
    if ignores:
        matchers.append(GlobMatcher(*ignores))

    # Files concatenate into one matcher, as they do in the exported file
    ignore_lines: List[str] = []
    for ignore_file in as_list(
        resource.get(ConfigKey.RESOURCE_IGNORE_FILES, []), ConfigKey.RESOURCE_IGNORE_FILES
    ):
        path = ospath.join_base(base_dir, ignore_file)
        ignore_lines.extend(load_ignore_file(path, base_dir=base_dir).as_patterns())
    if ignore_lines:
        matchers.append(IgnoreFileMatcher(base_dir, ignore_lines))

    ignore_paths = as_list(
        resource.get(ConfigKey.RESOURCE_IGNORE_PATHS, []), ConfigKey.RESOURCE_IGNORE_PATHS
    )
    if ignore_paths:
        matchers.append(SetOrDescendantMatcher(base_dir, *ignore_paths))

    return build_composite(matchers)


def build_live_update(live_update: Optional[Dict[str, Any]], base_dir: str) -> Optional[LiveUpdate]:
    """Build the live update block of a resource, if declared."""
    if live_update is None:
        return None

    fall_back_on = PathSet.of(
        as_list(live_update.get(ConfigKey.FALL_BACK_ON, []), ConfigKey.FALL_BACK_ON), base_dir
    )
    syncs = tuple(
        SyncStep(
            local=ospath.join_base(base_dir, sync[ConfigKey.SYNC_LOCAL]),
            remote=sync[ConfigKey.SYNC_REMOTE],
        )
        for sync in live_update.get(ConfigKey.SYNC, [])
    )
    runs = tuple(
        RunStep(
            command=run[ConfigKey.RUN_CMD],
            triggers=PathSet.of(
                as_list(run.get(ConfigKey.RUN_TRIGGER, []), ConfigKey.RUN_TRIGGER), base_dir
            ),
        )
        for run in live_update.get(ConfigKey.RUN, [])
    )
    return LiveUpdate(fall_back_on=fall_back_on, syncs=syncs, runs=runs)


def build_resource(resource: Dict[str, Any], base_dir: str) -> Resource:
    """Build a resource from a validated declaration.

    Args:
        resource: Resource declaration
        base_dir: Absolute directory relative paths are relative to

    Returns:
        Resource with all matchers constructed

    Raises:
        MatcherError: If a matcher cannot be constructed
    """
    resource_dir = ospath.join_base(base_dir, resource.get(ConfigKey.RESOURCE_BASE_DIR) or ".")

    deps = PathSet.of(
        as_list(resource.get(ConfigKey.RESOURCE_DEPS, []), ConfigKey.RESOURCE_DEPS), resource_dir
    )
    return Resource(
        name=resource[ConfigKey.RESOURCE_NAME],
        base_dir=resource_dir,
        deps=deps,
        ignore=build_ignore_matcher(resource, resource_dir),
        live_update=build_live_update(resource.get(ConfigKey.RESOURCE_LIVE_UPDATE), resource_dir),
    )


def build_resources(
    section: Dict[str, Any], config_dir: str, logger: Optional[Logger] = None
) -> List[Resource]:
    """Validate a ``devwatch`` section and build its resources.

    Args:
        section: Merged contents of the ``devwatch`` key
        config_dir: Absolute directory of the config file
        logger: Logger (default: global logger)

    Returns:
        Resources in declaration order

    Raises:
        ConfigError: If validation or matcher construction fails
    """
    logger = logger or get_logger()

    try:
        validate_config(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", e.error_code) from e

    base_dir = ospath.join_base(config_dir, section.get(ConfigKey.BASE_DIR) or ".")

    resources = []
    for i, declaration in enumerate(section.get(ConfigKey.RESOURCES, [])):
        label = resource_label(declaration, i)
        try:
            resource = build_resource(declaration, base_dir)
        except InvalidPatternError as e:
            raise ConfigError(
                f"Invalid configuration: {label}: invalid ignore pattern "
                f"'{e.pattern}': {e.reason}",
                e.error_code,
            ) from e
        except MatcherError as e:
            raise ConfigError(f"Invalid configuration: {label}: {e.message}", e.error_code) from e

        logger.debug(
            "Built resource",
            resource=resource.name,
            deps=len(resource.deps.paths),
            live_update=resource.live_update is not None,
        )
        resources.append(resource)

    return resources


def load_resources(config: ConfigManager, logger: Optional[Logger] = None) -> List[Resource]:
    """Build resources from a configuration manager.

    Relative base directories resolve against the config file's directory.

    Raises:
        ConfigError: If the configuration is invalid
    """
    return build_resources(config.section(), config.config_dir, logger=logger)
