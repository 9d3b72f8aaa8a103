#!/usr/bin/env python3
"""Command-line interface for devwatch.

This module provides the CLI for checking resource declarations:
- Argument parsing and validation
- Configuration file loading
- ``validate``: build every resource's matchers
- ``check``: report which resources a set of changed paths triggers
- ``ignore``: render a resource's ignore rules as a .dockerignore file

Example:
    >>> from devwatch.cli import parse_arguments
    >>> args = parse_arguments(["--config", "devwatch.yaml", "check", "src/main.go"])
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from devwatch.core.constants import DEVWATCH_VERSION, ConfigKey, ErrorCode
from devwatch.core.validators import ValidationError
from devwatch.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from devwatch.infrastructure.logger import LogLevel, Logger, configure_logging
from devwatch.matching.errors import MatcherError
from devwatch.matching.ignore import render_ignore_file
from devwatch.resources.dispatcher import ChangeDispatcher
from devwatch.resources.loader import load_resources
from devwatch.resources.model import FileEvent, Resource

DESCRIPTION = "devwatch - decide which resources a file change rebuilds"
DEFAULT_CONFIG_FILE = "devwatch.yaml"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="devwatch",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check the configuration
  devwatch validate

  # Which resources does a change trigger?
  devwatch --config devwatch.yaml check src/main.go package.json

  # Write the ignore file for a resource's image build
  devwatch ignore api -o .dockerignore
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {DEVWATCH_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file path (default: {DEFAULT_CONFIG_FILE})",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--log-level",
        choices=[level.name for level in LogLevel],
        type=str.upper,
        help="Minimum log level (default: from configuration)",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write logs to this file",
    )

    parser.add_argument(
        "-j",
        "--workers",
        metavar="N",
        type=int,
        help="Threads used to evaluate resources",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    subparsers.add_parser("validate", help="Load the configuration and build all matchers")

    check = subparsers.add_parser("check", help="Report resources triggered by changed paths")
    check.add_argument("paths", metavar="PATH", nargs="*", help="Changed file paths")
    check.add_argument(
        "--dir",
        metavar="PATH",
        dest="dirs",
        action="append",
        default=[],
        help="Changed directory path (can be specified multiple times)",
    )

    ignore = subparsers.add_parser("ignore", help="Render a resource's ignore file")
    ignore.add_argument("resource", metavar="RESOURCE", help="Resource name")
    ignore.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        type=str,
        help="Write to FILE instead of stdout",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Raises:
        CLIError: If validation fails
    """
    config_path = Path(args.config)
    if not config_path.exists():
        raise CLIError(f"Configuration file does not exist: {args.config}")
    if not config_path.is_file():
        raise CLIError(f"Configuration path is not a file: {args.config}")

    if args.workers is not None and args.workers < 1:
        raise CLIError(f"--workers must be at least 1, got {args.workers}")

    if args.command == "check" and not (args.paths or args.dirs):
        raise CLIError("check needs at least one PATH or --dir")


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Load the configuration file and apply command-line overrides.

    Raises:
        ConfigError: If the file cannot be loaded
    """
    config = ConfigManager(args.config)

    if args.log_level:
        config.set("devwatch.logging.level", args.log_level, ConfigSource.CLI_ARGS)
    if args.log_file:
        config.set("devwatch.logging.file", args.log_file, ConfigSource.CLI_ARGS)
    if args.workers:
        config.set("devwatch.dispatch.max_workers", args.workers, ConfigSource.CLI_ARGS)

    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging from configuration.

    Raises:
        ConfigError: If the configured level is unknown or the log file
            cannot be opened
    """
    level = config.get("devwatch.logging.level", "INFO")
    log_file = config.get("devwatch.logging.file")
    try:
        return configure_logging(level=level, log_file=log_file)
    except KeyError:
        raise ConfigError(f"Unknown log level: {level}")
    except OSError as e:
        raise ConfigError(f"Cannot open log file {log_file}: {e}", ErrorCode.PERMISSION_DENIED)


def find_resource(resources: List[Resource], name: str) -> Resource:
    for resource in resources:
        if resource.name == name:
            return resource
    raise CLIError(f"Unknown resource: {name}")


def cmd_validate(args: argparse.Namespace, resources: List[Resource], logger: Logger) -> int:
    print(f"OK: {len(resources)} resources")
    return 0


def cmd_check(
    args: argparse.Namespace, resources: List[Resource], config: ConfigManager, logger: Logger
) -> int:
    events = [FileEvent(os.path.abspath(p)) for p in args.paths]
    events.extend(FileEvent(os.path.abspath(d), is_dir=True) for d in args.dirs)

    workers = config.get(f"{ConfigKey.ROOT}.{ConfigKey.DISPATCH}.{ConfigKey.MAX_WORKERS}", 1)
    dispatcher = ChangeDispatcher(resources, max_workers=workers, logger=logger)

    decisions = dispatcher.dispatch(events)
    for decision in decisions:
        print(f"{decision.resource}: {decision.action.value} ({decision.reason})")
        for run in decision.runs:
            print(f"  run: {run.command}")

    if not decisions:
        print("No resources triggered")
    return 0


def cmd_ignore(args: argparse.Namespace, resources: List[Resource], logger: Logger) -> int:
    resource = find_resource(resources, args.resource)
    content = render_ignore_file(resource.ignore, resource=resource.name)

    if args.output:
        try:
            Path(args.output).write_text(content, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write {args.output}: {e}")
        logger.info("Wrote ignore file", resource=resource.name, path=args.output)
    else:
        sys.stdout.write(content)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)
        config = load_configuration(args)
        logger = setup_logging(config)
        resources = load_resources(config, logger=logger)

        if args.command == "validate":
            return cmd_validate(args, resources, logger)
        if args.command == "check":
            return cmd_check(args, resources, config, logger)
        return cmd_ignore(args, resources, logger)

    except (CLIError, ConfigError, ValidationError, MatcherError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
