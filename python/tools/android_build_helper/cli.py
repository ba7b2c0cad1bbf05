#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line interface for the Android build configurator.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .core.configurator import BuildOutputConfigurator
from .core.errors import AndroidBuildError, ConfigurationError
from .core.models import ConfiguratorOptions
from .utils.config import ConfiguratorConfig
from .utils.settings import discover_subprojects
from . import __version__


def setup_logging(args: argparse.Namespace) -> None:
    """Set up logging sinks from the command-line options."""
    logger.remove()

    log_level = args.log_level
    if args.verbose and log_level == "INFO":
        log_level = "DEBUG"

    if log_level in ["DEBUG", "TRACE"]:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
    else:
        log_format = (
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        )

    logger.add(sys.stderr, level=log_level, format=log_format, colorize=True)

    if args.log_file:
        logger.add(
            args.log_file,
            level=log_level,
            format=log_format,
            rotation="10 MB",
            retention=3,
            compression="gz",
            enqueue=True
        )

    logger.debug(f"Logging initialized at {log_level} level")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="android_build_helper",
        description="Configure the build output layout of an Android project",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        epilog="Examples:\n"
               "  %(prog)s configure --root_dir android\n"
               "  %(prog)s show --subprojects app feature\n"
               "  %(prog)s clean --config android_build.toml",
    )
    parser.add_argument("--version", action="version",
                        version=f"Android Build Configurator v{__version__}")

    common = argparse.ArgumentParser(add_help=False)

    project_group = common.add_argument_group("Project")
    project_group.add_argument("--root_dir", type=Path,
                               help="Root project directory (default: current directory)")
    project_group.add_argument("--subprojects", nargs="*",
                               help="Subproject names (default: read from settings.gradle[.kts])")
    project_group.add_argument("--build_dir_relative",
                               help="Path applied to the root's default build directory")
    project_group.add_argument("--evaluation_target",
                               help="Subproject evaluated before all others")
    project_group.add_argument("--strict-flag-check", action="store_true", default=None,
                               help="Require the override flag as a whole line")

    config_group = common.add_argument_group("Configuration")
    config_group.add_argument("--config", type=Path,
                              help="Load configuration from file")
    config_group.add_argument("--auto-config", action="store_true",
                              help="Auto-discover android_build.* configuration file")
    config_group.add_argument("--validate-config", action="store_true",
                              help="Validate configuration and exit")
    config_group.add_argument("--dry-run", action="store_true",
                              help="Show what would be done without touching the filesystem")

    logging_group = common.add_argument_group("Logging")
    logging_group.add_argument("--verbose", action="store_true",
                               help="Enable verbose output")
    logging_group.add_argument("--log_level",
                               choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
                               default="INFO",
                               help="Set the logging level")
    logging_group.add_argument("--log_file", type=Path,
                               help="Also log to this file")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("configure", parents=[common],
                        help="Run the configuration pass")
    commands.add_parser("clean", parents=[common],
                        help="Delete the redirected build output directory")
    commands.add_parser("show", parents=[common],
                        help="Print the computed configuration as JSON")

    return parser.parse_args(argv)


def load_options(args: argparse.Namespace) -> ConfiguratorOptions:
    """Merge file configuration with command-line options (command line wins)."""
    config_options = None
    if args.config:
        config_options = ConfiguratorConfig.load_from_file(args.config)
        logger.info(f"Loaded configuration from {args.config}")
    elif args.auto_config:
        config_options = ConfiguratorConfig.auto_discover_config(args.root_dir or Path("."))

    cmd_options = ConfiguratorOptions(
        root_dir=args.root_dir,
        subprojects=args.subprojects,
        build_dir_relative=args.build_dir_relative,
        evaluation_target=args.evaluation_target,
        strict_flag_check=args.strict_flag_check,
        verbose=args.verbose or None,
    )

    options = ConfiguratorConfig.merge_configs(config_options, cmd_options)
    options.setdefault("root_dir", Path("."))
    if not options.get("subprojects"):
        options["subprojects"] = discover_subprojects(options["root_dir"])
    return options


def run(args: argparse.Namespace) -> int:
    """Execute the selected command."""
    options = load_options(args)

    if args.validate_config:
        warnings = ConfiguratorConfig.validate_config(options)
        if warnings:
            logger.warning("Configuration validation warnings:")
            for warning in warnings:
                logger.warning(f"  - {warning}")
        else:
            logger.success("Configuration validation passed")
        return 0

    dry_run = args.dry_run or args.command == "show"
    configurator = BuildOutputConfigurator.from_options(options, dry_run=dry_run)
    subprojects = options.get("subprojects", [])

    match args.command:
        case "configure":
            configurator.configure(subprojects)
        case "show":
            configuration = configurator.configure(subprojects)
            print(json.dumps(configuration.to_dict(), indent=2))
        case "clean":
            result = configurator.clean()
            if result.failed:
                return 1
        case _:
            raise ConfigurationError(f"Unknown command: {args.command}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the configurator from the command line."""
    args = parse_args(argv)
    setup_logging(args)
    logger.debug(f"Android Build Configurator v{__version__} starting")

    try:
        return run(args)
    except AndroidBuildError as e:
        logger.error(f"Configuration failed: {e}")
        if args.verbose:
            logger.debug(f"Error context: {e.context.to_dict()}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
