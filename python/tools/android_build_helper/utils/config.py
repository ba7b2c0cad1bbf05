#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration loading utilities for the Android build configurator.
"""

from __future__ import annotations

import configparser
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from ..core.models import ConfiguratorOptions, DEFAULT_EVALUATION_TARGET, KNOWN_REPOSITORIES
from ..core.errors import ConfigurationError, ErrorContext

SECTION = "android_build"


class ConfiguratorConfig:
    """
    Utility class for loading configurator options from files.

    Supports JSON, YAML, INI and TOML. Settings live either at the top level
    or in an ``android_build`` section/table (required for INI).
    """

    _SUPPORTED_EXTENSIONS = {
        ".json": "json",
        ".yaml": "yaml",
        ".yml": "yaml",
        ".ini": "ini",
        ".conf": "ini",
        ".toml": "toml",
    }

    _BOOL_KEYS = ("strict_flag_check", "verbose")
    _LIST_KEYS = ("subprojects", "repositories")
    _STR_KEYS = (
        "build_dir_relative",
        "properties_file",
        "flag_line",
        "evaluation_target",
    )

    @classmethod
    def load_from_file(cls, file_path: Union[Path, str]) -> ConfiguratorOptions:
        """
        Load configurator options from a file.

        Args:
            file_path: Path to the configuration file.

        Returns:
            ConfiguratorOptions: Normalised options. A relative ``root_dir`` is
            resolved against the configuration file's directory.

        Raises:
            ConfigurationError: If the file is missing, unsupported or invalid.
        """
        config_path = Path(file_path)

        if not config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                config_file=config_path,
                context=ErrorContext(operation="load_config", path=config_path),
            )

        suffix = config_path.suffix.lower()
        if suffix not in cls._SUPPORTED_EXTENSIONS:
            supported = ", ".join(cls._SUPPORTED_EXTENSIONS.keys())
            raise ConfigurationError(
                f"Cannot load {suffix} files (expected one of: {supported})",
                config_file=config_path,
            )

        try:
            content = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read {config_path}: {e}",
                config_file=config_path,
                cause=e,
            ) from e

        format_type = cls._SUPPORTED_EXTENSIONS[suffix]
        logger.debug(f"Loading {format_type.upper()} configuration from {config_path}")

        match format_type:
            case "json":
                options = cls.load_from_json(content, config_path)
            case "yaml":
                options = cls.load_from_yaml(content, config_path)
            case "ini":
                options = cls.load_from_ini(content, config_path)
            case _:
                options = cls.load_from_toml(content, config_path)

        root_dir = options.get("root_dir")
        if root_dir is not None and not root_dir.is_absolute():
            options["root_dir"] = config_path.parent / root_dir
        return options

    @classmethod
    def load_from_json(
        cls, json_str: str, source_file: Optional[Path] = None
    ) -> ConfiguratorOptions:
        """Load options from a JSON string."""
        try:
            config_data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Malformed JSON: {e}",
                config_file=source_file,
                context=ErrorContext(
                    additional_info={"line": e.lineno, "column": e.colno}
                ),
            ) from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(
                "Top level of a JSON config must be an object",
                config_file=source_file,
            )
        return cls._normalize_config(cls._section(config_data), source_file)

    @classmethod
    def load_from_yaml(
        cls, yaml_str: str, source_file: Optional[Path] = None
    ) -> ConfiguratorOptions:
        """Load options from a YAML string."""
        try:
            import yaml
        except ImportError:
            raise ConfigurationError(
                "Loading .yaml files needs the PyYAML package",
                config_file=source_file,
            )

        try:
            config_data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            error_details = {}
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                error_details.update({"line": mark.line + 1, "column": mark.column + 1})
            raise ConfigurationError(
                f"Malformed YAML: {e}",
                config_file=source_file,
                context=ErrorContext(additional_info=error_details),
            ) from e

        if config_data is None:
            config_data = {}
        elif not isinstance(config_data, dict):
            raise ConfigurationError(
                "Top level of a YAML config must be a mapping",
                config_file=source_file,
            )
        return cls._normalize_config(cls._section(config_data), source_file)

    @classmethod
    def load_from_ini(
        cls, ini_str: str, source_file: Optional[Path] = None
    ) -> ConfiguratorOptions:
        """Load options from an INI string with an [android_build] section."""
        parser = configparser.ConfigParser()
        try:
            parser.read_string(ini_str)
        except configparser.Error as e:
            raise ConfigurationError(
                f"Malformed INI: {e}", config_file=source_file
            ) from e

        if SECTION not in parser:
            raise ConfigurationError(
                f"INI configuration must contain a [{SECTION}] section",
                config_file=source_file,
            )

        config_data: Dict[str, Any] = dict(parser[SECTION])
        for key in cls._BOOL_KEYS:
            if key in config_data:
                try:
                    config_data[key] = parser.getboolean(SECTION, key)
                except ValueError as e:
                    raise ConfigurationError(
                        f"[{SECTION}] {key}: {e}",
                        config_file=source_file,
                        invalid_option=key,
                    ) from e

        return cls._normalize_config(config_data, source_file)

    @classmethod
    def load_from_toml(
        cls, toml_str: str, source_file: Optional[Path] = None
    ) -> ConfiguratorOptions:
        """Load options from a TOML string."""
        try:
            import tomllib
        except ImportError:
            try:
                import tomli as tomllib
            except ImportError:
                raise ConfigurationError(
                    "Loading .toml files needs Python 3.11+ or the tomli package",
                    config_file=source_file,
                )

        try:
            config_data = tomllib.loads(toml_str)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f"Malformed TOML: {e}", config_file=source_file
            ) from e

        return cls._normalize_config(cls._section(config_data), source_file)

    @staticmethod
    def _section(config_data: Dict[str, Any]) -> Dict[str, Any]:
        section = config_data.get(SECTION)
        return dict(section) if isinstance(section, dict) else dict(config_data)

    @classmethod
    def _normalize_config(
        cls, config_data: Dict[str, Any], source_file: Optional[Path] = None
    ) -> ConfiguratorOptions:
        """Normalise and type-check configuration data."""
        known = set(ConfiguratorOptions.__annotations__)
        unknown = sorted(set(config_data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        options: Dict[str, Any] = {}

        if config_data.get("root_dir") is not None:
            options["root_dir"] = Path(config_data["root_dir"])

        for key in cls._LIST_KEYS:
            if key in config_data and config_data[key] is not None:
                options[key] = cls._as_list(config_data[key], key, source_file)

        for key in cls._STR_KEYS:
            if key in config_data and config_data[key] is not None:
                if not isinstance(config_data[key], str):
                    raise ConfigurationError(
                        f"Option {key} must be a string",
                        config_file=source_file,
                        invalid_option=key,
                    )
                options[key] = config_data[key]

        for key in cls._BOOL_KEYS:
            if key in config_data and config_data[key] is not None:
                if not isinstance(config_data[key], bool):
                    raise ConfigurationError(
                        f"Option {key} must be a boolean",
                        config_file=source_file,
                        invalid_option=key,
                    )
                options[key] = config_data[key]

        unknown_repos = [
            name
            for name in options.get("repositories", [])
            if name not in KNOWN_REPOSITORIES
        ]
        if unknown_repos:
            raise ConfigurationError(
                f"Unknown repositories: {', '.join(unknown_repos)}",
                config_file=source_file,
                invalid_option="repositories",
            )

        return ConfiguratorOptions(**options)

    @staticmethod
    def _as_list(value: Any, key: str, source_file: Optional[Path]) -> List[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return list(value)
        raise ConfigurationError(
            f"Option {key} must be a list of strings",
            config_file=source_file,
            invalid_option=key,
        )

    @classmethod
    def get_default_config_files(cls, directory: Path) -> List[Path]:
        """Existing android_build.* files in directory, JSON first."""
        return [
            directory / f"{SECTION}{ext}"
            for ext in cls._SUPPORTED_EXTENSIONS
            if (directory / f"{SECTION}{ext}").is_file()
        ]

    @classmethod
    def auto_discover_config(
        cls, start_directory: Union[Path, str]
    ) -> Optional[ConfiguratorOptions]:
        """
        Find and load an ``android_build.*`` file in start_directory or its parents.

        Returns:
            ConfiguratorOptions if a file was found, None otherwise
        """
        search_dir = Path(start_directory).resolve()

        for directory in [search_dir] + list(search_dir.parents):
            config_files = cls.get_default_config_files(directory)
            if config_files:
                logger.info(f"Using configuration {config_files[0]}")
                return cls.load_from_file(config_files[0])

        logger.debug(f"No {SECTION}.* file above {search_dir}")
        return None

    @classmethod
    def merge_configs(cls, *configs: Optional[ConfiguratorOptions]) -> ConfiguratorOptions:
        """Merge option sets; later ones take precedence, None values are skipped."""
        merged: Dict[str, Any] = {}
        for config in configs:
            if not config:
                continue
            merged.update({key: value for key, value in config.items() if value is not None})
        return ConfiguratorOptions(**merged)

    @classmethod
    def validate_config(cls, config: ConfiguratorOptions) -> List[str]:
        """
        Validate options and return a list of warnings.

        Args:
            config: Options to validate

        Returns:
            List of validation warning messages
        """
        warnings = []

        root_dir = config.get("root_dir", Path("."))
        if not Path(root_dir).is_dir():
            warnings.append(f"Root project directory does not exist: {root_dir}")

        subprojects = config.get("subprojects") or []
        if not subprojects:
            warnings.append("No subprojects configured")

        target = config.get("evaluation_target", DEFAULT_EVALUATION_TARGET)
        if subprojects and target not in subprojects:
            warnings.append(
                f"Evaluation target '{target}' is not one of the subprojects"
            )

        return warnings
