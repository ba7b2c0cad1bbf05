#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Build-output directory redirection.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from loguru import logger

from .errors import ConfigurationError, ErrorContext
from .models import DEFAULT_BUILD_DIR_NAME, DEFAULT_BUILD_DIR_RELATIVE

# Characters Gradle rejects in project names
FORBIDDEN_NAME_CHARS = frozenset('/\\:<>"?*|')


def redirect_root_output(
    root_path: Union[Path, str],
    relative: str = DEFAULT_BUILD_DIR_RELATIVE,
    build_dir_name: str = DEFAULT_BUILD_DIR_NAME,
) -> Path:
    """
    Compute the redirected build directory of the root project.

    The relative segment is resolved against the root project's default
    build directory (``<root>/build``), so the default ``../../build`` lands
    on a ``build`` directory next to the root project. Normalisation is
    lexical; symlinks are not followed.

    Args:
        root_path: Root project directory.
        relative: Path segment applied to the default build directory.
        build_dir_name: Name of the default build directory.

    Returns:
        Path: The redirected root output directory.
    """
    root = Path(os.path.abspath(root_path))
    redirected = Path(os.path.normpath(root / build_dir_name / relative))
    logger.debug(f"Root build output redirected: {root} -> {redirected}")
    return redirected


def validate_project_name(name: str) -> None:
    """Raise ConfigurationError unless name is usable as one path segment."""
    if not name or name in (".", ".."):
        raise ConfigurationError(
            f"Invalid project name: {name!r}",
            invalid_option="subprojects",
            context=ErrorContext(operation="redirect_subproject_output", project=name),
        )

    bad = sorted(set(name) & FORBIDDEN_NAME_CHARS)
    if bad:
        raise ConfigurationError(
            f"Project name {name!r} contains forbidden characters: {''.join(bad)}",
            invalid_option="subprojects",
            context=ErrorContext(operation="redirect_subproject_output", project=name),
        )


def redirect_subproject_output(name: str, redirected_root: Union[Path, str]) -> Path:
    """Return the output directory of a subproject: a direct child of the root output."""
    validate_project_name(name)
    output = Path(redirected_root) / name
    logger.debug(f"Subproject '{name}' build output: {output}")
    return output
