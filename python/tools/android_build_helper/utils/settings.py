#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Subproject discovery from settings.gradle / settings.gradle.kts.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

SETTINGS_FILES = ("settings.gradle.kts", "settings.gradle")

# include(":app", ":lib") / include ':app', ':lib' (continued while a line ends with a comma)
_INCLUDE_RE = re.compile(
    r"^\s*include\b\s*"
    r"(?:\((?P<paren>[^)]*)\)|(?P<bare>[^\n]*(?:,[ \t]*\n[^\n]*)*))",
    re.MULTILINE,
)
_QUOTED_RE = re.compile(r"""["']([^"']+)["']""")
_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def find_settings_file(root_dir: Union[Path, str]) -> Optional[Path]:
    """Return the settings script of the root project, Kotlin DSL first."""
    root = Path(root_dir)
    for name in SETTINGS_FILES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def project_name_from_path(project_path: str) -> str:
    """':feature:login' -> 'login'."""
    return project_path.strip().strip(":").split(":")[-1]


def parse_includes(text: str) -> List[str]:
    """Extract subproject names from the include statements of a settings script."""
    text = _BLOCK_COMMENT_RE.sub("", text)
    text = _LINE_COMMENT_RE.sub("", text)

    names: List[str] = []
    for match in _INCLUDE_RE.finditer(text):
        args = match.group("paren") or match.group("bare") or ""
        for project_path in _QUOTED_RE.findall(args):
            name = project_name_from_path(project_path)
            if name and name not in names:
                names.append(name)
    return names


def discover_subprojects(root_dir: Union[Path, str]) -> List[str]:
    """
    List the subprojects included by the root project's settings script.

    Returns an empty list when there is no settings script.
    """
    settings = find_settings_file(root_dir)
    if settings is None:
        logger.debug(f"No settings script found in {root_dir}")
        return []

    names = parse_includes(settings.read_text(encoding="utf-8"))
    logger.debug(f"Discovered subprojects in {settings}: {names}")
    return names
