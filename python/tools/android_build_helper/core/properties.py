#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Idempotent maintenance of the flag line in gradle.properties.

The file is treated as opaque text: only the presence of the flag line is
checked, other lines are never parsed or rewritten.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from loguru import logger

from .errors import handle_fs_error
from .models import DEFAULT_FLAG_LINE

ENCODING = "utf-8"


def contains_flag(text: str, flag_line: str = DEFAULT_FLAG_LINE, strict: bool = False) -> bool:
    """
    Check whether text already carries the flag.

    The default check is a plain substring test, so the flag also counts as
    present inside a comment or a longer value. With strict=True a line must
    equal the flag once surrounding whitespace is stripped.
    """
    if strict:
        return any(line.strip() == flag_line for line in text.splitlines())
    return flag_line in text


def ensure_override_flag(
    properties_path: Union[Path, str],
    flag_line: str = DEFAULT_FLAG_LINE,
    strict: bool = False,
) -> None:
    """
    Make sure the properties file contains the flag line.

    A missing file is created holding exactly the flag line. An existing file
    without the flag gets a newline plus the flag appended. A file that
    already has it is left untouched.

    Raises:
        PropertiesFileError: If the file cannot be read, created or appended to.
    """
    path = Path(properties_path)

    try:
        if not path.exists():
            with path.open("w", encoding=ENCODING, newline="") as handle:
                handle.write(flag_line)
            logger.info(f"Created {path} with '{flag_line}'")
            return

        with path.open("r", encoding=ENCODING, errors="replace", newline="") as handle:
            text = handle.read()

        if contains_flag(text, flag_line, strict):
            logger.debug(f"'{flag_line}' already present in {path}")
            return

        with path.open("a", encoding=ENCODING, newline="") as handle:
            handle.write("\n" + flag_line)
        logger.info(f"Appended '{flag_line}' to {path}")

    except OSError as e:
        raise handle_fs_error("ensure_override_flag", e, path=path) from e
