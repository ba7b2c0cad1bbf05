#!/usr/bin/env python3
"""
Shared fixtures for the android_build_helper tests.
"""

import sys
from pathlib import Path

import pytest

# Add the tools directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "python" / "tools"))

from android_build_helper.core.models import DEFAULT_FLAG_LINE  # noqa: E402


@pytest.fixture
def flag_line() -> str:
    return DEFAULT_FLAG_LINE


@pytest.fixture
def android_root(tmp_path: Path) -> Path:
    """An Android root project two levels below tmp_path (tmp/<repo>/android)."""
    root = tmp_path / "repo" / "android"
    root.mkdir(parents=True)
    (root / "settings.gradle.kts").write_text(
        'pluginManagement { }\ninclude(":app")\n', encoding="utf-8"
    )
    return root


@pytest.fixture
def properties_file(android_root: Path) -> Path:
    return android_root / "gradle.properties"
