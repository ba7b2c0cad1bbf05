#!/usr/bin/env python3
"""
Tests for subproject discovery from settings scripts.
"""

from pathlib import Path

from android_build_helper.utils.settings import (
    discover_subprojects,
    find_settings_file,
    parse_includes,
    project_name_from_path,
)


def test_kotlin_dsl_includes():
    text = 'rootProject.name = "demo"\ninclude(":app")\ninclude(":core", ":feature:login")\n'

    assert parse_includes(text) == ["app", "core", "login"]


def test_groovy_includes():
    text = "include ':app', ':data'\ninclude \":ui\"\n"

    assert parse_includes(text) == ["app", "data", "ui"]


def test_multiline_include():
    text = 'include(\n    ":app",\n    ":lib",\n)\n'

    assert parse_includes(text) == ["app", "lib"]


def test_groovy_multiline_include():
    text = "include ':app',\n        ':lib',\n        ':feature:login'\ninclude ':extra'\n"

    assert parse_includes(text) == ["app", "lib", "login", "extra"]


def test_groovy_include_stops_without_trailing_comma():
    text = "include ':app'\nrootProject.name = 'demo'\n"

    assert parse_includes(text) == ["app"]


def test_comments_and_include_build_are_ignored():
    text = (
        '// include(":old")\n'
        '/* include(":legacy") */\n'
        'includeBuild("../plugins")\n'
        'include(":app") // main\n'
    )

    assert parse_includes(text) == ["app"]


def test_duplicates_collapse():
    assert parse_includes('include(":app")\ninclude(":app")\n') == ["app"]


def test_project_name_from_path():
    assert project_name_from_path(":feature:login") == "login"
    assert project_name_from_path("app") == "app"


def test_kotlin_settings_preferred(tmp_path: Path):
    (tmp_path / "settings.gradle").write_text("include ':groovy'", encoding="utf-8")
    (tmp_path / "settings.gradle.kts").write_text('include(":kotlin")', encoding="utf-8")

    assert find_settings_file(tmp_path) == tmp_path / "settings.gradle.kts"
    assert discover_subprojects(tmp_path) == ["kotlin"]


def test_no_settings_file(tmp_path: Path):
    assert find_settings_file(tmp_path) is None
    assert discover_subprojects(tmp_path) == []
