#!/usr/bin/env python3
"""
Tests for the gradle.properties flag maintenance.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from android_build_helper.core.errors import PropertiesFileError
from android_build_helper.core.properties import contains_flag, ensure_override_flag


def test_creates_missing_file_with_exact_content(properties_file: Path, flag_line: str):
    assert not properties_file.exists()

    ensure_override_flag(properties_file)

    assert properties_file.read_bytes() == flag_line.encode("utf-8")


def test_appends_after_unrelated_content(properties_file: Path):
    properties_file.write_text("foo=bar", encoding="utf-8")

    ensure_override_flag(properties_file)

    assert properties_file.read_bytes() == b"foo=bar\nandroid.overridePathCheck=true"


def test_appends_newline_even_when_file_ends_with_one(properties_file: Path):
    properties_file.write_text("foo=bar\n", encoding="utf-8")

    ensure_override_flag(properties_file)

    assert properties_file.read_bytes() == b"foo=bar\n\nandroid.overridePathCheck=true"


def test_existing_flag_leaves_file_unchanged(properties_file: Path):
    original = b"org.gradle.jvmargs=-Xmx4g\r\nandroid.overridePathCheck=true\r\nx=1"
    properties_file.write_bytes(original)
    mtime = properties_file.stat().st_mtime_ns

    ensure_override_flag(properties_file)

    assert properties_file.read_bytes() == original
    assert properties_file.stat().st_mtime_ns == mtime


def test_idempotent(properties_file: Path):
    properties_file.write_text("a=1\nb=2", encoding="utf-8")

    ensure_override_flag(properties_file)
    first = properties_file.read_bytes()
    ensure_override_flag(properties_file)

    assert properties_file.read_bytes() == first


def test_idempotent_from_missing_file(properties_file: Path):
    ensure_override_flag(properties_file)
    first = properties_file.read_bytes()
    ensure_override_flag(properties_file)

    assert properties_file.read_bytes() == first


def test_substring_match_inside_comment_counts(properties_file: Path):
    original = "# xandroid.overridePathCheck=truex\n"
    properties_file.write_text(original, encoding="utf-8")

    ensure_override_flag(properties_file)

    assert properties_file.read_text(encoding="utf-8") == original


def test_strict_check_requires_whole_line(properties_file: Path):
    properties_file.write_text("# xandroid.overridePathCheck=truex", encoding="utf-8")

    ensure_override_flag(properties_file, strict=True)

    assert properties_file.read_text(encoding="utf-8") == (
        "# xandroid.overridePathCheck=truex\nandroid.overridePathCheck=true"
    )


def test_different_casing_is_not_a_match(properties_file: Path):
    properties_file.write_text("android.overridePathCheck=TRUE", encoding="utf-8")

    ensure_override_flag(properties_file)

    assert properties_file.read_text(encoding="utf-8") == (
        "android.overridePathCheck=TRUE\nandroid.overridePathCheck=true"
    )


def test_custom_flag_line(properties_file: Path):
    ensure_override_flag(properties_file, flag_line="android.useAndroidX=true")

    assert properties_file.read_text(encoding="utf-8") == "android.useAndroidX=true"


@pytest.mark.parametrize(
    "text,strict,expected",
    [
        ("android.overridePathCheck=true", False, True),
        ("android.overridePathCheck=true", True, True),
        ("  android.overridePathCheck=true  \nfoo=bar", True, True),
        ("xandroid.overridePathCheck=true", False, True),
        ("xandroid.overridePathCheck=true", True, False),
        ("android.overridePathCheck=false", False, False),
        ("", False, False),
    ],
)
def test_contains_flag(text: str, strict: bool, expected: bool):
    assert contains_flag(text, strict=strict) is expected


def test_missing_parent_directory_is_fatal(tmp_path: Path):
    target = tmp_path / "missing" / "gradle.properties"

    with pytest.raises(PropertiesFileError) as excinfo:
        ensure_override_flag(target)

    assert isinstance(excinfo.value.cause, FileNotFoundError)
    assert excinfo.value.context.path == target


def test_write_failure_is_fatal(properties_file: Path):
    properties_file.write_text("foo=bar", encoding="utf-8")

    with patch.object(Path, "open", side_effect=PermissionError("denied")):
        with pytest.raises(PropertiesFileError) as excinfo:
            ensure_override_flag(properties_file)

    assert excinfo.value.context.operation == "ensure_override_flag"
    assert properties_file.read_text(encoding="utf-8") == "foo=bar"


def test_latin1_content_gets_flag_appended(properties_file: Path):
    properties_file.write_bytes(b"# caf\xe9\nfoo=bar")

    ensure_override_flag(properties_file)

    assert properties_file.read_bytes() == b"# caf\xe9\nfoo=bar\nandroid.overridePathCheck=true"


def test_latin1_content_with_flag_is_unchanged(properties_file: Path):
    original = b"# caf\xe9\nandroid.overridePathCheck=true"
    properties_file.write_bytes(original)

    ensure_override_flag(properties_file)

    assert properties_file.read_bytes() == original
