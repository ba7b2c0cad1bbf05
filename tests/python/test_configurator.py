#!/usr/bin/env python3
"""
Tests for the full configuration pass.
"""

from pathlib import Path

import pytest

from android_build_helper.core.configurator import BuildOutputConfigurator
from android_build_helper.core.errors import ConfigurationError, EvaluationOrderError
from android_build_helper.core.models import (
    GOOGLE,
    MAVEN_CENTRAL,
    ConfigStatus,
    ConfiguratorOptions,
)


@pytest.fixture
def configurator(android_root: Path) -> BuildOutputConfigurator:
    return BuildOutputConfigurator(android_root)


def test_configure_layout(configurator: BuildOutputConfigurator, android_root: Path):
    configuration = configurator.configure(["app", "camera_plugin"])

    root_output = android_root.parent / "build"
    assert configuration.root_build_dir == root_output
    assert configuration.subprojects["app"].build_dir == root_output / "app"
    assert configuration.subprojects["camera_plugin"].build_dir == root_output / "camera_plugin"
    assert configurator.get_status() == ConfigStatus.CONFIGURED


def test_configure_writes_flag_once(
    configurator: BuildOutputConfigurator, properties_file: Path, flag_line: str
):
    configurator.configure(["app", "a", "b", "c"])

    assert properties_file.read_text(encoding="utf-8") == flag_line


def test_configure_appends_to_existing_properties(
    configurator: BuildOutputConfigurator, properties_file: Path
):
    properties_file.write_text("org.gradle.jvmargs=-Xmx4G", encoding="utf-8")

    configurator.configure(["app", "lib"])

    assert properties_file.read_text(encoding="utf-8") == (
        "org.gradle.jvmargs=-Xmx4G\nandroid.overridePathCheck=true"
    )


def test_configure_evaluation_order(configurator: BuildOutputConfigurator):
    configuration = configurator.configure(["lib", "app", "feature"])

    assert configuration.evaluation_order == ["app", "lib", "feature"]
    assert configurator.graph.dependencies("lib") == ["app"]
    assert configurator.graph.dependencies("app") == []


def test_configure_declares_repositories(configurator: BuildOutputConfigurator):
    configuration = configurator.configure(["app"])

    assert configuration.root.repositories == [GOOGLE, MAVEN_CENTRAL]
    assert configuration.subprojects["app"].repositories == [GOOGLE, MAVEN_CENTRAL]


def test_configure_registers_clean(configurator: BuildOutputConfigurator):
    configuration = configurator.configure(["app"])

    assert configuration.tasks == ["clean"]


def test_configure_twice_is_stable(
    configurator: BuildOutputConfigurator, properties_file: Path
):
    first = configurator.configure(["app"]).to_dict()
    content = properties_file.read_bytes()

    second = configurator.configure(["app"]).to_dict()

    assert first == second
    assert properties_file.read_bytes() == content


def test_missing_evaluation_target_fails(configurator: BuildOutputConfigurator):
    with pytest.raises(EvaluationOrderError):
        configurator.configure(["lib"])

    assert configurator.get_status() == ConfigStatus.FAILED


def test_no_subprojects(configurator: BuildOutputConfigurator):
    configuration = configurator.configure([])

    assert configuration.subprojects == {}
    assert configuration.evaluation_order == []


def test_subproject_before_root_is_rejected(configurator: BuildOutputConfigurator):
    with pytest.raises(ConfigurationError):
        configurator.redirect_subproject_output("app")


def test_register_clean_before_root_is_rejected(configurator: BuildOutputConfigurator):
    with pytest.raises(ConfigurationError):
        configurator.register_clean_task()


def test_dry_run_does_not_touch_filesystem(android_root: Path, properties_file: Path):
    configurator = BuildOutputConfigurator(android_root, dry_run=True)

    configuration = configurator.configure(["app"])

    assert not properties_file.exists()
    assert configuration.root_build_dir == android_root.parent / "build"


def test_clean_after_configure(configurator: BuildOutputConfigurator, android_root: Path):
    configuration = configurator.configure(["app"])
    (configuration.subprojects["app"].build_dir / "outputs").mkdir(parents=True)

    result = configurator.clean()

    assert result.success
    assert not (android_root.parent / "build").exists()
    assert android_root.exists()
    assert configurator.get_status() == ConfigStatus.COMPLETED


def test_clean_without_configure(configurator: BuildOutputConfigurator, android_root: Path):
    (android_root.parent / "build" / "app").mkdir(parents=True)

    assert configurator.clean().success
    assert not (android_root.parent / "build").exists()


def test_clean_dry_run(android_root: Path):
    output = android_root.parent / "build"
    output.mkdir()

    assert BuildOutputConfigurator(android_root, dry_run=True).clean().success
    assert output.exists()


def test_from_options(android_root: Path):
    options = ConfiguratorOptions(
        root_dir=android_root,
        build_dir_relative="../out",
        evaluation_target="core",
        repositories=["mavenCentral"],
        strict_flag_check=True,
    )

    configurator = BuildOutputConfigurator.from_options(options)
    configuration = configurator.configure(["core", "app"])

    assert configurator.strict_flag_check is True
    assert configuration.root_build_dir == android_root / "out"
    assert configuration.evaluation_order == ["core", "app"]
    assert configuration.root.repositories == [MAVEN_CENTRAL]


def test_from_options_unknown_repository(android_root: Path):
    with pytest.raises(ConfigurationError):
        BuildOutputConfigurator.from_options(
            ConfiguratorOptions(root_dir=android_root, repositories=["jcenter"])
        )


def test_custom_properties_file(android_root: Path):
    configurator = BuildOutputConfigurator(android_root, properties_file="local.properties")

    configurator.configure(["app"])

    assert (android_root / "local.properties").read_text(encoding="utf-8") == (
        "android.overridePathCheck=true"
    )
