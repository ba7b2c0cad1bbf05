#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data models for the Android build configurator.
"""

from __future__ import annotations

from enum import Enum, auto
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypedDict

from loguru import logger

DEFAULT_FLAG_LINE = "android.overridePathCheck=true"
DEFAULT_PROPERTIES_FILE = "gradle.properties"
DEFAULT_BUILD_DIR_NAME = "build"
DEFAULT_BUILD_DIR_RELATIVE = "../../build"
DEFAULT_EVALUATION_TARGET = "app"
CLEAN_TASK_NAME = "clean"


class ConfigStatus(Enum):
    """Enumeration of configuration pass status values."""

    NOT_STARTED = auto()
    CONFIGURING = auto()
    CONFIGURED = auto()
    CLEANING = auto()
    COMPLETED = auto()
    FAILED = auto()


@dataclass(frozen=True)
class Repository:
    """An artifact repository declared for every project."""

    name: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "url": self.url}


GOOGLE = Repository("google", "https://dl.google.com/dl/android/maven2/")
MAVEN_CENTRAL = Repository("mavenCentral", "https://repo.maven.apache.org/maven2/")

KNOWN_REPOSITORIES: Dict[str, Repository] = {
    GOOGLE.name: GOOGLE,
    MAVEN_CENTRAL.name: MAVEN_CENTRAL,
}

DEFAULT_REPOSITORIES = (GOOGLE, MAVEN_CENTRAL)


@dataclass
class ProjectSpec:
    """A root project or subproject taking part in the configuration pass."""

    name: str
    project_dir: Path
    repositories: List[Repository] = field(default_factory=list)
    build_dir: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "project_dir": str(self.project_dir),
            "repositories": [repo.name for repo in self.repositories],
            "build_dir": str(self.build_dir) if self.build_dir else None,
        }


@dataclass
class TaskResult:
    """Data class to store the outcome of a registered task."""

    success: bool
    output: str
    error: str = ""
    exit_code: int = 0
    execution_time: float = 0.0

    @property
    def failed(self) -> bool:
        """Convenience property to check if the task failed."""
        return not self.success

    def log_result(self, task_name: str) -> None:
        """Log the result with its timing."""
        if self.success:
            logger.success(
                f"Task '{task_name}' finished in {self.execution_time:.3f}s"
            )
        else:
            logger.error(
                f"Task '{task_name}' failed (exit code {self.exit_code}): {self.error}"
            )


@dataclass
class Task:
    """A named zero-argument action exposed to the build host."""

    name: str
    action: Callable[[], TaskResult]
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description}


@dataclass
class BuildConfiguration:
    """
    Explicit configuration state threaded through one configuration pass.

    Holds what the pass computes: the root project and its subprojects with
    their redirected build directories, the shared properties file, the
    evaluation order and the names of the registered tasks.
    """

    root: ProjectSpec
    properties_file: Path
    subprojects: Dict[str, ProjectSpec] = field(default_factory=dict)
    evaluation_order: List[str] = field(default_factory=list)
    tasks: List[str] = field(default_factory=list)

    @property
    def root_build_dir(self) -> Optional[Path]:
        return self.root.build_dir

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "root": self.root.to_dict(),
            "properties_file": str(self.properties_file),
            "subprojects": {
                name: spec.to_dict() for name, spec in self.subprojects.items()
            },
            "evaluation_order": list(self.evaluation_order),
            "tasks": list(self.tasks),
        }


class ConfiguratorOptions(TypedDict, total=False):
    """Type definition for configurator options dictionary."""

    root_dir: Path
    subprojects: List[str]
    build_dir_relative: str
    properties_file: str
    flag_line: str
    evaluation_target: str
    repositories: List[str]
    strict_flag_check: bool
    verbose: bool


def resolve_repositories(names: List[str]) -> List[Repository]:
    """Map repository names (``google``, ``mavenCentral``) to Repository objects."""
    unknown = [name for name in names if name not in KNOWN_REPOSITORIES]
    if unknown:
        raise ValueError(
            f"Unknown repositories: {', '.join(unknown)} "
            f"(known: {', '.join(KNOWN_REPOSITORIES)})"
        )
    return [KNOWN_REPOSITORIES[name] for name in names]
