#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Project-level configuration pass for an Android build.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from loguru import logger

from .errors import AndroidBuildError, ConfigurationError, ErrorContext
from .evaluation import EvaluationGraph
from .models import (
    CLEAN_TASK_NAME,
    DEFAULT_BUILD_DIR_RELATIVE,
    DEFAULT_EVALUATION_TARGET,
    DEFAULT_FLAG_LINE,
    DEFAULT_PROPERTIES_FILE,
    DEFAULT_REPOSITORIES,
    BuildConfiguration,
    ConfigStatus,
    ConfiguratorOptions,
    ProjectSpec,
    Repository,
    Task,
    TaskResult,
    resolve_repositories,
)
from .paths import redirect_root_output, redirect_subproject_output
from .properties import ensure_override_flag
from .tasks import TaskRegistry, register_clean_task


class BuildOutputConfigurator:
    """
    Runs the configuration pass of a root project and its subprojects.

    The pass redirects every build directory under a shared output directory
    next to the root project, makes sure the root project's properties file
    carries the path-check override flag, orders subproject evaluation after
    the evaluation target and registers the clean task.

    Attributes:
        root_dir: Root project directory.
        properties_file: Path of the shared properties file.
        build_dir_relative: Segment applied to the root's default build dir.
        flag_line: Line that must be present in the properties file.
        evaluation_target: Subproject every other subproject waits for.
        repositories: Repositories declared for every project.
        strict_flag_check: Require the flag as a whole line.
        dry_run: Compute the configuration without touching the filesystem.
    """

    def __init__(
        self,
        root_dir: Union[Path, str],
        *,
        properties_file: str = DEFAULT_PROPERTIES_FILE,
        build_dir_relative: str = DEFAULT_BUILD_DIR_RELATIVE,
        flag_line: str = DEFAULT_FLAG_LINE,
        evaluation_target: str = DEFAULT_EVALUATION_TARGET,
        repositories: Optional[Sequence[Repository]] = None,
        strict_flag_check: bool = False,
        dry_run: bool = False,
    ) -> None:
        self.root_dir = Path(os.path.abspath(root_dir))
        self.properties_file = self.root_dir / properties_file
        self.build_dir_relative = build_dir_relative
        self.flag_line = flag_line
        self.evaluation_target = evaluation_target
        self.repositories = list(
            DEFAULT_REPOSITORIES if repositories is None else repositories
        )
        self.strict_flag_check = strict_flag_check
        self.dry_run = dry_run

        self.status = ConfigStatus.NOT_STARTED
        self.graph = EvaluationGraph()
        self.tasks = TaskRegistry()
        self.configuration = BuildConfiguration(
            root=ProjectSpec(name=self.root_dir.name, project_dir=self.root_dir),
            properties_file=self.properties_file,
        )

        logger.debug(
            f"Initialized {self.__class__.__name__} for {self.root_dir} "
            f"(properties: {self.properties_file}, dry_run: {self.dry_run})"
        )

    @classmethod
    def from_options(
        cls, options: ConfiguratorOptions, dry_run: bool = False
    ) -> BuildOutputConfigurator:
        """Create a configurator from ConfiguratorOptions."""
        kwargs = {
            key: options[key]
            for key in (
                "properties_file",
                "build_dir_relative",
                "flag_line",
                "evaluation_target",
                "strict_flag_check",
            )
            if options.get(key) is not None
        }
        if options.get("repositories") is not None:
            try:
                kwargs["repositories"] = resolve_repositories(options["repositories"])
            except ValueError as e:
                raise ConfigurationError(str(e), invalid_option="repositories") from e

        return cls(options.get("root_dir", Path(".")), dry_run=dry_run, **kwargs)

    @property
    def root_build_dir(self) -> Optional[Path]:
        return self.configuration.root_build_dir

    def declare_repositories(self, project: ProjectSpec) -> None:
        """Declare the shared repository list on a project."""
        project.repositories = list(self.repositories)
        logger.debug(
            f"Repositories for '{project.name}': "
            f"{', '.join(repo.name for repo in project.repositories)}"
        )

    def redirect_root_output(self, root_path: Optional[Union[Path, str]] = None) -> Path:
        """Redirect the root project's build directory and return it."""
        output = redirect_root_output(
            root_path if root_path is not None else self.root_dir,
            self.build_dir_relative,
        )
        self.configuration.root.build_dir = output
        logger.info(f"Root build directory: {output}")
        return output

    def redirect_subproject_output(
        self, name: str, redirected_root: Optional[Path] = None
    ) -> Path:
        """
        Redirect a subproject's build directory below the root output.

        Raises:
            ConfigurationError: If the root output was not redirected yet or
                the name is not a valid project name.
        """
        root_output = redirected_root or self.root_build_dir
        if root_output is None:
            raise ConfigurationError(
                "Root build output must be redirected before subprojects",
                context=ErrorContext(operation="redirect_subproject_output", project=name),
            )

        output = redirect_subproject_output(name, root_output)
        project = self.configuration.subprojects.get(name)
        if project is None:
            project = ProjectSpec(name=name, project_dir=self.root_dir / name)
            self.configuration.subprojects[name] = project
        project.build_dir = output
        return output

    def ensure_override_flag(self, properties_path: Optional[Path] = None) -> None:
        """Ensure the flag line is present in the properties file."""
        path = properties_path or self.properties_file
        if self.dry_run:
            logger.info(f"[dry-run] Would ensure '{self.flag_line}' in {path}")
            return
        ensure_override_flag(path, self.flag_line, self.strict_flag_check)

    def declare_dependency(self, subproject: str, target: Optional[str] = None) -> None:
        """Declare that target is evaluated before subproject."""
        self.graph.declare_dependency(subproject, target or self.evaluation_target)

    def register_clean_task(self) -> Task:
        """
        Register the clean task for the redirected root output.

        Raises:
            ConfigurationError: If the root output was not redirected yet.
        """
        if self.root_build_dir is None:
            raise ConfigurationError(
                "Root build output must be redirected before registering clean",
                context=ErrorContext(operation="register_clean_task"),
            )
        task = register_clean_task(self.tasks, self.root_build_dir)
        self.configuration.tasks = self.tasks.names
        return task

    def configure(self, subprojects: Iterable[str]) -> BuildConfiguration:
        """
        Run the full configuration pass.

        Args:
            subprojects: Names of the subprojects to configure.

        Returns:
            BuildConfiguration: The computed configuration.
        """
        names: List[str] = list(dict.fromkeys(subprojects))
        self.status = ConfigStatus.CONFIGURING
        logger.info(
            f"Configuring {self.root_dir.name} with {len(names)} subproject(s)"
        )

        try:
            self.declare_repositories(self.configuration.root)
            root_output = self.redirect_root_output()

            for name in names:
                self.graph.add_project(name)

            for name in names:
                self.redirect_subproject_output(name, root_output)
                self.declare_repositories(self.configuration.subprojects[name])
                self.ensure_override_flag()
                self.declare_dependency(name)

            if CLEAN_TASK_NAME not in self.tasks:
                self.register_clean_task()

            self.configuration.evaluation_order = (
                self.graph.evaluation_order() if names else []
            )
        except AndroidBuildError:
            self.status = ConfigStatus.FAILED
            raise

        self.status = ConfigStatus.CONFIGURED
        logger.success(
            f"Configuration complete; evaluation order: "
            f"{' -> '.join(self.configuration.evaluation_order) or '(none)'}"
        )
        return self.configuration

    def clean(self) -> TaskResult:
        """Run the registered clean task."""
        if CLEAN_TASK_NAME not in self.tasks:
            if self.root_build_dir is None:
                self.redirect_root_output()
            self.register_clean_task()

        if self.dry_run:
            logger.info(f"[dry-run] Would delete {self.root_build_dir}")
            return TaskResult(
                success=True, output=f"[dry-run] Would delete {self.root_build_dir}"
            )

        self.status = ConfigStatus.CLEANING
        try:
            result = self.tasks.run(CLEAN_TASK_NAME)
        except AndroidBuildError:
            self.status = ConfigStatus.FAILED
            raise
        self.status = ConfigStatus.COMPLETED
        return result

    def get_status(self) -> ConfigStatus:
        """Get current configuration status."""
        return self.status
