#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core components of the Android build configurator.
"""

from .configurator import BuildOutputConfigurator
from .evaluation import EvaluationGraph
from .models import (
    BuildConfiguration,
    ConfigStatus,
    ConfiguratorOptions,
    ProjectSpec,
    Repository,
    Task,
    TaskResult,
)
from .errors import (
    AndroidBuildError,
    ConfigurationError,
    PropertiesFileError,
    EvaluationOrderError,
    CleanError,
    TaskNotFoundError,
)
from .paths import redirect_root_output, redirect_subproject_output
from .properties import ensure_override_flag
from .tasks import TaskRegistry, register_clean_task

__all__ = [
    "BuildOutputConfigurator",
    "EvaluationGraph",
    "BuildConfiguration",
    "ConfigStatus",
    "ConfiguratorOptions",
    "ProjectSpec",
    "Repository",
    "Task",
    "TaskResult",
    "AndroidBuildError",
    "ConfigurationError",
    "PropertiesFileError",
    "EvaluationOrderError",
    "CleanError",
    "TaskNotFoundError",
    "redirect_root_output",
    "redirect_subproject_output",
    "ensure_override_flag",
    "TaskRegistry",
    "register_clean_task",
]
