#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Android Build Configurator

Project-level configuration pass for Android (Gradle) builds: redirects the
root and subproject build directories next to the project, keeps the
path-check override flag in gradle.properties, orders subproject evaluation
after ``app`` and registers a clean task.
"""

from .core.configurator import BuildOutputConfigurator
from .core.evaluation import EvaluationGraph
from .core.errors import (
    AndroidBuildError, ConfigurationError, PropertiesFileError,
    EvaluationOrderError, CleanError, TaskNotFoundError
)
from .core.models import (
    BuildConfiguration, ConfigStatus, ConfiguratorOptions,
    ProjectSpec, Repository, Task, TaskResult
)
from .core.paths import redirect_root_output, redirect_subproject_output
from .core.properties import ensure_override_flag
from .core.tasks import TaskRegistry, register_clean_task
from .utils.config import ConfiguratorConfig
from .utils.settings import discover_subprojects
import sys
from loguru import logger

# Configure loguru with defaults
logger.remove()  # Remove default handler
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    colorize=True
)

# Package metadata
__version__ = "1.0.0"
__license__ = "GPL-3.0-or-later"


def get_tool_info() -> dict:
    """
    Get metadata about the android_build_helper module.

    Returns:
        dict: Module metadata including name, version, description, license,
              supported platforms, available functions and classes.
    """
    return {
        "name": "android_build_helper",
        "version": __version__,
        "description": "Configuration pass for Android builds: output redirection, gradle.properties flag, clean task",
        "license": __license__,
        "supported": True,
        "platform": ["windows", "linux", "macos"],
        "functions": [
            "redirect_root_output",
            "redirect_subproject_output",
            "ensure_override_flag",
            "declare_dependency",
            "register_clean_task",
            "configure",
            "clean",
            "get_tool_info"
        ],
        "requirements": [
            "python>=3.10",
            "loguru",
            "pyyaml",
        ],
        "classes": {
            "BuildOutputConfigurator": "Runs the configuration pass",
            "EvaluationGraph": "Evaluation-order constraints between subprojects",
            "TaskRegistry": "Named actions exposed to the build host",
            "ConfiguratorConfig": "Configuration file loading",
            "BuildConfiguration": "Result of a configuration pass",
            "ConfigStatus": "Enumeration of configuration status values",
            "TaskResult": "Data class for storing task results",
        }
    }


__all__ = [
    'BuildOutputConfigurator', 'EvaluationGraph', 'TaskRegistry',
    'BuildConfiguration', 'ConfigStatus', 'ConfiguratorOptions',
    'ProjectSpec', 'Repository', 'Task', 'TaskResult',
    'AndroidBuildError', 'ConfigurationError', 'PropertiesFileError',
    'EvaluationOrderError', 'CleanError', 'TaskNotFoundError',
    'redirect_root_output', 'redirect_subproject_output',
    'ensure_override_flag', 'register_clean_task',
    'ConfiguratorConfig', 'discover_subprojects',
    'get_tool_info',
    '__version__', '__license__'
]
