#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception hierarchy for the Android build configurator with error context.
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Any, Dict, Optional, Union
from dataclasses import dataclass, field, replace

from loguru import logger


@dataclass(frozen=True)
class ErrorContext:
    """Context information for configuration errors."""

    operation: Optional[str] = None
    path: Optional[Path] = None
    project: Optional[str] = None
    additional_info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for structured logging."""
        return {
            "operation": self.operation,
            "path": str(self.path) if self.path else None,
            "project": self.project,
            "additional_info": self.additional_info,
        }


class AndroidBuildError(Exception):
    """
    Base exception class for configuration pass failures.

    Every error raised while configuring a project carries an ErrorContext
    naming the operation, the filesystem path and the project involved.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.cause = cause
        self.traceback_str = traceback.format_exc() if cause else None

        logger.bind(
            error_context=self.context.to_dict(),
            original_cause=str(cause) if cause else None,
        ).error(f"{self.__class__.__name__}: {message}")

    def __str__(self) -> str:
        """String representation with context."""
        base_msg = super().__str__()

        if self.context.operation:
            base_msg += f"\nOperation: {self.context.operation}"

        if self.context.path:
            base_msg += f"\nPath: {self.context.path}"

        if self.cause:
            base_msg += f"\nCaused by: {self.cause}"

        return base_msg


def _with_info(kwargs: Dict[str, Any], **info: Any) -> Dict[str, Any]:
    """Fold keyword details into the context's additional_info."""
    context = kwargs.get("context") or ErrorContext()
    kwargs["context"] = replace(
        context,
        additional_info={
            **context.additional_info,
            **{key: value for key, value in info.items() if value is not None},
        },
    )
    return kwargs


class ConfigurationError(AndroidBuildError):
    """Exception raised for invalid configuration values or call order."""

    def __init__(
        self,
        message: str,
        *,
        config_file: Optional[Union[str, Path]] = None,
        invalid_option: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            **_with_info(
                kwargs,
                config_file=str(config_file) if config_file else None,
                invalid_option=invalid_option,
            ),
        )


class PropertiesFileError(AndroidBuildError):
    """Exception raised when the properties file cannot be read or written."""

    def __init__(
        self,
        message: str,
        *,
        properties_file: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            **_with_info(
                kwargs,
                properties_file=str(properties_file) if properties_file else None,
            ),
        )


class EvaluationOrderError(AndroidBuildError):
    """Exception raised for unknown dependency targets or dependency cycles."""

    def __init__(
        self,
        message: str,
        *,
        cycle: Optional[list] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **_with_info(kwargs, cycle=cycle))


class CleanError(AndroidBuildError):
    """Exception raised when the output directory cannot be deleted."""

    def __init__(
        self,
        message: str,
        *,
        output_dir: Optional[Union[str, Path]] = None,
        permission_error: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            **_with_info(
                kwargs,
                output_dir=str(output_dir) if output_dir else None,
                permission_error=permission_error,
            ),
        )


class TaskNotFoundError(AndroidBuildError):
    """Exception raised when running a task that was never registered."""

    def __init__(self, task_name: str, **kwargs: Any) -> None:
        self.task_name = task_name
        super().__init__(
            f"Task not found: {task_name}", **_with_info(kwargs, task=task_name)
        )


def handle_fs_error(
    operation: str,
    error: Exception,
    *,
    path: Optional[Path] = None,
    project: Optional[str] = None,
) -> AndroidBuildError:
    """
    Convert filesystem exceptions to AndroidBuildError with context.

    Args:
        operation: Name of the operation where the error occurred
        error: The original exception
        path: Filesystem path being touched
        project: Project being configured, if any

    Returns:
        AndroidBuildError subclass matching the operation
    """
    if isinstance(error, AndroidBuildError):
        return error

    message = f"Error in {operation}: {error}"
    context = ErrorContext(operation=operation, path=path, project=project)

    match operation:
        case "ensure_override_flag":
            return PropertiesFileError(
                message, context=context, cause=error, properties_file=path
            )
        case "clean":
            return CleanError(
                message,
                context=context,
                cause=error,
                output_dir=path,
                permission_error=isinstance(error, PermissionError),
            )
        case _:
            return AndroidBuildError(message, context=context, cause=error)
