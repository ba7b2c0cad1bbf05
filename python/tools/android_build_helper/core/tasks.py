#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Named tasks exposed to the build host, including the clean task.
"""

from __future__ import annotations

import functools
import shutil
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar, Union

from loguru import logger

from .errors import ConfigurationError, ErrorContext, TaskNotFoundError, handle_fs_error
from .models import CLEAN_TASK_NAME, Task, TaskResult

F = TypeVar("F", bound=Callable[[], TaskResult])


class TaskRegistry:
    """Registry of named zero-argument actions."""

    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def names(self) -> List[str]:
        return list(self._tasks)

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise TaskNotFoundError(name) from None

    def register(
        self, name: str, action: Callable[[], TaskResult], description: str = ""
    ) -> Task:
        """
        Register an action under a unique name.

        Raises:
            ConfigurationError: If a task with that name already exists.
        """
        if name in self._tasks:
            raise ConfigurationError(
                f"Task already registered: {name}",
                context=ErrorContext(operation="register_task"),
            )
        task = Task(name=name, action=action, description=description)
        self._tasks[name] = task
        logger.debug(f"Registered task '{name}'")
        return task

    def task(self, name: Optional[str] = None, description: str = "") -> Callable[[F], F]:
        """
        Decorator registering a function as a task.

        Usage:
            registry = TaskRegistry()

            @registry.task(description="Print the layout")
            def show() -> TaskResult:
                ...
        """

        def decorator(func: F) -> F:
            @functools.wraps(func)
            def wrapper() -> TaskResult:
                return func()

            doc = (func.__doc__ or "").strip().split("\n")[0]
            self.register(name or func.__name__, wrapper, description or doc)
            return wrapper  # type: ignore[return-value]

        return decorator

    def run(self, name: str) -> TaskResult:
        """
        Run a registered task, timing it.

        Errors raised by the action propagate unchanged.
        """
        task = self.get(name)
        logger.info(f"Running task '{name}'")
        start_time = time.time()
        result = task.action()
        result.execution_time = time.time() - start_time
        result.log_result(name)
        return result


def delete_output_dir(output_dir: Union[Path, str]) -> TaskResult:
    """
    Recursively delete a build output directory.

    A missing directory is not an error. Any other filesystem failure is
    raised as CleanError.
    """
    path = Path(output_dir)

    if not path.exists() and not path.is_symlink():
        logger.debug(f"Nothing to clean: {path} does not exist")
        return TaskResult(success=True, output=f"Nothing to clean: {path}")

    logger.info(f"Deleting build output directory: {path}")
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        # Removed concurrently; the end state is the same
        pass
    except OSError as e:
        raise handle_fs_error("clean", e, path=path) from e

    return TaskResult(success=True, output=f"Deleted build output directory: {path}")


def register_clean_task(registry: TaskRegistry, output_dir: Union[Path, str]) -> Task:
    """Register the clean task deleting output_dir."""
    path = Path(output_dir)
    return registry.register(
        CLEAN_TASK_NAME,
        functools.partial(delete_output_dir, path),
        f"Deletes the build output directory {path}",
    )
