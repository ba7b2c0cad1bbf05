#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Evaluation-order constraints between subprojects.
"""

from __future__ import annotations

from typing import Dict, List, Set

from loguru import logger

from .errors import ErrorContext, EvaluationOrderError


class EvaluationGraph:
    """
    Directed graph of "must be evaluated before" edges between subprojects.

    Projects are kept in the order they were added; evaluation_order() is a
    topological sort that falls back to that order between unrelated projects.
    """

    def __init__(self) -> None:
        self._projects: List[str] = []
        self._depends_on: Dict[str, List[str]] = {}

    @property
    def projects(self) -> List[str]:
        return list(self._projects)

    def add_project(self, name: str) -> None:
        if name not in self._depends_on:
            self._projects.append(name)
            self._depends_on[name] = []

    def declare_dependency(self, project: str, target: str) -> None:
        """Record that target must be evaluated before project."""
        self.add_project(project)
        if project == target:
            logger.debug(f"Skipping self-dependency of '{project}'")
            return
        if target not in self._depends_on[project]:
            self._depends_on[project].append(target)
            logger.debug(f"'{project}' evaluation depends on '{target}'")

    def dependencies(self, project: str) -> List[str]:
        return list(self._depends_on.get(project, []))

    def evaluation_order(self) -> List[str]:
        """
        Compute the order in which projects are evaluated.

        Raises:
            EvaluationOrderError: If an edge targets an unknown project or
                the edges form a cycle.
        """
        for project, targets in self._depends_on.items():
            for target in targets:
                if target not in self._depends_on:
                    raise EvaluationOrderError(
                        f"Project '{project}' depends on unknown project '{target}'",
                        context=ErrorContext(
                            operation="evaluation_order", project=project
                        ),
                    )

        order: List[str] = []
        done: Set[str] = set()
        remaining = list(self._projects)

        while remaining:
            ready = [
                name
                for name in remaining
                if all(dep in done for dep in self._depends_on[name])
            ]
            if not ready:
                raise EvaluationOrderError(
                    f"Circular evaluation dependency between: {', '.join(remaining)}",
                    cycle=list(remaining),
                    context=ErrorContext(operation="evaluation_order"),
                )
            # One per round; ties resolve to declaration order
            name = ready[0]
            order.append(name)
            done.add(name)
            remaining.remove(name)

        return order
