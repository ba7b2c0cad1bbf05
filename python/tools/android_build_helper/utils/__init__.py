#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility modules: configuration loading and subproject discovery.
"""

from __future__ import annotations

from .config import ConfiguratorConfig
from .settings import discover_subprojects, parse_includes

__all__ = [
    "ConfiguratorConfig",
    "discover_subprojects",
    "parse_includes",
]
