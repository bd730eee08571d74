#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Service group management package.
"""

from .aggregate import LogTailSupervisor, show_all_logs, show_all_status
from .commands import app, main
from .compose import ComposeInvoker, build_compose_args
from .manager import ServiceManager
from .models import (
    PRIMARY_SERVICES,
    Action,
    ExecutionOptions,
    Invocation,
    ServiceName,
    Settings,
    load_settings,
)
from .parser import HelpRequested, UsageError, parse_args

__all__ = [
    # Commands
    "app",
    "main",
    # Orchestration
    "ServiceManager",
    "ComposeInvoker",
    "build_compose_args",
    "LogTailSupervisor",
    "show_all_logs",
    "show_all_status",
    # Parsing
    "parse_args",
    "HelpRequested",
    "UsageError",
    # Models
    "PRIMARY_SERVICES",
    "Action",
    "ExecutionOptions",
    "Invocation",
    "ServiceName",
    "Settings",
    "load_settings",
]
