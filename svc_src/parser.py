#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line parsing for the service manager.

Service selectors are order sensitive (``--postgres --n8n`` starts postgres
first), so tokens are consumed left to right by hand instead of being
declared as independent options.
"""

import re
from typing import Optional, Sequence

from .models import (
    PRIMARY_SERVICES,
    Action,
    ExecutionOptions,
    Invocation,
    ServiceName,
)

SERVICE_FLAGS: dict[str, ServiceName] = {
    "--traefik": ServiceName.TRAEFIK,
    "--postgres": ServiceName.POSTGRES,
    "--n8n": ServiceName.N8N,
    # DBeaver ships inside the postgres compose project
    "--dbeaver": ServiceName.POSTGRES,
}

ACTIONS: dict[str, Action] = {action.value: action for action in Action}

_SCALE_PATTERN = re.compile(r"[0-9]+")


class HelpRequested(Exception):
    """Raised when --help is seen"""


class UsageError(Exception):
    """Invalid command line input"""

    def __init__(self, message: str, show_usage: bool = False):
        super().__init__(message)
        self.message = message
        self.show_usage = show_usage


def parse_scale(value: Optional[str]) -> int:
    """Validate a --scale value as a non-negative integer literal"""
    if value is None or not _SCALE_PATTERN.fullmatch(value):
        raise UsageError("Scale value must be a number")
    return int(value)


def parse_args(argv: Sequence[str]) -> Invocation:
    """Parse command line tokens into an Invocation.

    Raises:
        HelpRequested: ``--help`` was given; nothing after it is examined.
        UsageError: unknown token, bad ``--scale`` value or no services.
    """
    services: list[ServiceName] = []
    action = Action.UP
    detached = True
    scale_workers: Optional[int] = None

    tokens = list(argv)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token in SERVICE_FLAGS:
            services.append(SERVICE_FLAGS[token])
        elif token == "--all":
            services = list(PRIMARY_SERVICES)
        elif token == "--scale":
            value = tokens[index] if index < len(tokens) else None
            scale_workers = parse_scale(value)
            index += 1
        elif token == "--foreground":
            detached = False
        elif token == "--help":
            raise HelpRequested()
        elif token in ACTIONS:
            action = ACTIONS[token]
        else:
            raise UsageError(f"Unknown option: {token}", show_usage=True)

    if not services:
        raise UsageError("No services specified!", show_usage=True)

    return Invocation(
        action=action,
        services=tuple(services),
        options=ExecutionOptions(detached=detached, scale_workers=scale_workers),
    )
