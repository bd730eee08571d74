#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Service directory resolution.
"""

from pathlib import Path
from typing import Optional

from . import console as log
from .models import ServiceName, Settings


def resolve_directory(settings: Settings, service: ServiceName) -> Path:
    """Map a service to its compose directory (not checked for existence)"""
    name = settings.directories.get(service, service.value)
    return settings.root_dir / name


def find_directory(
    settings: Settings, service: ServiceName, quiet: bool = False
) -> Optional[Path]:
    """Return the service directory if it exists right now, else None"""
    directory = resolve_directory(settings, service)
    if not directory.is_dir():
        if not quiet:
            log.error(f"Directory {directory} does not exist!")
        return None
    return directory
