#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Service manager orchestrating compose operations across service groups.
"""

import subprocess
import time
from typing import Sequence

from . import console as log
from .aggregate import is_full_selection, show_all_logs, show_all_status
from .compose import ComposeInvoker
from .models import Action, ExecutionOptions, ServiceName, Settings

# ============================================================================
# Core Service Manager
# ============================================================================


class ServiceManager:
    """Runs an action over the selected services"""

    def __init__(self, settings: Settings, options: ExecutionOptions):
        self.settings = settings
        self.options = options
        self.invoker = ComposeInvoker(settings, options)

    def ensure_networks(self) -> None:
        """Create the shared networks, ignoring ones that already exist"""
        log.info("Creating Docker networks if they don't exist...")
        for network in self.settings.networks:
            try:
                subprocess.run(
                    [self.settings.docker_command, "network", "create", network],
                    capture_output=True,
                    text=True,
                )
            except FileNotFoundError:
                log.warning(
                    f"{self.settings.docker_command} not found, "
                    f"skipping network {network}"
                )

    def manage_services(
        self, action: Action, services: Sequence[ServiceName]
    ) -> list[ServiceName]:
        """Run the action for each service in order, returning failures"""
        if action is Action.UP:
            self.ensure_networks()

        stagger = action is Action.UP and len(services) > 1
        failed: list[ServiceName] = []

        for index, service in enumerate(services):
            if stagger and index > 0:
                time.sleep(self.settings.startup_delay)
            if not self.invoker.run(service, action):
                failed.append(service)

        return failed

    def dispatch(
        self, action: Action, services: Sequence[ServiceName]
    ) -> list[ServiceName]:
        """Route an action to the aggregate views or the per-service loop"""
        if action is Action.STATUS and is_full_selection(services):
            return show_all_status(self.settings, self.invoker)
        if action is Action.LOGS and len(services) > 1:
            return show_all_logs(self.settings, self.invoker, services)
        return self.manage_services(action, services)
