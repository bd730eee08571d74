#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Compose command construction and execution.
"""

import subprocess
from typing import Sequence

from rich.text import Text

from . import console as log
from .models import Action, ExecutionOptions, ServiceName, Settings
from .services import find_directory

console = log.console

# Compose subcommand for each action; "up" gets -d appended when detached
ACTION_SUBCOMMANDS: dict[Action, list[str]] = {
    Action.UP: ["up"],
    Action.DOWN: ["down"],
    Action.RESTART: ["restart"],
    Action.STOP: ["stop"],
    Action.START: ["start"],
    Action.LOGS: ["logs", "-f"],
    Action.STATUS: ["ps"],
    Action.PULL: ["pull"],
}


def build_compose_args(
    action: Action, detached: bool = True, extra_args: Sequence[str] = ()
) -> list[str]:
    """Translate an action into compose arguments"""
    if action not in ACTION_SUBCOMMANDS:
        raise ValueError(f"Unknown action: {getattr(action, 'value', action)}")

    args = list(ACTION_SUBCOMMANDS[action])
    if action is Action.UP and detached:
        args.append("-d")
    args.extend(extra_args)
    return args


class ComposeInvoker:
    """Runs compose commands inside service directories"""

    def __init__(self, settings: Settings, options: ExecutionOptions):
        self.settings = settings
        self.options = options

    def command_for(
        self, action: Action, extra_args: Sequence[str] = ()
    ) -> list[str]:
        """Full argv for an action"""
        return self.settings.compose_command + build_compose_args(
            action, self.options.detached, extra_args
        )

    def run(
        self,
        service: ServiceName,
        action: Action,
        extra_args: Sequence[str] = (),
        quiet: bool = False,
    ) -> bool:
        """Run a compose action for one service.

        Returns False when the directory is missing, the action is unknown
        or compose exits non-zero. A missing compose executable raises
        FileNotFoundError.
        """
        directory = find_directory(self.settings, service, quiet=quiet)
        if directory is None:
            return False

        try:
            cmd = self.command_for(action, extra_args)
        except ValueError as e:
            log.error(str(e))
            return False

        if not quiet:
            log.info(f"Running {action.value} for {directory.name}...")
            console.print(Text(f"Running: {' '.join(cmd)}", style="dim"))

        try:
            result = subprocess.run(cmd, cwd=directory)
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            raise

        if result.returncode != 0:
            log.error(
                f"{action.value} failed for {service.value} "
                f"(exit {result.returncode})"
            )
            return False
        return True
