#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI entry point for the service manager.
"""

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from typer.core import TyperCommand

from . import console as log
from .aggregate import INTERRUPTED_EXIT_CODE
from .manager import ServiceManager
from .models import load_settings
from .parser import HelpRequested, UsageError, parse_args

console = log.console
app = typer.Typer(
    name=log.PROGRAM_NAME,
    help="Service manager for Docker Compose service groups",
    add_completion=False,
)


class RawArgsCommand(TyperCommand):
    """Command that hands every token, including "--", to parse_args"""

    def parse_args(self, ctx, args):
        ctx.args = list(args)
        return []


# ============================================================================
# CLI Commands
# ============================================================================


@app.command(cls=RawArgsCommand, context_settings={"help_option_names": []})
def manage(ctx: typer.Context):
    """Run an action (default: up) for the selected services"""
    try:
        invocation = parse_args(ctx.args)
    except HelpRequested:
        log.show_help()
        raise typer.Exit(0)
    except UsageError as e:
        log.error(e.message)
        if e.show_usage:
            console.print()
            log.show_help()
        raise typer.Exit(1)

    try:
        settings = load_settings(Path.cwd())
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        log.error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    if invocation.options.scale_workers is not None:
        log.warning(
            f"--scale {invocation.options.scale_workers} is accepted "
            "but not applied to any action"
        )

    manager = ServiceManager(settings, invocation.options)
    try:
        failed = manager.dispatch(invocation.action, invocation.services)
    except FileNotFoundError as e:
        log.error(f"Command not found: {e.filename or e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        raise typer.Exit(INTERRUPTED_EXIT_CODE)

    if failed:
        names = ", ".join(service.value for service in failed)
        log.warning(f"Some services reported errors: {names}")

    log.info("Operation completed successfully!")


def main():
    """Main entry point"""
    app()
