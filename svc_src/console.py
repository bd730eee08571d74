#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Console output helpers shared by all commands.
"""

from rich.console import Console
from rich.text import Text

# Rich Console for beautiful output
console = Console(highlight=False, soft_wrap=True)

PROGRAM_NAME = "svc"


def info(message: str) -> None:
    """Print an informational message"""
    console.print(Text.assemble(("[INFO]", "green"), " ", message))


def warning(message: str) -> None:
    """Print a warning message"""
    console.print(Text.assemble(("[WARNING]", "yellow"), " ", message))


def error(message: str) -> None:
    """Print an error message"""
    console.print(Text.assemble(("[ERROR]", "red"), " ", message))


def heading(title: str) -> None:
    console.print(Text(f"=== {title} ===", style="blue"))


def show_help() -> None:
    """Print usage information"""
    name = PROGRAM_NAME
    console.print("[blue]Service Manager for Docker Compose Services[/blue]")
    console.print()
    console.print(f"Usage: {name} [OPTIONS] [ACTION]")
    console.print()
    console.print("[yellow]Services:[/yellow]")
    console.print("  --traefik       Manage Traefik reverse proxy")
    console.print("  --postgres      Manage PostgreSQL database")
    console.print("  --n8n           Manage n8n workflow automation")
    console.print("  --dbeaver       Manage DBeaver (included with PostgreSQL)")
    console.print("  --all           Manage all services")
    console.print()
    console.print("[yellow]Actions:[/yellow]")
    console.print("  up              Start services (default)")
    console.print("  down            Stop and remove services")
    console.print("  restart         Restart services")
    console.print("  stop            Stop services")
    console.print("  start           Start existing services")
    console.print("  logs            Show logs")
    console.print("  status          Show service status")
    console.print("  pull            Pull latest images")
    console.print()
    console.print("[yellow]Options:[/yellow]")
    console.print("  --help          Show this help message")
    console.print("  --foreground    Run in foreground (don't detach)")
    console.print("  --scale N       Worker scale (accepted, currently not applied)")
    console.print()
    console.print("[yellow]Examples:[/yellow]")
    console.print(f"  {name} --traefik up            # Start Traefik")
    console.print(f"  {name} --postgres --n8n up     # Start PostgreSQL and n8n")
    console.print(f"  {name} --all down              # Stop all services")
    console.print(f"  {name} --n8n logs              # Show n8n logs")
    console.print(f"  {name} --all status            # Show status of all services")
