#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Aggregate status and log views across several services.
"""

import signal
import subprocess
import tempfile
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

from rich.text import Text

from . import console as log
from .compose import ComposeInvoker
from .models import PRIMARY_SERVICES, Action, ServiceName, Settings
from .services import find_directory

console = log.console

INTERRUPTED_EXIT_CODE = 130


def is_full_selection(services: Sequence[ServiceName]) -> bool:
    """True when every primary service is selected (order/duplicates ignored)"""
    return set(services) == set(PRIMARY_SERVICES)


# ============================================================================
# Status
# ============================================================================


def show_all_status(
    settings: Settings, invoker: ComposeInvoker
) -> list[ServiceName]:
    """Print compose status for each primary service that exists"""
    failed: list[ServiceName] = []

    log.heading("Service Status")
    console.print()

    for service in PRIMARY_SERVICES:
        if find_directory(settings, service, quiet=True) is None:
            continue
        console.print(Text(f"{service.label}:", style="yellow"))
        if not invoker.run(service, Action.STATUS, quiet=True):
            failed.append(service)
        console.print()

    return failed


# ============================================================================
# Logs
# ============================================================================


def _last_line(path: Path) -> str:
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return ""
    for line in reversed(lines):
        if line.strip():
            return line.strip()
    return ""


class LogTailSupervisor:
    """Runs one log-following process per service and owns their lifetime.

    Each process is drained by a worker thread that prefixes lines with the
    service name. Leaving the ``with`` block, for any reason, terminates the
    processes still running, joins the workers and removes the temporary
    directory holding each process's stderr.
    """

    def __init__(self, terminate_timeout: float = 5.0):
        self.terminate_timeout = terminate_timeout
        self._processes: list[subprocess.Popen[str]] = []
        self._futures: dict[ServiceName, Future[int]] = {}
        self._stopping = threading.Event()
        self._tmpdir: Optional[tempfile.TemporaryDirectory[str]] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self) -> "LogTailSupervisor":
        self._tmpdir = tempfile.TemporaryDirectory(prefix="svc-logs-")
        self._executor = ThreadPoolExecutor(thread_name_prefix="svc-logs")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    @property
    def temp_dir(self) -> Path:
        if self._tmpdir is None:
            raise RuntimeError("LogTailSupervisor is not running")
        return Path(self._tmpdir.name)

    def spawn(
        self, service: ServiceName, directory: Path, cmd: Sequence[str]
    ) -> Future[int]:
        """Start following logs for a service in its directory"""
        if self._executor is None:
            raise RuntimeError("LogTailSupervisor is not running")

        stderr_path = self.temp_dir / f"{service.value}.err"
        with open(stderr_path, "w", encoding="utf-8") as stderr_file:
            process = subprocess.Popen(
                list(cmd),
                cwd=directory,
                stdout=subprocess.PIPE,
                stderr=stderr_file,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        self._processes.append(process)

        future = self._executor.submit(self._pump, service, process, stderr_path)
        self._futures[service] = future
        return future

    def _pump(
        self,
        service: ServiceName,
        process: "subprocess.Popen[str]",
        stderr_path: Path,
    ) -> int:
        prefix = f"[{service.value}] "
        if process.stdout is not None:
            for line in process.stdout:
                console.print(Text.assemble((prefix, "cyan"), line.rstrip("\n")))
        returncode = process.wait()

        # negative or 130: killed by a signal, usually the operator's Ctrl+C
        interrupted = returncode < 0 or returncode == INTERRUPTED_EXIT_CODE
        if returncode != 0 and not interrupted and not self._stopping.is_set():
            detail = _last_line(stderr_path)
            message = f"Log stream for {service.value} exited with {returncode}"
            log.error(f"{message}: {detail}" if detail else message)
        return returncode

    def wait(self) -> dict[ServiceName, int]:
        """Block until every log stream ends"""
        return {service: f.result() for service, f in self._futures.items()}

    def shutdown(self) -> None:
        """Stop all processes, join workers and remove temporary files"""
        self._stopping.set()

        for process in self._processes:
            if process.poll() is None:
                process.terminate()
        for process in self._processes:
            try:
                process.wait(timeout=self.terminate_timeout)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()

        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._tmpdir is not None:
            self._tmpdir.cleanup()
            self._tmpdir = None


@contextmanager
def interrupt_on_sigterm() -> Iterator[None]:
    """Treat SIGTERM like Ctrl+C while following logs"""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _raise_interrupt(signum, frame):
        raise KeyboardInterrupt

    previous = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        yield
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)


def show_all_logs(
    settings: Settings,
    invoker: ComposeInvoker,
    services: Sequence[ServiceName],
) -> list[ServiceName]:
    """Follow logs of several services at once, prefixed by service name"""
    log.heading("Service Logs")
    console.print("Press Ctrl+C to stop following logs")
    console.print()

    cmd = invoker.command_for(Action.LOGS, [f"--tail={settings.log_tail}"])
    started: set[Path] = set()

    with interrupt_on_sigterm(), LogTailSupervisor() as supervisor:
        for service in services:
            directory = find_directory(settings, service)
            if directory is None or directory in started:
                continue
            started.add(directory)
            supervisor.spawn(service, directory, cmd)

        try:
            results = supervisor.wait()
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            raise

    return [service for service, code in results.items() if code != 0]
