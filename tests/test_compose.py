import os
import subprocess
from pathlib import Path

import pytest

from svc_src import compose
from svc_src.compose import ACTION_SUBCOMMANDS, ComposeInvoker, build_compose_args
from svc_src.models import Action, ExecutionOptions, ServiceName, Settings


def _record_runs(monkeypatch, returncode: int = 0) -> list[tuple[list[str], Path]]:
    calls: list[tuple[list[str], Path]] = []

    def fake_run(cmd, cwd=None, **kwargs):
        calls.append((list(cmd), Path(cwd)))
        return subprocess.CompletedProcess(cmd, returncode)

    monkeypatch.setattr(compose.subprocess, "run", fake_run)
    return calls


def test_every_action_has_a_subcommand():
    assert set(ACTION_SUBCOMMANDS) == set(Action)


@pytest.mark.parametrize(
    ("action", "detached", "expected"),
    [
        (Action.UP, True, ["up", "-d"]),
        (Action.UP, False, ["up"]),
        (Action.DOWN, True, ["down"]),
        (Action.RESTART, True, ["restart"]),
        (Action.STOP, True, ["stop"]),
        (Action.START, True, ["start"]),
        (Action.LOGS, True, ["logs", "-f"]),
        (Action.STATUS, True, ["ps"]),
        (Action.PULL, False, ["pull"]),
    ],
)
def test_build_compose_args(action: Action, detached: bool, expected: list[str]):
    assert build_compose_args(action, detached) == expected


def test_build_compose_args_appends_extra_args():
    assert build_compose_args(Action.LOGS, extra_args=["--tail=50"]) == [
        "logs",
        "-f",
        "--tail=50",
    ]


def test_build_compose_args_rejects_unknown_action():
    with pytest.raises(ValueError, match="Unknown action: bogus"):
        build_compose_args("bogus")  # type: ignore[arg-type]


def test_run_uses_service_directory_as_cwd(tmp_path: Path, monkeypatch):
    (tmp_path / "traefik").mkdir()
    calls = _record_runs(monkeypatch)
    cwd_before = os.getcwd()

    invoker = ComposeInvoker(Settings(root_dir=tmp_path), ExecutionOptions())
    assert invoker.run(ServiceName.TRAEFIK, Action.UP) is True

    assert calls == [(["docker-compose", "up", "-d"], tmp_path / "traefik")]
    assert os.getcwd() == cwd_before


def test_run_honours_compose_command_and_directory_overrides(
    tmp_path: Path, monkeypatch
):
    (tmp_path / "db").mkdir()
    calls = _record_runs(monkeypatch)
    settings = Settings(
        root_dir=tmp_path,
        compose_command=["docker", "compose"],
        directories={ServiceName.POSTGRES: "db"},
    )

    invoker = ComposeInvoker(settings, ExecutionOptions(detached=False))
    assert invoker.run(ServiceName.POSTGRES, Action.UP) is True
    assert calls == [(["docker", "compose", "up"], tmp_path / "db")]


def test_run_skips_missing_directory(tmp_path: Path, monkeypatch, capsys):
    calls = _record_runs(monkeypatch)

    invoker = ComposeInvoker(Settings(root_dir=tmp_path), ExecutionOptions())
    assert invoker.run(ServiceName.N8N, Action.DOWN) is False

    assert calls == []
    out = capsys.readouterr().out
    assert "[ERROR]" in out
    assert "does not exist!" in out


def test_run_reports_compose_failure(tmp_path: Path, monkeypatch, capsys):
    (tmp_path / "n8n").mkdir()
    _record_runs(monkeypatch, returncode=2)

    invoker = ComposeInvoker(Settings(root_dir=tmp_path), ExecutionOptions())
    assert invoker.run(ServiceName.N8N, Action.PULL) is False
    assert "[ERROR] pull failed for n8n (exit 2)" in capsys.readouterr().out


def test_run_propagates_missing_compose_executable(tmp_path: Path, monkeypatch):
    (tmp_path / "n8n").mkdir()

    def fake_run(cmd, cwd=None, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(compose.subprocess, "run", fake_run)

    invoker = ComposeInvoker(Settings(root_dir=tmp_path), ExecutionOptions())
    with pytest.raises(FileNotFoundError):
        invoker.run(ServiceName.N8N, Action.UP)


def test_run_reraises_interrupt_while_streaming(tmp_path: Path, monkeypatch, capsys):
    (tmp_path / "n8n").mkdir()

    def fake_run(cmd, cwd=None, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(compose.subprocess, "run", fake_run)

    invoker = ComposeInvoker(Settings(root_dir=tmp_path), ExecutionOptions())
    with pytest.raises(KeyboardInterrupt):
        invoker.run(ServiceName.N8N, Action.LOGS)
    assert "Interrupted by user" in capsys.readouterr().out
