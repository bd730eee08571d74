from pathlib import Path

import pytest
from pydantic import ValidationError

from svc_src.models import (
    PRIMARY_SERVICES,
    ExecutionOptions,
    ServiceName,
    Settings,
    load_settings,
)
from svc_src.services import find_directory, resolve_directory


def test_primary_services_order():
    assert [s.value for s in PRIMARY_SERVICES] == ["traefik", "postgres", "n8n"]


def test_service_labels():
    assert ServiceName.POSTGRES.label == "PostgreSQL"
    assert ServiceName.N8N.label == "n8n"


def test_execution_options_reject_negative_scale():
    with pytest.raises(ValidationError):
        ExecutionOptions(scale_workers=-1)


def test_settings_defaults(tmp_path: Path):
    settings = Settings(root_dir=tmp_path)
    assert settings.compose_command == ["docker-compose"]
    assert settings.networks == ["traefik", "postgres-network"]
    assert settings.startup_delay == 2.0
    assert settings.log_tail == 50


def test_settings_reject_empty_compose_command(tmp_path: Path):
    with pytest.raises(ValidationError):
        Settings(root_dir=tmp_path, compose_command=[])


def test_load_settings_without_config_file(tmp_path: Path):
    settings = load_settings(tmp_path)
    assert settings.root_dir == tmp_path
    assert settings.directories == {}


def test_load_settings_reads_services_yaml(tmp_path: Path):
    (tmp_path / "services.yaml").write_text(
        "compose_command: [docker, compose]\n"
        "startup_delay: 0.5\n"
        "directories:\n"
        "  postgres: database\n",
        encoding="utf-8",
    )
    settings = load_settings(tmp_path)
    assert settings.compose_command == ["docker", "compose"]
    assert settings.startup_delay == 0.5
    assert settings.directories == {ServiceName.POSTGRES: "database"}


def test_load_settings_env_overrides_yaml(tmp_path: Path, monkeypatch):
    (tmp_path / "services.yaml").write_text("startup_delay: 0.5\n", encoding="utf-8")
    monkeypatch.setenv("SVC_STARTUP_DELAY", "7")
    assert load_settings(tmp_path).startup_delay == 7.0


def test_load_settings_rejects_invalid_values(tmp_path: Path):
    (tmp_path / "services.yaml").write_text("log_tail: -5\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_settings(tmp_path)


def test_resolve_directory_identity_and_alias_target(tmp_path: Path):
    settings = Settings(root_dir=tmp_path)
    assert resolve_directory(settings, ServiceName.TRAEFIK) == tmp_path / "traefik"
    assert resolve_directory(settings, ServiceName.POSTGRES) == tmp_path / "postgres"


def test_find_directory_checks_existence_each_time(tmp_path: Path, capsys):
    settings = Settings(root_dir=tmp_path)
    assert find_directory(settings, ServiceName.N8N) is None
    assert "does not exist!" in capsys.readouterr().out

    (tmp_path / "n8n").mkdir()
    assert find_directory(settings, ServiceName.N8N) == tmp_path / "n8n"


def test_find_directory_quiet(tmp_path: Path, capsys):
    settings = Settings(root_dir=tmp_path)
    assert find_directory(settings, ServiceName.N8N, quiet=True) is None
    assert capsys.readouterr().out == ""
