#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Data and configuration models for service management.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Type

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)

CONFIG_FILENAME = "services.yaml"


# ============================================================================
# Services and Actions
# ============================================================================


class ServiceName(str, Enum):
    """Managed service groups"""

    TRAEFIK = "traefik"
    POSTGRES = "postgres"
    N8N = "n8n"

    @property
    def label(self) -> str:
        """Human readable name used in aggregate output"""
        return _SERVICE_LABELS[self]


_SERVICE_LABELS = {
    ServiceName.TRAEFIK: "Traefik",
    ServiceName.POSTGRES: "PostgreSQL",
    ServiceName.N8N: "n8n",
}

# Fixed order used by --all and the aggregate status view
PRIMARY_SERVICES: Tuple[ServiceName, ...] = (
    ServiceName.TRAEFIK,
    ServiceName.POSTGRES,
    ServiceName.N8N,
)


class Action(str, Enum):
    """Compose actions accepted on the command line"""

    UP = "up"
    DOWN = "down"
    RESTART = "restart"
    STOP = "stop"
    START = "start"
    LOGS = "logs"
    STATUS = "status"
    PULL = "pull"


# ============================================================================
# Invocation Models
# ============================================================================


class ExecutionOptions(BaseModel):
    """Options collected from the command line"""

    model_config = ConfigDict(frozen=True)

    detached: bool = Field(default=True, description="Run 'up' in detached mode")
    scale_workers: Optional[int] = Field(
        default=None,
        ge=0,
        description="Worker scale (accepted for compatibility, not applied)",
    )


class Invocation(BaseModel):
    """A fully parsed command line"""

    model_config = ConfigDict(frozen=True)

    action: Action = Field(default=Action.UP)
    services: Tuple[ServiceName, ...] = Field(description="Selected services")
    options: ExecutionOptions = Field(default_factory=ExecutionOptions)


# ============================================================================
# Settings
# ============================================================================


class Settings(BaseSettings):
    """Runtime configuration"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SVC_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    root_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory containing the per-service compose directories",
    )
    compose_command: list[str] = Field(
        default_factory=lambda: ["docker-compose"],
        description="Compose executable (e.g. ['docker', 'compose'])",
    )
    docker_command: str = Field(
        default="docker", description="Docker executable used for networks"
    )
    networks: list[str] = Field(
        default_factory=lambda: ["traefik", "postgres-network"],
        description="Shared networks created before 'up'",
    )
    startup_delay: float = Field(
        default=2.0, ge=0, description="Seconds to wait between started services"
    )
    log_tail: int = Field(
        default=50, ge=0, description="History lines shown per service in log view"
    )
    directories: dict[ServiceName, str] = Field(
        default_factory=dict,
        description="Per-service directory overrides relative to root_dir",
    )

    @field_validator("compose_command")
    @classmethod
    def validate_compose_command(cls, v: list[str]) -> list[str]:
        """Reject an empty compose command"""
        if not v or not all(part.strip() for part in v):
            raise ValueError("compose_command must contain at least one argument")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.
        Priority: env vars > .env file > YAML (init) > file secrets > defaults
        """
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(root_dir: Path) -> Settings:
    """Load settings, merging services.yaml from root_dir when present"""
    data: dict[str, object] = {"root_dir": root_dir}
    config_path = root_dir / CONFIG_FILENAME
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{config_path} must contain a mapping")
        data.update(loaded)

    settings = Settings(**data)
    if not settings.root_dir.is_absolute():
        settings = settings.model_copy(
            update={"root_dir": (root_dir / settings.root_dir).resolve()}
        )
    return settings
