"""SleepOnLAN configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

import json
import shlex
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from sleeponlan.services.packet_validator import PACKET_SIZE


class Settings(BaseSettings):
    """Daemon settings, overridable from the environment or the CLI."""

    app_name: str = "SleepOnLAN"
    log_level: str = "INFO"

    # Network
    host: str = "0.0.0.0"
    port: int = 10
    buffer_size: int = 1024

    # Mode: dev = log the suspend instead of running it
    mode: str = "prod"

    # Suspend action
    suspend_command: Annotated[list[str], NoDecode] = ["systemctl", "suspend"]
    suspend_timeout_seconds: float = 30.0

    # Only act on packets addressed to one of this host's interfaces
    local_only: bool = False

    @property
    def is_dry_run(self) -> bool:
        return self.mode == "dev"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SLEEPONLAN_",
        extra="ignore",
    )

    @field_validator("port")
    @classmethod
    def _check_port(cls, value: int) -> int:
        if not 0 <= value <= 65535:
            raise ValueError(f"port must be between 0 and 65535, got {value}")
        return value

    @field_validator("buffer_size")
    @classmethod
    def _check_buffer_size(cls, value: int) -> int:
        # recvfrom truncates silently; one spare byte exposes oversized datagrams
        if value <= PACKET_SIZE:
            raise ValueError(
                f"buffer_size must exceed the {PACKET_SIZE}-byte magic packet, got {value}"
            )
        return value

    @field_validator("suspend_command", mode="before")
    @classmethod
    def _split_suspend_command(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str):
            if value.lstrip().startswith("["):
                return json.loads(value)
            return shlex.split(value)
        return value

    @field_validator("suspend_command")
    @classmethod
    def _check_suspend_command(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("suspend_command must not be empty")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
