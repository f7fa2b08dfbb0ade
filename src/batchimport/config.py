from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Keys used by settings files written for the original tooling.
_LEGACY_KEYS = {
    "echoErrors": "echo_errors",
    "htmlMessages": "html_messages",
    "logLevel": "log_level",
}


class Settings(BaseSettings):
    """Import configuration loaded from environment/.env or a JSON file."""

    echo_errors: bool = Field(default=False)
    html_messages: bool = Field(default=False)
    extension: str = Field(default=".py")
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="BATCHIMPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("extension must not be empty")
        return value if value.startswith(".") else f".{value}"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


def load_settings(path: Path | str | None = None, **overrides: Any) -> Settings:
    """
    Build settings from a JSON file, falling back to environment/.env.

    Explicit ``overrides`` win over both sources; ``None`` overrides are ignored so CLI
    options that were not given do not mask configured values.
    """

    payload: dict[str, Any] = {}
    if path is not None:
        settings_path = Path(path)
        with settings_path.open("r", encoding="utf-8") as fh:
            try:
                raw = json.load(fh)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in settings file {settings_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ValueError(f"Settings file {settings_path} must contain a JSON object")
        payload = {_LEGACY_KEYS.get(key, key): value for key, value in raw.items()}

    payload.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return Settings(**payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid settings: {exc}") from exc
