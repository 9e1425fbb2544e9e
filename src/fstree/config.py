"""Settings read from the environment, falling back to a local .env file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "FSTREE_"
DEFAULT_COPY_BUFFER_SIZE = 1024 * 1024
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def read_env_file(keys: list[str], env_file: Path | None = None) -> dict[str, str]:
    """Parse a .env file and return the values for the requested keys.

    Values are returned, never exported into os.environ.
    """
    env_file = env_file or Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    wanted = set(keys)
    result: dict[str, str] = {}

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if key not in wanted:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        if value:
            result[key] = value

    return result


class Settings(BaseModel):
    log_level: str = "WARNING"
    copy_buffer_size: int = Field(default=DEFAULT_COPY_BUFFER_SIZE, gt=0)
    archive_compression: Literal["deflate", "store"] = "deflate"
    path_style: Literal["native", "posix"] = "native"

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().upper()
            if value not in LOG_LEVELS:
                raise ValueError(f"unknown log level: {value}")
        return value

    @field_validator("archive_compression", "path_style", mode="before")
    @classmethod
    def _lowercase(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


def load_settings(env_file: Path | None = None) -> Settings:
    """Build settings from FSTREE_* variables, then the .env file, then defaults."""
    fields = list(Settings.model_fields)
    env_keys = [ENV_PREFIX + name.upper() for name in fields]
    file_values = read_env_file(env_keys, env_file)

    values: dict[str, str] = {}
    for name, key in zip(fields, env_keys):
        value = os.environ.get(key) or file_values.get(key)
        if value:
            values[name] = value
    return Settings.model_validate(values)


SETTINGS: Settings = load_settings()
