"""
Process-level settings shared by the API and the bootstrap command.
Only a handful of variables are mandatory; the store location falls back to a
local SQLite file so a fresh checkout runs without any database server.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = ("PROJECT_NAME", "ENV", "LOG_LEVEL")
OPTIONAL_ENV_VARS: Final[tuple[str, ...]] = ("DATABASE_URL",)

DEFAULT_DATABASE_URL: Final[str] = "sqlite:///library.db"
LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseModel):
    """Settings read from `.env` and the process environment."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    PROJECT_NAME: str
    ENV: str
    LOG_LEVEL: str
    DATABASE_URL: str = DEFAULT_DATABASE_URL

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported LOG_LEVEL: {value!r}")
        return level

def _environment_values() -> dict[str, str]:
    names = REQUIRED_ENV_VARS + OPTIONAL_ENV_VARS
    return {name: os.environ[name] for name in names if os.environ.get(name)}


def load_settings(*, load_env: bool = True) -> Settings:
    """Read and validate settings; raise RuntimeError naming whatever is missing or invalid."""

    if load_env:
        load_dotenv()

    values = _environment_values()
    missing = sorted(name for name in REQUIRED_ENV_VARS if name not in values)
    if missing:
        raise RuntimeError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Set them in the environment or in `.env`."
        )

    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
