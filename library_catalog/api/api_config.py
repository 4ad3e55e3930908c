# This file defines runtime settings for the API layer in one place.
# Each field can be overridden by one environment variable (see `_ENV_FIELDS`);
# anything unset keeps the local-development default declared on ApiConfig.

from __future__ import annotations

import os
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from library_catalog.common.settings import DEFAULT_DATABASE_URL

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Library Management System API"
    api_prefix: str = "/api"
    schema_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "local"
    database_url: str = DEFAULT_DATABASE_URL
    sqlite_busy_timeout_seconds: float = 5.0
    default_loan_days: int = 14
    popular_report_limit: int = 10
    enable_request_logging: bool = False
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    app_version: str = "0.1.0"

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_prefix must start with '/'.")
        return value.rstrip("/")

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("database_url must not be empty.")
        return value

    @field_validator("port", "default_loan_days", "popular_report_limit")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Value must be at least 1.")
        return value

    @field_validator("sqlite_busy_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value < 0:
            raise ValueError("sqlite_busy_timeout_seconds must not be negative.")
        return value


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _parse_list(name: str, raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_str(name: str, raw: str) -> str:
    return raw


def _parse_int(name: str, raw: str) -> int:
    return int(raw)


def _parse_float(name: str, raw: str) -> float:
    return float(raw)


# field -> (environment variables in priority order, parser)
_ENV_FIELDS: dict[str, tuple[tuple[str, ...], Callable[[str, str], Any]]] = {
    "api_name": (("API_NAME",), _parse_str),
    "api_prefix": (("API_PREFIX",), _parse_str),
    "schema_version": (("API_SCHEMA_VERSION",), _parse_str),
    "host": (("API_HOST",), _parse_str),
    # PORT is the variable most hosting platforms inject.
    "port": (("API_PORT", "PORT"), _parse_int),
    "environment": (("ENV",), _parse_str),
    "database_url": (("DATABASE_URL",), _parse_str),
    "sqlite_busy_timeout_seconds": (("SQLITE_BUSY_TIMEOUT_SECONDS",), _parse_float),
    "default_loan_days": (("LIBRARY_DEFAULT_LOAN_DAYS",), _parse_int),
    "popular_report_limit": (("LIBRARY_POPULAR_REPORT_LIMIT",), _parse_int),
    "enable_request_logging": (("API_ENABLE_REQUEST_LOGGING",), _parse_bool),
    "allowed_origins": (("API_ALLOWED_ORIGINS",), _parse_list),
    "app_version": (("APP_VERSION",), _parse_str),
}


def _first_env(names: tuple[str, ...]) -> tuple[str, str] | None:
    for name in names:
        raw = os.getenv(name)
        if raw is not None and raw.strip():
            return name, raw
    return None


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and the process environment."""

    if load_env:
        load_dotenv()

    overrides: dict[str, Any] = {}
    for field_name, (env_names, parse) in _ENV_FIELDS.items():
        found = _first_env(env_names)
        if found is not None:
            overrides[field_name] = parse(*found)
    return ApiConfig.model_validate(overrides)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    return load_api_config()
