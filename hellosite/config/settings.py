"""Typed runtime settings resolved once at startup."""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .resolver import DEFAULT_ENV_FILE_PATH, ConfigResolver, SettingsLoadError, config_read_fallback_file

DEFAULT_ADMIN_PATH = "/admin/"
LOG_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AppSettings(BaseSettings):
    """Application settings for the web runtime.

    Values are supplied by `ConfigResolver` as init arguments only; the
    environment and dotenv sources of pydantic-settings are disabled so that
    the resolver stays the single reader of configuration.

    Attributes:
        application_host: Host interface for web server binding.
        application_port: Web server port (``PORT``).
        database_url: SQLAlchemy URL for the data store (``DATABASE_URL``).
        admin_path: Path prefix served by the admin handler (``ADMIN_PATH``).
        request_failure_policy: ``isolate`` answers a failed request with HTTP 500,
            ``fatal`` terminates the process.
        database_pool_size: Upper bound of pooled database connections.
        log_level: Logging level name.
    """

    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(ge=1, le=65535)
    database_url: str = Field(min_length=1)
    admin_path: str = Field(default=DEFAULT_ADMIN_PATH)
    request_failure_policy: Literal["isolate", "fatal"] = Field(default="isolate")
    database_pool_size: int = Field(default=5, ge=1)
    log_level: str = Field(default="INFO")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)

    @field_validator("database_url")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("admin_path")
    @classmethod
    def _validate_admin_path(cls, value: str) -> str:
        if not value.startswith("/") or not value.endswith("/") or value == "/":
            raise ValueError("admin_path must start and end with '/' and must not be the site root")
        return value

    @field_validator("request_failure_policy", mode="before")
    @classmethod
    def _normalize_policy(cls, value: str) -> str:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level_name = value.strip().upper()
        if level_name not in LOG_LEVEL_NAMES:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVEL_NAMES)}")
        return level_name


def config_load_settings(resolver: ConfigResolver) -> AppSettings:
    """Resolve and validate runtime settings from the configuration sources.

    Args:
        resolver: Configuration resolver with environment and fallback values merged.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        MissingConfigurationError: Raised when ``PORT`` or ``DATABASE_URL`` is absent.
        SettingsLoadError: Raised when a value fails validation.
    """

    values = {
        "application_port": resolver.config_require_value("PORT"),
        "database_url": resolver.config_require_value("DATABASE_URL"),
        "admin_path": resolver.config_value_or_default("ADMIN_PATH", DEFAULT_ADMIN_PATH),
        "application_host": resolver.config_value_or_default("HOST", "0.0.0.0"),
        "request_failure_policy": resolver.config_value_or_default("REQUEST_FAILURE_POLICY", "isolate"),
        "database_pool_size": resolver.config_value_or_default("DATABASE_POOL_SIZE", "5"),
        "log_level": resolver.config_value_or_default("LOG_LEVEL", "INFO"),
    }
    try:
        return AppSettings(**values)
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error


def config_load_database_url(env_file_path: str | Path = DEFAULT_ENV_FILE_PATH) -> str:
    """Resolve only the database URL for migration tooling.

    The fallback file is optional here so that schema migrations can run from
    the environment alone.

    Args:
        env_file_path: Path of the fallback ``KEY=VALUE`` file.

    Returns:
        str: Non-empty database URL.

    Raises:
        SettingsLoadError: Raised when the URL is missing or blank, or the fallback file is malformed.
    """

    fallback_entries = config_read_fallback_file(env_file_path) if Path(env_file_path).is_file() else {}
    resolver = ConfigResolver(environ=os.environ, fallback_entries=fallback_entries)
    database_url = resolver.config_require_value("DATABASE_URL").strip()
    if not database_url:
        raise SettingsLoadError("Database URL configuration validation failed. DATABASE_URL must not be blank.")
    return database_url
