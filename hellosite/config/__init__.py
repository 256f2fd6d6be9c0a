"""Configuration package for runtime settings and startup validation."""

from .resolver import (
    DEFAULT_ENV_FILE_PATH,
    ConfigResolver,
    MalformedConfigLineError,
    MissingConfigurationError,
    SettingsLoadError,
)
from .settings import DEFAULT_ADMIN_PATH, AppSettings, config_load_database_url, config_load_settings

__all__ = [
    "AppSettings",
    "ConfigResolver",
    "DEFAULT_ADMIN_PATH",
    "DEFAULT_ENV_FILE_PATH",
    "MalformedConfigLineError",
    "MissingConfigurationError",
    "SettingsLoadError",
    "config_load_database_url",
    "config_load_settings",
]
