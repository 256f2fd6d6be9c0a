"""Tests for typed runtime settings validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from hellosite.config import (
    ConfigResolver,
    MissingConfigurationError,
    SettingsLoadError,
    config_load_database_url,
    config_load_settings,
)


def _build_resolver(**values: str) -> ConfigResolver:
    """Create a resolver whose environment holds the given values.

    Returns:
        ConfigResolver: Resolver without fallback entries.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return ConfigResolver(environ=values, fallback_entries={})


def test_config_settings_apply_defaults_for_optional_keys() -> None:
    """Resolve required keys and defaults for every optional key.

    Returns:
        None: Assertions validate resolved settings.

    Raises:
        AssertionError: Raised when defaults differ.
    """

    settings = config_load_settings(_build_resolver(PORT="8080", DATABASE_URL="sqlite://"))

    assert settings.application_port == 8080
    assert settings.database_url == "sqlite://"
    assert settings.admin_path == "/admin/"
    assert settings.application_host == "0.0.0.0"
    assert settings.request_failure_policy == "isolate"
    assert settings.database_pool_size == 5
    assert settings.log_level == "INFO"


def test_config_settings_read_optional_overrides() -> None:
    settings = config_load_settings(
        _build_resolver(
            PORT="9000",
            DATABASE_URL=" sqlite:// ",
            ADMIN_PATH="/ops/",
            HOST="127.0.0.1",
            REQUEST_FAILURE_POLICY="FATAL",
            DATABASE_POOL_SIZE="1",
            LOG_LEVEL="debug",
        )
    )

    assert settings.database_url == "sqlite://"
    assert settings.admin_path == "/ops/"
    assert settings.application_host == "127.0.0.1"
    assert settings.request_failure_policy == "fatal"
    assert settings.database_pool_size == 1
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("missing_key", ["PORT", "DATABASE_URL"])
def test_config_settings_require_port_and_database_url(missing_key: str) -> None:
    """Fail naming the required key absent from every source.

    Returns:
        None: Assertions validate missing required keys.

    Raises:
        AssertionError: Raised when a required key is optional.
    """

    values = {"PORT": "8080", "DATABASE_URL": "sqlite://"}
    del values[missing_key]

    with pytest.raises(MissingConfigurationError, match=missing_key):
        config_load_settings(_build_resolver(**values))


@pytest.mark.parametrize(
    "override",
    [
        {"PORT": "http"},
        {"PORT": "70000"},
        {"DATABASE_URL": "   "},
        {"ADMIN_PATH": "ops"},
        {"ADMIN_PATH": "/ops"},
        {"ADMIN_PATH": "/"},
        {"REQUEST_FAILURE_POLICY": "retry"},
        {"DATABASE_POOL_SIZE": "0"},
        {"LOG_LEVEL": "LOUD"},
    ],
)
def test_config_settings_reject_invalid_values(override: dict[str, str]) -> None:
    """Raise a settings error for values failing validation.

    Returns:
        None: Assertions validate rejection.

    Raises:
        AssertionError: Raised when an invalid value is accepted.
    """

    values = {"PORT": "8080", "DATABASE_URL": "sqlite://", **override}

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings(_build_resolver(**values))


def test_config_settings_are_frozen() -> None:
    settings = config_load_settings(_build_resolver(PORT="8080", DATABASE_URL="sqlite://"))

    with pytest.raises(ValidationError):
        settings.application_port = 9000


def test_config_database_url_loads_without_fallback_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Resolve the database URL from the environment when no fallback file exists.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate migration URL loading.

    Raises:
        AssertionError: Raised when the URL is not resolved.
    """

    monkeypatch.setenv("DATABASE_URL", "sqlite:///migrations.db")

    assert config_load_database_url(tmp_path / "missing.env") == "sqlite:///migrations.db"


def test_config_database_url_falls_back_to_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    env_file_path = tmp_path / ".env"
    env_file_path.write_text("DATABASE_URL=sqlite:///from-file.db\n", encoding="utf-8")

    assert config_load_database_url(env_file_path) == "sqlite:///from-file.db"
