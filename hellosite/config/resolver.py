"""Two-source configuration resolution with environment precedence.

Values come from the live process environment first and from a line-oriented
``KEY=VALUE`` fallback file second. The fallback file is strict: every line must
hold exactly one ``=`` separator, otherwise startup fails with the offending
line in the diagnostic.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from hellosite.log import log_get_logger

DEFAULT_ENV_FILE_PATH = ".env"
CONFIG_SEPARATOR = "="

logger = log_get_logger(__name__)


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class MalformedConfigLineError(SettingsLoadError):
    """Raised when a fallback file line does not hold exactly one separator."""

    def __init__(self, line: str):
        super().__init__(f"Malformed line in fallback configuration file: {line}")
        self.line = line


class MissingConfigurationError(SettingsLoadError):
    """Raised when a required key is absent from every configuration source."""

    def __init__(self, key: str):
        super().__init__(f"ENV variable {key} is not set")
        self.key = key


def config_parse_fallback_lines(lines: list[str]) -> dict[str, str]:
    """Parse fallback file lines into an ordered key/value mapping.

    Args:
        lines: File lines without line terminators.

    Returns:
        dict[str, str]: Parsed entries; a repeated key keeps its first value.

    Raises:
        MalformedConfigLineError: Raised for the first line whose separator count is not one.
    """

    entries: dict[str, str] = {}
    for line in lines:
        parts = line.split(CONFIG_SEPARATOR)
        if len(parts) != 2:
            raise MalformedConfigLineError(line)
        entries.setdefault(parts[0], parts[1])
    return entries


def config_read_fallback_file(env_file_path: str | Path) -> dict[str, str]:
    """Read and parse the fallback configuration file.

    Args:
        env_file_path: Path of the ``KEY=VALUE`` file.

    Returns:
        dict[str, str]: Parsed fallback entries.

    Raises:
        SettingsLoadError: Raised when the file cannot be read.
        MalformedConfigLineError: Raised when a line is malformed.
    """

    try:
        content = Path(env_file_path).read_text(encoding="utf-8")
    except OSError as error:
        raise SettingsLoadError(f"Fallback configuration file could not be read: {env_file_path}") from error
    return config_parse_fallback_lines(content.splitlines())


class ConfigResolver:
    """Read-only configuration view merging environment over fallback entries."""

    def __init__(self, environ: Mapping[str, str], fallback_entries: Mapping[str, str]):
        """Merge both sources once; the environment wins on every shared key.

        Args:
            environ: Snapshot of the live process environment.
            fallback_entries: Entries parsed from the fallback file.
        """

        merged = dict(environ)
        injected: dict[str, str] = {}
        for key, value in fallback_entries.items():
            if key in merged:
                continue
            logger.info('ENV[%s] is unset: using fallback value "%s"', key, value)
            merged[key] = value
            injected[key] = value

        self._values = MappingProxyType(merged)
        self._injected = MappingProxyType(injected)

    @classmethod
    def config_from_sources(
        cls,
        env_file_path: str | Path = DEFAULT_ENV_FILE_PATH,
        environ: Mapping[str, str] | None = None,
    ) -> ConfigResolver:
        """Build a resolver from the process environment and the fallback file.

        Args:
            env_file_path: Path of the fallback file.
            environ: Environment mapping; defaults to ``os.environ``.

        Returns:
            ConfigResolver: Resolver with both sources merged.

        Raises:
            SettingsLoadError: Raised when the fallback file is missing or malformed.
        """

        fallback_entries = config_read_fallback_file(env_file_path)
        return cls(environ=dict(os.environ if environ is None else environ), fallback_entries=fallback_entries)

    @property
    def injected_values(self) -> Mapping[str, str]:
        """Fallback entries that were not shadowed by the environment."""

        return self._injected

    def config_lookup(self, key: str) -> str | None:
        return self._values.get(key)

    def config_require_value(self, key: str) -> str:
        """Return a value that must be present in one of the sources.

        Args:
            key: Configuration key.

        Returns:
            str: Resolved value.

        Raises:
            MissingConfigurationError: Raised when the key is absent from both sources.
        """

        value = self._values.get(key)
        if value is None:
            raise MissingConfigurationError(key)
        return value

    def config_value_or_default(self, key: str, default: str) -> str:
        value = self._values.get(key)
        return default if value is None else value

    def config_export_environment(self, environ: dict[str, str] | None = None) -> None:
        """Copy fallback-only entries into the process environment.

        Existing environment values are never overwritten.

        Args:
            environ: Target mapping; defaults to ``os.environ``.
        """

        target = os.environ if environ is None else environ
        for key, value in self._injected.items():
            target.setdefault(key, value)
