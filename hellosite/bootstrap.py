"""Application bootstrap wiring for startup validation and dependency assembly.

Startup is strictly sequential: configuration, then templates, then the data
store. Any failure raises before the next step runs and before the listener
binds.
"""

from dataclasses import dataclass
from pathlib import Path

from fastapi import FastAPI

from hellosite.api import AdminHandler, ContentHandler, create_api_application
from hellosite.config import (
    DEFAULT_ENV_FILE_PATH,
    AppSettings,
    ConfigResolver,
    SettingsLoadError,
    config_load_settings,
)
from hellosite.db import DataStoreConnectionError, SQLAlchemyDataStore, SQLAlchemyUserRepository, db_connect
from hellosite.log import log_configure, log_get_logger
from hellosite.templating import TemplateRegistry, TemplateRegistryError

STARTUP_FATAL_ERRORS = (SettingsLoadError, TemplateRegistryError, DataStoreConnectionError)

logger = log_get_logger(__name__)


@dataclass(frozen=True)
class BootstrapResult:
    """Assembled runtime objects.

    Attributes:
        settings: Validated runtime settings.
        template_registry: Compiled template registry.
        application: Web application ready to be served.
    """

    settings: AppSettings
    template_registry: TemplateRegistry
    application: FastAPI


def bootstrap_load_settings(
    env_file_path: str | Path = DEFAULT_ENV_FILE_PATH,
    export_environment: bool = False,
) -> AppSettings:
    """Resolve configuration sources and validate runtime settings.

    Args:
        env_file_path: Path of the fallback ``KEY=VALUE`` file.
        export_environment: Copy fallback-only values into ``os.environ``.

    Returns:
        AppSettings: Validated runtime settings.

    Raises:
        SettingsLoadError: Raised when configuration is missing, malformed or invalid.
    """

    resolver = ConfigResolver.config_from_sources(env_file_path=env_file_path)
    if export_environment:
        resolver.config_export_environment()
    settings = config_load_settings(resolver)
    log_configure(settings.log_level)
    return settings


def bootstrap_create_application(
    env_file_path: str | Path = DEFAULT_ENV_FILE_PATH,
    export_environment: bool = False,
    template_registry: TemplateRegistry | None = None,
) -> BootstrapResult:
    """Assemble the runtime application after validating startup inputs.

    Args:
        env_file_path: Path of the fallback ``KEY=VALUE`` file.
        export_environment: Copy fallback-only values into ``os.environ``.
        template_registry: Prebuilt registry; the bundled tree is compiled when omitted.

    Returns:
        BootstrapResult: Settings, registry and application.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        TemplateRegistryError: Raised when the template tree cannot be compiled.
        DataStoreConnectionError: Raised when the database is unreachable.
    """

    settings = bootstrap_load_settings(env_file_path=env_file_path, export_environment=export_environment)
    registry = TemplateRegistry.template_build() if template_registry is None else template_registry
    engine = db_connect(database_url=settings.database_url, pool_size=settings.database_pool_size)

    data_store = SQLAlchemyDataStore(engine=engine)
    content_handler = ContentHandler(
        user_repository=SQLAlchemyUserRepository(data_store=data_store),
        template_registry=registry,
        failure_policy=settings.request_failure_policy,
    )
    application = create_api_application(
        settings=settings,
        data_store=data_store,
        admin_handler=AdminHandler(),
        content_handler=content_handler,
    )
    return BootstrapResult(settings=settings, template_registry=registry, application=application)
