"""FastAPI application factory wiring the admin and content routes.

Routes are matched in registration order: the admin prefix is registered
before the catch-all, so it always wins for paths under it.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response

from hellosite.config import AppSettings
from hellosite.db import DataStorePort
from hellosite.log import log_get_logger

from .handlers import RequestHandler

logger = log_get_logger(__name__)


def api_mount_handler(application: FastAPI, path: str, handler: RequestHandler, name: str) -> None:
    """Register ``handler`` on ``path`` for any request method, including non-standard ones.

    Args:
        application: Application receiving the route.
        path: Route path, optionally with a ``{...:path}`` tail parameter.
        handler: Handler serving the route.
        name: Route name.
    """

    def api_dispatch(request: Request) -> Response:
        return handler.handle(request)

    application.add_route(path, api_dispatch, methods=None, name=name, include_in_schema=False)


def create_api_application(
    settings: AppSettings,
    data_store: DataStorePort,
    admin_handler: RequestHandler,
    content_handler: RequestHandler,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings providing the admin prefix.
        data_store: Data store released when the application shuts down.
        admin_handler: Handler serving the admin prefix.
        content_handler: Handler serving every other path.

    Returns:
        FastAPI: Application with the admin route followed by the catch-all route.

    Raises:
        ValueError: Raised when a dependency is missing.
    """

    if data_store is None:
        raise ValueError("data_store must not be None")

    @asynccontextmanager
    async def lifespan(_application: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            data_store.db_close()
            logger.info("Data store closed")

    application = FastAPI(
        title="hellosite",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    admin_path = settings.admin_path
    logger.info("Serving admin site from %s", admin_path)
    api_mount_handler(application, admin_path.rstrip("/"), admin_handler, name="admin_root")
    api_mount_handler(application, f"{admin_path}{{admin_path_tail:path}}", admin_handler, name="admin")
    api_mount_handler(application, "/{content_path:path}", content_handler, name="content")

    return application
