"""Request handlers composing the data store and the template registry."""

from __future__ import annotations

import os
from typing import Callable, Protocol

from fastapi import Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from hellosite.db import QueryRowError, UserRepositoryPort
from hellosite.log import log_get_logger
from hellosite.templating import HelloView, TemplateRegistry, TemplateRenderError

ADMIN_PLACEHOLDER_BODY = "Admin foo"
FAILURE_POLICY_ISOLATE = "isolate"
FAILURE_POLICY_FATAL = "fatal"

REQUEST_FAILURE_ERRORS = (QueryRowError, TemplateRenderError, SQLAlchemyError)

logger = log_get_logger(__name__)


def handler_terminate_process(exit_code: int = 1) -> None:
    """Terminate the whole process immediately, bypassing server shutdown."""

    os._exit(exit_code)


class RequestHandler(Protocol):
    """Single capability shared by every handler: turn a request into a response."""

    def handle(self, request: Request) -> Response:
        """Produce the response for one request.

        Args:
            request: Inbound request.

        Returns:
            Response: Response sent to the client.
        """


class AdminHandler(RequestHandler):
    """Placeholder admin surface answering every request with fixed text."""

    def handle(self, request: Request) -> Response:
        return PlainTextResponse(ADMIN_PLACEHOLDER_BODY)


class ContentHandler(RequestHandler):
    """Primary handler rendering the ``hello`` page from the single user row."""

    def __init__(
        self,
        user_repository: UserRepositoryPort,
        template_registry: TemplateRegistry,
        failure_policy: str = FAILURE_POLICY_ISOLATE,
        terminate: Callable[[int], None] = handler_terminate_process,
    ):
        """Initialize the content handler.

        Args:
            user_repository: Repository fetching the user row.
            template_registry: Registry holding the ``hello`` template.
            failure_policy: ``isolate`` answers a failed request with HTTP 500,
                ``fatal`` terminates the process.
            terminate: Process termination hook used by the ``fatal`` policy.

        Raises:
            ValueError: Raised when a dependency is missing or the policy is unknown.
        """

        if user_repository is None:
            raise ValueError("user_repository must not be None")
        if template_registry is None:
            raise ValueError("template_registry must not be None")
        if failure_policy not in (FAILURE_POLICY_ISOLATE, FAILURE_POLICY_FATAL):
            raise ValueError(f"unsupported failure policy: {failure_policy}")

        self._user_repository = user_repository
        self._template_registry = template_registry
        self._failure_policy = failure_policy
        self._terminate = terminate

    def handle(self, request: Request) -> Response:
        """Fetch the user, render the ``hello`` template and return the page.

        Args:
            request: Inbound request; path and method do not affect the result.

        Returns:
            Response: Rendered page, or HTTP 500 under the ``isolate`` policy.
        """

        try:
            user = self._user_repository.db_fetch_user()
            view = HelloView(name=user.name)
            body = self._template_registry.template_render(view.template_name, view)
        except REQUEST_FAILURE_ERRORS as error:
            return self._handle_failure(request, error)

        return HTMLResponse(body)

    def _handle_failure(self, request: Request, error: Exception) -> Response:
        if self._failure_policy == FAILURE_POLICY_FATAL:
            logger.critical("Request %s %s failed, terminating: %s", request.method, request.url.path, error)
            self._terminate(1)

        logger.error(
            "Request %s %s failed: %s",
            request.method,
            request.url.path,
            error,
            exc_info=error,
        )
        return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
