"""API layer package for application and route composition."""

from .application import create_api_application
from .handlers import (
    ADMIN_PLACEHOLDER_BODY,
    FAILURE_POLICY_FATAL,
    FAILURE_POLICY_ISOLATE,
    AdminHandler,
    ContentHandler,
    RequestHandler,
)

__all__ = [
    "ADMIN_PLACEHOLDER_BODY",
    "AdminHandler",
    "ContentHandler",
    "FAILURE_POLICY_FATAL",
    "FAILURE_POLICY_ISOLATE",
    "RequestHandler",
    "create_api_application",
]
