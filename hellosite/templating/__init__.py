"""Template registry package: build-once compilation and render-by-name."""

from .registry import (
    TEMPLATE_PREFIX,
    TEMPLATE_SUFFIX,
    TemplateRegistry,
    TemplateRegistryError,
    TemplateRenderError,
    template_logical_name,
)
from .views import HelloView, TemplateView

__all__ = [
    "HelloView",
    "TEMPLATE_PREFIX",
    "TEMPLATE_SUFFIX",
    "TemplateRegistry",
    "TemplateRegistryError",
    "TemplateRenderError",
    "TemplateView",
    "template_logical_name",
]
