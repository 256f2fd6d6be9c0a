"""Explicit view types, one per template, declaring the fields each template reads."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

TEMPLATE_FIELD_KEY = "template_field"


@dataclass(frozen=True)
class TemplateView:
    """Base class for template views.

    A field may carry ``metadata={"template_field": ...}`` to expose it to the
    template under a different name than the Python attribute.

    Attributes:
        template_name: Logical registry name of the template the view feeds.
    """

    template_name: ClassVar[str]

    def view_context(self) -> dict[str, Any]:
        return {
            view_field.metadata.get(TEMPLATE_FIELD_KEY, view_field.name): getattr(self, view_field.name)
            for view_field in fields(self)
        }


@dataclass(frozen=True)
class HelloView(TemplateView):
    """Data consumed by the ``hello`` template.

    Attributes:
        name: Display name of the fetched user, exposed to the template as ``Name``.
    """

    template_name: ClassVar[str] = "hello"

    name: str = field(metadata={TEMPLATE_FIELD_KEY: "Name"})
