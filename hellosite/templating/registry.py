"""Immutable, name-addressable registry of compiled templates.

The registry is built once at startup by walking a template tree. Each file is
registered under its logical name, which is its tree path with a fixed
directory prefix and file extension removed. All templates share one Jinja2
environment, so they can extend or include each other by logical name.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from importlib import resources
from importlib.resources.abc import Traversable
from types import MappingProxyType
from typing import Any, TextIO

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from hellosite.log import log_get_logger

from .views import TemplateView

TEMPLATE_PREFIX = "templates/"
TEMPLATE_SUFFIX = ".tmpl"

logger = log_get_logger(__name__)


class TemplateRegistryError(RuntimeError):
    """Raised when the template tree cannot be read or compiled."""


class TemplateRenderError(RuntimeError):
    """Raised when a template cannot be found or evaluated at render time."""

    def __init__(self, template_name: str, detail: str):
        super().__init__(f"Rendering template {template_name} failed: {detail}")
        self.template_name = template_name


def template_logical_name(tree_path: str, prefix: str = TEMPLATE_PREFIX, suffix: str = TEMPLATE_SUFFIX) -> str:
    """Derive the registry name of a template file from its tree path.

    Args:
        tree_path: Slash-separated path relative to the tree root, e.g. ``templates/hello.tmpl``.
        prefix: Leading directory segment to strip.
        suffix: Trailing extension to strip.

    Returns:
        str: Logical template name, e.g. ``hello``.
    """

    name = tree_path.removeprefix(prefix)
    return name.removesuffix(suffix)


def template_walk_tree(node: Traversable, tree_path: str) -> Iterator[tuple[str, Traversable]]:
    """Yield ``(tree_path, file)`` pairs depth-first in sorted sibling order.

    Args:
        node: Directory or file to visit.
        tree_path: Slash-separated path of ``node`` relative to the tree root.

    Yields:
        tuple[str, Traversable]: Tree path and leaf entry for each file.

    Raises:
        OSError: Raised when a directory cannot be listed.
    """

    if not node.is_dir():
        yield tree_path, node
        return

    for child in sorted(node.iterdir(), key=lambda entry: entry.name):
        yield from template_walk_tree(child, f"{tree_path}/{child.name}" if tree_path else child.name)


def template_default_tree() -> Traversable:
    """Return the package root containing the bundled ``templates`` directory."""

    return resources.files("hellosite")


class TemplateRegistry:
    """Read-only lookup of compiled templates sharing one namespace."""

    def __init__(self, environment: Environment, sources: Mapping[str, str], templates: Mapping[str, Template]):
        self._environment = environment
        self._sources = MappingProxyType(dict(sources))
        self._templates = MappingProxyType(dict(templates))

    @classmethod
    def template_build(
        cls,
        tree_root: Traversable | None = None,
        directory: str = TEMPLATE_PREFIX.rstrip("/"),
        prefix: str = TEMPLATE_PREFIX,
        suffix: str = TEMPLATE_SUFFIX,
    ) -> TemplateRegistry:
        """Walk the template tree and compile every file into the registry.

        A later file whose logical name collides with an earlier one replaces it.

        Args:
            tree_root: Root of the embedded tree; defaults to the ``hellosite`` package.
            directory: Directory under ``tree_root`` holding the templates.
            prefix: Leading directory segment stripped from each tree path.
            suffix: File extension stripped from each tree path.

        Returns:
            TemplateRegistry: Registry holding every template of the tree.

        Raises:
            TemplateRegistryError: Raised on any read, traversal or compile failure.
        """

        root = template_default_tree() if tree_root is None else tree_root
        sources: dict[str, str] = {}
        try:
            for tree_path, entry in template_walk_tree(root.joinpath(directory), directory):
                name = template_logical_name(tree_path, prefix=prefix, suffix=suffix)
                if name in sources:
                    logger.debug("Template %s from %s replaces an earlier definition", name, tree_path)
                logger.info("Template %s", name)
                sources[name] = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise TemplateRegistryError(f"Template tree could not be read: {error}") from error

        environment = Environment(
            loader=DictLoader(sources),
            undefined=StrictUndefined,
            autoescape=select_autoescape(default=True, default_for_string=True),
        )
        templates: dict[str, Template] = {}
        for name in sources:
            try:
                templates[name] = environment.get_template(name)
            except TemplateError as error:
                raise TemplateRegistryError(f"Template {name} could not be compiled: {error}") from error

        registry = cls(environment=environment, sources=sources, templates=templates)
        logger.info("Defined templates: %s", ", ".join(registry.template_names()))
        return registry

    def template_names(self) -> tuple[str, ...]:
        return tuple(sorted(self._templates))

    def template_source(self, name: str) -> str:
        """Return the registered body of a template.

        Raises:
            KeyError: Raised when no template is registered under ``name``.
        """

        return self._sources[name]

    def template_render(self, name: str, view: TemplateView | Mapping[str, Any]) -> str:
        """Render a registered template with the fields of a view.

        Args:
            name: Logical template name.
            view: View instance or plain mapping exposing the template fields.

        Returns:
            str: Rendered document.

        Raises:
            TemplateRenderError: Raised when the name is unknown, the view feeds another
                template, or evaluation fails for any reason.
        """

        logger.debug("Rendering template %s", name)
        template = self._templates.get(name)
        if template is None:
            raise TemplateRenderError(name, "template is not registered")

        if isinstance(view, TemplateView):
            if view.template_name != name:
                raise TemplateRenderError(name, f"{type(view).__name__} feeds template {view.template_name}")
            context = view.view_context()
        else:
            context = dict(view)

        try:
            return template.render(context)
        except TemplateNotFound as error:
            raise TemplateRenderError(name, f"referenced template {error.name} is not registered") from error
        except TemplateError as error:
            raise TemplateRenderError(name, str(error)) from error
        except Exception as error:
            raise TemplateRenderError(name, f"{type(error).__name__}: {error}") from error

    def template_render_to(self, writer: TextIO, name: str, view: TemplateView | Mapping[str, Any]) -> None:
        """Render a template and write the full document to ``writer``.

        Nothing is written when rendering fails.

        Raises:
            TemplateRenderError: Raised when the name is unknown or evaluation fails.
        """

        writer.write(self.template_render(name, view))
