"""Template engines that render resolved partials.

An engine implements ``render(template_id, options, locals)`` returning
the rendered string. ``options["layout"]`` tells it whether to wrap the
output in the page layout; partials always pass ``False``.

Built-in Engines:
- `FunctionEngine`: Wrap a callable as an engine (quick one-offs, tests)
- `Jinja2Engine`: Render Jinja2 templates, with layout wrapping and a
  ``partial`` template global

Custom Engines:
Implement the TemplateEngine protocol:
    ```python
    class MakoEngine:
        def __init__(self, lookup: TemplateLookup):
            self.lookup = lookup

        def render(self, template_id, options, locals):
            body = self.lookup.get_template(f"{template_id}.mako").render(**locals)
            if options.get("layout", True):
                return self.lookup.get_template("layout.mako").render(body=body)
            return body
    ```

Errors raised while locating or rendering a template (for example
``jinja2.TemplateNotFound``) are the engine's own and propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import jinja2
from markupsafe import Markup

from partialkit.config import PartialConfig
from partialkit.helpers import PartialHelper

RenderFunc = Callable[[str, Mapping[str, Any], Mapping[str, Any]], str]


@runtime_checkable
class TemplateEngine(Protocol):
    """Anything that can render a template id with options and locals."""

    def render(
        self,
        template_id: str,
        options: Mapping[str, Any],
        locals: Mapping[str, Any],
    ) -> str: ...


class FunctionEngine:
    """Wrap a ``(template_id, options, locals) -> str`` callable as an engine.

    Example:
            >>> engine = FunctionEngine(lambda tid, opts, loc: f"<{tid}>")
            >>> PartialHelper(engine)("header")
            '<_header>'

    """

    __slots__ = ("_render_func",)

    def __init__(self, render_func: RenderFunc):
        self._render_func = render_func

    def render(
        self,
        template_id: str,
        options: Mapping[str, Any],
        locals: Mapping[str, Any],
    ) -> str:
        return self._render_func(template_id, options, locals)


class Jinja2Engine:
    """Render Jinja2 templates by template id.

    Template ids get ``extension`` appended, so the partial ``"header"``
    resolves to ``_header.html``. When ``options["layout"]`` is truthy
    (the default for page renders) the output is rendered into the layout
    template as ``body``; a string value names a different layout.

    The engine installs a ``PartialHelper`` as the ``partial`` global of its
    Jinja2 environment. Output is wrapped in ``Markup`` so autoescaping
    templates do not escape it again.

    Attributes:
        environment: The Jinja2 environment templates are loaded from.
        extension: Suffix appended to template ids.
        layout: Template id of the default layout, or None for no layout.
        helper: The installed ``PartialHelper``.

    Example:
            >>> engine = Jinja2Engine.from_mapping({
            ...     "layout.html": "<body>{{ body }}</body>",
            ...     "_item.html": "<li>{{ item }}</li>",
            ...     "list.html": "<ul>{{ partial('item', collection=items) }}</ul>",
            ... })
            >>> engine.render("list", {}, {"items": ["a", "b"]})
            '<body><ul><li>a</li>\\n<li>b</li></ul></body>'

    """

    __slots__ = ("environment", "extension", "helper", "layout")

    def __init__(
        self,
        environment: jinja2.Environment,
        *,
        extension: str = ".html",
        layout: str | None = "layout",
        helper_name: str | None = "partial",
        config: PartialConfig | None = None,
    ):
        self.environment = environment
        self.extension = extension
        self.layout = layout
        self.helper = PartialHelper.from_config(self, config or PartialConfig(), wrap=Markup)
        if helper_name:
            environment.globals[helper_name] = self.helper

    @classmethod
    def from_mapping(cls, templates: Mapping[str, str], **kwargs: Any) -> Jinja2Engine:
        """Engine over in-memory template sources (testing, embedded templates)."""
        return cls(_environment(jinja2.DictLoader(dict(templates))), **kwargs)

    @classmethod
    def from_directory(
        cls,
        paths: str | Path | list[str | Path],
        encoding: str = "utf-8",
        **kwargs: Any,
    ) -> Jinja2Engine:
        """Engine over one or more template directories, searched in order."""
        if isinstance(paths, (str, Path)):
            paths = [paths]
        return cls(_environment(jinja2.FileSystemLoader(paths, encoding=encoding)), **kwargs)

    def template_name(self, template_id: str) -> str:
        if self.extension and not template_id.endswith(self.extension):
            return template_id + self.extension
        return template_id

    def render(
        self,
        template_id: str,
        options: Mapping[str, Any],
        locals: Mapping[str, Any],
    ) -> str:
        template = self.environment.get_template(self.template_name(template_id))
        body = template.render(locals)

        layout = options.get("layout", True)
        if not layout:
            return body
        layout_id = layout if isinstance(layout, str) else self.layout
        if layout_id is None:
            return body
        wrapper = self.environment.get_template(self.template_name(layout_id))
        return wrapper.render({**locals, "body": Markup(body)})

    def __repr__(self) -> str:
        return f"Jinja2Engine(loader={type(self.environment.loader).__name__})"


def _environment(loader: jinja2.BaseLoader) -> jinja2.Environment:
    return jinja2.Environment(
        loader=loader,
        autoescape=jinja2.select_autoescape(default_for_string=True),
        undefined=jinja2.StrictUndefined,
    )
