"""The ``partial()`` helper exposed to view code and templates.

``PartialHelper`` is the caller-facing surface: it resolves a partial call
with a ``PartialResolver`` and forwards each descriptor to a
``TemplateEngine``. Register it as a template global and templates can
render partials themselves:

    {{ partial("header", {"title": page.title}) }}
    {{ partial("greeting", "Hello") }}
    {{ partial("comment", collection=post.comments, loop="loop") }}

Call Forms:
    partial(name)                          # no locals
    partial(name, mapping)                 # mapping used as the locals
    partial(name, value)                   # {local_name: value}
    partial(name, value, engine_options)   # plus engine options
    partial(name, PartialOptions(...))     # single explicit options structure
    partial(name, collection=[...], ...)   # keyword form of the same structure

Collection renders are joined with ``separator`` (a newline by default).
Errors from the engine propagate untouched; the partial nesting chain is
restored either way.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from partialkit._types import MISSING, PartialOptions, RenderDescriptor
from partialkit.config import PartialConfig
from partialkit.render_context import partial_scope
from partialkit.resolver import PartialResolver

if TYPE_CHECKING:
    from partialkit.engines import TemplateEngine

logger = logging.getLogger(__name__)


class PartialHelper:
    """Render partials through a template engine.

    Attributes:
        engine: Anything with ``render(template_id, options, locals) -> str``.
        resolver: Resolver applying the naming convention.
        separator: Joins the renders of a collection.
        max_depth: Maximum nesting of partials inside partials.
        wrap: Applied to every result, e.g. ``markupsafe.Markup`` so an
            autoescaping engine does not escape rendered HTML again.

    Example:
            >>> helper = PartialHelper(engine)
            >>> helper("item", collection=["a", "b"])
            '<li>a</li>\\n<li>b</li>'

    """

    __slots__ = ("engine", "max_depth", "resolver", "separator", "wrap")

    def __init__(
        self,
        engine: TemplateEngine,
        resolver: PartialResolver | None = None,
        *,
        separator: str = "\n",
        max_depth: int = 50,
        wrap: Callable[[str], str] = str,
    ):
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.engine = engine
        self.resolver = resolver or PartialResolver()
        self.separator = separator
        self.max_depth = max_depth
        self.wrap = wrap

    @classmethod
    def from_config(
        cls,
        engine: TemplateEngine,
        config: PartialConfig,
        *,
        wrap: Callable[[str], str] = str,
    ) -> PartialHelper:
        return cls(
            engine,
            PartialResolver.from_config(config),
            separator=config.separator,
            max_depth=config.max_depth,
            wrap=wrap,
        )

    def __call__(
        self,
        name: str,
        value: Any = MISSING,
        options: PartialOptions | Mapping[str, Any] | None = None,
        /,
        *,
        collection: Iterable[Any] | None = None,
        locals: Mapping[str, Any] | None = None,
        alias: str | None = None,
        loop: str | None = None,
        **engine_options: Any,
    ) -> str:
        """Render partial ``name`` once, or once per collection member.

        Raises:
            InvalidTemplateName: Empty or malformed name
            InvalidCollection: Collection is unordered or not iterable
            PartialDepthError: Partials nested deeper than ``max_depth``
            TypeError: Conflicting arguments
        """
        if isinstance(value, PartialOptions):
            if options is not None:
                raise TypeError("partial() got PartialOptions and options together")
            value, options = MISSING, value

        opts = _merge_options(
            options,
            collection=collection,
            locals=locals,
            alias=alias,
            loop=loop,
            engine_options=engine_options,
        )

        if opts.collection is None:
            descriptors = [self.resolver.resolve(name, value, opts)]
        else:
            if value is not MISSING:
                raise TypeError("partial() takes a value or a collection, not both")
            descriptors = self.resolver.resolve_collection(name, opts.collection, opts)
            logger.debug("Rendering partial '%s' for %d members", name, len(descriptors))

        return self.render_descriptors(descriptors)

    def render_descriptors(self, descriptors: Iterable[RenderDescriptor]) -> str:
        """Render resolved descriptors in order and join them with ``separator``."""
        parts = []
        for descriptor in descriptors:
            with partial_scope(descriptor.name, self.max_depth):
                parts.append(self.engine.render(*descriptor.as_args()))
        return self.wrap(self.separator.join(parts))

    def __repr__(self) -> str:
        return f"PartialHelper(engine={self.engine!r}, resolver={self.resolver!r})"


def _merge_options(
    options: PartialOptions | Mapping[str, Any] | None,
    *,
    collection: Iterable[Any] | None,
    locals: Mapping[str, Any] | None,
    alias: str | None,
    loop: str | None,
    engine_options: dict[str, Any],
) -> PartialOptions:
    """Overlay keyword arguments on the positional options structure."""
    if options is None:
        base = PartialOptions()
    elif isinstance(options, PartialOptions):
        base = options
    elif isinstance(options, Mapping):
        base = PartialOptions(engine_options=options)
    else:
        raise TypeError(
            f"options must be a mapping or PartialOptions, got {type(options).__name__}"
        )

    overrides: dict[str, Any] = {
        key: val
        for key, val in (
            ("collection", collection),
            ("locals", locals),
            ("alias", alias),
            ("loop", loop),
        )
        if val is not None
    }
    if engine_options:
        overrides["engine_options"] = {**base.engine_options, **engine_options}
    if not overrides:
        return base
    return dataclasses.replace(base, **overrides)
