"""Partial resolution: template id, locals and render options.

``PartialResolver`` turns a partial call into one ``RenderDescriptor``
(single form) or an ordered list of them (collection form). It performs
no I/O and never calls the template engine: the descriptor's
``as_args()`` is exactly the argument list of ``TemplateEngine.render``.

Single form:
    >>> resolver = PartialResolver()
    >>> d = resolver.resolve("header", {"title": "Hi"})
    >>> d.template_id, d.locals, d.render_options
    ('_header', {'title': 'Hi'}, {'layout': False})

    A non-mapping value is bound under the partial's own name:

    >>> resolver.resolve("greeting", "Hello").locals
    {'greeting': 'Hello'}

Collection form:
    >>> [d.locals for d in resolver.resolve_collection("item", ["a", "b"])]
    [{'item': 'a'}, {'item': 'b'}]

Thread-Safety:
    Resolvers hold only their (immutable) naming convention. Every call
    builds fresh descriptors, so one resolver can serve any number of
    threads or tasks.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence, Set
from typing import Any

from partialkit._types import (
    MISSING,
    Locals,
    NamingConvention,
    PartialLoop,
    PartialOptions,
    RenderDescriptor,
    Value,
    as_locals,
)
from partialkit.config import PartialConfig
from partialkit.exceptions import ErrorCode, InvalidCollection, InvalidTemplateName

logger = logging.getLogger(__name__)

_SEGMENT = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]*")

_NO_OPTIONS = PartialOptions()


class PartialResolver:
    """Compute the engine-facing form of partial calls.

    Attributes:
        naming: Naming convention applied to every partial name.

    Example:
            >>> PartialResolver().engine_id("users/row")
            'users/_row'
            >>> PartialResolver(NamingConvention.DIRECT).engine_id("users/row")
            'users/row'

    Raises:
        InvalidTemplateName: Empty or malformed partial name
        InvalidCollection: Collection that is unordered or not iterable

    """

    __slots__ = ("naming",)

    def __init__(self, naming: NamingConvention | str = NamingConvention.UNDERSCORE_PREFIXED):
        self.naming = NamingConvention.parse(naming)

    @classmethod
    def from_config(cls, config: PartialConfig) -> PartialResolver:
        return cls(config.naming)

    def __repr__(self) -> str:
        return f"PartialResolver(naming={self.naming.value!r})"

    def engine_id(self, name: str) -> str:
        """Validate ``name`` and apply the naming convention."""
        _check_name(name)
        return self.naming.apply(name)

    def local_name(self, name: str) -> str:
        """Variable name a bound value gets inside the partial.

        The last path segment without its extension, dashes turned into
        underscores: ``"users/user-card.html"`` gives ``"user_card"``.
        """
        _check_name(name)
        local = name.rpartition("/")[2].split(".", 1)[0].replace("-", "_")
        if not local.isidentifier():
            raise InvalidTemplateName(
                name,
                f"'{local}' is not usable as a variable name",
                hint="Pass alias='...' to choose the variable name",
            )
        return local

    def resolve(
        self,
        name: str,
        value: Any = MISSING,
        options: PartialOptions | Mapping[str, Any] | None = None,
    ) -> RenderDescriptor:
        """Resolve a single partial render.

        Args:
            name: Caller-facing partial name.
            value: ``Locals``/mapping used verbatim, ``Value``/any other
                object bound under the partial's local name, or ``MISSING``
                for no locals at all.
            options: ``PartialOptions``, or a plain mapping of engine options.
                A collection in ``options`` is ignored here; use
                ``resolve_collection()``.

        Returns:
            RenderDescriptor with ``render_options["layout"]`` forced to False.
        """
        template_id = self.engine_id(name)
        opts = _coerce_options(options)
        alias = _check_variable(name, opts.alias, "alias")

        if value is MISSING:
            own: Mapping[str, Any] = {}
        else:
            match as_locals(value):
                case Locals(mapping=mapping):
                    own = mapping
                case Value(value=bound):
                    own = {alias or self.local_name(name): bound}

        descriptor = RenderDescriptor(
            template_id=template_id,
            locals=_layer(opts.locals, own),
            render_options=_render_options(opts),
            name=name,
        )
        logger.debug("Resolved partial '%s' -> '%s'", name, template_id)
        return descriptor

    def resolve_collection(
        self,
        name: str,
        collection: Iterable[Any],
        options: PartialOptions | Mapping[str, Any] | None = None,
    ) -> list[RenderDescriptor]:
        """Resolve one render per collection member, in collection order.

        Each member is bound under the partial's local name (or
        ``options.alias``). With ``options.loop`` set, a ``PartialLoop`` is
        bound under that key as well.

        Returns:
            Descriptors in member order; empty for an empty collection.
        """
        template_id = self.engine_id(name)
        opts = _coerce_options(options)
        local = _check_variable(name, opts.alias, "alias") or self.local_name(name)
        loop_key = _check_variable(name, opts.loop, "loop")
        members = _members(name, collection)

        length = len(members)
        descriptors = []
        for index, member in enumerate(members):
            own: dict[str, Any] = {local: member}
            if loop_key:
                own[loop_key] = PartialLoop(index0=index, length=length)
            descriptors.append(
                RenderDescriptor(
                    template_id=template_id,
                    locals=_layer(opts.locals, own),
                    render_options=_render_options(opts),
                    name=name,
                    index=index,
                )
            )
        logger.debug(
            "Resolved partial collection '%s' -> '%s' (%d members)", name, template_id, length
        )
        return descriptors


def _check_name(name: Any) -> None:
    if not isinstance(name, str):
        raise InvalidTemplateName(name, f"expected str, got {type(name).__name__}")
    if not name:
        raise InvalidTemplateName(name, "name is empty", code=ErrorCode.EMPTY_NAME)

    segments = name.split("/")
    for segment in segments:
        if not segment:
            cleaned = "/".join(s for s in segments if s)
            raise InvalidTemplateName(
                name,
                "empty path segment",
                hint=f"Write '{cleaned}'" if cleaned else None,
            )
        if segment in (".", ".."):
            raise InvalidTemplateName(name, f"relative segment '{segment}' is not allowed")
        if not _SEGMENT.fullmatch(segment):
            raise InvalidTemplateName(
                name,
                f"segment '{segment}' may only contain letters, digits, '_', '-' and '.'",
            )


def _check_variable(name: str, variable: str | None, what: str) -> str | None:
    if variable is None:
        return None
    if not isinstance(variable, str) or not variable.isidentifier():
        raise InvalidTemplateName(
            name,
            f"{what} {variable!r} is not a valid variable name",
            code=ErrorCode.INVALID_ALIAS,
        )
    return variable


def _coerce_options(options: PartialOptions | Mapping[str, Any] | None) -> PartialOptions:
    if options is None:
        return _NO_OPTIONS
    if isinstance(options, PartialOptions):
        return options
    if isinstance(options, Mapping):
        return PartialOptions(engine_options=options)
    raise TypeError(
        f"options must be a mapping or PartialOptions, got {type(options).__name__}"
    )


def _render_options(opts: PartialOptions) -> dict[str, Any]:
    if opts.engine_options.get("layout"):
        logger.debug("Ignoring layout=%r for partial render", opts.engine_options["layout"])
    return {**opts.engine_options, "layout": False}


def _layer(shared: Mapping[str, Any] | None, own: Mapping[str, Any]) -> Mapping[str, Any]:
    """Lay ``own`` over ``shared``; ``own`` is returned as-is when nothing is shared."""
    if not shared:
        return own
    return {**shared, **own}


def _members(name: str, collection: Any) -> Sequence[Any]:
    if isinstance(collection, (str, bytes, bytearray)):
        raise InvalidCollection(
            name,
            collection,
            hint="Wrap a single string in a list: [value]",
        )
    if isinstance(collection, Mapping):
        raise InvalidCollection(
            name,
            collection,
            hint="Pass mapping.values() or list(mapping.items())",
        )
    if isinstance(collection, Set):
        raise InvalidCollection(
            name,
            collection,
            code=ErrorCode.UNORDERED_COLLECTION,
            hint="Pass sorted(collection) or a list",
        )
    if isinstance(collection, Sequence):
        return collection
    try:
        members = iter(collection)
    except TypeError:
        raise InvalidCollection(
            name, collection, hint="Pass a list or tuple of members"
        ) from None
    return list(members)


_default_resolver = PartialResolver()


def resolve(
    name: str,
    value: Any = MISSING,
    options: PartialOptions | Mapping[str, Any] | None = None,
) -> RenderDescriptor:
    """``PartialResolver.resolve`` with the underscore-prefixed convention."""
    return _default_resolver.resolve(name, value, options)


def resolve_collection(
    name: str,
    collection: Iterable[Any],
    options: PartialOptions | Mapping[str, Any] | None = None,
) -> list[RenderDescriptor]:
    """``PartialResolver.resolve_collection`` with the underscore-prefixed convention."""
    return _default_resolver.resolve_collection(name, collection, options)
