"""Value types shared by the resolver and the helper.

Everything here is immutable and built fresh for each call. The tagged
``Locals`` / ``Value`` variants let callers say explicitly whether they
are passing a set of template variables or one value to bind under the
partial's own name; ``as_locals()`` keeps the untagged shortcut.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final


class _Missing:
    """Sentinel type for "no value passed" (distinct from ``None``)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


class NamingConvention(Enum):
    """How a caller-facing partial name maps to the engine's template id.

    ``DIRECT`` passes the name through. ``UNDERSCORE_PREFIXED`` prepends
    ``_`` to the last path segment, so ``"header"`` becomes ``"_header"``
    and ``"users/row"`` becomes ``"users/_row"``.
    """

    DIRECT = "direct"
    UNDERSCORE_PREFIXED = "underscore-prefixed"

    @classmethod
    def parse(cls, value: str | NamingConvention) -> NamingConvention:
        """Parse a convention name, accepting ``_`` or ``-`` and any case.

        Raises:
            ValueError: If ``value`` names no convention.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        for member in cls:
            if member.value == normalized:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown naming convention {value!r} (expected one of: {choices})")

    def apply(self, name: str) -> str:
        if self is NamingConvention.DIRECT:
            return name
        head, sep, tail = name.rpartition("/")
        return f"{head}{sep}_{tail}"


@dataclass(frozen=True, slots=True)
class Locals:
    """An explicit mapping of template variables, used verbatim."""

    mapping: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class Value:
    """A single value bound under the partial's local name."""

    value: Any


def as_locals(raw: Any) -> Locals | Value:
    """Tag an untagged argument: mappings become ``Locals``, anything else ``Value``.

    Already-tagged arguments are returned unchanged.

    Example:
        >>> as_locals({"title": "Hi"})
        Locals(mapping={'title': 'Hi'})
        >>> as_locals("Hello")
        Value(value='Hello')
    """
    if isinstance(raw, (Locals, Value)):
        return raw
    if isinstance(raw, Mapping):
        return Locals(raw)
    return Value(raw)


@dataclass(frozen=True, slots=True)
class PartialOptions:
    """Everything a partial call can be configured with.

    Attributes:
        collection: Members to render the partial once for, in order.
        locals: Shared variables laid under every render's own locals.
        alias: Variable name for the bound value instead of the derived one.
        loop: When set, collection renders also receive a ``PartialLoop``
            under this key.
        engine_options: Options passed through to the template engine.
            ``layout`` is always overridden to ``False``.
    """

    collection: Iterable[Any] | None = None
    locals: Mapping[str, Any] | None = None
    alias: str | None = None
    loop: str | None = None
    engine_options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PartialLoop:
    """Position of the current member within a partial collection.

    Mirrors the ``loop`` variable of a template ``for`` block:
    ``index`` is 1-based, ``index0`` 0-based.
    """

    index0: int
    length: int

    @property
    def index(self) -> int:
        return self.index0 + 1

    @property
    def first(self) -> bool:
        return self.index0 == 0

    @property
    def last(self) -> bool:
        return self.index0 == self.length - 1

    @property
    def revindex(self) -> int:
        return self.length - self.index0

    @property
    def revindex0(self) -> int:
        return self.length - self.index0 - 1

    def __repr__(self) -> str:
        return f"<PartialLoop {self.index}/{self.length}>"


@dataclass(frozen=True, slots=True)
class RenderDescriptor:
    """A resolved partial render, ready to hand to a template engine.

    Attributes:
        template_id: Engine-facing id (naming convention applied).
        locals: Variables for the template.
        render_options: Engine options; ``layout`` is always ``False``.
        name: Caller-facing partial name.
        index: Position within a collection, ``None`` for single renders.
    """

    template_id: str
    locals: Mapping[str, Any]
    render_options: Mapping[str, Any]
    name: str
    index: int | None = None

    def as_args(self) -> tuple[str, Mapping[str, Any], Mapping[str, Any]]:
        """Arguments in ``TemplateEngine.render(template_id, options, locals)`` order."""
        return self.template_id, self.render_options, self.locals
