"""partialkit: partial view rendering for template hosts.

A partial is a template fragment rendered inside another template, never
wrapped in the page layout. partialkit resolves partial calls into
engine-ready render descriptors and exposes a ``partial()`` helper for
view code and templates.

Quickstart:
    >>> from partialkit import Jinja2Engine
    >>> engine = Jinja2Engine.from_mapping({
    ...     "_greeting.html": "<p>{{ greeting }}</p>",
    ... })
    >>> engine.helper("greeting", "Hello")
    Markup('<p>Hello</p>')

Resolution only (no engine involved):
    >>> from partialkit import resolve
    >>> resolve("header", {"title": "Hi"}).as_args()
    ('_header', {'layout': False}, {'title': 'Hi'})

Three Strategies:
1. **Forwarding**: ``partial(name, locals)`` renders ``_name`` with the
   given locals and ``layout=False``.
2. **Implicit local**: ``partial(name, value)`` binds a non-mapping value
   under the partial's own name (``{name: value}``).
3. **Collection**: ``partial(name, collection=items)`` renders once per
   member, in order, joined with a newline.

Thread-Safety:
Resolution is pure and builds fresh objects per call. The only render
state, the chain of partials being rendered, lives in a ContextVar.

"""

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
from partialkit.engines import FunctionEngine, Jinja2Engine, TemplateEngine
from partialkit.exceptions import (
    ErrorCode,
    InvalidCollection,
    InvalidTemplateName,
    PartialDepthError,
    PartialError,
)
from partialkit.helpers import PartialHelper
from partialkit.render_context import current_stack, partial_scope
from partialkit.resolver import PartialResolver, resolve, resolve_collection

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "ErrorCode",
    "FunctionEngine",
    "InvalidCollection",
    "InvalidTemplateName",
    "Jinja2Engine",
    "Locals",
    "NamingConvention",
    "PartialConfig",
    "PartialDepthError",
    "PartialError",
    "PartialHelper",
    "PartialLoop",
    "PartialOptions",
    "PartialResolver",
    "RenderDescriptor",
    "TemplateEngine",
    "Value",
    "__version__",
    "as_locals",
    "current_stack",
    "partial_scope",
    "resolve",
    "resolve_collection",
]
