"""Exceptions for partialkit.

Exception Hierarchy:
PartialError (base)
├── InvalidTemplateName     # Empty, malformed, or unbindable partial name
├── InvalidCollection       # Collection is unordered or not iterable
└── PartialDepthError       # Partials nested deeper than the configured limit

Validation errors are raised synchronously before anything is rendered.
Errors raised by the template engine itself (missing template, render
failure) are never wrapped: they reach the caller unchanged.

Example:
    ```
    P-NAM-002: Invalid partial name 'users//row': empty path segment
      Hint: Write 'users/row'
    ```

"""

from __future__ import annotations

from enum import Enum
from typing import Any

from partialkit import terminal


class ErrorCode(Enum):
    """Searchable error codes for partial errors.

    Format: P-{CATEGORY}-{NUMBER}
    Categories: NAM (template names), COL (collections), RUN (rendering)
    """

    # Template name errors (P-NAM-xxx)
    EMPTY_NAME = "P-NAM-001"
    MALFORMED_NAME = "P-NAM-002"
    INVALID_ALIAS = "P-NAM-003"

    # Collection errors (P-COL-xxx)
    NOT_ENUMERABLE = "P-COL-001"
    UNORDERED_COLLECTION = "P-COL-002"

    # Render errors (P-RUN-xxx)
    PARTIAL_DEPTH = "P-RUN-001"

    @property
    def category(self) -> str:
        """Error category (``'name'``, ``'collection'`` or ``'runtime'``)."""
        prefix = self.value.split("-")[1]
        return {
            "NAM": "name",
            "COL": "collection",
            "RUN": "runtime",
        }.get(prefix, "unknown")


class PartialError(Exception):
    """Base exception for all partialkit errors.

    Catch this to handle every validation failure raised by the resolver
    and the helper in one place:

        >>> try:
        ...     helper("", value)
        ... except PartialError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: ErrorCode identifying the failure.
        hint: Optional actionable suggestion shown by ``format_compact()``.
    """

    code: ErrorCode | None = None

    def __init__(self, message: str, *, code: ErrorCode | None = None, hint: str | None = None):
        if code is not None:
            self.code = code
        self.message = message
        self.hint = hint
        super().__init__(message)

    def format_compact(self) -> str:
        """Format the error as a short terminal diagnostic.

        Format::

            P-COL-002: Collection for partial 'item' must be ordered, got set
              Hint: Pass sorted(items) or a list

        """
        header = self.message
        if self.code:
            header = f"{terminal.error_code(self.code.value)}: {header}"
        parts = [header]
        if self.hint:
            parts.append(f"  {terminal.hint('Hint:')} {self.hint}")
        return "\n".join(parts)


class InvalidTemplateName(PartialError, ValueError):
    """Partial name cannot be turned into a template id or a local name.

    Raised for empty names, non-string names, malformed path segments,
    names whose local variable would not be a valid identifier, and
    aliases that are not identifiers.

    Example:
            >>> resolve("", "Hello")
        InvalidTemplateName: Invalid partial name '': name is empty

    """

    code: ErrorCode | None = ErrorCode.MALFORMED_NAME

    def __init__(
        self,
        name: Any,
        reason: str,
        *,
        code: ErrorCode | None = None,
        hint: str | None = None,
    ):
        self.name = name
        self.reason = reason
        super().__init__(
            f"Invalid partial name {name!r}: {reason}",
            code=code,
            hint=hint,
        )


class InvalidCollection(PartialError, TypeError):
    """Collection argument is unordered or not iterable at all.

    Strings, bytes, mappings and sets are rejected even though they are
    iterable: none of them yields members in a meaningful order.
    """

    code: ErrorCode | None = ErrorCode.NOT_ENUMERABLE

    def __init__(
        self,
        name: str,
        collection: Any,
        *,
        code: ErrorCode | None = None,
        hint: str | None = None,
    ):
        self.name = name
        self.collection_type = type(collection).__name__
        if code is ErrorCode.UNORDERED_COLLECTION:
            message = (
                f"Collection for partial '{name}' must be ordered, "
                f"got {self.collection_type}"
            )
        else:
            message = (
                f"Collection for partial '{name}' must be an enumerable sequence, "
                f"got {self.collection_type}"
            )
        super().__init__(message, code=code, hint=hint)


class PartialDepthError(PartialError, RuntimeError):
    """Partials nested deeper than ``max_depth``.

    Usually a partial that renders itself, directly or through another
    partial. The message shows the chain of partial names.
    """

    code: ErrorCode | None = ErrorCode.PARTIAL_DEPTH

    def __init__(self, name: str, stack: tuple[str, ...], max_depth: int):
        self.name = name
        self.stack = stack
        self.max_depth = max_depth
        super().__init__(
            f"Maximum partial depth ({max_depth}) exceeded rendering '{name}'\n"
            f"  Partial chain: {' -> '.join((*stack, name))}",
            hint="Check for a partial that renders itself",
        )

    def format_compact(self) -> str:
        """Format the error with the partial chain highlighted."""
        chain = " -> ".join(terminal.partial_name(n) for n in (*self.stack, self.name))
        parts = [
            f"{terminal.error_code(self.code.value)}: "
            f"Maximum partial depth ({self.max_depth}) exceeded rendering '{self.name}'",
            f"  {terminal.dim_text('Partial chain:')} {chain}",
        ]
        if self.hint:
            parts.append(f"  {terminal.hint('Hint:')} {self.hint}")
        return "\n".join(parts)
