"""Per-render partial nesting state.

A partial's template can itself call ``partial()``. The chain of partials
currently being rendered lives in a ContextVar, so each thread and each
asyncio task sees only its own chain and nothing leaks into the user's
template locals.

    >>> with partial_scope("comments", max_depth=50):
    ...     with partial_scope("comment", max_depth=50):
    ...         current_stack()
    ('comments', 'comment')

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass

from partialkit.exceptions import PartialDepthError


@dataclass(frozen=True, slots=True)
class PartialStack:
    """Names of the partials being rendered, outermost first."""

    names: tuple[str, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.names)

    def push(self, name: str) -> PartialStack:
        return PartialStack(self.names + (name,))


_partial_stack: ContextVar[PartialStack] = ContextVar(
    "partial_stack",
    default=PartialStack(),
)


def current_stack() -> tuple[str, ...]:
    """Partial names being rendered in the current context (empty outside renders)."""
    return _partial_stack.get().names


@contextmanager
def partial_scope(name: str, max_depth: int) -> Iterator[PartialStack]:
    """Mark ``name`` as being rendered for the duration of the block.

    The previous chain is restored on exit, including when the engine
    raises.

    Raises:
        PartialDepthError: If the chain is already ``max_depth`` long.
    """
    stack = _partial_stack.get()
    if stack.depth >= max_depth:
        raise PartialDepthError(name, stack.names, max_depth)
    inner = stack.push(name)
    token: Token[PartialStack] = _partial_stack.set(inner)
    try:
        yield inner
    finally:
        _partial_stack.reset(token)
