"""Configuration for partial resolution and rendering.

    >>> config = PartialConfig(naming=NamingConvention.DIRECT, separator="")
    >>> helper = PartialHelper.from_config(engine, config)

Deployments can also configure through environment variables:

- ``PARTIALKIT_NAMING``: ``direct`` or ``underscore-prefixed``
- ``PARTIALKIT_SEPARATOR``: string placed between collection renders
  (backslash escapes such as ``\\n`` are decoded)
- ``PARTIALKIT_MAX_DEPTH``: maximum partial nesting depth
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from partialkit._types import NamingConvention

ENV_NAMING = "PARTIALKIT_NAMING"
ENV_SEPARATOR = "PARTIALKIT_SEPARATOR"
ENV_MAX_DEPTH = "PARTIALKIT_MAX_DEPTH"


@dataclass(frozen=True, slots=True)
class PartialConfig:
    """Settings shared by ``PartialResolver`` and ``PartialHelper``.

    Attributes:
        naming: Naming convention applied to partial names.
        separator: Joins the renders of a collection.
        max_depth: Maximum nesting of partials inside partials. 50 is deep
            enough for real view hierarchies while catching a partial that
            renders itself early.
    """

    naming: NamingConvention = NamingConvention.UNDERSCORE_PREFIXED
    separator: str = "\n"
    max_depth: int = 50

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PartialConfig:
        """Build a config from ``PARTIALKIT_*`` variables, defaulting the rest.

        Raises:
            ValueError: If a variable is set to an unusable value.
        """
        if environ is None:
            environ = os.environ

        kwargs: dict[str, object] = {}
        if naming := environ.get(ENV_NAMING):
            try:
                kwargs["naming"] = NamingConvention.parse(naming)
            except ValueError as e:
                raise ValueError(f"{ENV_NAMING}: {e}") from e
        if ENV_SEPARATOR in environ:
            try:
                kwargs["separator"] = _decode_escapes(environ[ENV_SEPARATOR])
            except ValueError as e:
                raise ValueError(f"{ENV_SEPARATOR}: {e}") from e
        if depth := environ.get(ENV_MAX_DEPTH):
            try:
                max_depth = int(depth)
            except ValueError as e:
                raise ValueError(f"{ENV_MAX_DEPTH} must be an integer, got {depth!r}") from e
            if max_depth < 1:
                raise ValueError(f"{ENV_MAX_DEPTH} must be at least 1, got {max_depth}")
            kwargs["max_depth"] = max_depth
        return cls(**kwargs)  # type: ignore[arg-type]


def _decode_escapes(value: str) -> str:
    """Decode backslash escapes, leaving non-ASCII text intact.

    Raises:
        ValueError: On a malformed escape such as ``\\x``.
    """
    return value.encode("latin-1", "backslashreplace").decode("unicode_escape")
