"""Property-based tests for partial resolution.

Invariants that must hold for every valid name, value and option set:

- Non-mapping values are bound as ``{name: value}``
- Mappings are used unchanged
- ``layout`` is always False, whatever the caller asked for
- Collection descriptors follow collection order one-to-one
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from partialkit import NamingConvention, PartialOptions, PartialResolver

from .strategies import (
    collection,
    engine_options,
    identifier_name,
    locals_mapping,
    partial_name,
    scalar_value,
)

_resolver = PartialResolver()
_direct = PartialResolver(NamingConvention.DIRECT)


class TestResolveProperties:
    """Single-render invariants."""

    @given(name=identifier_name, value=scalar_value)
    @settings(max_examples=200)
    def test_scalar_bound_under_name(self, name: str, value: object) -> None:
        assert _resolver.resolve(name, value, {}).locals == {name: value}

    @given(name=partial_name, mapping=locals_mapping)
    @settings(max_examples=200)
    def test_mapping_unchanged(self, name: str, mapping: dict) -> None:
        assert _resolver.resolve(name, mapping, {}).locals == mapping

    @given(name=partial_name, options=engine_options)
    @settings(max_examples=200)
    def test_layout_always_false(self, name: str, options: dict) -> None:
        render_options = _resolver.resolve(name, options=options).render_options
        assert render_options["layout"] is False
        assert {k: v for k, v in render_options.items() if k != "layout"} == {
            k: v for k, v in options.items() if k != "layout"
        }

    @given(name=identifier_name)
    def test_naming_conventions(self, name: str) -> None:
        assert _resolver.engine_id(name) == "_" + name
        assert _direct.engine_id(name) == name

    @given(name=partial_name)
    def test_underscore_only_touches_last_segment(self, name: str) -> None:
        head, _, tail = _resolver.engine_id(name).rpartition("/")
        original_head, _, original_tail = name.rpartition("/")
        assert head == original_head
        assert tail == "_" + original_tail


class TestCollectionProperties:
    """Collection-form invariants."""

    @given(name=identifier_name, members=collection)
    @settings(max_examples=200)
    def test_order_and_count_preserved(self, name: str, members: list) -> None:
        descriptors = _resolver.resolve_collection(name, members, {})
        assert len(descriptors) == len(members)
        assert [d.locals for d in descriptors] == [{name: m} for m in members]
        assert [d.index for d in descriptors] == list(range(len(members)))

    @given(name=identifier_name, members=collection, options=engine_options)
    def test_layout_false_for_all(self, name: str, members: list, options: dict) -> None:
        descriptors = _resolver.resolve_collection(name, members, options)
        assert all(d.render_options["layout"] is False for d in descriptors)

    @given(members=st.lists(st.integers(), min_size=1, max_size=10))
    def test_loop_bounds(self, members: list[int]) -> None:
        descriptors = _resolver.resolve_collection("n", members, PartialOptions(loop="loop"))
        loops = [d.locals["loop"] for d in descriptors]
        assert sum(loop.first for loop in loops) == 1
        assert sum(loop.last for loop in loops) == 1
        assert [loop.index0 for loop in loops] == list(range(len(members)))
