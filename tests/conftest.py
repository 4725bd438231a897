"""Pytest configuration and fixtures for partialkit tests."""

import pytest

from partialkit import (
    FunctionEngine,
    Jinja2Engine,
    NamingConvention,
    PartialHelper,
    PartialResolver,
)


class RecordingEngine:
    """Engine double that records every render call.

    Renders ``<template_id|k=v,...>`` with the locals sorted by key, so
    tests can assert on both the output and the arguments received.
    """

    def __init__(self):
        self.calls = []

    def render(self, template_id, options, locals):
        self.calls.append((template_id, dict(options), dict(locals)))
        pairs = ",".join(f"{k}={locals[k]}" for k in sorted(locals))
        return f"<{template_id}|{pairs}>"


@pytest.fixture
def resolver():
    """Resolver with the default underscore-prefixed convention."""
    return PartialResolver()


@pytest.fixture
def direct_resolver():
    """Resolver that passes names through unchanged."""
    return PartialResolver(NamingConvention.DIRECT)


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def helper(engine):
    """PartialHelper over a RecordingEngine."""
    return PartialHelper(engine)


@pytest.fixture
def echo_engine():
    """FunctionEngine returning only the template id."""
    return FunctionEngine(lambda template_id, options, locals: template_id)


@pytest.fixture
def jinja_engine():
    """Jinja2Engine with a layout, plain partials and partials that call partials."""
    return Jinja2Engine.from_mapping(
        {
            "layout.html": "<html><title>{{ title | default('') }}</title>{{ body }}</html>",
            "alt.html": "<alt>{{ body }}</alt>",
            "page.html": (
                "{{ partial('header', {'title': title}) }}"
                "<ul>{{ partial('item', collection=items) }}</ul>"
            ),
            "_header.html": "<h1>{{ title }}</h1>",
            "_greeting.html": "<p>{{ greeting }}</p>",
            "_item.html": "<li>{{ item }}</li>",
            "_row.html": "<tr class=\"{{ 'first' if pos.first else 'rest' }}\">{{ row }}</tr>",
            "_comments.html": "{{ partial('comment', collection=comments, alias='c') }}",
            "_comment.html": "<c>{{ c }}</c>",
            "_forever.html": "{{ partial('forever') }}",
            "users/_card.html": "<card>{{ card.name }}</card>",
        }
    )
