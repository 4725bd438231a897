"""Fixtures shared by the partialkit examples.

``example_app`` imports the ``app.py`` that sits next to the requesting
test as a fresh module, so module-level renders run again for every test.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest):
    """Execute the sibling app.py and return it as a module."""
    app_path = Path(request.path).parent / "app.py"
    spec = importlib.util.spec_from_file_location(f"{app_path.parent.name}_app", app_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
