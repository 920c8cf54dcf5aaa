"""
Pytest fixtures for SSR bridge tests.
"""

from __future__ import annotations

import pytest

from engine.ssr.template import PageTemplate
from engine.ssr.tests.fakes import FakeScriptContext


@pytest.fixture
def manifest_exports():
    return {
        "Button": {"client": "button.js", "css": ["button.css"]},
        "Layout": {"client": "layout.js", "css": ["layout.css", "reset.css"]},
    }


@pytest.fixture
def context(manifest_exports):
    return FakeScriptContext(manifest=manifest_exports)


@pytest.fixture
def template():
    return PageTemplate("<!DOCTYPE html><html><head>{{{head}}}</head><body>{{{body}}}</body></html>")
