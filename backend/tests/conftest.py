"""
Pytest configuration and fixtures for SSR host tests.
"""

from __future__ import annotations

import os

# Set test environment before importing config
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("ENVIRONMENT", "development")

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from backend.main import app  # noqa: E402
from engine.ssr import PageTemplate, Renderer  # noqa: E402
from engine.ssr.tests.fakes import FakeScriptContext  # noqa: E402


@pytest.fixture
def script_context():
    return FakeScriptContext(
        manifest={
            "Button": {"client": "button.js", "css": ["button.css"]},
            "Layout": {"client": "layout.js", "css": ["layout.css"]},
        }
    )


@pytest.fixture
def renderer(script_context):
    template = PageTemplate("<!DOCTYPE html><html><head>{{{head}}}</head><body>{{{body}}}</body></html>")
    renderer = Renderer(script_context, template)
    app.state.renderer = renderer
    yield renderer
    app.state.renderer = None


@pytest_asyncio.fixture
async def async_client(renderer):
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
