"""
SSR host FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.config import settings
from backend.routes import render as render_routes
from engine.ssr import Renderer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Starts the script context unless a renderer was installed beforehand
    (tests do this), and stops it on shutdown.
    """
    # Startup
    owned = getattr(app.state, "renderer", None) is None
    if owned:
        app.state.renderer = Renderer.from_build(settings.SSR_BUILD_DIR, node_binary=settings.NODE_BINARY)
        logger.info("Renderer started from %s", settings.SSR_BUILD_DIR)

    yield

    # Shutdown
    if owned:
        app.state.renderer.close()
        app.state.renderer = None
        logger.info("Renderer stopped")


app = FastAPI(
    title="SSR Host",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(render_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
