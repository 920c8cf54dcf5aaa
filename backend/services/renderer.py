"""HTTP-side render service: runs the SSR bridge and maps its failures to responses."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from html import escape

from fastapi import Request
from fastapi.responses import HTMLResponse, Response

from backend.config import settings
from engine.ssr import Entry, RenderError, Renderer

logger = logging.getLogger(__name__)

_ERROR_PAGE = "<!DOCTYPE html><html><body><h1>500 - Render failed</h1>{detail}</body></html>"


def get_renderer(request: Request) -> Renderer:
    """FastAPI dependency: the process-wide renderer built at startup."""
    return request.app.state.renderer


async def render_response(renderer: Renderer, entries: Sequence[Entry], noreload: bool = False) -> Response:
    """
    Render entries and wrap the result in a Response.

    Render errors come from component code, so their message may be shown
    (when EXPOSE_RENDER_ERRORS is on). Anything else is logged and answered
    with a generic page.
    """
    try:
        rendered = await renderer.render_async(entries, noreload=noreload)
    except RenderError as e:
        logger.warning("render: component error entries=%s: %s", [en.comp for en in entries], e)
        detail = f"<pre>{escape(str(e))}</pre>" if settings.EXPOSE_RENDER_ERRORS else ""
        return HTMLResponse(content=_ERROR_PAGE.format(detail=detail), status_code=500)
    except Exception:
        logger.exception("render: failed entries=%s noreload=%s", [en.comp for en in entries], noreload)
        return HTMLResponse(content=_ERROR_PAGE.format(detail=""), status_code=500)

    return Response(content=rendered.content, media_type=rendered.media_type)
