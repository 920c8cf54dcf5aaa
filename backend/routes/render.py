"""Render route: POST /api/render returns a server-rendered page or a hydration payload."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from fastapi.responses import Response

from backend.models.render import RenderRequest
from backend.services.renderer import get_renderer, render_response
from engine.ssr import Renderer

router = APIRouter(prefix="/api", tags=["render"])


@router.post("/render")
async def render(
    req: RenderRequest,
    renderer: Renderer = Depends(get_renderer),
    x_noreload: str | None = Header(default=None),
) -> Response:
    """
    Render a list of components.

    With noreload (in the body, or an X-Noreload: 1 header) the server skips
    rendering and returns [{"File", "Props", "CSS"}] for client-side hydration.
    Otherwise the full page HTML is returned.
    """
    noreload = req.noreload or (x_noreload or "").strip().lower() in ("1", "true")
    return await render_response(renderer, req.to_entries(), noreload=noreload)
