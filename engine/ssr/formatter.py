"""
SSR Bridge: Response Formatter

Turns a bridge result into bytes plus exactly one Content-Type. Any failure
here is fatal for the request; nothing partial is returned.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from engine.ssr.errors import FormattingError
from engine.ssr.template import PageTemplate
from engine.ssr.types import RenderedResponse, RenderResult, ResponseEntry

HTML_MEDIA_TYPE = "text/html; charset=utf-8"
JSON_MEDIA_TYPE = "application/json; charset=utf-8"


def format_html(template: PageTemplate, result: RenderResult) -> RenderedResponse:
    """Merge head/body into the page template."""
    return RenderedResponse(content=template.render(result), media_type=HTML_MEDIA_TYPE)


def format_json(entries: Sequence[ResponseEntry]) -> RenderedResponse:
    """Serialize hydration descriptors to a compact JSON array."""
    try:
        body = json.dumps(
            [e.to_dict() for e in entries],
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        # UnicodeEncodeError (lone surrogates) is a ValueError
        raise FormattingError(f"response is not JSON-serializable: {e}") from e
    return RenderedResponse(content=body, media_type=JSON_MEDIA_TYPE)
