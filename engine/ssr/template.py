"""
SSR Bridge: Page Template

The page shell the server-rendered fragments are merged into. Templates are
mustache (chevron); use triple braces so fragments go in verbatim:

    <html><head>{{{head}}}</head><body>{{{body}}}</body></html>
"""

from __future__ import annotations

from pathlib import Path

import chevron

from engine.ssr.errors import FormattingError
from engine.ssr.types import RenderResult

TEMPLATE_FILE = "template.html"


class PageTemplate:
    """A mustache page template: (template, {head, body}) -> bytes."""

    def __init__(self, source: str, name: str = TEMPLATE_FILE):
        self.source = source
        self.name = name

    @classmethod
    def from_file(cls, path: str | Path) -> PageTemplate:
        path = Path(path)
        return cls(path.read_text(encoding="utf-8"), name=path.name)

    @classmethod
    def from_build(cls, build_dir: str | Path) -> PageTemplate:
        return cls.from_file(Path(build_dir) / TEMPLATE_FILE)

    def render(self, result: RenderResult) -> bytes:
        try:
            html = chevron.render(self.source, {"head": result.head, "body": result.body})
            return html.encode("utf-8")
        except Exception as e:
            raise FormattingError(f"template {self.name}: {e}") from e
