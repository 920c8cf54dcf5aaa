"""
SSR Bridge: Renderer

Mediates all rendering work between the host and the script context.

Two response modes from the same request shape:

  reload (default)  server-render the entries through the script context and
                    merge head/body into the page template -> HTML
  noreload          skip the script context; return the manifest-resolved
                    asset path, props and stylesheets per entry -> JSON

The script context is a single non-reentrant thread of execution, so at most
one script render is in flight across the process. The lock covers the script
call only, never template execution or JSON encoding.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Sequence
from pathlib import Path

from engine.ssr.errors import RenderError
from engine.ssr.formatter import format_html, format_json
from engine.ssr.manifest import Manifest
from engine.ssr.script_context import NodeScriptContext, ScriptContext
from engine.ssr.template import PageTemplate
from engine.ssr.types import Entry, RenderedResponse, RenderResult, ResponseEntry

logger = logging.getLogger(__name__)


class Renderer:
    """
    Renders component entries to an HTML page or a hydration payload.
    Safe to share across threads.
    """

    def __init__(self, context: ScriptContext, template: PageTemplate):
        self._context = context
        self._template = template
        self._lock = threading.Lock()

    @classmethod
    def from_build(
        cls,
        build_dir: str | Path,
        node_binary: str = "node",
        command: Sequence[str] | None = None,
    ) -> Renderer:
        """
        Build a renderer from the server build output directory.

        The directory must hold template.html, renderfile.js and exports.js.
        Starts the Node process; raises BridgeStartupError if it can't.
        """
        template = PageTemplate.from_build(build_dir)
        context = NodeScriptContext(build_dir, node_binary=node_binary, command=command)
        context.start()
        return cls(context, template)

    @property
    def manifest(self) -> Manifest:
        return self._context.manifest

    # -- render --

    def render(self, entries: Sequence[Entry], noreload: bool = False) -> RenderedResponse:
        """
        Render entries in the requested mode.

        Raises RenderError when component code failed, FormattingError when
        the page or JSON could not be built. Any other script failure is
        re-raised unchanged.
        """
        if noreload:
            return format_json(self.resolve(entries))

        result = self._render_script(entries)
        return format_html(self._template, result)

    async def render_async(self, entries: Sequence[Entry], noreload: bool = False) -> RenderedResponse:
        """render() on a worker thread, so the event loop never waits on the lock."""
        return await asyncio.to_thread(self.render, entries, noreload)

    def resolve(self, entries: Sequence[Entry]) -> list[ResponseEntry]:
        """Map entries to hydration descriptors via the manifest. No script, no lock."""
        manifest = self._context.manifest
        resp: list[ResponseEntry] = []
        for entry in entries:
            comp = manifest.lookup(entry.comp)
            resp.append(ResponseEntry(file="/" + comp.client, props=entry.props, css=comp.css))
        return resp

    def _render_script(self, entries: Sequence[Entry]) -> RenderResult:
        start = time.monotonic()
        try:
            with self._lock:
                result = self._context.render(entries)
        except Exception as e:
            if self._context.is_render_error(e):
                raise RenderError(str(e), cause=e) from e
            raise

        logger.debug(
            "render: %d entries in %.1fms",
            len(entries),
            (time.monotonic() - start) * 1000,
        )
        return result

    # -- lifecycle --

    def close(self) -> None:
        self._context.close()
