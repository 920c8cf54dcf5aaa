"""
SSR Bridge: serves UI components from an embedded script runtime, either as
a server-rendered page or as a hydration payload for the client.

  manifest        component identifier -> client asset + stylesheets
  script_context  the single-threaded script engine (Node child process)
  renderer        serializes script access, picks the response mode
  formatter       HTML page or JSON array, with its Content-Type
"""

from engine.ssr.errors import (
    BridgeError,
    BridgeStartupError,
    ExecutionFault,
    FormattingError,
    RenderError,
    ScriptError,
)
from engine.ssr.manifest import Manifest
from engine.ssr.renderer import Renderer
from engine.ssr.script_context import NodeScriptContext, ScriptContext
from engine.ssr.template import PageTemplate
from engine.ssr.types import Entry, ManifestEntry, RenderedResponse, RenderResult, ResponseEntry

__all__ = [
    "BridgeError",
    "BridgeStartupError",
    "Entry",
    "ExecutionFault",
    "FormattingError",
    "Manifest",
    "ManifestEntry",
    "NodeScriptContext",
    "PageTemplate",
    "RenderError",
    "RenderedResponse",
    "RenderResult",
    "Renderer",
    "ResponseEntry",
    "ScriptContext",
    "ScriptError",
]
