"""
Fakes for SSR bridge tests.

FakeScriptContext stands in for the script engine: it records calls, can be
told to fail, and detects reentrant use.
"""

from __future__ import annotations

import threading
import time

from engine.ssr.manifest import Manifest
from engine.ssr.script_context import ScriptContext
from engine.ssr.types import RenderResult


class ComponentThrew(Exception):
    """What user component code raises inside the fake engine."""


class FakeScriptContext(ScriptContext):
    def __init__(self, manifest=None, result=None, delay=0.0):
        self.manifest = Manifest.from_exports(manifest or {})
        self.result = result or RenderResult(head="<title>X</title>", body="<div>Y</div>")
        self.delay = delay
        self.fail_with: BaseException | None = None
        self.calls: list[list] = []
        self.active = 0
        self.max_active = 0
        self.closed = False
        self._guard = threading.Lock()

    def render(self, entries):
        with self._guard:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            reentered = self.active > 1
        try:
            if reentered:
                raise AssertionError("script context reentered")
            self.calls.append(list(entries))
            if self.delay:
                time.sleep(self.delay)
            if self.fail_with is not None:
                exc, self.fail_with = self.fail_with, None
                raise exc
            return self.result
        finally:
            with self._guard:
                self.active -= 1

    def is_render_error(self, exc):
        return isinstance(exc, ComponentThrew)

    def close(self):
        self.closed = True


