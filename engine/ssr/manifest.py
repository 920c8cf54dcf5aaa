"""
SSR Bridge: Manifest

Static mapping from component identifier to its compiled client asset and
stylesheets. Loaded once from the script context's exports and never mutated.

Lookups are lenient: an unknown identifier (a stale build, usually) yields an
empty ManifestEntry instead of failing the request.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from engine.ssr.errors import BridgeStartupError
from engine.ssr.types import ManifestEntry

logger = logging.getLogger(__name__)

_EMPTY = ManifestEntry()


class Manifest(Mapping[str, ManifestEntry]):
    """Read-only component manifest."""

    def __init__(self, entries: Mapping[str, ManifestEntry] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_exports(cls, raw: Any) -> Manifest:
        """
        Build a manifest from the structure exported by the script bundle:

            {"Button": {"client": "button.js", "css": ["button.css"]}, ...}

        Missing fields become empty values. A top level that is not an object
        means the bundle is broken, so that raises.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise BridgeStartupError(f"manifest must be an object, got {type(raw).__name__}")

        entries: dict[str, ManifestEntry] = {}
        for comp, desc in raw.items():
            if not isinstance(desc, Mapping):
                raise BridgeStartupError(f"manifest entry for {comp!r} must be an object")
            css = desc.get("css") or ()
            entries[str(comp)] = ManifestEntry(
                client=str(desc.get("client") or ""),
                css=tuple(str(c) for c in css),
            )
        return cls(entries)

    def lookup(self, comp: str) -> ManifestEntry:
        entry = self._entries.get(comp)
        if entry is None:
            logger.warning("manifest: unknown component %r", comp)
            return _EMPTY
        return entry

    def __getitem__(self, comp: str) -> ManifestEntry:
        return self._entries[comp]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Manifest({sorted(self._entries)!r})"
