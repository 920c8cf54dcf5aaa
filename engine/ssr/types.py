"""
SSR Bridge: Shared Types

Data classes passed between the manifest, the script context, the renderer
and the formatter. None of these are persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Entry:
    """One component to render, with its props."""

    comp: str
    props: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # props is never None past construction
        if self.props is None:
            object.__setattr__(self, "props", {})

    def to_dict(self) -> dict[str, Any]:
        return {"comp": self.comp, "props": self.props}


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ManifestEntry:
    """Compiled client asset and stylesheets for one component."""

    client: str = ""
    css: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderResult:
    """Head and body fragments from a server-side render."""

    head: str
    body: str


@dataclass(frozen=True)
class ResponseEntry:
    """Hydration descriptor for one component (reload-disabled mode)."""

    file: str
    props: dict[str, Any]
    css: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"File": self.file, "Props": self.props, "CSS": list(self.css)}


@dataclass(frozen=True)
class RenderedResponse:
    """Fully formatted response body and its Content-Type."""

    content: bytes
    media_type: str
