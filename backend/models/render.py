"""Render request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from engine.ssr.types import Entry


class RenderEntry(BaseModel):
    """One component in a render request."""

    model_config = {"extra": "forbid"}

    comp: str = Field(min_length=1)
    props: dict[str, Any] | None = None

    def to_entry(self) -> Entry:
        return Entry(comp=self.comp, props=self.props or {})


class RenderRequest(BaseModel):
    """What the client sends to POST /api/render."""

    model_config = {"extra": "forbid"}

    entries: list[RenderEntry] = Field(default_factory=list)
    noreload: bool = False

    def to_entries(self) -> list[Entry]:
        return [e.to_entry() for e in self.entries]
