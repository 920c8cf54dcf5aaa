"""
Pydantic models for the SSR host.

All request shapes defined here. No imports from routes or services.
"""

from backend.models.render import RenderEntry, RenderRequest

__all__ = [
    "RenderEntry",
    "RenderRequest",
]
