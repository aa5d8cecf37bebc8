"""Service-layer helpers for the live map backend."""

from .live_map import LiveMapService

__all__ = ["LiveMapService"]
