"""Timeline layout: event grouping, canvas geometry and the anchor registry."""

from __future__ import annotations

from .geometry import CanvasGeometry, GeometryProvider
from .groups import EventGroup, LayoutParams, WaveLayout, layout_wave, stagger_offsets
from .registry import PositionRegistry

__all__ = [
    "CanvasGeometry",
    "EventGroup",
    "GeometryProvider",
    "LayoutParams",
    "PositionRegistry",
    "WaveLayout",
    "layout_wave",
    "stagger_offsets",
]
