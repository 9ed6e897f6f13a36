"""Pydantic contracts for the timeline data model and canvas geometry."""

from __future__ import annotations

from .geometry import Point, Rect, round_half_up
from .timeline import (
    DEFAULT_CONNECTION_REASON,
    Connection,
    Dataset,
    Event,
    EventSubmission,
    Wave,
)

__all__ = [
    "DEFAULT_CONNECTION_REASON",
    "Connection",
    "Dataset",
    "Event",
    "EventSubmission",
    "Point",
    "Rect",
    "Wave",
    "round_half_up",
]
