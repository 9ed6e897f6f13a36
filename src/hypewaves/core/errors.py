"""Domain errors raised by the board.

Lookups of things that do not exist raise subclasses of :class:`LookupError`
as well, so hosts can map them to "not found" without importing this module.
"""

from __future__ import annotations


class HypewavesError(Exception):
    """Base class for all hypewaves domain errors."""


class UnknownTimelineError(HypewavesError, ValueError):
    """An event submission referenced a timeline index with no wave."""

    def __init__(self, index: int) -> None:
        super().__init__(f"No timeline at index {index}")
        self.index = index


class UnknownEventError(HypewavesError, LookupError):
    """An operation referenced an event id that is not on any wave."""

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Event {event_id!r} not found")
        self.event_id = event_id


class UnknownConnectionError(HypewavesError, LookupError):
    """A connection index was out of range for the confirmed list."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Connection {index} not found")
        self.index = index


__all__ = [
    "HypewavesError",
    "UnknownConnectionError",
    "UnknownEventError",
    "UnknownTimelineError",
]
