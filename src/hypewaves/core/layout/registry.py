"""
PositionRegistry: event id -> current on-screen anchor.

The registry is a projection of rendered geometry, never authoritative data.
After every rendering pass the host hands over the rectangles of the event
cards it actually drew; the registry snaps their centroids to integer pixels
and reports whether anything moved.

Change reporting is what keeps a reactive host from looping forever: a
re-render is only needed when ``recompute`` returns ``True``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from hypewaves.core.contracts.geometry import Point, Rect
from hypewaves.core.settings import get_logger

log = get_logger("hypewaves.layout.registry")


class PositionRegistry:
    """Tracks the rounded centroid of every currently rendered event.

    Attributes
    ----------
    _positions : dict[str, Point]
        Integer-pixel centroids keyed by event id.
    _generation : int
        Number of recomputes that reported a change.
    """

    __slots__ = ("_positions", "_generation")

    def __init__(self) -> None:
        self._positions: dict[str, Point] = {}
        self._generation: int = 0

    def recompute(self, rendered_rects: Mapping[str, Rect]) -> bool:
        """Replace the tracked anchors with those of ``rendered_rects``.

        Ids that are no longer rendered are dropped (they scrolled out or were
        filtered out); that is not an error.

        Returns
        -------
        bool
            ``True`` if an anchor appeared, disappeared, or moved by at least
            one whole pixel after rounding.
        """
        fresh = {event_id: rect.center.rounded() for event_id, rect in rendered_rects.items()}
        if fresh == self._positions:
            return False

        dropped = self._positions.keys() - fresh.keys()
        if dropped:
            log.debug("Dropping %d stale anchor(s): %s", len(dropped), sorted(dropped))

        self._positions = fresh
        self._generation += 1
        return True

    def get(self, event_id: str) -> Point | None:
        """Return the anchor for ``event_id``, or ``None`` if it is not rendered."""
        return self._positions.get(event_id)

    def snapshot(self) -> dict[str, Point]:
        """Return a copy of all anchors (stable for tests and serialization)."""
        return dict(sorted(self._positions.items()))

    @property
    def generation(self) -> int:
        return self._generation

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._positions

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._positions)


__all__ = ["PositionRegistry"]
