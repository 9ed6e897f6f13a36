"""
ConnectionsRenderer: drawable primitives for confirmed and in-progress connections.

The renderer is a thin consumer. It never decides *whether* a connection
exists; it only turns the visible connections and the draft into curves and
lines, skipping anything whose anchor is missing from the registry.

Registry anchors are page coordinates. The renderer subtracts the container
origin so that primitives can be drawn on an overlay anchored at the
container's top-left corner. The draft cursor is already in container
coordinates.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from hypewaves.core.connections.state_machine import DraftState, PendingStart
from hypewaves.core.contracts.geometry import Point, Rect
from hypewaves.core.contracts.timeline import Event
from hypewaves.core.layout.registry import PositionRegistry
from hypewaves.core.visibility import IndexedConnection

_LABEL_LIFT = 5.0
_TOOLTIP_WIDTH = 200.0
_TOOLTIP_GAP = 8.0


def _fmt(value: float) -> str:
    """Compact pixel formatting: at most two decimals, no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def curve_path(start: Point, end: Point) -> str:
    """Cubic Bezier from ``start`` to ``end`` with both handles at the mid x.

    >>> curve_path(Point(x=0, y=0), Point(x=100, y=100))
    'M 0,0 C 50,0 50,100 100,100'
    """
    cx = (start.x + end.x) / 2
    return (
        f"M {_fmt(start.x)},{_fmt(start.y)} "
        f"C {_fmt(cx)},{_fmt(start.y)} {_fmt(cx)},{_fmt(end.y)} "
        f"{_fmt(end.x)},{_fmt(end.y)}"
    )


def label_anchor(start: Point, end: Point) -> Point:
    """Midpoint of the segment, lifted slightly so text clears the curve."""
    return Point(x=(start.x + end.x) / 2, y=(start.y + end.y) / 2 - _LABEL_LIFT)


@dataclass(frozen=True, slots=True)
class RenderedConnection:
    """A confirmed connection ready to draw; ``index`` addresses it for deletion."""

    index: int
    from_id: str
    to_id: str
    reason: str
    start: Point
    end: Point
    path: str
    label: Point


@dataclass(frozen=True, slots=True)
class LiveLine:
    """The straight, arrow-headed line of a draft that follows the cursor."""

    start_event_id: str
    start: Point
    end: Point


@dataclass(frozen=True, slots=True)
class Tooltip:
    """Hover card shown under an event that has detail text."""

    left: float
    top: float
    title: str
    detail: str


class ConnectionsRenderer:
    """Builds drawable primitives from visible connections, anchors and the draft."""

    def __init__(self, container_origin: Point | None = None) -> None:
        self.container_origin: Point = container_origin or Point(x=0, y=0)

    def _local(self, p: Point) -> Point:
        return p.offset(-self.container_origin.x, -self.container_origin.y)

    def render_connections(
        self,
        visible: Iterable[IndexedConnection],
        registry: PositionRegistry,
    ) -> list[RenderedConnection]:
        """Return a curve for each visible connection whose anchors are both known."""
        out: list[RenderedConnection] = []
        for item in visible:
            conn = item.connection
            src = registry.get(conn.from_id)
            dst = registry.get(conn.to_id)
            if src is None or dst is None:
                continue
            start, end = self._local(src), self._local(dst)
            out.append(
                RenderedConnection(
                    index=item.index,
                    from_id=conn.from_id,
                    to_id=conn.to_id,
                    reason=conn.reason,
                    start=start,
                    end=end,
                    path=curve_path(start, end),
                    label=label_anchor(start, end),
                )
            )
        return out

    def render_live_line(self, state: DraftState, registry: PositionRegistry) -> LiveLine | None:
        """Return the draft's live line, or ``None`` when it must not be drawn.

        The line is suppressed outside ``PendingStart``, when the host gave no
        cursor, and when the start event has no anchor (for example because it
        was filtered out), so it is never drawn from a stale location.
        """
        if not isinstance(state, PendingStart) or state.cursor is None:
            return None
        anchor = registry.get(state.start_event_id)
        if anchor is None:
            return None
        return LiveLine(
            start_event_id=state.start_event_id,
            start=self._local(anchor),
            end=state.cursor,
        )


def tooltip_for(event: Event, rect: Rect | None) -> Tooltip | None:
    """Position the hover card centred under ``rect``; events without detail get none."""
    if not event.detail or rect is None:
        return None
    return Tooltip(
        left=rect.left + rect.width / 2 - _TOOLTIP_WIDTH / 2,
        top=rect.bottom + _TOOLTIP_GAP,
        title=event.title,
        detail=event.detail,
    )


__all__ = [
    "ConnectionsRenderer",
    "LiveLine",
    "RenderedConnection",
    "Tooltip",
    "curve_path",
    "label_anchor",
    "tooltip_for",
]
