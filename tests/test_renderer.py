"""Tests for connection curves, the live line and tooltip placement."""

from __future__ import annotations

from datetime import date

from hypewaves.core.connections.renderer import (
    ConnectionsRenderer,
    curve_path,
    label_anchor,
    tooltip_for,
)
from hypewaves.core.connections.state_machine import IDLE, AwaitingReason, PendingStart
from hypewaves.core.contracts.geometry import Point, Rect
from hypewaves.core.contracts.timeline import Connection, Event
from hypewaves.core.layout.registry import PositionRegistry
from hypewaves.core.visibility import IndexedConnection


def _registry(**centers: tuple[float, float]) -> PositionRegistry:
    reg = PositionRegistry()
    reg.recompute(
        {
            eid: Rect(left=x - 10, top=y - 10, width=20, height=20)
            for eid, (x, y) in centers.items()
        }
    )
    return reg


def test_curve_path_uses_mid_x_handles() -> None:
    assert curve_path(Point(x=0, y=0), Point(x=100, y=100)) == "M 0,0 C 50,0 50,100 100,100"
    assert curve_path(Point(x=10, y=5), Point(x=15, y=-5)) == "M 10,5 C 12.5,5 12.5,-5 15,-5"


def test_label_sits_just_above_midpoint() -> None:
    assert label_anchor(Point(x=0, y=0), Point(x=100, y=100)) == Point(x=50, y=45)


def test_connections_without_anchors_are_skipped() -> None:
    reg = _registry(A=(0, 0), B=(100, 100))
    visible = [
        IndexedConnection(index=0, connection=Connection(from_id="A", to_id="gone")),
        IndexedConnection(index=3, connection=Connection(from_id="A", to_id="B", reason="r")),
    ]
    out = ConnectionsRenderer().render_connections(visible, reg)
    assert len(out) == 1
    assert out[0].index == 3
    assert out[0].path == "M 0,0 C 50,0 50,100 100,100"
    assert out[0].reason == "r"


def test_container_origin_is_subtracted() -> None:
    reg = _registry(A=(100, 200), B=(300, 400))
    renderer = ConnectionsRenderer(container_origin=Point(x=100, y=200))
    visible = [IndexedConnection(index=0, connection=Connection(from_id="A", to_id="B"))]
    (rc,) = renderer.render_connections(visible, reg)
    assert rc.start == Point(x=0, y=0)
    assert rc.end == Point(x=200, y=200)


def test_live_line_follows_cursor_from_start_anchor() -> None:
    reg = _registry(A=(10, 20))
    state = PendingStart(start_event_id="A", cursor=Point(x=50, y=60))
    line = ConnectionsRenderer().render_live_line(state, reg)
    assert line is not None
    assert line.start == Point(x=10, y=20)
    assert line.end == Point(x=50, y=60)


def test_live_line_is_suppressed_when_it_cannot_be_drawn() -> None:
    reg = _registry(A=(10, 20))
    renderer = ConnectionsRenderer()
    assert renderer.render_live_line(IDLE, reg) is None
    assert renderer.render_live_line(PendingStart(start_event_id="A"), reg) is None
    # Start event filtered out: no anchor, so no line from a stale location.
    hidden = PendingStart(start_event_id="hidden", cursor=Point(x=1, y=1))
    assert renderer.render_live_line(hidden, reg) is None
    awaiting = AwaitingReason(start_event_id="A", target_event_id="B")
    assert renderer.render_live_line(awaiting, reg) is None


def test_tooltip_centred_under_card() -> None:
    ev = Event(id="e", date=date(2007, 1, 9), title="iPhone", detail="Keynote")
    tip = tooltip_for(ev, Rect(left=10, top=20, width=180, height=60))
    assert tip is not None
    assert (tip.left, tip.top) == (0, 88)
    assert tip.detail == "Keynote"


def test_no_tooltip_without_detail_or_rect() -> None:
    plain = Event(id="e", date=date(2007, 1, 9), title="iPhone")
    assert tooltip_for(plain, Rect(left=0, top=0, width=10, height=10)) is None
    rich = Event(id="e", date=date(2007, 1, 9), title="iPhone", detail="x")
    assert tooltip_for(rich, None) is None
