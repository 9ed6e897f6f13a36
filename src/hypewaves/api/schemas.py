"""
Request and response schemas of the hypewaves HTTP API.

The engine's own types are frozen dataclasses and Pydantic contracts; these
models are the stable JSON shapes the API promises to clients, built from an
engine :class:`~hypewaves.core.board.session.BoardFrame` by the helpers at
the bottom of this module.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from hypewaves.core.board.session import BoardFrame, describe_draft
from hypewaves.core.connections.state_machine import DraftState
from hypewaves.core.contracts.geometry import Point, Rect
from hypewaves.core.contracts.timeline import Connection, Event
from hypewaves.core.visibility import Selection

# --------------------------------------------------------------------------- #
# Requests
# --------------------------------------------------------------------------- #


class SelectionRequest(BaseModel):
    """Replace the view state."""

    wave_indices: list[int] = Field(default_factory=list)
    show_predicted: bool = True


class GestureRequest(BaseModel):
    """A connect gesture on an event, with the pointer position if known."""

    event_id: str
    x: float | None = None
    y: float | None = None

    def cursor(self) -> Point | None:
        if self.x is None or self.y is None:
            return None
        return Point(x=self.x, y=self.y)


class CursorRequest(BaseModel):
    x: float
    y: float


class CommitRequest(BaseModel):
    """Reason typed into the connection prompt; blank means the placeholder."""

    reason: str | None = None


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


class SelectionOut(BaseModel):
    wave_indices: list[int]
    show_predicted: bool


class DraftOut(BaseModel):
    state: str
    start_event_id: str | None = None
    target_event_id: str | None = None
    cursor: dict[str, float] | None = None


class PlacedEventOut(BaseModel):
    event: Event
    offset: float
    rect: Rect | None
    predicted: bool


class GroupOut(BaseModel):
    top: float
    height: float
    events: list[PlacedEventOut]


class WaveOut(BaseModel):
    index: int
    column: int
    title: str
    label: str
    period: str
    origin: dt.datetime
    groups: list[GroupOut]


class BoardOut(BaseModel):
    """Visible waves with their layout, plus the current view state."""

    evaluated_at: dt.datetime
    selection: SelectionOut
    waves: list[WaveOut]
    connection_count: int
    draft: DraftOut


class RenderedConnectionOut(BaseModel):
    index: int
    from_id: str
    to_id: str
    reason: str
    path: str
    label: Point


class LiveLineOut(BaseModel):
    start_event_id: str
    start: Point
    end: Point


class RenderOut(BaseModel):
    evaluated_at: dt.datetime
    connections: list[RenderedConnectionOut]
    live_line: LiveLineOut | None
    draft: DraftOut


class ConnectionOut(BaseModel):
    index: int
    from_id: str
    to_id: str
    reason: str


class DeletedEventOut(BaseModel):
    event_id: str
    connections_removed: int


# --------------------------------------------------------------------------- #
# Builders
# --------------------------------------------------------------------------- #


def selection_out(selection: Selection) -> SelectionOut:
    return SelectionOut(
        wave_indices=sorted(selection.wave_indices),
        show_predicted=selection.show_predicted,
    )


def draft_out(state: DraftState) -> DraftOut:
    return DraftOut.model_validate(describe_draft(state))


def connection_out(index: int, conn: Connection) -> ConnectionOut:
    return ConnectionOut(index=index, from_id=conn.from_id, to_id=conn.to_id, reason=conn.reason)


def board_out(frame: BoardFrame, selection: Selection, connection_count: int) -> BoardOut:
    waves: list[WaveOut] = []
    for vl in frame.waves:
        groups = [
            GroupOut(
                top=g.top,
                height=g.height,
                events=[
                    PlacedEventOut(
                        event=ev,
                        offset=offset,
                        rect=frame.rects.get(ev.id),
                        predicted=ev.id in frame.predicted_ids,
                    )
                    for ev, offset in g.placements()
                ],
            )
            for g in vl.layout.groups
        ]
        waves.append(
            WaveOut(
                index=vl.index,
                column=vl.column,
                title=vl.wave.title,
                label=vl.wave.label,
                period=vl.wave.period,
                origin=vl.layout.origin,
                groups=groups,
            )
        )
    return BoardOut(
        evaluated_at=frame.evaluated_at,
        selection=selection_out(selection),
        waves=waves,
        connection_count=connection_count,
        draft=draft_out(frame.draft),
    )


def render_out(frame: BoardFrame) -> RenderOut:
    live: LiveLineOut | None = None
    if frame.live_line is not None:
        ll = frame.live_line
        live = LiveLineOut(start_event_id=ll.start_event_id, start=ll.start, end=ll.end)
    return RenderOut(
        evaluated_at=frame.evaluated_at,
        connections=[
            RenderedConnectionOut(
                index=rc.index,
                from_id=rc.from_id,
                to_id=rc.to_id,
                reason=rc.reason,
                path=rc.path,
                label=rc.label,
            )
            for rc in frame.connections
        ],
        live_line=live,
        draft=draft_out(frame.draft),
    )


__all__ = [
    "BoardOut",
    "CommitRequest",
    "ConnectionOut",
    "CursorRequest",
    "DeletedEventOut",
    "DraftOut",
    "GestureRequest",
    "RenderOut",
    "SelectionOut",
    "SelectionRequest",
    "board_out",
    "connection_out",
    "draft_out",
    "render_out",
    "selection_out",
]
