"""
ShowcaseBoard: the composition root of the timeline engine.

The board is the single owner of all mutable state:

- the waves (data) and the connection state machine (draft + confirmed list);
- the selection (which waves are shown, whether predicted events are shown);
- the position registry (derived anchors) and the geometry host that feeds it.

Every mutation goes through a board method and bumps ``revision``. Rendering
always starts with :meth:`ShowcaseBoard.refresh`, so anchors are never older
than the last mutation that added or removed an event.

The refresh pass
----------------
1. Sample the evaluation instant once.
2. Derive the visible set (:func:`~hypewaves.core.visibility.compute_visible`).
3. Lay out each visible wave (:func:`~hypewaves.core.layout.groups.layout_wave`).
4. Measure the cards with the geometry host and feed the registry. Repeat
   only while the registry reports a change (a fixed point, bounded by
   ``max_passes``).
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hypewaves.core.board.trace import BoardSnapshot
from hypewaves.core.connections.renderer import (
    ConnectionsRenderer,
    LiveLine,
    RenderedConnection,
    Tooltip,
    tooltip_for,
)
from hypewaves.core.connections.state_machine import (
    AwaitingReason,
    ConnectionStateMachine,
    DraftState,
    PendingStart,
)
from hypewaves.core.contracts.geometry import Point, Rect
from hypewaves.core.contracts.timeline import (
    Connection,
    Dataset,
    Event,
    EventSubmission,
    Wave,
)
from hypewaves.core.errors import UnknownEventError, UnknownTimelineError
from hypewaves.core.ids import generate_event_id
from hypewaves.core.layout.geometry import CanvasGeometry, GeometryProvider
from hypewaves.core.layout.groups import LayoutParams, WaveLayout, layout_wave
from hypewaves.core.layout.registry import PositionRegistry
from hypewaves.core.loader import load_dataset
from hypewaves.core.settings import get_logger, load_settings
from hypewaves.core.visibility import Selection, VisibleSet, compute_visible

log = get_logger("hypewaves.board")


@dataclass(frozen=True, slots=True)
class VisibleWaveLayout:
    """A visible wave, its filtered events' layout, and its display column."""

    index: int
    column: int
    wave: Wave
    layout: WaveLayout


@dataclass(frozen=True, slots=True)
class BoardFrame:
    """Everything a host needs to draw one frame."""

    evaluated_at: dt.datetime
    waves: tuple[VisibleWaveLayout, ...]
    rects: dict[str, Rect]
    connections: list[RenderedConnection]
    live_line: LiveLine | None
    draft: DraftState
    predicted_ids: frozenset[str] = field(default_factory=frozenset)


def describe_draft(state: DraftState) -> dict[str, Any]:
    """Return a JSON-safe description of the draft state."""
    out: dict[str, Any] = {"state": state.name}
    if isinstance(state, PendingStart):
        out["start_event_id"] = state.start_event_id
        out["cursor"] = state.cursor.model_dump() if state.cursor else None
    elif isinstance(state, AwaitingReason):
        out["start_event_id"] = state.start_event_id
        out["target_event_id"] = state.target_event_id
    return out


class ShowcaseBoard:
    """Single-owner state of the showcase plus every operation that mutates it."""

    def __init__(
        self,
        dataset: Dataset | None = None,
        *,
        params: LayoutParams | None = None,
        geometry: GeometryProvider | None = None,
        renderer: ConnectionsRenderer | None = None,
        max_passes: int | None = None,
    ) -> None:
        ds = dataset if dataset is not None else Dataset()
        self._waves: list[Wave] = list(ds.waves)
        self.machine = ConnectionStateMachine(ds.connections)
        self.selection = Selection.all_of(len(self._waves))
        self.registry = PositionRegistry()

        self.params = params if params is not None else LayoutParams.from_settings()
        self.geometry: GeometryProvider = (
            geometry if geometry is not None else CanvasGeometry.from_settings()
        )
        self.renderer = renderer if renderer is not None else ConnectionsRenderer()
        self.max_passes = max_passes if max_passes is not None else load_settings().max_layout_passes

        self._revision = 0
        self._layout_revision = -1
        self._last_pass_count = 0
        self._visible: VisibleSet | None = None
        self._layouts: tuple[VisibleWaveLayout, ...] = ()
        self._rects: dict[str, Rect] = {}
        self._traces: list[BoardSnapshot] = []

    @classmethod
    def from_path(cls, path: str | Path, **kwargs: Any) -> ShowcaseBoard:
        """Load the dataset at ``path`` (degrading to empty) and build a board."""
        return cls(load_dataset(path), **kwargs)

    # ------------------------------ Inspection ------------------------------

    @property
    def waves(self) -> tuple[Wave, ...]:
        return tuple(self._waves)

    @property
    def connections(self) -> tuple[Connection, ...]:
        return self.machine.connections

    @property
    def draft(self) -> DraftState:
        return self.machine.state

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def layout_revision(self) -> int:
        """Revision the current anchors were computed at (-1 before the first pass)."""
        return self._layout_revision

    @property
    def last_pass_count(self) -> int:
        """Number of measure passes the last refresh needed to settle."""
        return self._last_pass_count

    def dataset(self) -> Dataset:
        """Return the current data as a :class:`Dataset` (view state excluded)."""
        return Dataset(waves=list(self._waves), connections=list(self.connections))

    def find_event(self, event_id: str) -> tuple[int, Event] | None:
        """Return ``(wave index, event)`` for ``event_id``, or ``None``."""
        for idx, wave in enumerate(self._waves):
            for ev in wave.events:
                if ev.id == event_id:
                    return idx, ev
        return None

    def _require_event(self, event_id: str) -> Event:
        found = self.find_event(event_id)
        if found is None:
            raise UnknownEventError(event_id)
        return found[1]

    def _touch(self) -> None:
        self._revision += 1

    # ------------------------------ View state ------------------------------

    def toggle_wave(self, index: int) -> Selection:
        """Show or hide the wave at ``index``."""
        if not 0 <= index < len(self._waves):
            raise UnknownTimelineError(index)
        self.selection = self.selection.toggle_wave(index)
        self._touch()
        return self.selection

    def set_show_predicted(self, show: bool) -> Selection:
        self.selection = self.selection.with_predicted(show)
        self._touch()
        return self.selection

    def set_selection(self, wave_indices: Iterable[int], show_predicted: bool) -> Selection:
        """Replace the view state; indices that name no wave are rejected."""
        indices = frozenset(wave_indices)
        for idx in sorted(indices):
            if not 0 <= idx < len(self._waves):
                raise UnknownTimelineError(idx)
        self.selection = Selection(wave_indices=indices, show_predicted=show_predicted)
        self._touch()
        return self.selection

    # ----------------------------- Data mutations ---------------------------

    def add_event(self, submission: EventSubmission) -> Event:
        """Append a new event with a fresh id to the wave at ``submission.timeline_index``."""
        idx = submission.timeline_index
        if not 0 <= idx < len(self._waves):
            raise UnknownTimelineError(idx)

        event = Event(
            id=generate_event_id(),
            date=submission.date,
            title=submission.title,
            detail=submission.detail or None,
        )
        wave = self._waves[idx]
        self._waves[idx] = wave.model_copy(update={"events": (*wave.events, event)})
        self._touch()
        log.info("Event %s (%s) added to wave %r", event.id, event.title, wave.title)
        return event

    def delete_event(self, event_id: str) -> int:
        """Delete an event, its connections, and any draft that references it.

        Returns the number of connections removed by the cascade.
        """
        found = self.find_event(event_id)
        if found is None:
            raise UnknownEventError(event_id)
        idx, _ = found

        wave = self._waves[idx]
        self._waves[idx] = wave.model_copy(
            update={"events": tuple(ev for ev in wave.events if ev.id != event_id)}
        )
        removed = self.machine.forget_event(event_id)
        self._touch()
        log.info("Event %s deleted with %d connection(s)", event_id, removed)
        return removed

    def delete_connection(self, index: int) -> Connection:
        """Delete the confirmed connection at ``index`` (an index into ``connections``)."""
        removed = self.machine.delete_connection(index)
        self._touch()
        return removed

    # ------------------------------ Draft flow ------------------------------

    def start_gesture(self, event_id: str, cursor: Point | None = None) -> DraftState:
        """Forward a connect gesture on an existing event to the state machine."""
        self._require_event(event_id)
        state = self.machine.start_gesture(event_id, cursor)
        self._touch()
        return state

    def cursor_move(self, pos: Point) -> DraftState:
        return self.machine.cursor_move(pos)

    def commit(self, reason: str | None = None) -> Connection | None:
        conn = self.machine.commit(reason)
        if conn is not None:
            self._touch()
        return conn

    def cancel(self) -> bool:
        cancelled = self.machine.cancel()
        if cancelled:
            self._touch()
        return cancelled

    # ------------------------------- Passes ---------------------------------

    def refresh(self, now: dt.datetime | None = None) -> VisibleSet:
        """Recompute visibility, layout and anchors for the current revision."""
        visible = compute_visible(self._waves, self.connections, self.selection, now)
        layouts = tuple(
            VisibleWaveLayout(
                index=vw.index,
                column=column,
                wave=vw.wave,
                layout=layout_wave(vw.wave.events, self.params, now=visible.evaluated_at),
            )
            for column, vw in enumerate(visible.waves)
        )

        wave_layouts = [vl.layout for vl in layouts]
        passes = 0
        rects: dict[str, Rect] = {}
        for passes in range(1, self.max_passes + 1):
            rects = dict(self.geometry(wave_layouts))
            if not self.registry.recompute(rects):
                break
        else:
            log.warning("Anchors still moving after %d layout passes", self.max_passes)

        self._visible = visible
        self._layouts = layouts
        self._rects = rects
        self._last_pass_count = passes
        self._layout_revision = self._revision
        return visible

    def render(self, now: dt.datetime | None = None) -> BoardFrame:
        """Refresh, then build the drawable frame."""
        visible = self.refresh(now)
        predicted = frozenset(
            ev.id
            for vl in self._layouts
            for ev in vl.wave.events
            if ev.is_future(visible.evaluated_at)
        )
        return BoardFrame(
            evaluated_at=visible.evaluated_at,
            waves=self._layouts,
            rects=dict(self._rects),
            connections=self.renderer.render_connections(visible.connections, self.registry),
            live_line=self.renderer.render_live_line(self.machine.state, self.registry),
            draft=self.machine.state,
            predicted_ids=predicted,
        )

    def tooltip(self, event_id: str) -> Tooltip | None:
        """Hover card for a rendered event (uses the rectangles of the last pass)."""
        event = self._require_event(event_id)
        return tooltip_for(event, self._rects.get(event_id))

    # ------------------------------ Snapshots -------------------------------

    def snapshot(self, note: str | None = None) -> BoardSnapshot:
        """Capture and record an immutable, JSON-safe snapshot of the board."""
        data: dict[str, Any] = {
            "dataset": self.dataset().to_payload(),
            "selection": {
                "wave_indices": sorted(self.selection.wave_indices),
                "show_predicted": self.selection.show_predicted,
            },
            "draft": describe_draft(self.machine.state),
            "anchors": {k: p.model_dump() for k, p in self.registry.snapshot().items()},
            "layout_revision": self._layout_revision,
        }
        snap = BoardSnapshot(
            timestamp=dt.datetime.now(dt.UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            revision=self._revision,
            note=note,
            data=data,
        )
        self._traces.append(snap)
        return snap

    def traces(self) -> tuple[BoardSnapshot, ...]:
        return tuple(self._traces)


__all__ = ["BoardFrame", "ShowcaseBoard", "VisibleWaveLayout", "describe_draft"]
