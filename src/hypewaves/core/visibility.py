"""
VisibilityFilter: derive what should be drawn from the data and the view state.

The filter is a pure derivation. Given the waves, the confirmed connections,
the current :class:`Selection` and one evaluation instant, it returns:

- the visible waves (selected ones, in their original order) with predicted
  events removed when ``show_predicted`` is off;
- the union of the surviving event ids;
- the connections whose both endpoints survived, each tagged with its index
  in the full connection list so a delete action can address it.

The evaluation instant is sampled once by the caller and reused for every
event, so a connection cannot flicker in and out within one pass.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from hypewaves.core.contracts.timeline import Connection, Wave, as_utc


@dataclass(frozen=True, slots=True)
class Selection:
    """View state: which waves are shown and whether predicted events are."""

    wave_indices: frozenset[int] = frozenset()
    show_predicted: bool = True

    @classmethod
    def all_of(cls, wave_count: int, *, show_predicted: bool = True) -> Selection:
        """Select every wave, the default right after a dataset is loaded."""
        return cls(wave_indices=frozenset(range(wave_count)), show_predicted=show_predicted)

    def toggle_wave(self, index: int) -> Selection:
        """Return a selection with ``index`` flipped in or out."""
        return Selection(
            wave_indices=self.wave_indices ^ {index},
            show_predicted=self.show_predicted,
        )

    def with_predicted(self, show: bool) -> Selection:
        return Selection(wave_indices=self.wave_indices, show_predicted=show)

    def is_selected(self, index: int) -> bool:
        return index in self.wave_indices


@dataclass(frozen=True, slots=True)
class VisibleWave:
    """A selected wave with its filtered events; ``index`` points into the full list."""

    index: int
    wave: Wave


@dataclass(frozen=True, slots=True)
class IndexedConnection:
    """A connection together with its position in the confirmed list."""

    index: int
    connection: Connection


@dataclass(frozen=True, slots=True)
class VisibleSet:
    """Result of one visibility pass."""

    evaluated_at: dt.datetime
    waves: tuple[VisibleWave, ...]
    event_ids: frozenset[str]
    connections: tuple[IndexedConnection, ...]

    def is_visible(self, event_id: str) -> bool:
        return event_id in self.event_ids


def filter_waves(
    waves: Sequence[Wave], selection: Selection, now: dt.datetime
) -> tuple[VisibleWave, ...]:
    """Keep selected waves and, unless predicted events are shown, past events only."""
    out: list[VisibleWave] = []
    for idx, wave in enumerate(waves):
        if not selection.is_selected(idx):
            continue
        if selection.show_predicted:
            out.append(VisibleWave(index=idx, wave=wave))
            continue
        kept = tuple(ev for ev in wave.events if not ev.is_future(now))
        out.append(VisibleWave(index=idx, wave=wave.model_copy(update={"events": kept})))
    return tuple(out)


def filter_connections(
    connections: Iterable[Connection], event_ids: frozenset[str]
) -> tuple[IndexedConnection, ...]:
    """Keep connections whose two endpoints are both in ``event_ids``."""
    return tuple(
        IndexedConnection(index=i, connection=conn)
        for i, conn in enumerate(connections)
        if conn.from_id in event_ids and conn.to_id in event_ids
    )


def compute_visible(
    waves: Sequence[Wave],
    connections: Sequence[Connection],
    selection: Selection,
    now: dt.datetime | None = None,
) -> VisibleSet:
    """Run the full visibility derivation for one pass.

    Parameters
    ----------
    waves, connections:
        The owned data model.
    selection:
        Current view state.
    now:
        Evaluation instant; sampled here once when omitted. A naive value
        is read as UTC.
    """
    instant = as_utc(now) if now is not None else dt.datetime.now(dt.UTC)
    visible_waves = filter_waves(waves, selection, instant)
    event_ids = frozenset(ev.id for vw in visible_waves for ev in vw.wave.events)
    return VisibleSet(
        evaluated_at=instant,
        waves=visible_waves,
        event_ids=event_ids,
        connections=filter_connections(connections, event_ids),
    )


__all__ = [
    "IndexedConnection",
    "Selection",
    "VisibleSet",
    "VisibleWave",
    "compute_visible",
    "filter_connections",
    "filter_waves",
]
