"""
GroupLayout: place one wave's events along its vertical time axis.

Algorithm
---------
1. Sort events by date (stable, so equal dates keep their input order).
2. Walk the sorted events once. An event joins the current group when it is
   at most ``threshold`` after the previous event; otherwise it opens a new
   group. There is no backtracking.
3. Map time to pixels linearly. The origin is January 1 (UTC) of the
   earliest event's year and ``span`` maps onto ``height`` pixels.
4. Place groups in order. A group's naive top comes from its first event;
   the final top is pushed down to at least ``last_bottom + group_spacing``
   so groups never overlap. Positions are only ever clamped forward, so a
   dense early cluster shifts every later group down.
5. Within a group, events get stagger offsets symmetric about zero, spaced
   by ``stagger_gap``. Even-sized groups are shifted by half a gap so that no
   card sits exactly on the axis line.

The output is a pure function of the input order and dates.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from hypewaves.core.contracts.timeline import Event, as_utc
from hypewaves.core.settings import Settings, load_settings

_DAYS_PER_YEAR = 365.25


@dataclass(frozen=True, slots=True)
class LayoutParams:
    """Pixel and time constants of the timeline canvas.

    Attributes
    ----------
    height : float
        Pixels that ``span`` maps onto.
    threshold : datetime.timedelta
        Largest gap between consecutive events inside one group.
    span : datetime.timedelta
        Duration drawn along the full ``height``.
    stagger_gap : float
        Distance between neighbouring cards inside a group.
    card_height : float
        Height of one event card; the last card of a group adds this much.
    group_spacing : float
        Minimum free space between the bottom of one group and the next.
    """

    height: float = 1600.0
    threshold: dt.timedelta = dt.timedelta(days=90)
    span: dt.timedelta = dt.timedelta(days=7.8 * _DAYS_PER_YEAR)
    stagger_gap: float = 80.0
    card_height: float = 60.0
    group_spacing: float = 20.0

    @classmethod
    def from_settings(cls, cfg: Settings | None = None) -> LayoutParams:
        """Build parameters from application settings (the cached ones by default)."""
        s = cfg if cfg is not None else load_settings()
        return cls(
            height=s.timeline_height,
            threshold=dt.timedelta(days=s.group_threshold_days),
            span=dt.timedelta(days=s.span_years * _DAYS_PER_YEAR),
            stagger_gap=s.stagger_gap,
            card_height=s.card_height,
            group_spacing=s.group_spacing,
        )


@dataclass(frozen=True, slots=True)
class EventGroup:
    """A cluster of temporally close events laid out together.

    ``events`` and ``offsets`` are parallel tuples in chronological order.
    """

    events: tuple[Event, ...]
    offsets: tuple[float, ...]
    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def placements(self) -> Iterable[tuple[Event, float]]:
        """Yield ``(event, stagger offset)`` pairs."""
        return zip(self.events, self.offsets, strict=True)


@dataclass(frozen=True, slots=True)
class WaveLayout:
    """Layout of one wave: its time origin and its groups, top to bottom."""

    origin: dt.datetime
    groups: tuple[EventGroup, ...]

    def event_ids(self) -> tuple[str, ...]:
        return tuple(ev.id for g in self.groups for ev in g.events)


def sort_events(events: Iterable[Event]) -> list[Event]:
    """Return events ordered by date; ``sorted`` is stable, so ties keep input order."""
    return sorted(events, key=lambda ev: ev.date)


def group_events(events: Iterable[Event], threshold: dt.timedelta) -> list[list[Event]]:
    """Partition events into consecutive groups separated by gaps larger than ``threshold``."""
    groups: list[list[Event]] = []
    current: list[Event] = []
    for ev in sort_events(events):
        if current and ev.moment - current[-1].moment > threshold:
            groups.append(current)
            current = []
        current.append(ev)
    if current:
        groups.append(current)
    return groups


def stagger_offsets(count: int, gap: float = 80.0) -> list[float]:
    """Return ``count`` offsets symmetric about zero and ``gap`` apart.

    >>> stagger_offsets(3)
    [-80.0, 0.0, 80.0]
    >>> stagger_offsets(2)
    [-40.0, 40.0]
    """
    half = count // 2
    shift = gap / 2 if count % 2 == 0 else 0.0
    return [float((i - half) * gap + shift) for i in range(count)]


def group_height(count: int, params: LayoutParams) -> float:
    """Vertical band occupied by a group of ``count`` staggered cards."""
    return params.stagger_gap * (count - 1) + params.card_height


def time_origin(events: Sequence[Event], now: dt.datetime | None = None) -> dt.datetime:
    """January 1 (UTC) of the earliest event's year, or ``now`` for an empty wave."""
    if not events:
        return as_utc(now) if now is not None else dt.datetime.now(dt.UTC)
    first = min(ev.date for ev in events)
    return dt.datetime(first.year, 1, 1, tzinfo=dt.UTC)


def time_to_pixels(moment: dt.datetime, origin: dt.datetime, params: LayoutParams) -> float:
    """Linear map from an instant to a pixel offset along the axis."""
    return (moment - origin) / params.span * params.height


def layout_wave(
    events: Sequence[Event],
    params: LayoutParams | None = None,
    *,
    now: dt.datetime | None = None,
) -> WaveLayout:
    """Group and place ``events`` on one timeline.

    Parameters
    ----------
    events:
        The wave's (already visibility-filtered) events, in any order.
    params:
        Canvas constants; defaults to :meth:`LayoutParams.from_settings`.
    now:
        Origin used when ``events`` is empty.

    Returns
    -------
    WaveLayout
        Groups in chronological order. For adjacent groups ``g1``, ``g2``:
        ``g2.top >= g1.top + g1.height + params.group_spacing``.
    """
    p = params if params is not None else LayoutParams.from_settings()
    origin = time_origin(events, now)

    placed: list[EventGroup] = []
    last_bottom = 0.0
    for members in group_events(events, p.threshold):
        naive = time_to_pixels(members[0].moment, origin, p)
        top = max(naive, last_bottom + p.group_spacing)
        height = group_height(len(members), p)
        placed.append(
            EventGroup(
                events=tuple(members),
                offsets=tuple(stagger_offsets(len(members), p.stagger_gap)),
                top=top,
                height=height,
            )
        )
        last_bottom = top + height

    return WaveLayout(origin=origin, groups=tuple(placed))


__all__ = [
    "EventGroup",
    "LayoutParams",
    "WaveLayout",
    "group_events",
    "group_height",
    "layout_wave",
    "sort_events",
    "stagger_offsets",
    "time_origin",
    "time_to_pixels",
]
