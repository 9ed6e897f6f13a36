"""Timeline contracts: events, waves, connections and the dataset envelope.

These Pydantic v2 models describe the persisted shape of the showcase data
(``data/waves.json``). Field aliases keep the on-disk camelCase keys
(``isFailure``, ``predictionTime``, ``from``/``to``) while Python code uses
snake_case attributes.

All models are frozen. "Mutating" a wave means building a new one with
``model_copy(update=...)``; the board swaps it in as a single update.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Reason stored when the user confirms a connection without typing one.
DEFAULT_CONNECTION_REASON = "Manual connection"


def as_utc(moment: dt.datetime) -> dt.datetime:
    """Treat a naive instant as UTC; aware instants pass through unchanged."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=dt.UTC)
    return moment


class Event(BaseModel):
    """A single dated occurrence placed on one wave."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Globally unique event id")
    date: dt.date
    title: str
    detail: str | None = Field(default=None)
    is_failure: bool = Field(default=False, alias="isFailure")

    @property
    def moment(self) -> dt.datetime:
        """Midnight UTC of the event date; the instant used on the time axis."""
        return dt.datetime.combine(self.date, dt.time.min, tzinfo=dt.UTC)

    def is_future(self, now: dt.datetime) -> bool:
        """Return True when the event lies strictly after ``now`` (a predicted event)."""
        return self.moment > as_utc(now)


class Wave(BaseModel):
    """One timeline: a named technology-adoption curve and its events."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    period: str = Field(default="", description="Display string, e.g. '1975-1990'")
    prediction_time: str | None = Field(default=None, alias="predictionTime")
    events: tuple[Event, ...] = Field(default_factory=tuple)

    @property
    def label(self) -> str:
        """Title with the prediction tag appended when the wave is a forecast."""
        if self.prediction_time:
            return f"{self.title} ({self.prediction_time})"
        return self.title

    def event_ids(self) -> set[str]:
        return {ev.id for ev in self.events}


class Connection(BaseModel):
    """A user-authored, reasoned, directed link between two events."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    reason: str = Field(default=DEFAULT_CONNECTION_REASON)

    @field_validator("reason", mode="before")
    @classmethod
    def _default_blank_reason(cls, v: object) -> object:
        """Blank or missing reasons collapse to the placeholder text."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CONNECTION_REASON
        return v

    def touches(self, event_id: str) -> bool:
        """Return True when ``event_id`` is either endpoint."""
        return self.from_id == event_id or self.to_id == event_id


class Dataset(BaseModel):
    """One-shot snapshot of waves and connections supplied at startup."""

    model_config = ConfigDict(populate_by_name=True)

    waves: list[Wave] = Field(default_factory=list)
    connections: list[Connection] = Field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        """Return the JSON-ready dict in the on-disk (aliased) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EventSubmission(BaseModel):
    """Completed record emitted by the event-creation dialog."""

    model_config = ConfigDict(populate_by_name=True)

    timeline_index: int = Field(ge=0, alias="timelineIndex")
    date: dt.date
    title: str = Field(min_length=1)
    detail: str | None = Field(default=None)


__all__ = [
    "DEFAULT_CONNECTION_REASON",
    "as_utc",
    "Connection",
    "Dataset",
    "Event",
    "EventSubmission",
    "Wave",
]
