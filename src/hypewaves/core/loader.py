"""Initial dataset loading with graceful degradation.

The loader is the "initial load" collaborator: it turns a JSON document of
the shape ``{"waves": [...], "connections": [...]}`` into a
:class:`~hypewaves.core.contracts.timeline.Dataset`.

Nothing here raises on bad data. A missing file, unreadable JSON or absent
top-level keys yield empty collections; individual malformed waves, events
or connections are skipped with a warning so the rest of the data is usable.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from hypewaves.core.contracts.timeline import Connection, Dataset, Event, Wave
from hypewaves.core.settings import get_logger

log = get_logger("hypewaves.loader")


def _as_list(raw: Any, key: str) -> list[Any]:
    value = raw.get(key) if isinstance(raw, Mapping) else None
    if value is None:
        return []
    if not isinstance(value, list):
        log.warning("Expected a list under %r, got %s; using []", key, type(value).__name__)
        return []
    return value


def _parse_events(raw_events: Any, wave_title: str) -> list[Event]:
    if not isinstance(raw_events, list):
        return []
    events: list[Event] = []
    for pos, item in enumerate(raw_events):
        try:
            events.append(Event.model_validate(item))
        except ValidationError as exc:
            log.warning(
                "Skipping malformed event #%d on wave %r: %s",
                pos,
                wave_title,
                exc.errors(include_url=False),
            )
    return events


def _parse_wave(item: Any, pos: int) -> Wave | None:
    if not isinstance(item, Mapping):
        log.warning("Skipping wave #%d: not an object", pos)
        return None
    title = str(item.get("title", f"wave {pos}"))
    header = {k: v for k, v in item.items() if k != "events"}
    try:
        wave = Wave.model_validate(header)
    except ValidationError as exc:
        log.warning("Skipping malformed wave #%d: %s", pos, exc.errors(include_url=False))
        return None
    events = _parse_events(item.get("events", []), title)
    return wave.model_copy(update={"events": tuple(events)})


def parse_dataset(raw: Any) -> Dataset:
    """Build a :class:`Dataset` from decoded JSON, skipping what cannot be parsed."""
    if not isinstance(raw, Mapping):
        log.error("Dataset root must be an object, got %s", type(raw).__name__)
        return Dataset()

    waves = [
        w for pos, item in enumerate(_as_list(raw, "waves")) if (w := _parse_wave(item, pos))
    ]

    connections: list[Connection] = []
    for pos, item in enumerate(_as_list(raw, "connections")):
        try:
            connections.append(Connection.model_validate(item))
        except ValidationError as exc:
            log.warning("Skipping malformed connection #%d: %s", pos, exc.errors(include_url=False))

    return Dataset(waves=waves, connections=connections)


def load_dataset(path: str | Path) -> Dataset:
    """Read and parse the dataset at ``path``; failures degrade to an empty dataset."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        log.error("Dataset %s not found; starting with no timelines", p)
        return Dataset()
    except (OSError, json.JSONDecodeError) as exc:
        log.error("Error loading data from %s: %s", p, exc)
        return Dataset()

    ds = parse_dataset(raw)
    log.info("Loaded %d wave(s), %d connection(s) from %s", len(ds.waves), len(ds.connections), p)
    return ds


__all__ = ["load_dataset", "parse_dataset"]
