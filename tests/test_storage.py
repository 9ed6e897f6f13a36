"""Tests for snapshot and dataset persistence."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

from hypewaves.core.board.session import ShowcaseBoard
from hypewaves.core.board.storage import SnapshotWriter, save_dataset
from hypewaves.core.board.trace import BoardSnapshot
from hypewaves.core.contracts.timeline import Connection, Dataset, Event, Wave
from hypewaves.core.loader import load_dataset
from hypewaves.core.settings import load_settings


def _dataset() -> Dataset:
    return Dataset(
        waves=[
            Wave(
                title="Smartphones",
                period="2007-2015",
                events=(
                    Event(id="iphone", date=date(2007, 1, 9), title="iPhone", detail="Keynote"),
                    Event(id="fire", date=date(2014, 7, 25), title="Fire Phone", isFailure=True),
                ),
            )
        ],
        connections=[Connection(from_id="iphone", to_id="fire", reason="Copycat")],
    )


def test_snapshot_writer_names_file_by_time_and_revision(tmp_path: Path) -> None:
    snap = BoardSnapshot(
        timestamp="2024-10-27T10:00:00.123456Z",
        revision=7,
        note="after connect",
        data={"k": [1, 2]},
    )
    path = SnapshotWriter(tmp_path).write(snap)

    assert path.name == "20241027T100000123456Z_rev000007.json"
    body = json.loads(path.read_text(encoding="utf-8"))
    assert body == {
        "timestamp": snap.timestamp,
        "revision": 7,
        "note": "after connect",
        "data": {"k": [1, 2]},
    }


def test_snapshot_dir_from_settings(monkeypatch: Any, tmp_path: Path) -> None:
    """`HYPEWAVES_SNAPSHOT_DIR` picks the default directory."""
    target = tmp_path / "snaps"
    monkeypatch.setenv("HYPEWAVES_SNAPSHOT_DIR", str(target))
    load_settings.cache_clear()
    try:
        writer = SnapshotWriter()
    finally:
        load_settings.cache_clear()
    assert writer.base_dir == target
    assert target.is_dir()


def test_board_snapshot_is_json_serializable(tmp_path: Path) -> None:
    board = ShowcaseBoard(_dataset())
    board.refresh()
    path = SnapshotWriter(tmp_path).write(board.snapshot("initial"))
    body = json.loads(path.read_text(encoding="utf-8"))
    assert body["note"] == "initial"
    assert set(body["data"]["anchors"]) == {"iphone", "fire"}


def test_saved_dataset_loads_back(tmp_path: Path) -> None:
    """The writer emits exactly the shape the loader reads."""
    path = save_dataset(tmp_path / "nested" / "waves.json", _dataset())
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["connections"] == [{"from": "iphone", "to": "fire", "reason": "Copycat"}]
    assert raw["waves"][0]["events"][1]["isFailure"] is True

    loaded = load_dataset(path)
    assert loaded.to_payload() == _dataset().to_payload()
