# tests/test_cli.py
"""
Tests for the hypewaves command-line interface (CLI).

Scope
-----
1.  **Command Registration**: `--help` lists the commands.
2.  **Read commands**: `show`, `layout` and `render` against a temp dataset.
3.  **Edit commands**: `connect`, `add-event`, `delete-event` and
    `delete-connection` rewrite the dataset file.
4.  **Error Handling**: unknown ids and bad input exit with code 1.

We use `typer.testing.CliRunner` to invoke the app in-process.
"""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from hypewaves.cli import app
from hypewaves.core.settings import load_settings

DATA: dict[str, Any] = {
    "waves": [
        {
            "title": "PC",
            "period": "1975-1984",
            "events": [
                {"id": "altair", "date": "1975-01-01", "title": "Altair"},
                {"id": "apple2", "date": "1977-06-10", "title": "Apple II"},
                {"id": "ibm", "date": "1981-08-12", "title": "IBM PC"},
            ],
        },
        {
            "title": "Web",
            "period": "1993-2001",
            "events": [
                {"id": "mosaic", "date": "1993-04-22", "title": "Mosaic"},
                {"id": "peak", "date": "2000-03-10", "title": "Peak", "isFailure": True},
            ],
        },
    ],
    "connections": [{"from": "ibm", "to": "mosaic", "reason": "Desktops"}],
}


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Create a fresh CliRunner for each test."""
    return CliRunner()


@pytest.fixture  # type: ignore[misc]
def data_file(tmp_path: Path) -> Path:
    p = tmp_path / "waves.json"
    p.write_text(json.dumps(DATA), encoding="utf-8")
    return p


@pytest.fixture  # type: ignore[misc]
def snapshot_dir(monkeypatch: Any, tmp_path: Path) -> Generator[Path, None, None]:
    """Point snapshot output at a temp directory for `--trace` runs."""
    target = tmp_path / "snaps"
    monkeypatch.setenv("HYPEWAVES_SNAPSHOT_DIR", str(target))
    load_settings.cache_clear()
    yield target
    load_settings.cache_clear()


def _saved(path: Path) -> dict[str, Any]:
    data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    return data


def test_cli_help_shows_usage(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    assert "hypewaves" in result.output
    for command in ("show", "render", "connect", "delete-event"):
        assert command in result.output


def test_show_lists_waves_and_connections(runner: CliRunner, data_file: Path) -> None:
    result = runner.invoke(app, ["show", "--data", str(data_file)])
    assert result.exit_code == 0, result.output
    assert "PC" in result.output
    assert "Web" in result.output
    assert "Connections" in result.output
    assert "Desktops" in result.output


def test_show_single_wave_hides_cross_wave_connection(
    runner: CliRunner, data_file: Path
) -> None:
    result = runner.invoke(app, ["show", "--data", str(data_file), "-w", "1"])
    assert result.exit_code == 0, result.output
    assert "Desktops" not in result.output


def test_show_rejects_unknown_wave(runner: CliRunner, data_file: Path) -> None:
    result = runner.invoke(app, ["show", "--data", str(data_file), "-w", "9"])
    assert result.exit_code == 1
    assert "No timeline at index 9" in result.output


def test_show_missing_file_degrades_to_empty(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["show", "--data", str(tmp_path / "missing.json")])
    assert result.exit_code == 0, result.output
    assert "No timelines to show" in result.output


def test_layout_prints_offsets(runner: CliRunner, data_file: Path) -> None:
    """Altair and Apple II are >90 days apart, so every group has one card."""
    result = runner.invoke(app, ["layout", "0", "--data", str(data_file)])
    assert result.exit_code == 0, result.output
    assert "altair" in result.output
    assert "+0" in result.output


def test_render_writes_svg(runner: CliRunner, data_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "board.svg"
    result = runner.invoke(app, ["render", "--data", str(data_file), "-o", str(out)])
    assert result.exit_code == 0, result.output

    svg = out.read_text(encoding="utf-8")
    assert svg.startswith("<svg")
    assert 'class="connection"' in svg
    assert 'data-event-id="peak"' in svg
    assert "Desktops" in svg


def test_connect_appends_connection(runner: CliRunner, data_file: Path) -> None:
    result = runner.invoke(
        app, ["connect", "altair", "peak", "--reason", "Hobbyists", "--data", str(data_file)]
    )
    assert result.exit_code == 0, result.output
    assert "Connected" in result.output
    assert _saved(data_file)["connections"][-1] == {
        "from": "altair",
        "to": "peak",
        "reason": "Hobbyists",
    }


def test_connect_without_reason_uses_placeholder(runner: CliRunner, data_file: Path) -> None:
    result = runner.invoke(app, ["connect", "apple2", "mosaic", "--data", str(data_file)])
    assert result.exit_code == 0, result.output
    assert _saved(data_file)["connections"][-1]["reason"] == "Manual connection"


def test_connect_unknown_event_fails(runner: CliRunner, data_file: Path) -> None:
    result = runner.invoke(app, ["connect", "altair", "ghost", "--data", str(data_file)])
    assert result.exit_code == 1
    assert "not found" in result.output
    assert _saved(data_file) == DATA


def test_connect_same_event_creates_nothing(runner: CliRunner, data_file: Path) -> None:
    result = runner.invoke(app, ["connect", "ibm", "ibm", "--data", str(data_file)])
    assert result.exit_code == 1
    assert len(_saved(data_file)["connections"]) == 1


def test_delete_event_cascades_to_file(
    runner: CliRunner, data_file: Path, snapshot_dir: Path
) -> None:
    result = runner.invoke(app, ["delete-event", "mosaic", "--data", str(data_file), "--trace"])
    assert result.exit_code == 0, result.output
    assert "1 connection(s)" in result.output

    saved = _saved(data_file)
    assert saved["connections"] == []
    assert [e["id"] for e in saved["waves"][1]["events"]] == ["peak"]
    assert len(list(snapshot_dir.glob("*.json"))) == 1


def test_add_event_appends_to_wave(runner: CliRunner, data_file: Path) -> None:
    result = runner.invoke(
        app,
        [
            "add-event",
            "--timeline",
            "1",
            "--date",
            "1995-08-09",
            "--title",
            "Netscape IPO",
            "--data",
            str(data_file),
        ],
    )
    assert result.exit_code == 0, result.output
    events = _saved(data_file)["waves"][1]["events"]
    assert events[-1]["title"] == "Netscape IPO"
    assert events[-1]["date"] == "1995-08-09"
    assert events[-1]["id"] not in {"mosaic", "peak"}


def test_add_event_rejects_bad_input(runner: CliRunner, data_file: Path) -> None:
    bad_date = runner.invoke(
        app, ["add-event", "-t", "0", "--date", "someday", "--title", "x", "--data", str(data_file)]
    )
    assert bad_date.exit_code == 1
    bad_wave = runner.invoke(
        app,
        ["add-event", "-t", "5", "--date", "1990-01-01", "--title", "x", "--data", str(data_file)],
    )
    assert bad_wave.exit_code == 1
    assert "No timeline at index 5" in bad_wave.output
    assert _saved(data_file) == DATA


def test_delete_connection(runner: CliRunner, data_file: Path) -> None:
    result = runner.invoke(app, ["delete-connection", "0", "--data", str(data_file)])
    assert result.exit_code == 0, result.output
    assert _saved(data_file)["connections"] == []

    missing = runner.invoke(app, ["delete-connection", "3", "--data", str(data_file)])
    assert missing.exit_code == 1
