# src/hypewaves/cli.py
"""
hypewaves Command Line Interface (CLI).

This module implements the terminal host of the timeline engine using
`typer` and `rich`. Every command loads the dataset, applies its operation
through a :class:`~hypewaves.core.board.session.ShowcaseBoard`, and renders
the result.

Features
--------
- **Show**: Tables of the visible waves, their layout groups and connections.
- **Layout**: Group positions and stagger offsets of a single wave.
- **Render**: Export the full canvas (cards, curves, labels) as SVG.
- **Edit**: Add or delete events and draw connections; the dataset file is
  rewritten in place, and `--trace` records a board snapshot.

Usage
-----
    $ hypewaves show --data data/waves.json --hide-predicted
    $ hypewaves connect pc-visicalc sp-appstore --reason "Killer app"
    $ hypewaves render -o board.svg
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hypewaves.core.board.session import BoardFrame, ShowcaseBoard
from hypewaves.core.board.storage import SnapshotWriter, save_dataset
from hypewaves.core.board.svg import frame_to_svg
from hypewaves.core.contracts.timeline import EventSubmission
from hypewaves.core.errors import HypewavesError
from hypewaves.core.settings import load_settings

# Ensure env vars (like HYPEWAVES_DATA_PATH) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="hypewaves: parallel hype-cycle timelines and the connections between them.",
    rich_markup_mode="markdown",
)
console = Console()

DataOption = Annotated[
    Path | None,
    typer.Option("--data", "-d", help="Dataset JSON (defaults to HYPEWAVES_DATA_PATH)."),
]
WavesOption = Annotated[
    list[int] | None,
    typer.Option("--wave", "-w", help="Only show these wave indices (repeatable)."),
]
HidePredictedOption = Annotated[
    bool,
    typer.Option("--hide-predicted", help="Hide events dated after today."),
]
TraceOption = Annotated[
    bool,
    typer.Option("--trace", help="Write a board snapshot after the change."),
]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _data_path(data: Path | None) -> Path:
    return data if data is not None else Path(load_settings().data_path)


def _open_board(data: Path | None, waves: list[int] | None, hide_predicted: bool) -> ShowcaseBoard:
    """Helper: load the board and apply the requested view state."""
    board = ShowcaseBoard.from_path(_data_path(data))
    indices = waves if waves else range(len(board.waves))
    board.set_selection(indices, show_predicted=not hide_predicted)
    return board


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[bold red]❌ Error:[/bold red] {exc}")
    return typer.Exit(code=1)


def _render_frame(frame: BoardFrame) -> None:
    """Helper: print one table per visible wave plus the drawable connections."""
    if not frame.waves:
        console.print("[dim]No timelines to show.[/dim]")

    for vl in frame.waves:
        table = Table(title=f"[{vl.index}] {vl.wave.label}", caption=vl.wave.period)
        table.add_column("Group", justify="right")
        table.add_column("Date")
        table.add_column("Id", style="dim")
        table.add_column("Title")
        table.add_column("Top", justify="right")
        table.add_column("Offset", justify="right")
        for gi, group in enumerate(vl.layout.groups):
            for ev, offset in group.placements():
                style = "red" if ev.is_failure else ""
                if ev.id in frame.predicted_ids:
                    style = f"{style} italic".strip()
                table.add_row(
                    str(gi),
                    ev.date.isoformat(),
                    ev.id,
                    ev.title,
                    f"{group.top:.0f}",
                    f"{offset:+.0f}",
                    style=style or None,
                )
        console.print(table)

    if frame.connections:
        ct = Table(title="Connections")
        ct.add_column("#", justify="right")
        ct.add_column("From")
        ct.add_column("To")
        ct.add_column("Reason")
        for rc in frame.connections:
            ct.add_row(str(rc.index), rc.from_id, rc.to_id, rc.reason)
        console.print(ct)


def _persist(board: ShowcaseBoard, data: Path | None, trace: bool, note: str) -> None:
    """Helper: write the dataset back and optionally record a snapshot."""
    path = save_dataset(_data_path(data), board.dataset())
    console.print(f"[dim]Dataset saved to: {path}[/dim]")
    if trace:
        board.refresh()
        snap_path = SnapshotWriter().write(board.snapshot(note))
        console.print(f"[dim]Snapshot saved to: {snap_path}[/dim]")


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def show(
    data: DataOption = None,
    wave: WavesOption = None,
    hide_predicted: HidePredictedOption = False,
) -> None:
    """Show the visible timelines, their groups, and the drawable connections."""
    try:
        board = _open_board(data, wave, hide_predicted)
    except HypewavesError as e:
        raise _fail(e) from e
    _render_frame(board.render())


@app.command()  # type: ignore[misc]
def layout(
    index: Annotated[int, typer.Argument(help="Wave index.")],
    data: DataOption = None,
    hide_predicted: HidePredictedOption = False,
) -> None:
    """Print the group layout (top, height, stagger offsets) of one wave."""
    try:
        board = _open_board(data, [index], hide_predicted)
    except HypewavesError as e:
        raise _fail(e) from e

    frame = board.render()
    vl = frame.waves[0]
    console.print(
        Panel.fit(
            f"[bold cyan]{vl.wave.label}[/bold cyan]\nOrigin: {vl.layout.origin.date().isoformat()}",
            border_style="cyan",
        )
    )
    table = Table()
    table.add_column("Group", justify="right")
    table.add_column("Top", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Events")
    table.add_column("Offsets")
    for gi, group in enumerate(vl.layout.groups):
        table.add_row(
            str(gi),
            f"{group.top:.1f}",
            f"{group.height:.0f}",
            ", ".join(ev.id for ev in group.events),
            ", ".join(f"{o:+.0f}" for o in group.offsets),
        )
    console.print(table)


@app.command()  # type: ignore[misc]
def render(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Where to write the SVG."),
    ] = Path("board.svg"),
    data: DataOption = None,
    wave: WavesOption = None,
    hide_predicted: HidePredictedOption = False,
) -> None:
    """Export the canvas with cards and connection curves as SVG."""
    try:
        board = _open_board(data, wave, hide_predicted)
    except HypewavesError as e:
        raise _fail(e) from e

    frame = board.render()
    svg = frame_to_svg(frame, axis_height=board.params.height)
    output.write_text(svg, encoding="utf-8")
    console.print(
        Panel(
            f"{len(frame.rects)} event(s), {len(frame.connections)} connection(s)\n"
            f"Saved to: [link=file://{output}]{output}[/link]",
            title="SVG",
            border_style="green",
        )
    )


@app.command("add-event")  # type: ignore[misc]
def add_event(
    timeline: Annotated[int, typer.Option("--timeline", "-t", help="Wave index.")],
    date: Annotated[str, typer.Option("--date", help="YYYY-MM-DD")],
    title: Annotated[str, typer.Option("--title")],
    detail: Annotated[str | None, typer.Option("--detail")] = None,
    data: DataOption = None,
    trace: TraceOption = False,
) -> None:
    """Append a new event to a wave."""
    board = ShowcaseBoard.from_path(_data_path(data))
    try:
        submission = EventSubmission(
            timeline_index=timeline,
            date=dt.date.fromisoformat(date),
            title=title,
            detail=detail,
        )
        event = board.add_event(submission)
    except (HypewavesError, ValueError) as e:
        raise _fail(e) from e

    console.print(f"[bold green]✅ Added[/bold green] {event.title} as [cyan]{event.id}[/cyan]")
    _persist(board, data, trace, f"add-event {event.id}")


@app.command("delete-event")  # type: ignore[misc]
def delete_event(
    event_id: Annotated[str, typer.Argument(help="Id of the event to delete.")],
    data: DataOption = None,
    trace: TraceOption = False,
) -> None:
    """Delete an event and every connection that touches it."""
    board = ShowcaseBoard.from_path(_data_path(data))
    try:
        removed = board.delete_event(event_id)
    except HypewavesError as e:
        raise _fail(e) from e

    console.print(
        f"[bold green]✅ Deleted[/bold green] {event_id} and {removed} connection(s)"
    )
    _persist(board, data, trace, f"delete-event {event_id}")


@app.command()  # type: ignore[misc]
def connect(
    source: Annotated[str, typer.Argument(help="Start event id.")],
    target: Annotated[str, typer.Argument(help="Target event id.")],
    reason: Annotated[
        str,
        typer.Option("--reason", "-r", help="Why the events are connected."),
    ] = "",
    data: DataOption = None,
    trace: TraceOption = False,
) -> None:
    """Draw a connection between two events (start gesture, second gesture, commit)."""
    board = ShowcaseBoard.from_path(_data_path(data))
    try:
        board.start_gesture(source)
        board.start_gesture(target)
    except HypewavesError as e:
        raise _fail(e) from e

    conn = board.commit(reason)
    if conn is None:
        # Same id twice cancels the draft instead of creating a connection.
        console.print("[yellow]Start and target are the same event; nothing created.[/yellow]")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]✅ Connected[/bold green] {conn.from_id} → {conn.to_id}: {conn.reason}"
    )
    _persist(board, data, trace, f"connect {conn.from_id} {conn.to_id}")


@app.command("delete-connection")  # type: ignore[misc]
def delete_connection(
    index: Annotated[int, typer.Argument(help="Connection index (see `show`).")],
    data: DataOption = None,
    trace: TraceOption = False,
) -> None:
    """Delete one confirmed connection by its index."""
    board = ShowcaseBoard.from_path(_data_path(data))
    try:
        conn = board.delete_connection(index)
    except HypewavesError as e:
        raise _fail(e) from e

    console.print(f"[bold green]✅ Deleted[/bold green] {conn.from_id} → {conn.to_id}")
    _persist(board, data, trace, f"delete-connection {index}")


if __name__ == "__main__":
    app()
