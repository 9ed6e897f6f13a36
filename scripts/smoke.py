# scripts/smoke.py
"""
Smoke Test Script for the hypewaves engine.

Loads a dataset, drives one full connection draft through the board
(start gesture, cursor move, second gesture, commit), deletes an event to
exercise the cascade, and prints what a host would draw after each step.

Usage
-----
1. Use the bundled sample data:
    $ python scripts/smoke.py

2. Use another dataset:
    $ python scripts/smoke.py --file path/to/waves.json
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from hypewaves.core.board.session import ShowcaseBoard
from hypewaves.core.contracts.geometry import Point

env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

DEFAULT_DATA = Path(__file__).resolve().parent.parent / "data" / "waves.json"


def _summary(board: ShowcaseBoard, label: str) -> None:
    frame = board.render()
    print(f"\n--- {label} (revision {board.revision}) ---")
    print(f"draft      : {frame.draft.name}")
    print(f"waves      : {[vl.wave.title for vl in frame.waves]}")
    print(f"anchors    : {len(frame.rects)}")
    print(f"curves     : {[(c.from_id, c.to_id, c.reason) for c in frame.connections]}")
    if frame.live_line:
        print(f"live line  : {frame.live_line.start} -> {frame.live_line.end}")


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run hypewaves Smoke Test")
    parser.add_argument("--file", "-f", type=str, help="Path to a dataset JSON file")
    args = parser.parse_args()

    path = Path(args.file) if args.file else DEFAULT_DATA
    board = ShowcaseBoard.from_path(path)
    if len(board.waves) < 2:
        print("⚠️  Need at least two waves with events for the smoke run.")
        sys.exit(1)

    _summary(board, "loaded")

    start = board.waves[0].events[0].id
    target = board.waves[1].events[0].id

    board.start_gesture(start, Point(x=10, y=10))
    board.cursor_move(Point(x=400, y=300))
    _summary(board, f"drafting from {start}")

    board.start_gesture(target)
    board.commit("Smoke test link")
    _summary(board, f"committed {start} -> {target}")

    board.delete_event(target)
    _summary(board, f"deleted {target}")

    print("\n✅ Smoke run complete.")


if __name__ == "__main__":
    main()
