"""Disk persistence for board snapshots and datasets.

- Snapshot directory: ``HYPEWAVES_SNAPSHOT_DIR`` or ``artifacts/snapshots/``
- Snapshot filename:  ``YYYYmmddTHHMMSSffffffZ_rev{rev:06d}.json``
- Dataset files use the same shape the loader reads
  (``{"waves": [...], "connections": [...]}``).

Usage
-----
>>> writer = SnapshotWriter()   # uses the configured directory
>>> path = writer.write(board.snapshot("after connect"))
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from hypewaves.core.contracts.timeline import Dataset
from hypewaves.core.settings import load_settings

from .trace import BoardSnapshot


def _default_dir() -> Path:
    """Return the default base directory for snapshot artifacts."""
    root = load_settings().snapshot_dir
    return Path(root) if root else Path("artifacts") / "snapshots"


class SnapshotWriter:
    """Persist board snapshots to disk as JSON files."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir: Path = base_dir if base_dir is not None else _default_dir()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def write(self, snap: BoardSnapshot) -> Path:
        """Write ``snap`` to disk and return the created file path."""
        safe_ts = snap.timestamp.replace("-", "").replace(":", "").replace(".", "")
        path = self.base_dir / f"{safe_ts}_rev{snap.revision:06d}.json"

        with path.open("w", encoding="utf-8") as f:
            json.dump(asdict(snap), f, ensure_ascii=False, indent=2)
            f.write("\n")
        return path


def save_dataset(path: str | Path, dataset: Dataset) -> Path:
    """Write ``dataset`` to ``path`` in the loader's format and return the path."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(dataset.to_payload(), f, ensure_ascii=False, indent=2)
        f.write("\n")
    return p


__all__ = ["SnapshotWriter", "save_dataset"]
