"""
Board snapshot definition.

A :class:`BoardSnapshot` is the immutable record of the showcase board at one
revision: the dataset, the view state, the draft and the anchors that were
current when it was taken. It is kept apart from ``session.py`` so the CLI
and the storage layer can use it without importing the board.

Design Notes
------------
- **Immutability**: once created, a snapshot does not change (``frozen=True``).
- **Serialization**: the timestamp is stored as an ISO string and ``data`` is
  already JSON-safe, so writing a snapshot is a plain ``json.dump``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    """
    Immutable record of a board state.

    Attributes
    ----------
    timestamp : str
        UTC capture time, e.g. ``"2024-10-27T10:00:00.123456Z"``.
    revision : int
        Board revision (number of mutations applied) at capture time.
    note : str | None
        Optional label, e.g. ``"after connect"``.
    data : dict[str, Any]
        JSON-safe copy of the board content.
    """

    timestamp: str
    revision: int
    note: str | None
    data: dict[str, Any] = field(default_factory=dict)
