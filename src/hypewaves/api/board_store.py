"""
In-memory Board Store for the HTTP host.

This module keeps the single :class:`ShowcaseBoard` that all API requests
operate on. The board is the process-wide owner of the waves, connections,
selection and draft; requests mutate it only through its methods.

Note on Persistence
-------------------
The store is volatile. On startup it loads the dataset named by
``HYPEWAVES_DATA_PATH``; edits live in memory until ``save()`` is called.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from hypewaves.core.board.session import ShowcaseBoard
from hypewaves.core.board.storage import save_dataset
from hypewaves.core.contracts.timeline import Dataset
from hypewaves.core.settings import get_logger, load_settings

log = get_logger("hypewaves.api.store")


class BoardStore:
    """
    Holder of the process-wide board.
    """

    # Singleton instance placeholder (initialized in app startup)
    _instance: ClassVar[BoardStore | None] = None

    def __init__(self, board: ShowcaseBoard | None = None) -> None:
        self._board: ShowcaseBoard = board if board is not None else ShowcaseBoard()
        self._source: Path | None = None

    @classmethod
    def get_instance(cls) -> BoardStore:
        """Accessor for the global singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def board(self) -> ShowcaseBoard:
        return self._board

    def load(self, path: str | Path | None = None) -> ShowcaseBoard:
        """Replace the board with one built from the dataset at ``path``."""
        source = Path(path) if path is not None else Path(load_settings().data_path)
        self._board = ShowcaseBoard.from_path(source)
        self._source = source
        return self._board

    def reset(self, dataset: Dataset | None = None) -> ShowcaseBoard:
        """Replace the board with a fresh one (used by tests)."""
        self._board = ShowcaseBoard(dataset)
        self._source = None
        return self._board

    def save(self, path: str | Path | None = None) -> Path:
        """Write the current dataset back to ``path`` or to where it was loaded from."""
        target = Path(path) if path is not None else self._source
        if target is None:
            raise ValueError("No dataset path to save to")
        written = save_dataset(target, self._board.dataset())
        log.info("Board saved to %s", written)
        return written


# Global accessor for convenience
def get_board_store() -> BoardStore:
    return BoardStore.get_instance()


__all__ = ["BoardStore", "get_board_store"]
