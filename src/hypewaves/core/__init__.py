"""Core package initializer for hypewaves.

Downstream code imports from the submodules directly, e.g.:
    from hypewaves.core.settings import settings, load_settings, Settings, get_logger
    from hypewaves.core.board.session import ShowcaseBoard
"""

from __future__ import annotations

__all__ = ["__doc__"]
