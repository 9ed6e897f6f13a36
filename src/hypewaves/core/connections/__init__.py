"""Connection drafting, confirmation and rendering."""

from __future__ import annotations

from .renderer import ConnectionsRenderer, LiveLine, RenderedConnection, Tooltip, tooltip_for
from .state_machine import (
    IDLE,
    AwaitingReason,
    ConnectionStateMachine,
    DraftState,
    Idle,
    PendingStart,
)

__all__ = [
    "IDLE",
    "AwaitingReason",
    "ConnectionStateMachine",
    "ConnectionsRenderer",
    "DraftState",
    "Idle",
    "LiveLine",
    "PendingStart",
    "RenderedConnection",
    "Tooltip",
    "tooltip_for",
]
