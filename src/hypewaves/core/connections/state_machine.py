"""
ConnectionStateMachine: interactive creation and deletion of connections.

States
------
``Idle``
    No draft exists.
``PendingStart(start_event_id, cursor)``
    The user picked a start event; a live line follows the cursor.
``AwaitingReason(start_event_id, target_event_id)``
    A second event was picked; the reason prompt is open and the live line
    is suspended.

Transitions
-----------
=================  ===========================  ==================
state              input                        next state
=================  ===========================  ==================
Idle               start_gesture(id, cursor)    PendingStart
PendingStart       cursor_move(pos)             PendingStart
PendingStart       start_gesture(same id)       Idle
PendingStart       start_gesture(other id)      AwaitingReason
PendingStart       cancel()                     Idle
AwaitingReason     commit(reason)               Idle (+ Connection)
AwaitingReason     cancel()                     Idle
=================  ===========================  ==================

Every other (state, input) pair is a no-op, so no input sequence can leave
the machine in an unknown state.

The machine also owns the confirmed connection list, because deleting an
event must drop its connections and any draft that references it in one
step (:meth:`ConnectionStateMachine.forget_event`).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from hypewaves.core.contracts.geometry import Point
from hypewaves.core.contracts.timeline import DEFAULT_CONNECTION_REASON, Connection
from hypewaves.core.errors import UnknownConnectionError
from hypewaves.core.settings import get_logger

log = get_logger("hypewaves.connections")


@dataclass(frozen=True, slots=True)
class Idle:
    """No connection is being drafted."""

    name = "idle"


@dataclass(frozen=True, slots=True)
class PendingStart:
    """A start event is chosen; ``cursor`` is the live line's free end.

    ``cursor`` is in container coordinates and may be ``None`` when the host
    could not report a pointer position.
    """

    start_event_id: str
    cursor: Point | None = None

    name = "pending_start"


@dataclass(frozen=True, slots=True)
class AwaitingReason:
    """Both endpoints are chosen; waiting for the reason prompt."""

    start_event_id: str
    target_event_id: str

    name = "awaiting_reason"


DraftState = Idle | PendingStart | AwaitingReason

IDLE = Idle()


def draft_references(state: DraftState, event_id: str) -> bool:
    """Return True when the draft in ``state`` starts or ends at ``event_id``."""
    if isinstance(state, PendingStart):
        return state.start_event_id == event_id
    if isinstance(state, AwaitingReason):
        return event_id in (state.start_event_id, state.target_event_id)
    return False


class ConnectionStateMachine:
    """Owner of the draft connection and the confirmed connection list."""

    __slots__ = ("_state", "_connections")

    def __init__(self, connections: Iterable[Connection] = ()) -> None:
        self._state: DraftState = IDLE
        self._connections: list[Connection] = list(connections)

    # ------------------------------ Inspection ------------------------------

    @property
    def state(self) -> DraftState:
        return self._state

    @property
    def connections(self) -> tuple[Connection, ...]:
        return tuple(self._connections)

    @property
    def is_idle(self) -> bool:
        return isinstance(self._state, Idle)

    # ------------------------------ Transitions -----------------------------

    def start_gesture(self, event_id: str, cursor: Point | None = None) -> DraftState:
        """Handle the "connect from/to this event" gesture (a double click)."""
        state = self._state
        if isinstance(state, Idle):
            self._state = PendingStart(start_event_id=event_id, cursor=cursor)
            log.debug("Draft started at %s", event_id)
        elif isinstance(state, PendingStart):
            if state.start_event_id == event_id:
                self._state = IDLE
                log.debug("Draft at %s cancelled by repeat gesture", event_id)
            else:
                self._state = AwaitingReason(
                    start_event_id=state.start_event_id, target_event_id=event_id
                )
                log.debug("Draft %s -> %s awaiting reason", state.start_event_id, event_id)
        else:
            self._ignore("start_gesture")
        return self._state

    def cursor_move(self, pos: Point) -> DraftState:
        """Move the live line's free end; only meaningful while ``PendingStart``."""
        state = self._state
        if isinstance(state, PendingStart):
            self._state = PendingStart(start_event_id=state.start_event_id, cursor=pos)
        return self._state

    def commit(self, reason: str | None = None) -> Connection | None:
        """Confirm the awaiting draft with ``reason`` and append the connection.

        Blank or missing reasons become ``"Manual connection"``; any other text
        is stored as typed. Returns the new connection, or ``None`` when no
        draft was awaiting a reason.
        """
        state = self._state
        if not isinstance(state, AwaitingReason):
            self._ignore("commit")
            return None

        text = reason if reason and reason.strip() else DEFAULT_CONNECTION_REASON
        conn = Connection(
            from_id=state.start_event_id,
            to_id=state.target_event_id,
            reason=text,
        )
        self._connections.append(conn)
        self._state = IDLE
        log.info("Connection %s -> %s committed (%s)", conn.from_id, conn.to_id, conn.reason)
        return conn

    def cancel(self) -> bool:
        """Discard any draft. Returns True if there was one."""
        if isinstance(self._state, Idle):
            self._ignore("cancel")
            return False
        self._state = IDLE
        log.debug("Draft cancelled")
        return True

    # ------------------------------- Deletion -------------------------------

    def delete_connection(self, index: int) -> Connection:
        """Remove the confirmed connection at ``index`` and return it."""
        if not 0 <= index < len(self._connections):
            raise UnknownConnectionError(index)
        removed = self._connections.pop(index)
        log.info("Connection %s -> %s deleted", removed.from_id, removed.to_id)
        return removed

    def forget_event(self, event_id: str) -> int:
        """Cascade an event deletion: drop its connections and any draft touching it.

        Returns the number of connections removed.
        """
        before = len(self._connections)
        self._connections = [c for c in self._connections if not c.touches(event_id)]
        removed = before - len(self._connections)

        if draft_references(self._state, event_id):
            self._state = IDLE
            log.debug("Draft cancelled because event %s was deleted", event_id)
        return removed

    def _ignore(self, action: str) -> None:
        log.debug("Ignored %s in state %s", action, self._state.name)


__all__ = [
    "IDLE",
    "AwaitingReason",
    "ConnectionStateMachine",
    "DraftState",
    "Idle",
    "PendingStart",
    "draft_references",
]
