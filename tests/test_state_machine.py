"""Tests for the draft-connection state machine."""

from __future__ import annotations

import random

import pytest

from hypewaves.core.connections.state_machine import (
    IDLE,
    AwaitingReason,
    ConnectionStateMachine,
    Idle,
    PendingStart,
)
from hypewaves.core.contracts.geometry import Point
from hypewaves.core.contracts.timeline import Connection
from hypewaves.core.errors import UnknownConnectionError


def test_gesture_on_same_event_twice_cancels() -> None:
    """A then A returns to Idle and creates nothing."""
    m = ConnectionStateMachine()
    assert isinstance(m.start_gesture("A", Point(x=1, y=2)), PendingStart)
    assert m.start_gesture("A") == IDLE
    assert m.connections == ()


def test_full_flow_commits_one_connection() -> None:
    """A then B then commit("X") -> exactly one connection A->B "X"."""
    m = ConnectionStateMachine()
    m.start_gesture("A")
    assert m.start_gesture("B") == AwaitingReason(start_event_id="A", target_event_id="B")

    conn = m.commit("X")
    assert conn == Connection(from_id="A", to_id="B", reason="X")
    assert m.connections == (conn,)
    assert m.is_idle


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_blank_reason_uses_placeholder(reason: str | None) -> None:
    m = ConnectionStateMachine()
    m.start_gesture("A")
    m.start_gesture("B")
    conn = m.commit(reason)
    assert conn is not None
    assert conn.reason == "Manual connection"


def test_reason_is_stored_as_typed() -> None:
    """Non-blank reasons keep their surrounding whitespace."""
    m = ConnectionStateMachine()
    m.start_gesture("A")
    m.start_gesture("B")
    conn = m.commit("  X  ")
    assert conn is not None and conn.reason == "  X  "


def test_cursor_move_only_updates_cursor() -> None:
    m = ConnectionStateMachine()
    assert m.cursor_move(Point(x=5, y=5)) == IDLE
    m.start_gesture("A", Point(x=0, y=0))
    state = m.cursor_move(Point(x=10, y=20))
    assert state == PendingStart(start_event_id="A", cursor=Point(x=10, y=20))


def test_cancel_from_any_draft_state() -> None:
    m = ConnectionStateMachine()
    assert m.cancel() is False

    m.start_gesture("A")
    assert m.cancel() is True
    assert m.is_idle

    m.start_gesture("A")
    m.start_gesture("B")
    assert m.cancel() is True
    assert m.is_idle
    assert m.connections == ()


def test_unmatched_inputs_are_no_ops() -> None:
    m = ConnectionStateMachine()
    assert m.commit("X") is None
    assert m.is_idle

    m.start_gesture("A")
    assert m.commit("X") is None
    assert isinstance(m.state, PendingStart)

    m.start_gesture("B")
    awaiting = m.state
    m.start_gesture("C")
    m.cursor_move(Point(x=1, y=1))
    assert m.state == awaiting


def test_any_input_sequence_stays_in_a_known_state() -> None:
    """Random sequences of gestures, moves, commits and cancels never break the machine."""
    rng = random.Random(7)
    m = ConnectionStateMachine()
    ids = ["A", "B", "C"]
    for _ in range(2000):
        action = rng.randrange(4)
        if action == 0:
            m.start_gesture(rng.choice(ids), Point(x=rng.random(), y=rng.random()))
        elif action == 1:
            m.cursor_move(Point(x=rng.random(), y=rng.random()))
        elif action == 2:
            m.commit(rng.choice(["", "why"]))
        else:
            m.cancel()
        assert isinstance(m.state, Idle | PendingStart | AwaitingReason)
    assert all(c.from_id != c.to_id for c in m.connections)


def test_duplicate_connections_are_allowed() -> None:
    m = ConnectionStateMachine()
    for _ in range(2):
        m.start_gesture("A")
        m.start_gesture("B")
        m.commit("same")
    assert len(m.connections) == 2


def test_delete_connection_by_index() -> None:
    m = ConnectionStateMachine(
        [Connection(from_id="A", to_id="B"), Connection(from_id="B", to_id="C")]
    )
    removed = m.delete_connection(0)
    assert (removed.from_id, removed.to_id) == ("A", "B")
    assert [c.from_id for c in m.connections] == ["B"]

    with pytest.raises(UnknownConnectionError):
        m.delete_connection(5)
    with pytest.raises(LookupError):
        m.delete_connection(-1)


def test_forget_event_cascades_to_connections_and_draft() -> None:
    m = ConnectionStateMachine(
        [
            Connection(from_id="A", to_id="B"),
            Connection(from_id="C", to_id="A"),
            Connection(from_id="B", to_id="C"),
        ]
    )
    m.start_gesture("A")
    assert m.forget_event("A") == 2
    assert m.is_idle
    assert [(c.from_id, c.to_id) for c in m.connections] == [("B", "C")]

    m.start_gesture("B")
    m.start_gesture("C")
    assert m.forget_event("C") == 1
    assert m.is_idle


def test_forget_event_leaves_unrelated_draft() -> None:
    m = ConnectionStateMachine()
    m.start_gesture("A")
    assert m.forget_event("Z") == 0
    assert m.state == PendingStart(start_event_id="A")
