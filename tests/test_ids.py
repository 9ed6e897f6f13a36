"""Tests for event id generation."""

from __future__ import annotations

import string

from hypewaves.core.ids import generate_event_id, to_base36


def test_base36_encoding() -> None:
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    assert to_base36(36**3 - 1) == "zzz"


def test_generated_ids_are_unique_and_base36() -> None:
    """A large batch of ids has no collisions and uses only base36 digits."""
    ids = [generate_event_id() for _ in range(2000)]
    assert len(set(ids)) == len(ids)
    allowed = set(string.digits + string.ascii_lowercase)
    assert all(set(i) <= allowed for i in ids)
    # 128 random bits never need more than 25 base36 digits.
    assert max(len(i) for i in ids) <= 25
