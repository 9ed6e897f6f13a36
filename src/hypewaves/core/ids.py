"""Identifier generation for new events.

Ids are 128-bit random tokens rendered in base36. Collisions are not checked
for; at this width they do not happen in practice.
"""

from __future__ import annotations

import secrets

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Return the lowercase base36 spelling of a non-negative integer."""
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_event_id() -> str:
    """Return a fresh, globally unique event id."""
    return to_base36(secrets.randbits(128))


__all__ = ["generate_event_id", "to_base36"]
