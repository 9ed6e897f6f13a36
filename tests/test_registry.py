"""Tests for the position registry's rounding and change reporting."""

from __future__ import annotations

from hypewaves.core.contracts.geometry import Point, Rect
from hypewaves.core.layout.registry import PositionRegistry


def _rect(left: float, top: float) -> Rect:
    return Rect(left=left, top=top, width=180, height=60)


def test_first_recompute_reports_change() -> None:
    reg = PositionRegistry()
    assert reg.recompute({"a": _rect(0, 0)}) is True
    assert reg.get("a") == Point(x=90, y=30)
    assert "a" in reg
    assert reg.generation == 1


def test_identical_geometry_is_not_a_change() -> None:
    """A second pass with the same rectangles settles the fixed point."""
    reg = PositionRegistry()
    rects = {"a": _rect(0, 0), "b": _rect(320, 100)}
    reg.recompute(rects)
    assert reg.recompute(dict(rects)) is False
    assert reg.generation == 1


def test_sub_pixel_jitter_is_absorbed_by_rounding() -> None:
    reg = PositionRegistry()
    reg.recompute({"a": _rect(0.1, 0.1)})
    assert reg.recompute({"a": _rect(0.3, 0.2)}) is False
    assert reg.recompute({"a": _rect(1.2, 0.2)}) is True
    assert reg.get("a") == Point(x=91, y=30)


def test_half_pixel_rounds_up() -> None:
    reg = PositionRegistry()
    reg.recompute({"a": Rect(left=0, top=0, width=1, height=3)})
    assert reg.get("a") == Point(x=1, y=2)


def test_dropped_ids_count_as_change() -> None:
    """An event that is no longer rendered loses its anchor."""
    reg = PositionRegistry()
    reg.recompute({"a": _rect(0, 0), "b": _rect(0, 100)})
    assert reg.recompute({"a": _rect(0, 0)}) is True
    assert reg.get("b") is None
    assert list(reg) == ["a"]


def test_empty_registry_stays_unchanged() -> None:
    reg = PositionRegistry()
    assert reg.recompute({}) is False
    assert reg.snapshot() == {}


def test_snapshot_is_sorted_copy() -> None:
    reg = PositionRegistry()
    reg.recompute({"b": _rect(0, 0), "a": _rect(0, 100)})
    snap = reg.snapshot()
    assert list(snap) == ["a", "b"]
    snap.clear()
    assert reg.get("a") is not None
