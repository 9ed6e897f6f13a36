"""Screen-space geometry shared by the layout host, registry and renderer.

Coordinates are CSS-style pixels: ``x`` grows to the right, ``y`` grows
downward, and a rectangle is anchored at its top-left corner.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


def round_half_up(value: float) -> int:
    """Round to the nearest integer pixel, halves away from negative infinity.

    ``round()`` uses banker's rounding, which would make ``0.5`` and ``1.5``
    land on the same side and let sub-pixel noise flip a centroid.
    """
    return math.floor(value + 0.5)


class Point(BaseModel):
    """A point on the canvas."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Point:
        return Point(x=self.x + dx, y=self.y + dy)

    def rounded(self) -> Point:
        """Return the point snapped to integer pixels."""
        return Point(x=round_half_up(self.x), y=round_half_up(self.y))


class Rect(BaseModel):
    """Axis-aligned rectangle of a rendered element."""

    model_config = ConfigDict(frozen=True)

    left: float
    top: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        """Centroid of the rectangle, not rounded."""
        return Point(x=self.left + self.width / 2, y=self.top + self.height / 2)


__all__ = ["Point", "Rect", "round_half_up"]
