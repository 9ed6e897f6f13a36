"""Default rendering host: turn wave layouts into event card rectangles.

A real UI measures its widgets; this module computes the same rectangles
from the layout so the CLI, the API and the tests have a deterministic host.
Visible waves are drawn as side-by-side columns in display order.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from hypewaves.core.contracts.geometry import Rect
from hypewaves.core.layout.groups import WaveLayout
from hypewaves.core.settings import Settings, load_settings

#: Anything that can measure rendered cards for a list of visible wave layouts.
GeometryProvider = Callable[[Sequence[WaveLayout]], Mapping[str, Rect]]


@dataclass(frozen=True, slots=True)
class CanvasGeometry:
    """Column-per-wave canvas.

    Wave column ``k`` starts at ``margin_left + k * column_width``; its axis
    begins ``header_height`` below the top of the canvas. A card's top edge is
    ``header_height + group.top + offset``.
    """

    card_width: float = 180.0
    card_height: float = 60.0
    column_width: float = 320.0
    margin_left: float = 40.0
    header_height: float = 120.0

    @classmethod
    def from_settings(cls, cfg: Settings | None = None) -> CanvasGeometry:
        s = cfg if cfg is not None else load_settings()
        return cls(
            card_width=s.card_width,
            card_height=s.card_height,
            column_width=s.column_width,
        )

    def column_x(self, column: int) -> float:
        return self.margin_left + column * self.column_width

    def card_rect(self, column: int, group_top: float, offset: float) -> Rect:
        return Rect(
            left=self.column_x(column),
            top=self.header_height + group_top + offset,
            width=self.card_width,
            height=self.card_height,
        )

    def __call__(self, layouts: Sequence[WaveLayout]) -> dict[str, Rect]:
        rects: dict[str, Rect] = {}
        for column, layout in enumerate(layouts):
            for group in layout.groups:
                for ev, offset in group.placements():
                    rects[ev.id] = self.card_rect(column, group.top, offset)
        return rects


__all__ = ["CanvasGeometry", "GeometryProvider"]
