"""SVG export of a :class:`~hypewaves.core.board.session.BoardFrame`.

Only geometry is normative here; colors and fonts are left to a stylesheet.
Elements carry CSS classes instead (``event``, ``failure``, ``predicted``,
``connection``, ``live``) so a host can theme the output.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from hypewaves.core.board.session import BoardFrame
from hypewaves.core.layout.geometry import CanvasGeometry

_SVG_NS = "http://www.w3.org/2000/svg"
_MARGIN = 40.0

_STYLE = """
.axis { stroke: #bbb; stroke-width: 2; }
.wave-title { font: bold 16px sans-serif; }
.event rect { fill: #fff; stroke: #ddd; stroke-width: 2; }
.event text { font: bold 13px sans-serif; fill: #007bff; }
.event.predicted text { fill: #333; }
.event.failure text { fill: #c0392b; }
.event.failure.predicted text { fill: darkred; }
.connection path { stroke: rgba(128,128,128,0.4); stroke-width: 2; fill: none; }
.connection text { font: 12px sans-serif; fill: rgba(128,128,128,0.8); text-anchor: middle; }
.live { stroke: gray; stroke-width: 3; }
"""


def _n(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def frame_to_svg(
    frame: BoardFrame,
    *,
    geometry: CanvasGeometry | None = None,
    axis_height: float = 1600.0,
) -> str:
    """Serialize ``frame`` to a standalone SVG document drawn on ``geometry``'s canvas."""
    geo = geometry if geometry is not None else CanvasGeometry.from_settings()
    right = max((r.right for r in frame.rects.values()), default=0.0)
    bottom = max((r.bottom for r in frame.rects.values()), default=0.0)
    width = max(right, len(frame.waves) * geo.column_width) + _MARGIN
    height = max(bottom, geo.header_height + axis_height) + _MARGIN

    root = ET.Element(
        "svg",
        {
            "xmlns": _SVG_NS,
            "width": _n(width),
            "height": _n(height),
            "viewBox": f"0 0 {_n(width)} {_n(height)}",
        },
    )
    ET.SubElement(root, "style").text = _STYLE

    defs = ET.SubElement(root, "defs")
    marker = ET.SubElement(
        defs,
        "marker",
        {
            "id": "arrowhead",
            "markerWidth": "10",
            "markerHeight": "7",
            "refX": "10",
            "refY": "3.5",
            "orient": "auto",
        },
    )
    ET.SubElement(marker, "polygon", {"points": "0 0, 10 3.5, 0 7", "fill": "gray"})

    for vl in frame.waves:
        group = ET.SubElement(root, "g", {"class": "wave", "data-index": str(vl.index)})
        x = geo.column_x(vl.column)
        ET.SubElement(
            group,
            "line",
            {
                "class": "axis",
                "x1": _n(x),
                "y1": _n(geo.header_height),
                "x2": _n(x),
                "y2": _n(geo.header_height + axis_height),
            },
        )
        title = ET.SubElement(group, "text", {"class": "wave-title", "x": _n(x), "y": "30"})
        title.text = vl.wave.label
        period = ET.SubElement(group, "text", {"x": _n(x), "y": "50"})
        period.text = vl.wave.period

        for g in vl.layout.groups:
            for ev, _offset in g.placements():
                rect = frame.rects.get(ev.id)
                if rect is None:
                    continue
                classes = ["event"]
                if ev.is_failure:
                    classes.append("failure")
                if ev.id in frame.predicted_ids:
                    classes.append("predicted")
                card = ET.SubElement(
                    group, "g", {"class": " ".join(classes), "data-event-id": ev.id}
                )
                ET.SubElement(
                    card,
                    "rect",
                    {
                        "x": _n(rect.left),
                        "y": _n(rect.top),
                        "width": _n(rect.width),
                        "height": _n(rect.height),
                        "rx": "8",
                    },
                )
                text_x = _n(rect.left + 10)
                label = ET.SubElement(card, "text", {"x": text_x, "y": _n(rect.top + 22)})
                label.text = ev.title
                when = ET.SubElement(card, "text", {"x": text_x, "y": _n(rect.top + 42)})
                when.text = ev.date.isoformat()

    for rc in frame.connections:
        cg = ET.SubElement(root, "g", {"class": "connection", "data-index": str(rc.index)})
        ET.SubElement(cg, "path", {"d": rc.path})
        text = ET.SubElement(cg, "text", {"x": _n(rc.label.x), "y": _n(rc.label.y)})
        text.text = rc.reason

    if frame.live_line is not None:
        ll = frame.live_line
        ET.SubElement(
            root,
            "line",
            {
                "class": "live",
                "x1": _n(ll.start.x),
                "y1": _n(ll.start.y),
                "x2": _n(ll.end.x),
                "y2": _n(ll.end.y),
                "marker-end": "url(#arrowhead)",
            },
        )

    return ET.tostring(root, encoding="unicode")


__all__ = ["frame_to_svg"]
