"""Interaction adapter — pointer position → metadata of the topmost shape under it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from shapely.geometry import Point

from bloomchart.engine.context import Frame, LayerContent
from bloomchart.engine.shapes import ShapeMeta

# Tooltip sits this far right of the pointer, or left when it would overflow
_TOOLTIP_OFFSET = 15.0
# Minimum distance from the top/bottom canvas edge
_TOOLTIP_MARGIN = 5.0
_TOOLTIP_PADDING = 8.0
TOOLTIP_FONT_PX = 14.0
# Average glyph width as a fraction of the font size (Arial-like)
_CHAR_WIDTH_RATIO = 0.6
_LINE_HEIGHT_RATIO = 1.2

_METRIC_LABELS = {"score": "Score", "benchmark": "Benchmark", "average": "Average"}


def _cut_by(layer: LayerContent, gaps: LayerContent | None, point: Point) -> bool:
    if gaps is None or not layer.cut_by_gaps or layer.layer > gaps.layer:
        return False
    return any(strip.to_polygon().covers(point) for strip in gaps.shapes)


def hit_test(frame: Frame, x: float, y: float) -> ShapeMeta | None:
    """Topmost metadata-carrying shape containing (x, y), or None.

    Layers are scanned top-down, shapes within a layer last-drawn first.
    A point inside a gap strip hits nothing on the layers that strip clears.
    """
    point = Point(x, y)
    gaps = next((c for c in frame.layers if c.subtractive), None)

    for content in reversed(frame.layers):
        if content.subtractive:
            continue
        candidates = [s for s in content.shapes if s.meta is not None]
        if not candidates:
            continue
        if _cut_by(content, gaps, point):
            continue
        for shape in reversed(candidates):
            if shape.to_polygon().covers(point):
                return shape.meta
    return None


def tooltip_text(meta: ShapeMeta, category_labels: Sequence[str]) -> str:
    """Two lines: category name, then ring, value and series."""
    if meta.category < len(category_labels):
        label = category_labels[meta.category].replace("\n", " ")
    else:
        label = f"Category {meta.category + 1}"
    metric = _METRIC_LABELS.get(meta.metric, meta.metric)
    return f"{label}\nRing {meta.tier + 1}: {meta.value:.1f} ({metric})"


def tooltip_box_size(text: str, font_size: float, scale: float = 1.0) -> tuple[float, float]:
    """Approximate rendered size of the tooltip text including padding."""
    lines = text.split("\n")
    width = max(len(line) for line in lines) * font_size * _CHAR_WIDTH_RATIO
    height = len(lines) * font_size * _LINE_HEIGHT_RATIO
    padding = 2 * _TOOLTIP_PADDING * scale
    return (width + padding, height + padding)


def tooltip_position(
    x: float,
    y: float,
    width: float,
    height: float,
    canvas_size: float,
    scale: float = 1.0,
) -> tuple[float, float]:
    """Top-left corner of the tooltip box, kept inside the canvas."""
    offset = _TOOLTIP_OFFSET * scale
    margin = _TOOLTIP_MARGIN * scale
    tx = x + offset
    ty = y - height / 2
    if tx + width > canvas_size:
        tx = x - width - offset
    if ty < 0:
        ty = margin
    if ty + height > canvas_size:
        ty = canvas_size - height - margin
    return (tx, ty)


@dataclass(frozen=True)
class TooltipLayout:
    text: str
    x: float
    y: float
    width: float
    height: float
    font_size: float


def tooltip_layout(
    meta: ShapeMeta,
    x: float,
    y: float,
    category_labels: Sequence[str],
    canvas_size: float,
    scale: float = 1.0,
) -> TooltipLayout:
    """Text, box size and position of the tooltip for a hit at (x, y)."""
    text = tooltip_text(meta, category_labels)
    font_size = TOOLTIP_FONT_PX * scale
    width, height = tooltip_box_size(text, font_size, scale)
    tx, ty = tooltip_position(x, y, width, height, canvas_size, scale)
    return TooltipLayout(text=text, x=tx, y=ty, width=width, height=height, font_size=font_size)
