"""Frame → SVG markup. One standalone document per layer, or the whole frame at once."""

from __future__ import annotations

import math
from xml.sax.saxutils import escape

from bloomchart.engine.context import Frame, LayerContent
from bloomchart.engine.shapes import (
    Circle,
    GapStrip,
    OverlayImage,
    Shape,
    TextLabel,
    TooltipBox,
    Wedge,
)
from bloomchart.utils.geometry import polar_to_xy, strip_points

_FONT_FAMILY = "Arial, Helvetica, sans-serif"
_LINE_HEIGHT = 1.2

# Gap strips are drawn opaque; the raster stage turns them into a clear mask
_MASK_FILL = "#000000"

_FULL_TURN = 2 * math.pi - 1e-9


def _f(v: float) -> str:
    return f"{v:.3f}"


def _arc(cx: float, cy: float, r: float, a0: float, a1: float) -> str:
    """SVG arc command from angle a0 to a1 (the path is already at a0)."""
    x, y = polar_to_xy(cx, cy, r, a1)
    large = 1 if abs(a1 - a0) > math.pi else 0
    sweep = 1 if a1 >= a0 else 0
    return f"A {_f(r)} {_f(r)} 0 {large} {sweep} {_f(x)} {_f(y)}"


def wedge_path(w: Wedge) -> str:
    """Path data for an annular sector; a full turn is split in two arcs."""
    a0, a1 = w.start_angle, w.end_angle
    if a1 - a0 >= _FULL_TURN:
        a1 = a0 + _FULL_TURN
    mid = (a0 + a1) / 2
    ox, oy = polar_to_xy(w.cx, w.cy, w.outer_radius, a0)
    parts = [
        f"M {_f(ox)} {_f(oy)}",
        _arc(w.cx, w.cy, w.outer_radius, a0, mid),
        _arc(w.cx, w.cy, w.outer_radius, mid, a1),
    ]
    if w.inner_radius > 0:
        ix, iy = polar_to_xy(w.cx, w.cy, w.inner_radius, a1)
        parts.append(f"L {_f(ix)} {_f(iy)}")
        parts.append(_arc(w.cx, w.cy, w.inner_radius, a1, mid))
        parts.append(_arc(w.cx, w.cy, w.inner_radius, mid, a0))
    else:
        parts.append(f"L {_f(w.cx)} {_f(w.cy)}")
    parts.append("Z")
    return " ".join(parts)


def _stroke_attrs(stroke: str | None, width: float) -> str:
    if not stroke or width <= 0:
        return ""
    return f' stroke="{stroke}" stroke-width="{_f(width)}" stroke-linejoin="round"'


def _text_element(
    x: float,
    y: float,
    text: str,
    font_size: float,
    fill: str,
    rotation: float = 0.0,
    stroke: str | None = None,
    stroke_width: float = 0.0,
    bold: bool = True,
    anchor: str = "middle",
) -> str:
    lines = text.split("\n")
    # Centre the block vertically on (x, y)
    first_dy = -(len(lines) - 1) * _LINE_HEIGHT / 2
    tspans = []
    for i, line in enumerate(lines):
        dy = first_dy if i == 0 else _LINE_HEIGHT
        tspans.append(f'<tspan x="{_f(x)}" dy="{dy:.2f}em">{escape(line)}</tspan>')
    transform = f' transform="rotate({rotation:.2f} {_f(x)} {_f(y)})"' if rotation else ""
    weight = ' font-weight="bold"' if bold else ""
    stroke_attr = ""
    if stroke and stroke_width > 0:
        stroke_attr = f' stroke="{stroke}" stroke-width="{_f(stroke_width)}" paint-order="stroke"'
    return (
        f'<text x="{_f(x)}" y="{_f(y)}" font-family="{_FONT_FAMILY}" font-size="{_f(font_size)}"'
        f'{weight} fill="{fill}"{stroke_attr} text-anchor="{anchor}"'
        f' dominant-baseline="central"{transform}>{"".join(tspans)}</text>'
    )


def shape_to_svg(shape: Shape) -> str:
    """One shape as an SVG element. Overlay images are composited by the raster stage."""
    if isinstance(shape, Wedge):
        return (
            f'<path d="{wedge_path(shape)}" fill="{shape.fill}"'
            f"{_stroke_attrs(shape.stroke, shape.stroke_width)}/>"
        )
    if isinstance(shape, Circle):
        return (
            f'<circle cx="{_f(shape.cx)}" cy="{_f(shape.cy)}" r="{_f(shape.radius)}"'
            f' fill="{shape.fill}"{_stroke_attrs(shape.stroke, shape.stroke_width)}/>'
        )
    if isinstance(shape, GapStrip):
        pts = strip_points(shape.cx, shape.cy, shape.angle, shape.length, shape.width)[:-1]
        points = " ".join(f"{_f(x)},{_f(y)}" for x, y in pts)
        return f'<polygon points="{points}" fill="{_MASK_FILL}"/>'
    if isinstance(shape, TextLabel):
        return _text_element(
            shape.x, shape.y, shape.text, shape.font_size, shape.fill,
            rotation=shape.rotation,
            stroke=shape.stroke,
            stroke_width=shape.stroke_width,
            bold=shape.bold,
        )
    if isinstance(shape, TooltipBox):
        rect = (
            f'<rect x="{_f(shape.x)}" y="{_f(shape.y)}" width="{_f(shape.width)}"'
            f' height="{_f(shape.height)}" rx="{_f(shape.corner_radius)}" fill="{shape.fill}"/>'
        )
        text = _text_element(
            shape.x + shape.width / 2,
            shape.y + shape.height / 2,
            shape.text,
            shape.font_size,
            shape.text_fill,
            bold=False,
        )
        return rect + text
    if isinstance(shape, OverlayImage):
        return ""
    raise TypeError(f"Unsupported shape: {type(shape).__name__}")


def svg_wrap(content: str, width: float, height: float) -> str:
    """Wrap SVG content in a standalone, transparent SVG document."""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width:.1f} {height:.1f}"'
        f' width="{width:.1f}" height="{height:.1f}">'
        f"\n{content}\n</svg>"
    )


def layer_to_svg(content: LayerContent, canvas_size: float) -> str:
    elements = [shape_to_svg(s) for s in content.shapes]
    return svg_wrap("\n".join(e for e in elements if e), canvas_size, canvas_size)


def frame_to_svg(frame: Frame) -> str:
    """Whole frame as one vector document, one <g> per layer.

    SVG has no destination-out, so the gap layer becomes a mask applied
    to the layers it cuts.
    """
    size = frame.canvas_size
    gaps = next((c for c in frame.layers if c.subtractive), None)
    defs = ""
    if gaps is not None and gaps.shapes:
        strips = "\n".join(shape_to_svg(s) for s in gaps.shapes).replace(_MASK_FILL, "black")
        defs = (
            '<defs><mask id="slice-gaps" maskUnits="userSpaceOnUse"'
            f' x="0" y="0" width="{size:.1f}" height="{size:.1f}">'
            f'<rect x="0" y="0" width="{size:.1f}" height="{size:.1f}" fill="white"/>'
            f"\n{strips}\n</mask></defs>"
        )

    groups = [defs] if defs else []
    for content in frame.layers:
        if content.subtractive or content.is_empty:
            continue
        body = "\n".join(e for e in (shape_to_svg(s) for s in content.shapes) if e)
        if not body:
            continue
        mask = ' mask="url(#slice-gaps)"' if defs and content.cut_by_gaps else ""
        groups.append(f'<g id="{content.layer.name.lower()}"{mask}>\n{body}\n</g>')
    return svg_wrap("\n".join(groups), size, size)
