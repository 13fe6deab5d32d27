"""Shape builders — kernel output → renderable, metadata-tagged descriptors.

Shapes carry data only. Hit-testing goes through ``to_polygon()`` and the
central adapter in engine.interaction; no shape holds behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from shapely.geometry import Point, Polygon

from bloomchart.engine.config import ChartPalette
from bloomchart.engine.kernel import (
    ChartFrame,
    IndicatorGeometry,
    filled_outer_radius,
    gap_width,
    ring_bounds,
    slice_angles,
)
from bloomchart.utils.geometry import annular_sector_points, polar_to_xy, strip_points

MetricKind = Literal["score", "benchmark", "average"]

# Circle approximation for hit polygons (segments per quarter circle)
_CIRCLE_QUAD_SEGS = 16


@dataclass(frozen=True)
class ShapeMeta:
    """What a data shape represents. Surfaced by the tooltip."""

    category: int
    tier: int
    value: float
    metric: MetricKind


@dataclass(frozen=True)
class Wedge:
    """Filled annular sector."""

    cx: float
    cy: float
    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    fill: str
    stroke: str | None = None
    stroke_width: float = 0.0
    meta: ShapeMeta | None = None

    def to_polygon(self) -> Polygon:
        return Polygon(
            annular_sector_points(
                self.cx, self.cy, self.inner_radius, self.outer_radius,
                self.start_angle, self.end_angle,
            )
        )


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    radius: float
    fill: str
    stroke: str | None = None
    stroke_width: float = 0.0
    meta: ShapeMeta | None = None

    def to_polygon(self) -> Polygon:
        return Point(self.cx, self.cy).buffer(self.radius, quad_segs=_CIRCLE_QUAD_SEGS)


@dataclass(frozen=True)
class GapStrip:
    """Radial strip cleared between two slices. Subtractive, no metadata."""

    cx: float
    cy: float
    angle: float
    length: float
    width: float
    meta: None = None

    def to_polygon(self) -> Polygon:
        return Polygon(strip_points(self.cx, self.cy, self.angle, self.length, self.width))


@dataclass(frozen=True)
class TextLabel:
    x: float
    y: float
    text: str
    font_size: float
    fill: str
    rotation: float = 0.0
    stroke: str | None = None
    stroke_width: float = 0.0
    bold: bool = True
    meta: None = None


@dataclass(frozen=True)
class TooltipBox:
    x: float
    y: float
    width: float
    height: float
    text: str
    font_size: float
    fill: str
    text_fill: str
    corner_radius: float = 6.0
    meta: None = None


@dataclass(frozen=True)
class OverlayImage:
    """Opaque external label asset; the engine never reads its contents."""

    path: str
    x: float
    y: float
    meta: None = None


Shape = Union[Wedge, Circle, GapStrip, TextLabel, TooltipBox, OverlayImage]


def build_background_wedges(frame: ChartFrame, palette: ChartPalette) -> list[Wedge]:
    """Full grey ring segments for every (category, tier)."""
    shapes: list[Wedge] = []
    for category in range(frame.geometry.category_count):
        angles = slice_angles(frame, category)
        for tier in range(frame.geometry.tier_count):
            bounds = ring_bounds(frame, tier)
            shapes.append(
                Wedge(
                    cx=frame.center_x,
                    cy=frame.center_y,
                    inner_radius=bounds.inner_radius,
                    outer_radius=bounds.outer_radius,
                    start_angle=angles.start_angle,
                    end_angle=angles.end_angle,
                    fill=palette.tier_color(palette.background, tier),
                )
            )
    return shapes


def build_fill_wedge(
    frame: ChartFrame,
    category: int,
    tier: int,
    fraction: float,
    fill: str,
    meta: ShapeMeta,
    sweep: float = 1.0,
) -> Wedge | None:
    """One filled tier segment, or None when nothing is filled.

    ``fraction`` maps linearly onto the tier's radial extent; ``sweep``
    reveals the slice clockwise from its start angle.
    """
    if fraction <= 0 or sweep <= 0:
        return None
    bounds = ring_bounds(frame, tier)
    angles = slice_angles(frame, category)
    return Wedge(
        cx=frame.center_x,
        cy=frame.center_y,
        inner_radius=bounds.inner_radius,
        outer_radius=filled_outer_radius(bounds, fraction),
        start_angle=angles.start_angle,
        end_angle=angles.start_angle + angles.span * min(sweep, 1.0),
        fill=fill,
        meta=meta,
    )


def build_gap_strips(frame: ChartFrame) -> list[GapStrip]:
    """One strip per category boundary, from the centre past the outer ring."""
    length = frame.max_radius + frame.px(frame.geometry.gap_overshoot_px)
    width = gap_width(frame)
    return [
        GapStrip(
            cx=frame.center_x,
            cy=frame.center_y,
            angle=slice_angles(frame, category).start_angle,
            length=length,
            width=width,
        )
        for category in range(frame.geometry.category_count)
    ]


def build_pill(
    frame: ChartFrame,
    indicator: IndicatorGeometry,
    value: float,
    palette: ChartPalette,
    progress: float = 1.0,
) -> list[Shape]:
    """Average indicator: body band, protrusion bands, then start and end caps.

    ``progress`` grows the pill out of the centre (radius and thickness).
    The body band stays inside the owning slice. Protrusion bands are only
    emitted for the part of the pill past a slice edge; the caps sit at
    the unclamped ends.
    """
    radius = indicator.mid_radius * progress
    half = indicator.half_thickness * progress
    stroke_width = frame.px(frame.geometry.indicator_stroke_px)
    meta = ShapeMeta(
        category=indicator.category,
        tier=indicator.tier_index,
        value=value,
        metric="average",
    )

    def band(start_angle: float, end_angle: float) -> Wedge:
        return Wedge(
            cx=frame.center_x,
            cy=frame.center_y,
            inner_radius=max(0.0, radius - half),
            outer_radius=radius + half,
            start_angle=start_angle,
            end_angle=end_angle,
            fill=palette.average,
            stroke=palette.average_stroke,
            stroke_width=stroke_width,
            meta=meta,
        )

    shapes: list[Shape] = [band(indicator.body_start, indicator.body_end)]
    if indicator.cap_start < indicator.body_start:
        shapes.append(band(indicator.cap_start, indicator.body_start))
    if indicator.cap_end > indicator.body_end:
        shapes.append(band(indicator.body_end, indicator.cap_end))

    for angle in (indicator.cap_start, indicator.cap_end):
        x, y = polar_to_xy(frame.center_x, frame.center_y, radius, angle)
        shapes.append(
            Circle(
                cx=x,
                cy=y,
                radius=half,
                fill=palette.average,
                stroke=palette.average_stroke,
                stroke_width=stroke_width,
                meta=meta,
            )
        )
    return shapes
