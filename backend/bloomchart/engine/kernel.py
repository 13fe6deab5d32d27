"""Geometry kernel — (category, tier, value) → radii and angles.

All functions are pure. Radii derive from the canvas size, never from a
fixed pixel constant, so the interactive display and the high-resolution
export share the exact same math.

Values are assumed pre-clamped to [0, tier_count]; the kernel does not
re-validate them (ChartInput does).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from bloomchart.engine.config import GeometryConfig
from bloomchart.utils.geometry import chord_half_angle, clamp

# Sub-layers per tier: values carry one decimal, so each tier splits in ten.
LAYERS_PER_TIER = 10

# Added before flooring so 2.3 * 10 == 22.999… still counts as 23 layers.
_FLOOR_EPS = 1e-9

# asin guard: protrusion may never reach the mid radius itself.
_MAX_PROTRUSION_RATIO = 0.99


@dataclass(frozen=True)
class ChartFrame:
    """Canvas-dependent constants shared by every shape of one render."""

    geometry: GeometryConfig
    canvas_size: float
    center_x: float
    center_y: float
    max_radius: float
    layer_thickness: float
    slice_angle: float
    rotation: float
    # canvas_size / display_size, applied to every pixel constant
    scale: float

    def px(self, value: float) -> float:
        """Scale a display-size pixel constant to this canvas."""
        return value * self.scale


@dataclass(frozen=True)
class RingBounds:
    inner_radius: float
    outer_radius: float

    @property
    def thickness(self) -> float:
        return self.outer_radius - self.inner_radius


@dataclass(frozen=True)
class SliceAngles:
    start_angle: float
    end_angle: float

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class IndicatorGeometry:
    """Average pill placement for one category.

    The pill is centred on the slice's mid angle and spans
    ``mid ± protrusion_angle``. The body band is clamped to the owning
    slice; the caps sit at the unclamped ends and may overhang into the
    neighbouring gap.
    """

    category: int
    tier_index: int
    layer_within_tier: int
    layer_index: int
    mid_radius: float
    half_thickness: float
    mid_angle: float
    protrusion_angle: float
    body_start: float
    body_end: float
    cap_start: float
    cap_end: float

    @property
    def protrudes(self) -> bool:
        """True when the caps reach past the slice edges."""
        return self.cap_start < self.body_start or self.cap_end > self.body_end


def chart_frame(geometry: GeometryConfig, canvas_size: float) -> ChartFrame:
    """Derive the per-canvas constants."""
    max_radius = (canvas_size / 2) * geometry.max_radius_fraction
    return ChartFrame(
        geometry=geometry,
        canvas_size=float(canvas_size),
        center_x=canvas_size / 2,
        center_y=canvas_size / 2,
        max_radius=max_radius,
        layer_thickness=max_radius / geometry.total_layers,
        slice_angle=2 * math.pi / geometry.category_count,
        rotation=-math.pi / 2,
        scale=canvas_size / geometry.display_size,
    )


def ring_bounds(frame: ChartFrame, tier: int) -> RingBounds:
    """Inner/outer radius of a tier, monotonic in tier."""
    g = frame.geometry
    start = (g.center_hole + tier * (g.ring_thickness + g.gap_thickness)) * frame.layer_thickness
    return RingBounds(start, start + g.ring_thickness * frame.layer_thickness)


def slice_angles(frame: ChartFrame, category: int) -> SliceAngles:
    """Angular partition of a category, starting at the top and running clockwise."""
    start = category * frame.slice_angle + frame.rotation
    return SliceAngles(start, start + frame.slice_angle)


def layers_filled(value: float, tier: int) -> int:
    """Filled sub-layers (0..10) of a tier for a clamped value."""
    raw = math.floor(value * LAYERS_PER_TIER + _FLOOR_EPS) - tier * LAYERS_PER_TIER
    return int(clamp(raw, 0, LAYERS_PER_TIER))


def fill_fraction(value: float, tier: int) -> float:
    """Fraction of a tier covered by value: clamp(0, 10, floor(v*10) - tier*10) / 10."""
    return layers_filled(value, tier) / LAYERS_PER_TIER


def filled_outer_radius(bounds: RingBounds, fraction: float) -> float:
    return bounds.inner_radius + bounds.thickness * fraction


def average_layer_index(value: float) -> int | None:
    """floor(v*10) - 1, or None when there is no indicator to draw."""
    if value <= 0:
        return None
    index = math.floor(value * LAYERS_PER_TIER + _FLOOR_EPS) - 1
    if index < 0:
        return None
    return index


def split_layer_index(index: int) -> tuple[int, int]:
    """Layer index → (tier_index, layer_within_tier)."""
    return divmod(index, LAYERS_PER_TIER)


def gap_width(frame: ChartFrame) -> float:
    """Linear width of the radial gap strips between slices."""
    g = frame.geometry
    return frame.px(g.slice_gap_thickness * g.gap_stroke_factor)


def protrusion_angle(frame: ChartFrame, mid_radius: float) -> float:
    """Half-width of the pill around the slice's mid angle.

    asin(protrusion / mid_radius) with the linear protrusion capped at
    0.99 * mid_radius. The caps may pass the slice edge by at most half
    the gap's angular width at that radius, so they never reach into the
    neighbouring slice.
    """
    if mid_radius <= 0:
        return 0.0
    linear = min(frame.px(frame.geometry.protrusion_px), mid_radius * _MAX_PROTRUSION_RATIO)
    angle = math.asin(linear / mid_radius)
    half_gap = chord_half_angle(gap_width(frame) / 2, mid_radius)
    return min(angle, frame.slice_angle / 2 + half_gap)


def indicator_geometry(frame: ChartFrame, category: int, value: float) -> IndicatorGeometry | None:
    """Average pill for one category, or None for values with no indicator."""
    index = average_layer_index(value)
    if index is None:
        return None

    g = frame.geometry
    tier_index, within = split_layer_index(index)
    if tier_index >= g.tier_count:
        # Only reachable for unclamped values; keep the pill on the last layer
        tier_index, within = g.tier_count - 1, g.ring_thickness - 1
    actual_layer = g.center_hole + tier_index * (g.ring_thickness + g.gap_thickness) + within
    mid_radius = (actual_layer + 0.5) * frame.layer_thickness

    angles = slice_angles(frame, category)
    mid = angles.mid_angle
    angle = protrusion_angle(frame, mid_radius)

    return IndicatorGeometry(
        category=category,
        tier_index=tier_index,
        layer_within_tier=within,
        layer_index=index,
        mid_radius=mid_radius,
        half_thickness=frame.layer_thickness * g.indicator_thickness_scale / 2,
        mid_angle=mid,
        protrusion_angle=angle,
        body_start=max(angles.start_angle, mid - angle),
        body_end=min(angles.end_angle, mid + angle),
        cap_start=mid - angle,
        cap_end=mid + angle,
    )


def value_label_radius(frame: ChartFrame, distance_percent: float) -> float:
    """Value numbers sit at the start of the outermost tier, scaled by distance_percent."""
    g = frame.geometry
    base = (g.center_hole + (g.tier_count - 1) * (g.ring_thickness + g.gap_thickness)) * frame.layer_thickness
    return base * (distance_percent / 100)


def value_label_anchor(
    frame: ChartFrame,
    category: int,
    angle_offset_deg: float,
    distance_percent: float,
) -> tuple[float, float]:
    angle = slice_angles(frame, category).mid_angle + math.radians(angle_offset_deg)
    radius = value_label_radius(frame, distance_percent)
    return (
        frame.center_x + radius * math.cos(angle),
        frame.center_y + radius * math.sin(angle),
    )


def category_label_anchor(frame: ChartFrame, category: int) -> tuple[float, float, float]:
    """(x, y, rotation_deg) for a category label following the circle.

    Labels on the left half are flipped 180° to stay readable.
    """
    mid = slice_angles(frame, category).mid_angle
    radius = frame.max_radius + frame.px(frame.geometry.label_offset_px)
    rotation = math.degrees(mid) + 90
    if math.pi / 2 < mid < math.pi * 1.5:
        rotation += 180
    return (
        frame.center_x + radius * math.cos(mid),
        frame.center_y + radius * math.sin(mid),
        rotation,
    )
