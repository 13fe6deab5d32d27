"""Engine configuration — chart geometry, palette, per-render options, animation timing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from bloomchart.engine.errors import GeometryConfigError

DEFAULT_CATEGORY_LABELS: tuple[str, ...] = (
    "klimaat",
    "leiderschap",
    "strategie en\nmanagement",
    "HR management",
    "communicatie",
    "kennis en\nvaardigheden",
)


@dataclass(frozen=True)
class GeometryConfig:
    """Radial layout in abstract layer units.

    Pixel constants are expressed at ``display_size`` and scaled with the
    canvas, so the same config renders identically at any resolution.
    """

    # Layer budget: 18 + 4*10 + 3*3 = 67
    total_layers: int = 67
    center_hole: int = 18
    ring_thickness: int = 10
    gap_thickness: int = 3
    slice_gap_thickness: int = 3
    category_count: int = 6
    tier_count: int = 4

    # Reference canvas size for the pixel constants below
    display_size: int = 500
    # Outermost ring edge as a fraction of the canvas half-width
    max_radius_fraction: float = 0.8

    # Gap strip width = slice_gap_thickness * gap_stroke_factor px
    gap_stroke_factor: float = 3.0
    # Gap strips run this far past the outer ring
    gap_overshoot_px: float = 20.0
    # Average pill: linear half-width around the slice mid angle
    protrusion_px: float = 10.0
    # Pill radial thickness relative to one geometry layer (20% wider)
    indicator_thickness_scale: float = 1.2
    indicator_stroke_px: float = 2.0
    # Pill only drawn once its animation progress passes this
    indicator_min_progress: float = 0.1
    # Category labels sit this far outside the outer ring
    label_offset_px: float = 30.0
    label_font_size_px: float = 12.0

    @property
    def expected_total_layers(self) -> int:
        return (
            self.center_hole
            + self.tier_count * self.ring_thickness
            + (self.tier_count - 1) * self.gap_thickness
        )

    def validate(self) -> None:
        """Raise GeometryConfigError when the layer budget is inconsistent."""
        if self.category_count < 1 or self.tier_count < 1:
            raise GeometryConfigError(
                f"category_count and tier_count must be positive "
                f"(got {self.category_count}, {self.tier_count})"
            )
        if self.ring_thickness < 1:
            raise GeometryConfigError(f"ring_thickness must be positive (got {self.ring_thickness})")
        if self.total_layers != self.expected_total_layers:
            raise GeometryConfigError(
                f"total_layers={self.total_layers} but center_hole + rings + gaps = "
                f"{self.expected_total_layers}"
            )


@dataclass(frozen=True)
class ChartPalette:
    """Fill colours per tier and series."""

    background: tuple[str, ...] = ("#F2F2F2", "#e6e6e6", "#cccccc", "#999999")
    score: tuple[str, ...] = ("#CEE5DA", "#6EC5CD", "#076C98", "#182E57")
    benchmark: str = "#F47B54"
    average: str = "#FFFF00"
    average_stroke: str = "#444444"
    category_label: str = "#076C98"
    value_label: str = "white"
    value_label_stroke: str = "black"
    tooltip_background: str = "rgba(0, 0, 0, 0.85)"
    tooltip_text: str = "white"

    def tier_color(self, colors: tuple[str, ...], tier: int) -> str:
        return colors[tier % len(colors)]


@dataclass(frozen=True)
class OverlayPlacement:
    """Externally supplied label image composited above the labels."""

    path: str
    offset_x: float = 0.0
    offset_y: float = 0.0


@dataclass(frozen=True)
class RenderConfig:
    """Per-render options. Read once at the top of each composition pass."""

    show_benchmark: bool = True
    show_average: bool = True
    show_values: bool = False
    show_labels: bool = True

    value_angle_offset_deg: float = 0.0
    value_font_size_px: float = 14.0
    value_distance_percent: float = 100.0

    category_labels: tuple[str, ...] = DEFAULT_CATEGORY_LABELS
    overlay: OverlayPlacement | None = None


class ProgressShape(str, enum.Enum):
    """How animation progress is distributed over the chart."""

    GLOBAL = "global"
    PER_SLICE = "per_slice"
    PER_SLICE_PER_TIER = "per_slice_per_tier"


@dataclass(frozen=True)
class SeriesEasing:
    """Easing curve name per animated series (see engine.easing)."""

    sweep: str = "cubic_out"
    tier: str = "quart_out"
    fill: str = "expo_out"
    average: str = "back_out"


BLOOM_EASING = SeriesEasing(sweep="cubic_out", tier="cubic_out", fill="cubic_out", average="cubic_out")


@dataclass(frozen=True)
class AnimationConfig:
    """Timing of the construction animation."""

    progress_shape: ProgressShape = ProgressShape.PER_SLICE_PER_TIER
    duration_ms: float = 1200.0
    stagger_delay_ms: float = 80.0
    # Fraction of the slice duration shared with its neighbour
    overlap: float = 0.6
    # Each tier starts this fraction of its slice window after the previous one
    tier_delay_fraction: float = 0.15
    frame_interval_ms: float = 1000.0 / 60.0
    easing: SeriesEasing = field(default_factory=SeriesEasing)

    @classmethod
    def bloom(cls, duration_ms: float = 1200.0) -> AnimationConfig:
        """Simple flower bloom: one global scalar, cubic-out everywhere."""
        return cls(
            progress_shape=ProgressShape.GLOBAL,
            duration_ms=duration_ms,
            easing=BLOOM_EASING,
        )
