"""High-resolution export — same pipeline, larger canvas, per-variant visibility overrides.

Overrides are applied to a copy of the RenderConfig (dataclasses.replace),
so an export can never leave flags changed for later renders.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import replace

from bloomchart.engine.compositor import Compositor
from bloomchart.engine.config import RenderConfig
from bloomchart.engine.context import ChartInput, Frame
from bloomchart.render.raster import frame_to_png

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_SCALE = 3.0


class ExportVariant(str, enum.Enum):
    FULL = "full"
    SCORES = "scores"
    SCORES_BENCHMARK = "scores_benchmark"
    SCORES_AVERAGE = "scores_average"


_OVERRIDES: dict[ExportVariant, dict[str, bool]] = {
    ExportVariant.FULL: {},
    ExportVariant.SCORES: {"show_benchmark": False, "show_average": False},
    ExportVariant.SCORES_BENCHMARK: {"show_benchmark": True, "show_average": False},
    ExportVariant.SCORES_AVERAGE: {"show_benchmark": False, "show_average": True},
}


def variant_config(config: RenderConfig, variant: ExportVariant) -> RenderConfig:
    """Copy of config with the variant's visibility flags applied."""
    return replace(config, **_OVERRIDES[variant])


def export_frame(
    compositor: Compositor,
    chart: ChartInput,
    config: RenderConfig,
    variant: ExportVariant = ExportVariant.FULL,
    scale: float = DEFAULT_EXPORT_SCALE,
) -> Frame:
    """Compose the final chart at display_size * scale."""
    if scale <= 0:
        raise ValueError(f"export scale must be positive (got {scale})")
    size = compositor.geometry.display_size * scale
    return compositor.compose(chart, variant_config(config, variant), canvas_size=size)


def export_png(
    compositor: Compositor,
    chart: ChartInput,
    config: RenderConfig,
    variant: ExportVariant = ExportVariant.FULL,
    scale: float = DEFAULT_EXPORT_SCALE,
) -> bytes:
    frame = export_frame(compositor, chart, config, variant, scale)
    logger.info("Exporting %s at %gx (%dpx)", variant.value, scale, int(frame.canvas_size))
    return frame_to_png(frame)


def export_all(
    compositor: Compositor,
    chart: ChartInput,
    config: RenderConfig,
    scale: float = DEFAULT_EXPORT_SCALE,
) -> dict[ExportVariant, bytes]:
    """Every partial variant (scores-only, +benchmark, +average) as PNG bytes."""
    return {
        variant: export_png(compositor, chart, config, variant, scale)
        for variant in (
            ExportVariant.SCORES,
            ExportVariant.SCORES_BENCHMARK,
            ExportVariant.SCORES_AVERAGE,
        )
    }
