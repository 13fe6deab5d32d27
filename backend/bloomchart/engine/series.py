"""Progress-aware shape generation for the three metric series."""

from __future__ import annotations

from typing import Sequence

from bloomchart.engine.context import MAX_VALUE, RenderContext
from bloomchart.engine.easing import get_easing
from bloomchart.engine.kernel import fill_fraction, indicator_geometry
from bloomchart.engine.shapes import (
    MetricKind,
    Shape,
    ShapeMeta,
    Wedge,
    build_fill_wedge,
    build_pill,
)
from bloomchart.utils.geometry import clamp


def fill_wedges(
    ctx: RenderContext,
    values: Sequence[float],
    metric: MetricKind,
    colors: Sequence[str],
) -> list[Wedge]:
    """Filled tier segments for a score-like series at the context's progress.

    At final progress the value is used as-is. During the animation the
    value grows with the fill curve, each slice sweeps clockwise with the
    sweep curve (staggered shapes only) and each tier grows outward with
    the tier curve (per-tier shape only).
    """
    progress = ctx.progress
    tier_count = ctx.geometry.tier_count
    fill_ease = get_easing(ctx.easing.fill)
    sweep_ease = get_easing(ctx.easing.sweep)
    tier_ease = get_easing(ctx.easing.tier)

    wedges: list[Wedge] = []
    for category, value in enumerate(values):
        if progress.final:
            animated, sweep = value, 1.0
        else:
            t = progress.slice_t(category)
            animated = clamp(value * fill_ease(t), 0.0, MAX_VALUE)
            sweep = sweep_ease(t) if progress.sweeps else 1.0

        for tier in range(tier_count):
            fraction = fill_fraction(animated, tier)
            if progress.tiers is not None and not progress.final:
                fraction *= clamp(tier_ease(progress.tier_t(category, tier)), 0.0, 1.0)
            wedge = build_fill_wedge(
                ctx.frame,
                category,
                tier,
                fraction,
                fill=colors[tier % len(colors)],
                meta=ShapeMeta(category=category, tier=tier, value=value, metric=metric),
                sweep=sweep,
            )
            if wedge is not None:
                wedges.append(wedge)
    return wedges


def average_pills(ctx: RenderContext) -> list[Shape]:
    """Average indicator pills, grown out of the centre with the average curve."""
    progress = ctx.progress
    ease = get_easing(ctx.easing.average)
    min_progress = ctx.geometry.indicator_min_progress

    shapes: list[Shape] = []
    for category, value in enumerate(ctx.chart.averages):
        indicator = indicator_geometry(ctx.frame, category, value)
        if indicator is None:
            continue
        eased = 1.0 if progress.final else ease(progress.slice_t(category))
        if eased <= min_progress:
            continue
        shapes.extend(build_pill(ctx.frame, indicator, value, ctx.palette, progress=eased))
    return shapes
