"""L2.01 — Score fills, one colour per tier."""

from __future__ import annotations

from bloomchart.engine.context import RenderContext
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.series import fill_wedges


@layer_pass(
    id="L2.01",
    layer=RenderLayer.SCORE,
    description="Draw score tier fills",
)
def draw_scores(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.SCORE)
    out.shapes.extend(fill_wedges(ctx, ctx.chart.scores, "score", ctx.palette.score))
