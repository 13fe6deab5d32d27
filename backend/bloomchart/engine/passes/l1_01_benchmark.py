"""L1.01 — Benchmark fills.

One colour across all tiers; sits below the scores so a benchmark above
the score shows as an orange band past the score fill.
"""

from __future__ import annotations

from bloomchart.engine.context import RenderContext
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.series import fill_wedges


@layer_pass(
    id="L1.01",
    layer=RenderLayer.BENCHMARK,
    flag="show_benchmark",
    description="Draw benchmark tier fills",
)
def draw_benchmarks(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.BENCHMARK)
    out.shapes.extend(
        fill_wedges(ctx, ctx.chart.benchmarks, "benchmark", (ctx.palette.benchmark,))
    )
