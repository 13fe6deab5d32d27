"""L4.01 — Slice gaps. Subtractive.

Strips along every category boundary that clear the background,
benchmark and score layers beneath them. Must stay the last pass that
touches those layers, or later fills would paint over the gaps.
"""

from __future__ import annotations

from bloomchart.engine.context import RenderContext
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.shapes import build_gap_strips


@layer_pass(
    id="L4.01",
    layer=RenderLayer.GAPS,
    description="Cut radial gaps between slices",
)
def cut_gaps(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.GAPS)
    out.shapes.extend(build_gap_strips(ctx.frame))
