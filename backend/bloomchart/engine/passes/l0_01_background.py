"""L0.01 — Background rings.

Grey segment for every (category, tier). Drawn in full on every frame,
animation progress does not apply.
"""

from __future__ import annotations

from bloomchart.engine.context import RenderContext
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.shapes import build_background_wedges


@layer_pass(
    id="L0.01",
    layer=RenderLayer.BACKGROUND,
    description="Draw background ring segments",
)
def draw_background(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.BACKGROUND)
    out.shapes.extend(build_background_wedges(ctx.frame, ctx.palette))
