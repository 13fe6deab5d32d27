"""L3.01 — Average indicator pills.

Pill per category with a positive average, centred on the slice. The body
band stays inside the slice; near the centre the caps and a short
protrusion band may overhang into the gap. Not cut by the gap layer.
"""

from __future__ import annotations

from bloomchart.engine.context import RenderContext
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.series import average_pills


@layer_pass(
    id="L3.01",
    layer=RenderLayer.AVERAGE,
    flag="show_average",
    description="Draw average indicator pills",
)
def draw_averages(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.AVERAGE)
    out.shapes.extend(average_pills(ctx))
