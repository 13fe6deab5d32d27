"""L8.01 — Tooltip for the shape under the pointer."""

from __future__ import annotations

from bloomchart.engine.context import RenderContext
from bloomchart.engine.interaction import tooltip_layout
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.shapes import TooltipBox


@layer_pass(
    id="L8.01",
    layer=RenderLayer.TOOLTIP,
    description="Draw the hover tooltip",
)
def draw_tooltip(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.TOOLTIP)
    request = ctx.tooltip
    if request is None:
        return
    frame = ctx.frame
    layout = tooltip_layout(
        request.meta,
        request.x,
        request.y,
        ctx.config.category_labels,
        frame.canvas_size,
        frame.scale,
    )
    out.shapes.append(
        TooltipBox(
            x=layout.x,
            y=layout.y,
            width=layout.width,
            height=layout.height,
            text=layout.text,
            font_size=layout.font_size,
            fill=ctx.palette.tooltip_background,
            text_fill=ctx.palette.tooltip_text,
            corner_radius=frame.px(6.0),
        )
    )
