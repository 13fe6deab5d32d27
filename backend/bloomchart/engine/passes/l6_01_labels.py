"""L6.01 — Category labels, rotated to follow the circle."""

from __future__ import annotations

from bloomchart.engine.context import RenderContext
from bloomchart.engine.kernel import category_label_anchor
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.shapes import TextLabel


@layer_pass(
    id="L6.01",
    layer=RenderLayer.LABELS,
    flag="show_labels",
    description="Draw category labels around the chart",
)
def draw_labels(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.LABELS)
    frame = ctx.frame
    labels = ctx.config.category_labels
    for category in range(ctx.geometry.category_count):
        if category >= len(labels):
            break
        x, y, rotation = category_label_anchor(frame, category)
        out.shapes.append(
            TextLabel(
                x=x,
                y=y,
                text=labels[category],
                font_size=frame.px(ctx.geometry.label_font_size_px),
                fill=ctx.palette.category_label,
                rotation=rotation,
            )
        )
