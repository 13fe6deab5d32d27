"""L5.01 — Score value numbers.

Only drawn on the final frame; mid-animation fills would not match the
printed value.
"""

from __future__ import annotations

from bloomchart.engine.context import RenderContext
from bloomchart.engine.kernel import value_label_anchor
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.shapes import TextLabel


@layer_pass(
    id="L5.01",
    layer=RenderLayer.VALUES,
    flag="show_values",
    description="Print score values inside each slice",
)
def draw_values(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.VALUES)
    if not ctx.progress.is_complete:
        return

    cfg = ctx.config
    frame = ctx.frame
    for category, score in enumerate(ctx.chart.scores):
        x, y = value_label_anchor(
            frame, category, cfg.value_angle_offset_deg, cfg.value_distance_percent
        )
        out.shapes.append(
            TextLabel(
                x=x,
                y=y,
                text=f"{score:.1f}",
                font_size=frame.px(cfg.value_font_size_px),
                fill=ctx.palette.value_label,
                stroke=ctx.palette.value_label_stroke,
                stroke_width=frame.px(1.0),
            )
        )
