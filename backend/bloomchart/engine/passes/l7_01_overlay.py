"""L7.01 — External label overlay.

Positions the asset only; its contents are never parsed. A missing file
fails this pass alone and the chart renders without it.
"""

from __future__ import annotations

from pathlib import Path

from bloomchart.engine.context import RenderContext
from bloomchart.engine.errors import OverlayLoadError
from bloomchart.engine.registry import RenderLayer, layer_pass
from bloomchart.engine.shapes import OverlayImage


@layer_pass(
    id="L7.01",
    layer=RenderLayer.OVERLAY,
    flag="overlay",
    optional=True,
    description="Place the label overlay asset",
)
def place_overlay(ctx: RenderContext) -> None:
    out = ctx.new_layer(RenderLayer.OVERLAY)
    overlay = ctx.config.overlay
    if not Path(overlay.path).is_file():
        raise OverlayLoadError(f"overlay asset not found: {overlay.path}")
    out.shapes.append(
        OverlayImage(
            path=overlay.path,
            x=ctx.frame.px(overlay.offset_x),
            y=ctx.frame.px(overlay.offset_y),
        )
    )
