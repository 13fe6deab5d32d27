"""POST /api/render, /api/frame, /api/export/{variant}, /api/hit-test."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from bloomchart.config import settings
from bloomchart.dependencies import get_compositor, get_overlay
from bloomchart.engine.compositor import Compositor
from bloomchart.engine.context import ChartInput
from bloomchart.engine.errors import ChartInputError
from bloomchart.engine.interaction import hit_test, tooltip_layout
from bloomchart.models.requests import ChartRequest, ExportRequest, HitTestRequest
from bloomchart.models.responses import FrameResponse, HitTestResponse
from bloomchart.render.export import ExportVariant, export_png
from bloomchart.render.raster import frame_to_png

logger = logging.getLogger(__name__)

router = APIRouter()


def _chart(req: ChartRequest) -> ChartInput:
    try:
        return req.to_chart()
    except ChartInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/frame", response_model=FrameResponse)
async def frame(
    req: ChartRequest,
    compositor: Compositor = Depends(get_compositor),
) -> FrameResponse:
    """Final chart geometry as JSON, one entry per render layer."""
    result = compositor.compose(
        _chart(req), req.to_render_config(get_overlay()), canvas_size=req.size
    )
    return FrameResponse.from_frame(result)


@router.post("/render")
async def render(
    req: ChartRequest,
    compositor: Compositor = Depends(get_compositor),
) -> Response:
    result = compositor.compose(
        _chart(req), req.to_render_config(get_overlay()), canvas_size=req.size
    )
    for pass_id, error in result.errors:
        logger.warning("Render continued without %s: %s", pass_id, error)
    return Response(content=frame_to_png(result), media_type="image/png")


@router.post("/export/{variant}")
async def export(
    variant: ExportVariant,
    req: ExportRequest,
    compositor: Compositor = Depends(get_compositor),
) -> Response:
    png = export_png(
        compositor,
        _chart(req),
        req.to_render_config(get_overlay()),
        variant=variant,
        scale=req.scale or settings.export_scale,
    )
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="radial-chart-{variant.value}.png"'},
    )


@router.post("/hit-test", response_model=HitTestResponse)
async def hit(
    req: HitTestRequest,
    compositor: Compositor = Depends(get_compositor),
) -> HitTestResponse:
    """Metadata of the shape under the pointer plus where its tooltip goes."""
    config = req.to_render_config()
    result = compositor.compose(_chart(req), config, canvas_size=req.size)
    meta = hit_test(result, req.x, req.y)
    if meta is None:
        return HitTestResponse(hit=False)

    layout = tooltip_layout(
        meta,
        req.x,
        req.y,
        config.category_labels,
        result.canvas_size,
        result.canvas_size / compositor.geometry.display_size,
    )
    return HitTestResponse(
        hit=True,
        category=meta.category,
        tier=meta.tier,
        value=meta.value,
        metric=meta.metric,
        tooltip_text=layout.text,
        tooltip_x=layout.x,
        tooltip_y=layout.y,
    )
