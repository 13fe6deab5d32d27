"""POST /api/animate/stream — build animation as Server-Sent Events."""

from __future__ import annotations

import json
import time
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from bloomchart.dependencies import get_animation_defaults, get_compositor, get_overlay
from bloomchart.engine.animation import AnimationScheduler
from bloomchart.engine.compositor import Compositor
from bloomchart.engine.errors import ChartInputError
from bloomchart.models.requests import AnimateRequest
from bloomchart.models.responses import FrameResponse

router = APIRouter(prefix="/animate")


async def _stream_animation(req: AnimateRequest, compositor: Compositor) -> AsyncGenerator[str, None]:
    """Tick the scheduler on the event loop, one SSE event per frame."""
    start = time.perf_counter()

    try:
        chart = req.to_chart()
    except ChartInputError as e:
        data = json.dumps({"type": "error", "message": str(e)})
        yield f"event: error\ndata: {data}\n\n"
        return

    scheduler = AnimationScheduler(
        compositor,
        config=req.to_animation_config(get_animation_defaults()),
        render_config=req.to_render_config(get_overlay()),
        canvas_size=req.size,
    )

    last = None
    async for frame in scheduler.run_async(chart):
        last = frame
        data = json.dumps({
            "tick": scheduler.ticks,
            "elapsed_ms": round((time.perf_counter() - start) * 1000, 1),
            "progress": frame.progress.as_dict(),
            "shapes": {c.layer.name.lower(): len(c.shapes) for c in frame.layers},
        })
        yield f"event: progress\ndata: {data}\n\n"

    if last is not None:
        result = FrameResponse.from_frame(last).model_dump()
        yield f"event: result\ndata: {json.dumps(result)}\n\n"

    yield f"event: done\ndata: {json.dumps({'type': 'done', 'ticks': scheduler.ticks})}\n\n"


@router.post("/stream")
async def animate_stream(
    req: AnimateRequest,
    compositor: Compositor = Depends(get_compositor),
) -> StreamingResponse:
    return StreamingResponse(
        _stream_animation(req, compositor),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
