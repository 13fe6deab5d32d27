"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from bloomchart.engine.registry import get_registry
from bloomchart.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        layer_passes_registered=get_registry().count,
    )


@router.get("/layers")
async def layers() -> list[dict[str, object]]:
    """Registered layer passes in z-order."""
    return [
        {
            "id": spec.id,
            "layer": spec.layer.name.lower(),
            "z_index": int(spec.layer),
            "flag": spec.flag,
            "description": spec.description,
        }
        for spec in get_registry().ordered()
    ]
