"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from bloomchart.config import settings
from bloomchart.engine.compositor import Compositor, create_compositor
from bloomchart.engine.config import AnimationConfig, GeometryConfig, OverlayPlacement


@lru_cache(maxsize=1)
def get_compositor() -> Compositor:
    return create_compositor(GeometryConfig(display_size=settings.display_size))


def get_overlay() -> OverlayPlacement | None:
    """Label overlay configured for this deployment, if any."""
    if not settings.overlay_path:
        return None
    return OverlayPlacement(
        path=settings.overlay_path,
        offset_x=settings.overlay_offset_x,
        offset_y=settings.overlay_offset_y,
    )


def get_animation_defaults() -> AnimationConfig:
    return AnimationConfig(
        duration_ms=settings.animation_duration_ms,
        stagger_delay_ms=settings.stagger_delay_ms,
        frame_interval_ms=settings.frame_interval_ms,
    )
