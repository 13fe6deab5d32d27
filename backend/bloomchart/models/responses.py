"""API response models."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from pydantic import BaseModel, Field

from bloomchart.engine.context import Frame, LayerContent


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    layer_passes_registered: int = 0


class LayerResponse(BaseModel):
    layer: str
    z_index: int
    subtractive: bool = False
    cut_by_gaps: bool = False
    shapes: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_content(cls, content: LayerContent) -> LayerResponse:
        return cls(
            layer=content.layer.name.lower(),
            z_index=int(content.layer),
            subtractive=content.subtractive,
            cut_by_gaps=content.cut_by_gaps,
            shapes=[{"type": type(s).__name__, **asdict(s)} for s in content.shapes],
        )


class FrameResponse(BaseModel):
    canvas_size: float
    progress: dict[str, Any]
    layers: list[LayerResponse] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_frame(cls, frame: Frame) -> FrameResponse:
        return cls(
            canvas_size=frame.canvas_size,
            progress=frame.progress.as_dict(),
            layers=[LayerResponse.from_content(c) for c in frame.layers],
            errors=dict(frame.errors),
        )


class HitTestResponse(BaseModel):
    hit: bool = False
    category: int | None = None
    tier: int | None = None
    value: float | None = None
    metric: str | None = None
    tooltip_text: str = ""
    tooltip_x: float | None = None
    tooltip_y: float | None = None
