"""API request models."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from pydantic import BaseModel, Field, field_validator

from bloomchart.engine.config import (
    DEFAULT_CATEGORY_LABELS,
    AnimationConfig,
    OverlayPlacement,
    ProgressShape,
    RenderConfig,
)
from bloomchart.engine.context import ChartInput
from bloomchart.engine.inputs import clamp_values


class ChartRequest(BaseModel):
    scores: list[Any] = Field(default_factory=list, description="Score per category, 0-4")
    benchmarks: list[Any] = Field(default_factory=list, description="Benchmark per category, 0-4")
    averages: list[Any] = Field(default_factory=list, description="Average per category, 0-4")

    show_benchmark: bool = True
    show_average: bool = True
    show_values: bool = False
    show_labels: bool = True

    value_angle_offset_deg: float = Field(default=0.0, description="Rotate value numbers (degrees)")
    value_font_size_px: float = Field(default=14.0, gt=0)
    value_distance_percent: float = Field(default=100.0, ge=0)
    category_labels: list[str] | None = None

    size: int | None = Field(default=None, gt=0, le=4096, description="Canvas size in px")

    @field_validator("scores", "benchmarks", "averages", mode="after")
    @classmethod
    def _clamp(cls, values: list[Any]) -> list[float]:
        # Non-numeric → 0, clipped to [0, 4], padded to 6 categories
        return clamp_values(values)

    def to_chart(self) -> ChartInput:
        return ChartInput.of(self.scores, self.benchmarks, self.averages)

    def to_render_config(self, overlay: OverlayPlacement | None = None) -> RenderConfig:
        return RenderConfig(
            show_benchmark=self.show_benchmark,
            show_average=self.show_average,
            show_values=self.show_values,
            show_labels=self.show_labels,
            value_angle_offset_deg=self.value_angle_offset_deg,
            value_font_size_px=self.value_font_size_px,
            value_distance_percent=self.value_distance_percent,
            category_labels=tuple(self.category_labels or DEFAULT_CATEGORY_LABELS),
            overlay=overlay,
        )


class ExportRequest(ChartRequest):
    scale: float | None = Field(default=None, gt=0, le=8, description="Export scale factor")


class HitTestRequest(ChartRequest):
    x: float = Field(..., description="Pointer x in canvas pixels")
    y: float = Field(..., description="Pointer y in canvas pixels")


class AnimateRequest(ChartRequest):
    progress_shape: ProgressShape = ProgressShape.PER_SLICE_PER_TIER
    duration_ms: float | None = Field(default=None, gt=0)
    stagger_delay_ms: float | None = Field(default=None, ge=0)
    overlap: float = Field(default=0.6, ge=0, le=1)
    frame_interval_ms: float | None = Field(default=None, ge=0)

    def to_animation_config(self, defaults: AnimationConfig) -> AnimationConfig:
        """Request overrides on top of the configured timing."""
        if self.progress_shape == ProgressShape.GLOBAL:
            base = AnimationConfig.bloom()
        else:
            base = AnimationConfig(progress_shape=self.progress_shape)
        return replace(
            base,
            duration_ms=self.duration_ms or defaults.duration_ms,
            stagger_delay_ms=(
                defaults.stagger_delay_ms if self.stagger_delay_ms is None else self.stagger_delay_ms
            ),
            overlap=self.overlap,
            frame_interval_ms=(
                defaults.frame_interval_ms if self.frame_interval_ms is None else self.frame_interval_ms
            ),
        )
