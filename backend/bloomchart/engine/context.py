"""RenderContext — the state flowing through one composition pass.

Inputs (chart values, configs, progress) are immutable; passes write only
their own layer into ``ctx.layers``. The compositor freezes the result
into a Frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from bloomchart.engine.config import (
    ChartPalette,
    GeometryConfig,
    RenderConfig,
    SeriesEasing,
)
from bloomchart.engine.errors import ChartInputError
from bloomchart.engine.kernel import ChartFrame
from bloomchart.engine.progress import ProgressVector
from bloomchart.engine.registry import RenderLayer
from bloomchart.engine.shapes import Shape, ShapeMeta

# Upper bound of every metric: one unit per tier
MAX_VALUE = 4.0


def _as_series(name: str, values: Sequence[float], count: int, max_value: float) -> tuple[float, ...]:
    if len(values) != count:
        raise ChartInputError(f"{name}: expected {count} values, got {len(values)}")
    out = []
    for i, v in enumerate(values):
        try:
            v = float(v)
        except (TypeError, ValueError) as exc:
            raise ChartInputError(f"{name}[{i}] = {v!r} is not a number") from exc
        if math.isnan(v) or v < 0 or v > max_value:
            raise ChartInputError(f"{name}[{i}] = {v} is outside [0, {max_value}]")
        out.append(v)
    return tuple(out)


@dataclass(frozen=True)
class ChartInput:
    """Three parallel metric series, validated on construction.

    Values must already be clamped to [0, max_value]; use
    engine.inputs.clamp_values on raw input first. The three series must
    have the same length, which is the chart's category count.
    """

    scores: tuple[float, ...]
    benchmarks: tuple[float, ...]
    averages: tuple[float, ...]
    max_value: float = MAX_VALUE

    def __post_init__(self) -> None:
        count = len(self.scores)
        for name in ("scores", "benchmarks", "averages"):
            series = _as_series(name, getattr(self, name), count, self.max_value)
            object.__setattr__(self, name, series)

    @classmethod
    def of(
        cls,
        scores: Sequence[float],
        benchmarks: Sequence[float],
        averages: Sequence[float],
        category_count: int = 6,
        max_value: float = MAX_VALUE,
    ) -> ChartInput:
        if len(scores) != category_count:
            raise ChartInputError(f"scores: expected {category_count} values, got {len(scores)}")
        return cls(
            scores=tuple(scores),
            benchmarks=tuple(benchmarks),
            averages=tuple(averages),
            max_value=max_value,
        )

    @property
    def category_count(self) -> int:
        return len(self.scores)


@dataclass(frozen=True)
class TooltipRequest:
    """Pointer position plus the metadata it hit."""

    x: float
    y: float
    meta: ShapeMeta


@dataclass
class LayerContent:
    """Shapes of one render layer, bottom to top."""

    layer: RenderLayer
    shapes: list[Shape] = field(default_factory=list)
    subtractive: bool = False
    cut_by_gaps: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.shapes


@dataclass(frozen=True)
class Frame:
    """One fully composed chart: every layer in z-order."""

    canvas_size: float
    layers: tuple[LayerContent, ...]
    progress: ProgressVector
    errors: tuple[tuple[str, str], ...] = ()

    def layer(self, layer: RenderLayer) -> LayerContent:
        for content in self.layers:
            if content.layer == layer:
                return content
        raise KeyError(layer)

    @property
    def shape_count(self) -> int:
        return sum(len(c.shapes) for c in self.layers)

    @property
    def is_final(self) -> bool:
        return self.progress.is_complete


@dataclass
class RenderContext:
    """Shared state for one composition pass."""

    chart: ChartInput
    config: RenderConfig
    geometry: GeometryConfig
    frame: ChartFrame
    progress: ProgressVector
    palette: ChartPalette = field(default_factory=ChartPalette)
    easing: SeriesEasing = field(default_factory=SeriesEasing)
    tooltip: TooltipRequest | None = None

    # --- Output ---
    layers: dict[RenderLayer, LayerContent] = field(default_factory=dict)
    completed_passes: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def canvas_size(self) -> float:
        return self.frame.canvas_size

    def new_layer(self, layer: RenderLayer) -> LayerContent:
        """Replace the layer's content with a fresh, empty one."""
        content = LayerContent(
            layer=layer,
            subtractive=layer.subtractive,
            cut_by_gaps=layer.cut_by_gaps,
        )
        self.layers[layer] = content
        return content
