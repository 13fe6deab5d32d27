"""Layer-pass registry — every render layer is drawn by one function registered via decorator.

Usage:
    @layer_pass(id="L1.01", layer=RenderLayer.BENCHMARK, flag="show_benchmark")
    def draw_benchmarks(ctx: RenderContext) -> None:
        out = ctx.new_layer(RenderLayer.BENCHMARK)
        out.shapes.extend(...)

The RenderLayer value is the z-order; passes run bottom to top.
Adding a new layer = one enum member plus one module with the decorator.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from bloomchart.engine.context import RenderContext

logger = logging.getLogger(__name__)


class RenderLayer(enum.IntEnum):
    """Render layers in fixed z-order, bottom to top."""

    BACKGROUND = 0
    BENCHMARK = 1
    SCORE = 2
    AVERAGE = 3
    GAPS = 4
    VALUES = 5
    LABELS = 6
    OVERLAY = 7
    TOOLTIP = 8

    @property
    def subtractive(self) -> bool:
        """Shapes on this layer clear pixels instead of painting them."""
        return self is RenderLayer.GAPS

    @property
    def cut_by_gaps(self) -> bool:
        """Layers the gap strips clear. The average pill is exempt so overhanging caps stay visible."""
        return self in (RenderLayer.BACKGROUND, RenderLayer.BENCHMARK, RenderLayer.SCORE)


@dataclass
class LayerPassSpec:
    id: str
    layer: RenderLayer
    fn: Callable[["RenderContext"], None]
    # RenderConfig attribute gating the whole layer (None = always drawn)
    flag: str | None = None
    # Failures are recorded on the frame instead of aborting the composition
    optional: bool = False
    description: str = ""


class LayerPassRegistry:
    """Registry of layer passes, at most one per render layer."""

    def __init__(self) -> None:
        self._passes: dict[str, LayerPassSpec] = {}

    def register(self, spec: LayerPassSpec) -> None:
        if spec.id in self._passes:
            raise ValueError(f"Duplicate layer pass ID: {spec.id}")
        for other in self._passes.values():
            if other.layer == spec.layer:
                raise ValueError(
                    f"Layer {spec.layer.name} already drawn by {other.id}, cannot add {spec.id}"
                )
        self._passes[spec.id] = spec
        logger.debug("Registered layer pass %s (%s)", spec.id, spec.layer.name)

    def get(self, pass_id: str) -> LayerPassSpec:
        return self._passes[pass_id]

    def for_layer(self, layer: RenderLayer) -> LayerPassSpec | None:
        for spec in self._passes.values():
            if spec.layer == layer:
                return spec
        return None

    def ordered(self) -> list[LayerPassSpec]:
        """All passes in z-order."""
        return sorted(self._passes.values(), key=lambda s: (s.layer, s.id))

    @property
    def count(self) -> int:
        return len(self._passes)


# Module-level singleton
_registry = LayerPassRegistry()


def get_registry() -> LayerPassRegistry:
    return _registry


def layer_pass(
    *,
    id: str,
    layer: RenderLayer,
    flag: str | None = None,
    optional: bool = False,
    description: str = "",
):
    """Decorator to register a layer pass."""

    def decorator(fn: Callable[["RenderContext"], None]):
        _registry.register(
            LayerPassSpec(
                id=id,
                layer=layer,
                fn=fn,
                flag=flag,
                optional=optional,
                description=description,
            )
        )
        return fn

    return decorator
