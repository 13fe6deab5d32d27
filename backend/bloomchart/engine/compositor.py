"""Layer compositor — runs the layer passes in z-order and freezes the result into a Frame."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from bloomchart.engine.config import ChartPalette, GeometryConfig, RenderConfig, SeriesEasing
from bloomchart.engine.context import ChartInput, Frame, RenderContext, TooltipRequest
from bloomchart.engine.errors import ChartInputError
from bloomchart.engine.kernel import chart_frame
from bloomchart.engine.progress import ProgressVector
from bloomchart.engine.registry import LayerPassRegistry, get_registry

logger = logging.getLogger(__name__)

_PASSES_PACKAGE = "bloomchart.engine.passes"


def register_passes() -> None:
    """Import all layer pass modules so @layer_pass decorators fire."""
    package = importlib.import_module(_PASSES_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{_PASSES_PACKAGE}.{module_name}")


class Compositor:
    """Composes a chart frame. Every call redraws every layer from scratch."""

    def __init__(
        self,
        registry: LayerPassRegistry | None = None,
        geometry: GeometryConfig | None = None,
        palette: ChartPalette | None = None,
    ) -> None:
        if registry is None:
            register_passes()
            registry = get_registry()
        self.registry = registry
        self.geometry = geometry or GeometryConfig()
        self.geometry.validate()
        self.palette = palette or ChartPalette()

    def compose(
        self,
        chart: ChartInput,
        config: RenderConfig | None = None,
        canvas_size: float | None = None,
        progress: ProgressVector | None = None,
        easing: SeriesEasing | None = None,
        tooltip: TooltipRequest | None = None,
    ) -> Frame:
        """Run every layer pass bottom to top.

        Without ``progress`` the chart is drawn in its final, static state.
        """
        if chart.category_count != self.geometry.category_count:
            raise ChartInputError(
                f"chart has {chart.category_count} categories, "
                f"geometry expects {self.geometry.category_count}"
            )

        start = time.perf_counter()
        ctx = RenderContext(
            chart=chart,
            config=config or RenderConfig(),
            geometry=self.geometry,
            frame=chart_frame(self.geometry, canvas_size or self.geometry.display_size),
            progress=progress or ProgressVector.complete(),
            palette=self.palette,
            easing=easing or SeriesEasing(),
            tooltip=tooltip,
        )

        for spec in self.registry.ordered():
            # Fresh, transparent layer even when the pass is gated off
            ctx.new_layer(spec.layer)
            if spec.flag is not None and not getattr(ctx.config, spec.flag):
                continue
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
            except Exception as e:
                if not spec.optional:
                    raise
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
                continue
            ctx.completed_passes.append(spec.id)
            logger.debug("  %s completed in %.2fms", spec.id, (time.perf_counter() - t0) * 1000)

        layers = tuple(ctx.layers[layer] for layer in sorted(ctx.layers))
        logger.debug(
            "Composed %d layers (%d shapes) in %.1fms",
            len(layers),
            sum(len(c.shapes) for c in layers),
            (time.perf_counter() - start) * 1000,
        )
        return Frame(
            canvas_size=ctx.canvas_size,
            layers=layers,
            progress=ctx.progress,
            errors=tuple(sorted(ctx.errors.items())),
        )


def create_compositor(geometry: GeometryConfig | None = None) -> Compositor:
    """Factory function for creating a compositor instance."""
    return Compositor(geometry=geometry)
