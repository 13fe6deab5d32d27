"""Shared test fixtures."""

from __future__ import annotations

import pytest

from bloomchart.engine.compositor import Compositor
from bloomchart.engine.config import GeometryConfig, RenderConfig
from bloomchart.engine.context import ChartInput
from bloomchart.engine.kernel import chart_frame


# Scenario chart: category 0 shows 2 full tiers + 30% of the third
SCORES = [2.3, 0.0, 4.0, 1.0, 1.0, 1.0]
BENCHMARKS = [3.0, 1.5, 2.0, 0.0, 3.5, 1.0]
AVERAGES = [2.5, 0.0, 3.2, 1.0, 0.0, 0.1]

# Display geometry: max radius 200px over 67 layers
DISPLAY_SIZE = 500
LAYER_PX = 200 / 67


@pytest.fixture
def geometry() -> GeometryConfig:
    return GeometryConfig()


@pytest.fixture
def frame(geometry):
    return chart_frame(geometry, DISPLAY_SIZE)


@pytest.fixture
def chart() -> ChartInput:
    return ChartInput.of(SCORES, BENCHMARKS, AVERAGES)


@pytest.fixture
def empty_chart() -> ChartInput:
    return ChartInput.of([0.0] * 6, [0.0] * 6, [0.0] * 6)


@pytest.fixture
def config() -> RenderConfig:
    return RenderConfig()


@pytest.fixture
def compositor(geometry) -> Compositor:
    return Compositor(geometry=geometry)


def _cairo_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


# Raster output needs the native cairo library
requires_cairo = pytest.mark.skipif(not _cairo_available(), reason="cairo library not available")
