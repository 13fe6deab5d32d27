"""Engine exceptions."""

from __future__ import annotations


class ChartInputError(ValueError):
    """Metric arrays do not match the chart's category count or range."""


class GeometryConfigError(ValueError):
    """Ring placement does not add up to the nominal layer budget."""


class OverlayLoadError(RuntimeError):
    """The label overlay asset could not be loaded."""
