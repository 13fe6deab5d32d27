"""Raw input → clamped metric values. Runs at the edges (API, CLI), never inside the engine."""

from __future__ import annotations

import math
from typing import Any, Iterable

from bloomchart.engine.context import MAX_VALUE


def clamp_value(raw: Any, default: float = 0.0, max_value: float = MAX_VALUE) -> float:
    """Parse one value; non-numeric or NaN becomes ``default``, then clip to [0, max_value]."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if math.isnan(value):
        return default
    return max(0.0, min(max_value, value))


def clamp_values(
    raw: Iterable[Any],
    count: int = 6,
    default: float = 0.0,
    max_value: float = MAX_VALUE,
) -> list[float]:
    """Clamp a series and pad/truncate it to ``count`` entries."""
    values = [clamp_value(v, default, max_value) for v in raw][:count]
    values.extend([default] * (count - len(values)))
    return values
