"""Easing curves. Each maps t in [0, 1] to eased progress with f(0) = 0 and f(1) = 1.

Out-curves only: the chart grows fast and settles. back_out overshoots
past 1 before settling, which the average pill uses for a small bounce.
"""

from __future__ import annotations

import math
from typing import Callable

EasingFn = Callable[[float], float]

# Standard back-out overshoot (≈10% past the target)
_BACK_OVERSHOOT = 1.70158

_ELASTIC_PERIOD = (2 * math.pi) / 3


def _clip(t: float) -> float:
    return 0.0 if t <= 0 else 1.0 if t >= 1 else t


def linear(t: float) -> float:
    return _clip(t)


def cubic_out(t: float) -> float:
    """1 - (1 - t)^3."""
    t = _clip(t)
    return 1 - (1 - t) ** 3


def quart_out(t: float) -> float:
    t = _clip(t)
    return 1 - (1 - t) ** 4


def expo_out(t: float) -> float:
    t = _clip(t)
    if t == 1.0:
        return 1.0
    return 1 - 2 ** (-10 * t)


def back_out(t: float) -> float:
    t = _clip(t)
    c3 = _BACK_OVERSHOOT + 1
    return 1 + c3 * (t - 1) ** 3 + _BACK_OVERSHOOT * (t - 1) ** 2


def elastic_out(t: float) -> float:
    t = _clip(t)
    if t in (0.0, 1.0):
        return t
    return 2 ** (-10 * t) * math.sin((t * 10 - 0.75) * _ELASTIC_PERIOD) + 1


EASINGS: dict[str, EasingFn] = {
    "linear": linear,
    "cubic_out": cubic_out,
    "quart_out": quart_out,
    "expo_out": expo_out,
    "back_out": back_out,
    "elastic_out": elastic_out,
}


def get_easing(name: str) -> EasingFn:
    try:
        return EASINGS[name]
    except KeyError:
        raise ValueError(f"Unknown easing: {name!r} (known: {sorted(EASINGS)})") from None
