"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

# Arc sampling density: one vertex per ~2° keeps polygon error below 0.02%
# of the radius, well under a pixel for the 500px display size.
_ARC_STEP_RAD = math.radians(2.0)

# Minimum vertices per arc so short arcs still bend.
_MIN_ARC_SAMPLES = 4


def clamp(value: float, low: float, high: float) -> float:
    """Clip value into [low, high]."""
    return max(low, min(high, value))


def polar_to_xy(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    """Point at (radius, angle) around (cx, cy). Angle in radians, y grows downward."""
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def arc_samples(start_angle: float, end_angle: float) -> int:
    """Number of vertices needed to sample an arc smoothly."""
    span = abs(end_angle - start_angle)
    return max(_MIN_ARC_SAMPLES, int(math.ceil(span / _ARC_STEP_RAD)) + 1)


def arc_points(
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    end_angle: float,
) -> NDArray[np.float64]:
    """Sample an arc from start_angle to end_angle as an Nx2 array."""
    n = arc_samples(start_angle, end_angle)
    angles = np.linspace(start_angle, end_angle, n)
    return np.column_stack([cx + radius * np.cos(angles), cy + radius * np.sin(angles)])


def annular_sector_points(
    cx: float,
    cy: float,
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
) -> NDArray[np.float64]:
    """Closed boundary of an annular sector: outer arc forward, inner arc back.

    With inner_radius == 0 the inner arc collapses to the centre and the
    result is a plain pie slice.
    """
    outer = arc_points(cx, cy, outer_radius, start_angle, end_angle)
    if inner_radius <= 0:
        inner = np.array([[cx, cy]])
    else:
        inner = arc_points(cx, cy, inner_radius, end_angle, start_angle)
    ring = np.vstack([outer, inner])
    return np.vstack([ring, ring[:1]])


def strip_points(
    x0: float,
    y0: float,
    angle: float,
    length: float,
    width: float,
) -> NDArray[np.float64]:
    """Closed rectangle of the given width running from (x0, y0) along angle."""
    ux, uy = math.cos(angle), math.sin(angle)
    # Unit normal
    nx, ny = -uy, ux
    hw = width / 2
    x1, y1 = x0 + ux * length, y0 + uy * length
    return np.array(
        [
            [x0 + nx * hw, y0 + ny * hw],
            [x1 + nx * hw, y1 + ny * hw],
            [x1 - nx * hw, y1 - ny * hw],
            [x0 - nx * hw, y0 - ny * hw],
            [x0 + nx * hw, y0 + ny * hw],
        ]
    )


def chord_half_angle(half_width: float, radius: float) -> float:
    """Angle subtended at the centre by half a straight strip of the given width.

    Returns pi/2 when the strip is at least as wide as the radius.
    """
    if radius <= 0:
        return math.pi / 2
    ratio = half_width / radius
    if ratio >= 1.0:
        return math.pi / 2
    return math.asin(ratio)
