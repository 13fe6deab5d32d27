"""Tests for the shape builders."""

import math

import pytest

from bloomchart.engine.config import ChartPalette, GeometryConfig
from bloomchart.engine.kernel import chart_frame, indicator_geometry, ring_bounds, slice_angles
from bloomchart.engine.shapes import (
    Circle,
    ShapeMeta,
    Wedge,
    build_background_wedges,
    build_fill_wedge,
    build_gap_strips,
    build_pill,
)


def test_background_covers_every_category_and_tier(frame):
    palette = ChartPalette()
    wedges = build_background_wedges(frame, palette)
    assert len(wedges) == 24
    assert all(w.meta is None for w in wedges)
    assert [w.fill for w in wedges[:4]] == list(palette.background)


def test_fill_wedge_carries_metadata(frame):
    meta = ShapeMeta(category=0, tier=2, value=2.3, metric="score")
    wedge = build_fill_wedge(frame, 0, 2, 0.3, fill="#076C98", meta=meta)
    bounds = ring_bounds(frame, 2)
    angles = slice_angles(frame, 0)
    assert wedge.meta == meta
    assert wedge.inner_radius == bounds.inner_radius
    assert wedge.outer_radius == pytest.approx(bounds.inner_radius + 0.3 * bounds.thickness)
    assert wedge.start_angle == angles.start_angle
    assert wedge.end_angle == pytest.approx(angles.end_angle)


def test_fill_wedge_empty_returns_none(frame):
    meta = ShapeMeta(category=0, tier=0, value=0.0, metric="score")
    assert build_fill_wedge(frame, 0, 0, 0.0, fill="#000", meta=meta) is None
    assert build_fill_wedge(frame, 0, 0, 1.0, fill="#000", meta=meta, sweep=0.0) is None


def test_fill_wedge_sweep_reveals_clockwise(frame):
    meta = ShapeMeta(category=1, tier=0, value=1.0, metric="benchmark")
    wedge = build_fill_wedge(frame, 1, 0, 1.0, fill="#F47B54", meta=meta, sweep=0.5)
    angles = slice_angles(frame, 1)
    assert wedge.start_angle == angles.start_angle
    assert wedge.end_angle == pytest.approx(angles.start_angle + angles.span / 2)


def test_wedge_polygon_area(frame):
    wedge = build_fill_wedge(
        frame, 0, 0, 1.0, fill="#000",
        meta=ShapeMeta(category=0, tier=0, value=1.0, metric="score"),
    )
    expected = (wedge.outer_radius**2 - wedge.inner_radius**2) * (math.pi / 3) / 2
    assert wedge.to_polygon().area == pytest.approx(expected, rel=0.01)


def test_gap_strips_on_category_boundaries(frame):
    strips = build_gap_strips(frame)
    assert len(strips) == 6
    assert strips[0].angle == pytest.approx(-math.pi / 2)
    assert strips[0].width == pytest.approx(9.0)
    assert strips[0].length == pytest.approx(220.0)
    assert all(s.meta is None for s in strips)


def test_pill_parts(frame):
    palette = ChartPalette()
    ind = indicator_geometry(frame, 0, 2.5)
    shapes = build_pill(frame, ind, 2.5, palette)
    assert len(shapes) == 3
    body, start_cap, end_cap = shapes
    assert isinstance(body, Wedge)
    assert isinstance(start_cap, Circle) and isinstance(end_cap, Circle)
    assert body.start_angle == ind.body_start
    assert body.end_angle == ind.body_end
    assert body.outer_radius - body.inner_radius == pytest.approx(2 * ind.half_thickness)
    for shape in shapes:
        assert shape.meta == ShapeMeta(category=0, tier=2, value=2.5, metric="average")
        assert shape.fill == palette.average
        assert shape.stroke == palette.average_stroke


def test_pill_body_stays_in_slice_near_centre():
    frame = chart_frame(GeometryConfig(total_layers=49, center_hole=0), 500)
    angles = slice_angles(frame, 1)
    ind = indicator_geometry(frame, 1, 0.3)
    body, before, after, start_cap, end_cap = build_pill(frame, ind, 0.3, ChartPalette())
    assert body.start_angle == pytest.approx(angles.start_angle)
    assert body.end_angle == pytest.approx(angles.end_angle)
    # Only the protrusion bands and caps reach past the slice edges
    assert before.end_angle == body.start_angle and before.start_angle < angles.start_angle
    assert after.start_angle == body.end_angle and after.end_angle > angles.end_angle
    start_angle = math.atan2(start_cap.cy - frame.center_y, start_cap.cx - frame.center_x)
    assert start_angle == pytest.approx(ind.cap_start)
    assert end_cap.meta == body.meta


def test_pill_grows_from_center(frame):
    ind = indicator_geometry(frame, 0, 2.5)
    half = build_pill(frame, ind, 2.5, ChartPalette(), progress=0.5)
    cap = half[-2]
    distance = math.hypot(cap.cx - frame.center_x, cap.cy - frame.center_y)
    assert distance == pytest.approx(ind.mid_radius * 0.5)
    assert cap.radius == pytest.approx(ind.half_thickness * 0.5)
