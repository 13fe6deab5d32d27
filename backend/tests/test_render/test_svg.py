"""Tests for SVG serialization of frames."""

import math

import pytest

from bloomchart.engine.config import RenderConfig
from bloomchart.engine.registry import RenderLayer
from bloomchart.engine.shapes import TextLabel, Wedge
from bloomchart.render.svg import frame_to_svg, layer_to_svg, shape_to_svg, wedge_path


def _wedge(inner: float, start: float = 0.0, end: float = math.pi / 3) -> Wedge:
    return Wedge(
        cx=250, cy=250, inner_radius=inner, outer_radius=100,
        start_angle=start, end_angle=end, fill="#076C98",
    )


def test_annular_wedge_path():
    d = wedge_path(_wedge(50))
    assert d.startswith("M ")
    assert d.endswith("Z")
    assert d.count("A ") == 4


def test_pie_wedge_path_closes_at_centre():
    d = wedge_path(_wedge(0))
    assert d.count("A ") == 2
    assert "L 250.000 250.000" in d


def test_full_turn_wedge_keeps_area():
    d = wedge_path(_wedge(50, 0.0, 2 * math.pi))
    # Two half-turn arcs per edge, never a degenerate zero-length arc
    assert d.count("A ") == 4
    assert " 0 0 1 " in d


def test_text_label_lines_and_escaping():
    svg = shape_to_svg(TextLabel(x=10, y=20, text="R&D\nteam", font_size=12, fill="#000"))
    assert svg.count("<tspan") == 2
    assert "R&amp;D" in svg
    assert "transform" not in svg


def test_rotated_label():
    svg = shape_to_svg(
        TextLabel(x=10, y=20, text="klimaat", font_size=12, fill="#000", rotation=30)
    )
    assert 'transform="rotate(30.00 10.000 20.000)"' in svg


def test_unknown_shape_rejected():
    with pytest.raises(TypeError):
        shape_to_svg(object())


def test_empty_layer_is_valid_document(compositor, empty_chart):
    frame = compositor.compose(empty_chart)
    svg = layer_to_svg(frame.layer(RenderLayer.SCORE), frame.canvas_size)
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")


def test_frame_svg_masks_cut_layers(compositor, chart):
    svg = frame_to_svg(compositor.compose(chart, RenderConfig(show_values=True)))
    assert '<mask id="slice-gaps"' in svg
    for name in ("background", "benchmark", "score"):
        assert f'<g id="{name}" mask="url(#slice-gaps)">' in svg
    # Average layer is not masked
    assert '<g id="average">' in svg
    assert '<g id="values">' in svg
    assert '<g id="gaps"' not in svg


def test_frame_svg_scales_with_canvas(compositor, chart):
    svg = frame_to_svg(compositor.compose(chart, canvas_size=1500))
    assert 'viewBox="0 0 1500.0 1500.0"' in svg
