"""Tests for the command-line renderer."""

from bloomchart.cli import build_parser, main
from tests.conftest import requires_cairo


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.variant == "full"
    assert args.scale == 1.0
    assert not args.values


def test_svg_output(tmp_path, capsys):
    out = tmp_path / "chart.svg"
    code = main([
        "--scores", "2.3", "0", "4", "1", "1", "1",
        "--averages", "2.5",
        "--variant", "scores_average",
        "--scale", "2",
        "--svg",
        "-o", str(out),
    ])
    assert code == 0
    svg = out.read_text(encoding="utf-8")
    assert 'viewBox="0 0 1000.0 1000.0"' in svg
    assert '<g id="average">' in svg
    assert '<g id="benchmark"' not in svg
    assert "1000px" in capsys.readouterr().out


def test_missing_overlay_still_renders(tmp_path):
    out = tmp_path / "chart.svg"
    assert main(["--overlay", str(tmp_path / "none.png"), "--svg", "-o", str(out)]) == 0
    assert out.exists()


@requires_cairo
def test_png_output(tmp_path):
    out = tmp_path / "chart.png"
    assert main(["--scores", "1", "2", "3", "--values", "-o", str(out)]) == 0
    assert out.read_bytes()[:4] == b"\x89PNG"
