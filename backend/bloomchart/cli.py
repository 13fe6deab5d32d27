"""Command-line renderer.

    python -m bloomchart.cli --scores 2.3 0 4 1 1 1 --averages 2.5 0 0 0 0 0 -o chart.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bloomchart.config import settings
from bloomchart.engine.compositor import create_compositor
from bloomchart.engine.config import GeometryConfig, OverlayPlacement, RenderConfig
from bloomchart.engine.context import ChartInput
from bloomchart.engine.inputs import clamp_values
from bloomchart.render.export import ExportVariant, export_frame
from bloomchart.render.raster import frame_to_png
from bloomchart.render.svg import frame_to_svg

logger = logging.getLogger("bloomchart.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a radial bloom chart to PNG or SVG")
    parser.add_argument("--scores", nargs="*", default=[], help="Score per category (0-4)")
    parser.add_argument("--benchmarks", nargs="*", default=[], help="Benchmark per category (0-4)")
    parser.add_argument("--averages", nargs="*", default=[], help="Average per category (0-4)")
    parser.add_argument("--no-benchmark", action="store_true", help="Hide benchmark fills")
    parser.add_argument("--no-average", action="store_true", help="Hide average indicators")
    parser.add_argument("--no-labels", action="store_true", help="Hide category labels")
    parser.add_argument("--values", action="store_true", help="Print score values in the chart")
    parser.add_argument("--value-angle", type=float, default=0.0, help="Value label angle offset (deg)")
    parser.add_argument("--value-font", type=float, default=14.0, help="Value label font size (px)")
    parser.add_argument("--value-distance", type=float, default=100.0, help="Value label distance (%%)")
    parser.add_argument(
        "--variant",
        choices=[v.value for v in ExportVariant],
        default=ExportVariant.FULL.value,
        help="Visibility preset",
    )
    parser.add_argument("--scale", type=float, default=1.0, help="Resolution multiplier")
    parser.add_argument("--size", type=int, default=settings.display_size, help="Display size (px)")
    parser.add_argument("--overlay", help="Label overlay image composited above the labels")
    parser.add_argument("--svg", action="store_true", help="Write SVG instead of PNG")
    parser.add_argument("-o", "--output", default="radial-chart.png", help="Output file")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, settings.bloomchart_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    chart = ChartInput.of(
        clamp_values(args.scores),
        clamp_values(args.benchmarks),
        clamp_values(args.averages),
    )
    config = RenderConfig(
        show_benchmark=not args.no_benchmark,
        show_average=not args.no_average,
        show_values=args.values,
        show_labels=not args.no_labels,
        value_angle_offset_deg=args.value_angle,
        value_font_size_px=args.value_font,
        value_distance_percent=args.value_distance,
        overlay=OverlayPlacement(args.overlay) if args.overlay else None,
    )

    compositor = create_compositor(GeometryConfig(display_size=args.size))
    frame = export_frame(compositor, chart, config, ExportVariant(args.variant), args.scale)
    for pass_id, error in frame.errors:
        logger.warning("Rendered without %s: %s", pass_id, error)

    out = Path(args.output)
    if args.svg:
        out.write_text(frame_to_svg(frame), encoding="utf-8")
    else:
        out.write_bytes(frame_to_png(frame))
    print(f"Wrote {out} ({int(frame.canvas_size)}px)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
