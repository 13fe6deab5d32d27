"""Frame → RGBA raster via CairoSVG + Pillow.

Each layer is rasterised to its own transparent surface. The subtractive
gap layer becomes an alpha mask that clears every layer marked
``cut_by_gaps``; then surfaces are alpha-composited bottom to top.
"""

from __future__ import annotations

import io
import logging

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from bloomchart.engine.context import Frame, LayerContent
from bloomchart.engine.shapes import OverlayImage
from bloomchart.render.svg import layer_to_svg

logger = logging.getLogger(__name__)


def rasterize_svg(svg_code: str, size: int) -> Image.Image:
    """Rasterise an SVG document to a size×size RGBA image."""
    import cairosvg

    png_data = cairosvg.svg2png(
        bytestring=svg_code.encode("utf-8"),
        output_width=size,
        output_height=size,
    )
    return Image.open(io.BytesIO(png_data)).convert("RGBA")


def rasterize_layer(content: LayerContent, canvas_size: float) -> Image.Image:
    size = int(round(canvas_size))
    if content.is_empty:
        return Image.new("RGBA", (size, size), (0, 0, 0, 0))
    return rasterize_svg(layer_to_svg(content, canvas_size), size)


def gap_mask(content: LayerContent, canvas_size: float) -> NDArray[np.float64]:
    """Coverage of the gap strips in [0, 1], one value per pixel."""
    rgba = np.asarray(rasterize_layer(content, canvas_size), dtype=np.float64)
    return rgba[:, :, 3] / 255.0


def clear_with_mask(image: Image.Image, mask: NDArray[np.float64]) -> Image.Image:
    """Destination-out: scale the image's alpha down by the mask coverage."""
    rgba = np.asarray(image, dtype=np.float64).copy()
    rgba[:, :, 3] *= 1.0 - mask
    return Image.fromarray(np.clip(np.rint(rgba), 0, 255).astype(np.uint8), "RGBA")


def load_overlay(shape: OverlayImage) -> Image.Image | None:
    """Load the overlay asset, or None (logged) when it cannot be read."""
    try:
        with Image.open(shape.path) as img:
            return img.convert("RGBA")
    except (OSError, UnidentifiedImageError) as e:
        logger.warning("Overlay %s could not be loaded: %s", shape.path, e)
        return None


def _overlay_surface(content: LayerContent, size: int) -> Image.Image:
    surface = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    for shape in content.shapes:
        if not isinstance(shape, OverlayImage):
            continue
        asset = load_overlay(shape)
        if asset is None:
            continue
        dest = (max(0, int(round(shape.x))), max(0, int(round(shape.y))))
        surface.alpha_composite(asset, dest=dest)
    return surface


def render_frame(frame: Frame) -> Image.Image:
    """Composite every layer of a frame into one transparent RGBA image."""
    size = int(round(frame.canvas_size))
    gaps = next((c for c in frame.layers if c.subtractive), None)
    mask = gap_mask(gaps, frame.canvas_size) if gaps is not None and gaps.shapes else None

    canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    for content in frame.layers:
        if content.subtractive or content.is_empty:
            continue
        if any(isinstance(s, OverlayImage) for s in content.shapes):
            surface = _overlay_surface(content, size)
        else:
            surface = rasterize_layer(content, frame.canvas_size)
        if mask is not None and content.cut_by_gaps:
            surface = clear_with_mask(surface, mask)
        canvas = Image.alpha_composite(canvas, surface)
    return canvas


def frame_to_png(frame: Frame) -> bytes:
    buf = io.BytesIO()
    render_frame(frame).save(buf, format="PNG")
    return buf.getvalue()
