"""Tests for the raster compositing stage."""

import io

import numpy as np
from PIL import Image

from bloomchart.engine.context import Frame, LayerContent
from bloomchart.engine.progress import ProgressVector
from bloomchart.engine.registry import RenderLayer
from bloomchart.engine.shapes import OverlayImage
from bloomchart.render.raster import clear_with_mask, frame_to_png, load_overlay, render_frame
from tests.conftest import requires_cairo


def _overlay_frame(path: str, x: float = 0.0, y: float = 0.0) -> Frame:
    layer = LayerContent(
        layer=RenderLayer.OVERLAY,
        shapes=[OverlayImage(path=path, x=x, y=y)],
    )
    return Frame(canvas_size=100, layers=(layer,), progress=ProgressVector.complete())


def test_clear_with_mask():
    image = Image.new("RGBA", (4, 4), (255, 0, 0, 255))
    mask = np.zeros((4, 4))
    mask[0, :] = 1.0
    mask[1, :] = 0.5
    alpha = np.asarray(clear_with_mask(image, mask))[:, :, 3]
    assert (alpha[0] == 0).all()
    assert (alpha[1] == 128).all()
    assert (alpha[2:] == 255).all()


def test_missing_overlay_returns_none(tmp_path):
    assert load_overlay(OverlayImage(path=str(tmp_path / "nope.png"), x=0, y=0)) is None


def test_unreadable_overlay_returns_none(tmp_path):
    bogus = tmp_path / "labels.png"
    bogus.write_bytes(b"not an image")
    assert load_overlay(OverlayImage(path=str(bogus), x=0, y=0)) is None


def test_overlay_composited_at_offset(tmp_path):
    asset = tmp_path / "labels.png"
    Image.new("RGBA", (10, 10), (0, 0, 255, 255)).save(asset)
    image = render_frame(_overlay_frame(str(asset), x=20, y=30))
    assert image.size == (100, 100)
    assert image.getpixel((25, 35)) == (0, 0, 255, 255)
    assert image.getpixel((5, 5))[3] == 0


def test_broken_overlay_renders_blank(tmp_path):
    image = render_frame(_overlay_frame(str(tmp_path / "gone.png")))
    assert image.getpixel((50, 50))[3] == 0


@requires_cairo
def test_render_frame_clears_gaps(compositor, chart):
    image = render_frame(compositor.compose(chart))
    assert image.size == (500, 500)
    # Score segment, category 0, tier 0
    assert image.getpixel((285, 189))[3] == 255
    # Inside the gap strip at 12 o'clock
    assert image.getpixel((250, 180))[3] == 0
    # Corners stay transparent
    assert image.getpixel((2, 2))[3] == 0


@requires_cairo
def test_frame_to_png(compositor, chart):
    png = frame_to_png(compositor.compose(chart, canvas_size=250))
    with Image.open(io.BytesIO(png)) as img:
        assert img.format == "PNG"
        assert img.size == (250, 250)
