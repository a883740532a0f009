"""Public API for banded, multi-threaded Mandelbrot rendering."""

from .codec import EncodingError, decode, encode
from .pipeline import draw
from .renderer import ESCAPE_LIMIT, Viewport, escape_time, pixel_to_point, render
from .scheduler import (
    Band,
    BandCursor,
    band_rows,
    describe_band,
    render_bands,
    render_pixels,
    split_bands,
)

__all__ = [
    "Band",
    "BandCursor",
    "ESCAPE_LIMIT",
    "EncodingError",
    "Viewport",
    "band_rows",
    "decode",
    "describe_band",
    "draw",
    "encode",
    "escape_time",
    "pixel_to_point",
    "render",
    "render_bands",
    "render_pixels",
    "split_bands",
]
