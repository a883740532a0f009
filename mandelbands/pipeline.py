"""Single entry point: render a viewport on a thread pool and encode it."""

from __future__ import annotations

from .codec import encode
from .renderer import Viewport
from .scheduler import render_pixels


def draw(
    image_width: int,
    image_height: int,
    left: float,
    top: float,
    right: float,
    bottom: float,
    thread_count: int,
    image_format: str = "png",
) -> bytes:
    """Render the Mandelbrot set between the given edges and return the encoded image.

    Raises ``ValueError`` for non-positive sizes or thread counts and for an
    inverted viewport, ``EncodingError`` when the image cannot be encoded, and
    re-raises whatever a worker thread raised.
    """

    if thread_count <= 0:
        raise ValueError(f"thread_count must be positive, got {thread_count}.")

    viewport = Viewport.from_edges(left, top, right, bottom)
    pixels = render_pixels(image_width, image_height, viewport, thread_count)
    return encode(pixels, image_width, image_height, image_format)
