"""Rendering primitives for grayscale Mandelbrot bands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

HORIZON = 4.0
ESCAPE_LIMIT = 255


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane covered by an image."""

    upper_left: complex
    lower_right: complex

    @classmethod
    def from_edges(cls, left: float, top: float, right: float, bottom: float) -> "Viewport":
        return cls(upper_left=complex(left, top), lower_right=complex(right, bottom))

    def validate(self) -> None:
        if not self.upper_left.real < self.lower_right.real:
            raise ValueError(
                f"left edge {self.upper_left.real!r} must be smaller than right edge {self.lower_right.real!r}."
            )
        if not self.upper_left.imag > self.lower_right.imag:
            raise ValueError(
                f"top edge {self.upper_left.imag!r} must be greater than bottom edge {self.lower_right.imag!r}."
            )


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Count the iterations needed to prove that ``c`` leaves the radius-2 disk.

    Returns ``None`` when ``limit`` iterations pass without an escape, which
    means ``c`` is probably a member of the set.
    """

    z = 0j
    for i in range(limit):
        if z.real * z.real + z.imag * z.imag > HORIZON:
            return i
        z = z * z + c
    return None


def pixel_to_point(
    bounds: tuple[int, int],
    pixel: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
) -> complex:
    """Map a ``(column, row)`` pixel of an image of size ``bounds`` onto the complex plane."""

    width = lower_right.real - upper_left.real
    height = upper_left.imag - lower_right.imag
    # Rows grow downward while the imaginary axis grows upward.
    return complex(
        upper_left.real + pixel[0] * width / bounds[0],
        upper_left.imag - pixel[1] * height / bounds[1],
    )


def render(
    pixels: np.ndarray,
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    rows: Optional[range] = None,
) -> None:
    """Render the Mandelbrot set into ``pixels``, one grayscale byte per pixel.

    ``bounds`` is the width and height of the image spanning ``upper_left`` to
    ``lower_right``. When ``rows`` is given, ``pixels`` holds only those image
    rows; each pixel is still mapped against the full image grid.
    """

    width, height = bounds
    if rows is None:
        rows = range(height)
    if len(pixels) != width * len(rows):
        raise AssertionError(
            f"buffer of {len(pixels)} pixels does not hold {len(rows)} rows of width {width}"
        )

    for offset, row in enumerate(rows):
        base = offset * width
        for column in range(width):
            point = pixel_to_point(bounds, (column, row), upper_left, lower_right)
            count = escape_time(point, ESCAPE_LIMIT)
            pixels[base + column] = 0 if count is None else ESCAPE_LIMIT - count
