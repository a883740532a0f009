"""Split a pixel buffer into horizontal bands and render them on a thread pool."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from .renderer import Viewport, pixel_to_point, render


@dataclass(frozen=True)
class Band:
    """A run of whole image rows handed to one worker."""

    index: int
    top: int
    height: int
    upper_left: complex
    lower_right: complex

    @property
    def rows(self) -> range:
        return range(self.top, self.top + self.height)


def band_rows(height: int, thread_count: int) -> int:
    """Rows per band; one extra row so that ``thread_count`` bands always cover the image."""

    return height // thread_count + 1


def split_bands(pixels: np.ndarray, bounds: tuple[int, int], rows_per_band: int) -> Iterator[tuple[int, np.ndarray]]:
    """Yield ``(index, view)`` pairs of consecutive, non-overlapping bands of ``pixels``."""

    chunk = rows_per_band * bounds[0]
    for index, start in enumerate(range(0, len(pixels), chunk)):
        yield index, pixels[start:start + chunk]


def describe_band(
    index: int,
    chunk: np.ndarray,
    bounds: tuple[int, int],
    rows_per_band: int,
    upper_left: complex,
    lower_right: complex,
) -> Band:
    """Locate band ``index``. The corner points describe the band; rendering maps rows against the full image."""

    top = rows_per_band * index
    height = len(chunk) // bounds[0]
    return Band(
        index=index,
        top=top,
        height=height,
        upper_left=pixel_to_point(bounds, (0, top), upper_left, lower_right),
        lower_right=pixel_to_point(bounds, (bounds[0], top + height), upper_left, lower_right),
    )


class BandCursor:
    """Lock-guarded cursor over the bands of a buffer.

    Bands come out in index order, each exactly once, to whichever thread
    asks first.
    """

    def __init__(self, bands: Iterator[tuple[int, np.ndarray]]) -> None:
        self._bands = bands
        self._lock = threading.Lock()

    def claim(self) -> Optional[tuple[int, np.ndarray]]:
        with self._lock:
            return next(self._bands, None)


def _worker(
    cursor: BandCursor,
    bounds: tuple[int, int],
    rows_per_band: int,
    upper_left: complex,
    lower_right: complex,
) -> list[Band]:
    done: list[Band] = []
    while True:
        claimed = cursor.claim()
        if claimed is None:
            return done
        index, chunk = claimed
        band = describe_band(index, chunk, bounds, rows_per_band, upper_left, lower_right)
        render(chunk, bounds, upper_left, lower_right, band.rows)
        done.append(band)


def render_bands(
    pixels: np.ndarray,
    bounds: tuple[int, int],
    upper_left: complex,
    lower_right: complex,
    thread_count: int,
) -> list[Band]:
    """Render ``pixels`` with ``thread_count`` workers and return the bands in index order.

    The pool runs on up to ``thread_count`` threads; an idle thread may pick
    up another worker once the bands run out. Every worker is joined before
    this returns. If any worker raised, the first failure (in worker order)
    is re-raised here.
    """

    if thread_count <= 0:
        raise ValueError(f"thread_count must be positive, got {thread_count}.")

    rows_per_band = band_rows(bounds[1], thread_count)
    cursor = BandCursor(split_bands(pixels, bounds, rows_per_band))

    with ThreadPoolExecutor(max_workers=thread_count, thread_name_prefix="band") as executor:
        futures = [
            executor.submit(_worker, cursor, bounds, rows_per_band, upper_left, lower_right)
            for _ in range(thread_count)
        ]

    bands: list[Band] = []
    for future in futures:
        bands.extend(future.result())
    return sorted(bands, key=lambda band: band.index)


def render_pixels(width: int, height: int, viewport: Viewport, thread_count: int) -> np.ndarray:
    """Render a ``width`` x ``height`` image into a fresh row-major ``uint8`` buffer."""

    if width <= 0 or height <= 0:
        raise ValueError(f"image dimensions must be positive, got {width}x{height}.")
    viewport.validate()

    pixels = np.zeros(width * height, dtype=np.uint8)
    render_bands(pixels, (width, height), viewport.upper_left, viewport.lower_right, thread_count)
    return pixels
