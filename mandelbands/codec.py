"""Encode rendered buffers as grayscale images and read them back."""

from __future__ import annotations

import io
from typing import Union

import imageio.v3 as iio
import numpy as np
import PIL.Image

BytesLike = Union[bytes, bytearray, memoryview]


class EncodingError(OSError):
    """Raised when a pixel buffer cannot be turned into an image, or back."""


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def normalize_format(image_format: str) -> str:
    """Lower-case extension for ``image_format``; ``"png"`` when blank."""

    normalized = (image_format or "png").lower().lstrip(".")
    return normalized or "png"


def encode(pixels: Union[np.ndarray, BytesLike], width: int, height: int, image_format: str = "png") -> bytes:
    """Encode ``width * height`` 8-bit grayscale samples as an image file in memory."""

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        samples = np.frombuffer(pixels, dtype=np.uint8)
    else:
        samples = np.asarray(pixels, dtype=np.uint8)

    if width <= 0 or height <= 0 or samples.size != width * height:
        raise EncodingError(f"buffer of {samples.size} samples does not match a {width}x{height} image.")

    image = PIL.Image.fromarray(np.ascontiguousarray(samples.reshape(height, width)))
    buffer = io.BytesIO()
    try:
        image.save(buffer, format=_pil_format_name(normalize_format(image_format)))
    except (KeyError, ValueError, OSError) as exc:
        raise EncodingError(f"could not encode {width}x{height} image as {image_format!r}: {exc}") from exc
    return buffer.getvalue()


def decode(data: BytesLike) -> np.ndarray:
    """Decode an encoded grayscale image into a ``(height, width)`` ``uint8`` array."""

    try:
        image = iio.imread(bytes(data))
    except (OSError, ValueError) as exc:
        raise EncodingError(f"could not decode image: {exc}") from exc
    if image.ndim != 2:
        raise EncodingError(f"expected a single-channel image, got shape {image.shape}.")
    if image.dtype != np.uint8:
        raise EncodingError(f"expected 8-bit samples, got {image.dtype}.")
    return image
