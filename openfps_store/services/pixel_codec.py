"""
Pixel codec: encoded raster bytes <-> canonical RGBA PixelBuffer.

Decoding goes through Pillow and normalizes L / LA / RGB / RGBA samples to
straight (non-premultiplied) RGBA8 with no scaling and no gamma handling.

Encoding writes the PNG stream directly so that compression and filtering
are fixed instead of auto-selected: zlib level 1 (fastest) and scanline
filter type 0 (None) on every row. Splat maps are high-entropy weight data;
row prediction only costs time there.
"""
from __future__ import annotations

import io
import struct
import zlib
from typing import Callable, Dict

import cv2
import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ..errors import DecodeError, EncodeError
from ..models.pixel_buffer import CHANNELS, PixelBuffer
from ..models.raster_image import ColorEncoding, RasterImage

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PNG_COLOR_TYPE_RGBA = 6
PNG_BIT_DEPTH = 8
FILTER_NONE = 0
COMPRESSION_LEVEL = zlib.Z_BEST_SPEED


# ─── Decode ───────────────────────────────────────────────────────────
def read_raster(data: bytes) -> RasterImage:
    """
    Parse encoded image bytes into raw samples, keeping the source encoding.

    Raises:
        UnsupportedFormat: the image mode is not L, LA, RGB or RGBA.
        DecodeError: the bytes are not a readable image, or are truncated.
    """
    try:
        with PILImage.open(io.BytesIO(data)) as img:
            encoding = ColorEncoding.from_mode(img.mode)
            img.load()
            width, height = img.size
            samples = img.tobytes()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError,
            PILImage.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot decode image: {exc}") from exc

    return RasterImage(width=width, height=height, encoding=encoding, samples=samples)


def _from_grayscale(arr: np.ndarray) -> np.ndarray:
    gray = arr.reshape(arr.shape[:2])
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2RGBA)


def _from_grayscale_alpha(arr: np.ndarray) -> np.ndarray:
    gray, alpha = arr[:, :, :1], arr[:, :, 1:]
    return np.concatenate([gray, gray, gray, alpha], axis=2)


def _from_rgb(arr: np.ndarray) -> np.ndarray:
    return cv2.cvtColor(arr, cv2.COLOR_RGB2RGBA)


def _from_rgba(arr: np.ndarray) -> np.ndarray:
    return arr


_CONVERTERS: Dict[ColorEncoding, Callable[[np.ndarray], np.ndarray]] = {
    ColorEncoding.GRAYSCALE: _from_grayscale,
    ColorEncoding.GRAYSCALE_ALPHA: _from_grayscale_alpha,
    ColorEncoding.RGB: _from_rgb,
    ColorEncoding.RGBA: _from_rgba,
}


def normalize(raster: RasterImage) -> PixelBuffer:
    """Convert raw samples of any supported encoding into an RGBA PixelBuffer."""
    arr = (
        np.frombuffer(raster.samples, dtype=np.uint8)
        .reshape(raster.height, raster.width, raster.encoding.channels)
        .copy()
    )
    rgba = _CONVERTERS[raster.encoding](arr)
    return PixelBuffer.from_array(rgba)


def decode(data: bytes) -> PixelBuffer:
    """Decode image bytes straight to a canonical RGBA PixelBuffer."""
    return normalize(read_raster(data))


# ─── Encode ───────────────────────────────────────────────────────────
def _chunk(chunk_type: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def encode(buffer: PixelBuffer) -> bytes:
    """
    Encode an RGBA PixelBuffer as an 8-bit RGBA PNG.

    Raises:
        DimensionMismatch: len(pixels) != width * height * 4 (checked first).
        EncodeError: non-positive dimensions or a failure building the stream.
    """
    buffer.validate()
    width, height = buffer.width, buffer.height
    if width <= 0 or height <= 0:
        raise EncodeError(f"Cannot encode a {width}x{height} image")

    rows = np.frombuffer(buffer.pixels, dtype=np.uint8).reshape(height, width * CHANNELS)
    filter_bytes = np.full((height, 1), FILTER_NONE, dtype=np.uint8)
    raw = np.hstack([filter_bytes, rows]).tobytes()

    try:
        ihdr = struct.pack(
            ">IIBBBBB",
            width,
            height,
            PNG_BIT_DEPTH,
            PNG_COLOR_TYPE_RGBA,
            0,  # compression method: deflate
            0,  # filter method: adaptive set (only type 0 is used per row)
            0,  # no interlace
        )
        idat = zlib.compress(raw, COMPRESSION_LEVEL)
    except (struct.error, zlib.error) as exc:
        raise EncodeError(f"Cannot encode {width}x{height} image: {exc}") from exc

    return b"".join([
        PNG_SIGNATURE,
        _chunk(b"IHDR", ihdr),
        _chunk(b"IDAT", idat),
        _chunk(b"IEND", b""),
    ])
