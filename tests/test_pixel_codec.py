"""pixel_codec unit tests."""

from __future__ import annotations

import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image as PILImage

from openfps_store.errors import DecodeError, DimensionMismatch, EncodeError, UnsupportedFormat
from openfps_store.models.pixel_buffer import PixelBuffer
from openfps_store.models.raster_image import ColorEncoding
from openfps_store.services import pixel_codec


def _chunks(png: bytes):
    """Yield (type, data) for each chunk of a PNG stream."""
    pos = len(pixel_codec.PNG_SIGNATURE)
    while pos < len(png):
        (length,) = struct.unpack(">I", png[pos:pos + 4])
        chunk_type = png[pos + 4:pos + 8]
        yield chunk_type, png[pos + 8:pos + 8 + length]
        pos += 12 + length


# ─── decode ───────────────────────────────────────────────────────────
def test_decode_grayscale_replicates_gray_and_sets_opaque(make_image_bytes):
    buffer = pixel_codec.decode(make_image_bytes("L", (1, 1), bytes([200])))

    assert (buffer.width, buffer.height) == (1, 1)
    assert list(buffer.pixels) == [200, 200, 200, 255]


def test_decode_rgb_appends_opaque_alpha(make_image_bytes):
    buffer = pixel_codec.decode(make_image_bytes("RGB", (1, 1), bytes([10, 20, 30])))

    assert list(buffer.pixels) == [10, 20, 30, 255]


def test_decode_grayscale_alpha_keeps_alpha(make_image_bytes):
    buffer = pixel_codec.decode(make_image_bytes("LA", (1, 1), bytes([50, 80])))

    assert list(buffer.pixels) == [50, 50, 50, 80]


def test_decode_rgba_is_not_premultiplied(make_image_bytes):
    samples = bytes([10, 20, 30, 0, 255, 128, 7, 1])
    buffer = pixel_codec.decode(make_image_bytes("RGBA", (2, 1), samples))

    assert buffer.pixels == samples


def test_decode_preserves_row_major_order(make_image_bytes):
    # 2x2 gray: top-left 1, top-right 2, bottom-left 3, bottom-right 4
    buffer = pixel_codec.decode(make_image_bytes("L", (2, 2), bytes([1, 2, 3, 4])))

    assert list(buffer.pixels[0::4]) == [1, 2, 3, 4]
    assert len(buffer.pixels) == 2 * 2 * 4


def test_read_raster_keeps_source_encoding(make_image_bytes):
    raster = pixel_codec.read_raster(make_image_bytes("LA", (3, 2)))

    assert raster.encoding is ColorEncoding.GRAYSCALE_ALPHA
    assert (raster.width, raster.height) == (3, 2)
    assert len(raster.samples) == 3 * 2 * 2


@pytest.mark.parametrize("mode", ["P", "1"])
def test_decode_rejects_other_encodings(make_image_bytes, mode):
    with pytest.raises(UnsupportedFormat) as excinfo:
        pixel_codec.decode(make_image_bytes(mode, (4, 4)))
    assert excinfo.value.mode == mode


def test_decode_rejects_garbage():
    with pytest.raises(DecodeError):
        pixel_codec.decode(b"definitely not an image")


def test_decode_rejects_truncated_data(make_image_bytes, rng):
    samples = rng.integers(0, 256, size=32 * 32 * 4, dtype=np.uint8).tobytes()
    png = make_image_bytes("RGBA", (32, 32), samples)

    with pytest.raises(DecodeError):
        pixel_codec.decode(png[: len(png) // 2])


@pytest.mark.parametrize("mode", ["L", "LA", "RGB", "RGBA"])
def test_normalization_is_idempotent(make_image_bytes, rng, mode):
    width, height = 5, 3
    samples = rng.integers(0, 256, size=width * height * len(mode), dtype=np.uint8).tobytes()

    first = pixel_codec.decode(make_image_bytes(mode, (width, height), samples))
    second = pixel_codec.decode(pixel_codec.encode(first))

    assert second == first


# ─── encode ───────────────────────────────────────────────────────────
@pytest.mark.parametrize("delta", [-4, -1, 1, 4])
def test_encode_rejects_length_mismatch(delta):
    expected = 3 * 2 * 4
    buffer = PixelBuffer(width=3, height=2, pixels=bytes(expected + delta))

    with pytest.raises(DimensionMismatch) as excinfo:
        pixel_codec.encode(buffer)
    assert excinfo.value.expected == expected
    assert excinfo.value.actual == expected + delta


def test_encode_rejects_empty_image():
    with pytest.raises(EncodeError):
        pixel_codec.encode(PixelBuffer(width=0, height=4, pixels=b""))


def test_encode_writes_rgba8_readable_by_pillow(rng):
    pixels = rng.integers(0, 256, size=4 * 3 * 4, dtype=np.uint8).tobytes()
    png = pixel_codec.encode(PixelBuffer(width=4, height=3, pixels=pixels))

    with PILImage.open(io.BytesIO(png)) as img:
        assert img.mode == "RGBA"
        assert img.size == (4, 3)
        assert img.tobytes() == pixels


def test_encode_uses_no_row_filter(rng):
    width, height = 6, 4
    pixels = rng.integers(0, 256, size=width * height * 4, dtype=np.uint8).tobytes()
    png = pixel_codec.encode(PixelBuffer(width=width, height=height, pixels=pixels))

    chunks = dict(_chunks(png))
    w, h, bit_depth, color_type, _, _, interlace = struct.unpack(">IIBBBBB", chunks[b"IHDR"])
    assert (w, h, bit_depth, color_type, interlace) == (width, height, 8, 6, 0)

    assert chunks[b"IDAT"][:2] == b"\x78\x01"  # zlib header of level 1 (fastest)
    raw = zlib.decompress(chunks[b"IDAT"])
    stride = 1 + width * 4
    assert len(raw) == stride * height
    assert all(raw[row * stride] == 0 for row in range(height))
    assert b"".join(raw[row * stride + 1:(row + 1) * stride] for row in range(height)) == pixels


def test_encode_keeps_color_under_zero_alpha():
    pixels = bytes([255, 0, 0, 0, 0, 200, 10, 0])
    png = pixel_codec.encode(PixelBuffer(width=2, height=1, pixels=pixels))

    assert pixel_codec.decode(png).pixels == pixels
