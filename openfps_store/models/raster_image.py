from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..errors import DecodeError, UnsupportedFormat


class ColorEncoding(Enum):
    """Source color encodings the codec accepts (values are Pillow mode names)."""
    GRAYSCALE = "L"
    GRAYSCALE_ALPHA = "LA"
    RGB = "RGB"
    RGBA = "RGBA"

    @property
    def channels(self) -> int:
        return len(self.value)

    @classmethod
    def from_mode(cls, mode: str) -> "ColorEncoding":
        try:
            return cls(mode)
        except ValueError:
            raise UnsupportedFormat(mode) from None


@dataclass(frozen=True)
class RasterImage:
    """
    Decoded-but-not-normalized image: raw 8-bit samples in the source encoding.
    """
    width: int
    height: int
    encoding: ColorEncoding
    samples: bytes  # width * height * encoding.channels bytes, row-major

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise DecodeError(f"Invalid image dimensions {self.width}x{self.height}")
        expected = self.width * self.height * self.encoding.channels
        if len(self.samples) != expected:
            raise DecodeError(
                f"Sample data has {len(self.samples)} bytes, expected {expected} "
                f"for {self.width}x{self.height} {self.encoding.value}"
            )
