from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from ..errors import DimensionMismatch

CHANNELS = 4


@dataclass
class PixelBuffer:
    """
    Canonical in-memory image: row-major RGBA, 4 bytes per pixel, never premultiplied.
    """
    width: int
    height: int
    pixels: bytes  # Length must be width * height * 4.

    @property
    def expected_length(self) -> int:
        return self.width * self.height * CHANNELS

    def validate(self) -> None:
        if len(self.pixels) != self.expected_length:
            raise DimensionMismatch(self.expected_length, len(self.pixels))

    def as_array(self) -> np.ndarray:
        """Read-only (H, W, 4) uint8 view over the pixel bytes."""
        self.validate()
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "PixelBuffer":
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise ValueError(f"Expected an (H, W, 4) array, got shape {arr.shape}")
        arr = np.ascontiguousarray(arr, dtype=np.uint8)
        height, width = arr.shape[:2]
        return cls(width=width, height=height, pixels=arr.tobytes())
