from __future__ import annotations
from dataclasses import dataclass

from .pixel_buffer import PixelBuffer


@dataclass
class SplatMap:
    """
    Per-pixel terrain layer weights: R, G, B, A each weight one texture layer.
    Splat maps are square; index 0 is the primary map.
    """
    buffer: PixelBuffer
    index: int = 0

    @property
    def resolution(self) -> int:
        return self.buffer.width
