from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np

from ..models.pixel_buffer import PixelBuffer
from ..repositories.filesystem_repository import FilesystemRepository
from ..repositories.image_repository import ImageRepository


class ImageService:
    """Business-level image I/O. No pixel math here beyond array views."""
    def __init__(self, filesystem: FilesystemRepository | None = None):
        self.image_repository = ImageRepository(filesystem)

    def load(self, path: Union[str, Path]) -> PixelBuffer:
        """Load an image file of any supported encoding as straight RGBA."""
        return self.image_repository.load(path)

    def save(self, path: Union[str, Path], buffer: PixelBuffer) -> None:
        """Write the buffer as an RGBA PNG, creating parent directories."""
        self.image_repository.save(path, buffer)

    @staticmethod
    def to_array(buffer: PixelBuffer) -> np.ndarray:
        """
        Writable (H, W, 4) copy of the buffer pixels.
        """
        return buffer.as_array().copy()

    @staticmethod
    def from_array(arr: np.ndarray) -> PixelBuffer:
        return PixelBuffer.from_array(arr)
