from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from ..models.pixel_buffer import PixelBuffer
from ..services import pixel_codec
from .filesystem_repository import FilesystemRepository

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O for PixelBuffer entities. Pixel conversion lives in pixel_codec.
    """
    def __init__(self, filesystem: FilesystemRepository | None = None):
        self.filesystem = filesystem or FilesystemRepository()

    def load(self, path: Union[str, Path]) -> PixelBuffer:
        data = self.filesystem.read_bytes(path)
        buffer = pixel_codec.decode(data)
        logger.debug("Loaded %dx%d image from %s", buffer.width, buffer.height, path)
        return buffer

    def save(self, path: Union[str, Path], buffer: PixelBuffer) -> None:
        # encode first so a bad buffer never truncates an existing file
        data = pixel_codec.encode(buffer)
        self.filesystem.write_bytes(path, data, create_parent=True)
