from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

from ..config import DEFAULT_SPLATMAP_RESOLUTION
from ..errors import DecodeError, NotFound, UnsupportedFormat
from ..models.pixel_buffer import CHANNELS
from ..models.splat_map import SplatMap
from ..repositories.filesystem_repository import FilesystemRepository
from .image_service import ImageService

logger = logging.getLogger(__name__)

TEXTURE_DEFINITION_FILE = "texture.json"
DEFAULT_LAYER_WEIGHTS = (255, 0, 0, 0)  # 100% first layer

ProjectRoot = Union[str, os.PathLike]


def splat_map_filename(index: int = 0) -> str:
    return "splatmap.png" if index == 0 else f"splatmap_{index}.png"


class TextureService:
    """
    Texture layer definitions (texture.json) and splat maps (splatmap*.png) of a project.

    Splat maps are read and written through the pixel codec so every RGBA
    channel keeps its exact weight, including under A=0.
    """

    def __init__(self, filesystem: FilesystemRepository | None = None,
                 default_resolution: int = DEFAULT_SPLATMAP_RESOLUTION):
        self.filesystem = filesystem or FilesystemRepository()
        self.image_service = ImageService(self.filesystem)
        self.default_resolution = default_resolution

    # ─── texture.json ─────────────────────────────────────────────────
    def load_texture_definition(self, root: ProjectRoot) -> Optional[Dict[str, Any]]:
        """
        Returns:
            The parsed definition, or None when the project has none (procedural textures).
        """
        path = Path(root) / TEXTURE_DEFINITION_FILE
        if not self.filesystem.exists(path):
            return None
        try:
            definition = json.loads(self.filesystem.read_text(path))
        except (DecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unparseable %s: %s", path, exc)
            return None
        return definition if isinstance(definition, dict) else None

    def save_texture_definition(self, root: ProjectRoot, definition: Dict[str, Any]) -> None:
        path = Path(root) / TEXTURE_DEFINITION_FILE
        self.filesystem.write_text(path, json.dumps(definition, indent=2), create_parent=True)

    # ─── splat maps ───────────────────────────────────────────────────
    @staticmethod
    def create_default_splat_map(resolution: int, index: int = 0) -> SplatMap:
        pixels = np.empty((resolution, resolution, CHANNELS), dtype=np.uint8)
        pixels[:, :] = DEFAULT_LAYER_WEIGHTS
        return SplatMap(buffer=ImageService.from_array(pixels), index=index)

    def load_splat_map(self, root: ProjectRoot, index: int = 0) -> Optional[SplatMap]:
        path = Path(root) / splat_map_filename(index)
        if not self.filesystem.exists(path):
            return None

        buffer = self.image_service.load(path)

        # Older saves wrote A=255 as a placeholder; the fourth layer is weight 0 there.
        if index == 0:
            pixels = ImageService.to_array(buffer)
            if np.all(pixels[:, :, 3] == 255):
                logger.info("Migrating legacy splat map %s (A=255 -> A=0)", path)
                pixels[:, :, 3] = 0
                buffer = ImageService.from_array(pixels)

        return SplatMap(buffer=buffer, index=index)

    def save_splat_map(self, root: ProjectRoot, splat_map: SplatMap) -> Path:
        path = Path(root) / splat_map_filename(splat_map.index)
        self.image_service.save(path, splat_map.buffer)
        return path

    def ensure_splat_map(self, root: ProjectRoot, index: int = 0,
                         resolution: Optional[int] = None) -> bool:
        """
        Write a default splat map unless a readable one exists. Returns True if one was written.
        """
        try:
            if self.load_splat_map(root, index) is not None:
                return False
        except (DecodeError, UnsupportedFormat, NotFound) as exc:
            logger.warning("Replacing unreadable %s: %s", splat_map_filename(index), exc)

        splat_map = self.create_default_splat_map(resolution or self.default_resolution, index)
        self.save_splat_map(root, splat_map)
        return True
