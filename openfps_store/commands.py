"""
Command surface invoked by the editor frontend.

Arguments and results are plain strings / numbers so they can cross a
JSON bridge unchanged; binary payloads travel as base64. Failures raise
StoreError subclasses carrying a user-presentable message.
"""
from __future__ import annotations

import base64 as b64
import binascii
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

from .config import AppConfig, load_config
from .errors import DecodeError, UnknownCommand
from .models.pixel_buffer import PixelBuffer
from .models.project import DocumentKind
from .repositories.filesystem_repository import FilesystemRepository
from .services.document_service import DocumentService
from .services.image_service import ImageService
from .services.recent_projects_service import RecentProjectsService
from .services.texture_service import TextureService

logger = logging.getLogger(__name__)


def _b64decode(payload: str) -> bytes:
    try:
        return b64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Failed to decode base64: {exc}") from exc


def _b64encode(data: bytes) -> str:
    return b64.b64encode(data).decode("ascii")


class Commands:
    """One method per command; `invoke` dispatches by name."""

    def __init__(self, config: AppConfig | None = None):
        self.config = config or load_config()
        self.filesystem = FilesystemRepository()
        self.documents = DocumentService(self.filesystem)
        self.recent = RecentProjectsService(self.config.app_data_dir, self.filesystem, self.documents)
        self.images = ImageService(self.filesystem)
        self.textures = TextureService(self.filesystem, self.config.splatmap_resolution)

        self._handlers: Dict[str, Callable[..., Any]] = {
            name: getattr(self, name)
            for name in (
                "open_project",
                "create_project",
                "is_valid_project",
                "rename_project",
                "read_project_metadata",
                "read_project_map",
                "read_project_settings",
                "save_project_metadata",
                "save_project_map",
                "save_project_settings",
                "list_recent_projects",
                "add_recent_project",
                "remove_recent_project",
                "read_text_file",
                "write_text_file",
                "read_binary_file_base64",
                "write_binary_file_base64",
                "read_png_rgba",
                "write_png_rgba",
                "ensure_splat_map",
            )
        }

    @property
    def names(self) -> List[str]:
        return sorted(self._handlers)

    def invoke(self, name: str, **kwargs: Any) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownCommand(name)
        logger.debug("invoke %s(%s)", name, ", ".join(sorted(kwargs)))
        return handler(**kwargs)

    # ─── Projects ─────────────────────────────────────────────────────
    def open_project(self, project_path: str) -> str:
        self.documents.open_project(project_path)
        return project_path

    def create_project(self, project_path: str, metadata: str) -> None:
        self.documents.create_project(project_path, metadata)

    def is_valid_project(self, project_path: str) -> bool:
        return self.documents.is_valid_project(project_path)

    def rename_project(self, old_path: str, new_name: str) -> str:
        return str(self.documents.rename_project(old_path, new_name))

    def read_project_metadata(self, project_path: str) -> str:
        return self.documents.read_document(project_path, DocumentKind.METADATA)

    def read_project_map(self, project_path: str) -> str:
        return self.documents.read_document(project_path, DocumentKind.MAP)

    def read_project_settings(self, project_path: str) -> str:
        return self.documents.read_document(project_path, DocumentKind.SETTINGS)

    def save_project_metadata(self, project_path: str, data: str) -> None:
        self.documents.write_document(project_path, DocumentKind.METADATA, data)

    def save_project_map(self, project_path: str, data: str) -> None:
        self.documents.write_document(project_path, DocumentKind.MAP, data)

    def save_project_settings(self, project_path: str, data: str) -> None:
        self.documents.write_document(project_path, DocumentKind.SETTINGS, data)

    # ─── Recent projects ──────────────────────────────────────────────
    def list_recent_projects(self) -> List[str]:
        return self.recent.list()

    def add_recent_project(self, project_path: str) -> None:
        self.recent.touch(project_path)

    def remove_recent_project(self, project_path: str) -> None:
        self.recent.remove(project_path)

    # ─── Generic files ────────────────────────────────────────────────
    def read_text_file(self, path: str) -> str:
        return self.filesystem.read_text(path)

    def write_text_file(self, path: str, content: str) -> None:
        self.filesystem.write_text(path, content, create_parent=True)

    def read_binary_file_base64(self, path: str) -> str:
        return _b64encode(self.filesystem.read_bytes(path))

    def write_binary_file_base64(self, path: str, base64: str) -> None:
        self.filesystem.write_bytes(path, _b64decode(base64), create_parent=True)

    # ─── RGBA images ──────────────────────────────────────────────────
    def read_png_rgba(self, path: str) -> Tuple[str, int, int]:
        """Returns (base64 RGBA pixels, width, height)."""
        buffer = self.images.load(path)
        return _b64encode(buffer.pixels), buffer.width, buffer.height

    def write_png_rgba(self, path: str, base64_pixels: str, width: int, height: int) -> None:
        buffer = PixelBuffer(width=int(width), height=int(height), pixels=_b64decode(base64_pixels))
        self.images.save(Path(path), buffer)

    # ─── Splat maps ───────────────────────────────────────────────────
    def ensure_splat_map(self, project_path: str, splat_map_index: int = 0) -> bool:
        """Write a default splat map (configured resolution) unless a readable one exists."""
        return self.textures.ensure_splat_map(project_path, int(splat_map_index))
