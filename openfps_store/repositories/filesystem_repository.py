from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Union

from ..errors import DecodeError, IOFailure, NotFound

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class FilesystemRepository:
    """
    Whole-file access to the local filesystem.
    Every OSError leaves this class as IOFailure (or NotFound for missing files).
    """

    @staticmethod
    def exists(path: PathLike) -> bool:
        return Path(path).exists()

    @staticmethod
    def is_dir(path: PathLike) -> bool:
        return Path(path).is_dir()

    @staticmethod
    def create_dir_all(path: PathLike) -> None:
        path = Path(path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure("create directory", path, exc) from exc

    @staticmethod
    def read_bytes(path: PathLike) -> bytes:
        path = Path(path)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFound(f"File not found: {path}") from exc
        except OSError as exc:
            raise IOFailure("read file", path, exc) from exc

    def read_text(self, path: PathLike) -> str:
        """UTF-8 text of the file; content that is not UTF-8 raises DecodeError."""
        data = self.read_bytes(path)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"File is not valid UTF-8 text: {path} ({exc})") from exc

    def write_bytes(self, path: PathLike, data: bytes, *, create_parent: bool = False) -> None:
        path = Path(path)
        if create_parent:
            self.create_dir_all(path.parent)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise IOFailure("write file", path, exc) from exc
        logger.debug("Wrote %d bytes to %s", len(data), path)

    def write_text(self, path: PathLike, content: str, *, create_parent: bool = False) -> None:
        path = Path(path)
        if create_parent:
            self.create_dir_all(path.parent)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise IOFailure("write file", path, exc) from exc
        logger.debug("Wrote %d chars to %s", len(content), path)

    @staticmethod
    def rename(src: PathLike, dst: PathLike) -> None:
        try:
            os.rename(src, dst)
        except OSError as exc:
            raise IOFailure("rename", f"{src} -> {dst}", exc) from exc

    @staticmethod
    def remove_file(path: PathLike) -> None:
        path = Path(path)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise NotFound(f"File not found: {path}") from exc
        except OSError as exc:
            raise IOFailure("remove file", path, exc) from exc

    @staticmethod
    def list_dir(path: PathLike) -> List[Path]:
        path = Path(path)
        try:
            return sorted(path.iterdir())
        except FileNotFoundError as exc:
            raise NotFound(f"Directory not found: {path}") from exc
        except OSError as exc:
            raise IOFailure("list directory", path, exc) from exc
