from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Union

from ..models.project import RECENT_PROJECTS_FILE
from .filesystem_repository import FilesystemRepository

logger = logging.getLogger(__name__)


class RecentProjectsRepository:
    """
    JSON-array file of project paths under the application data directory.
    Reads are lenient: a missing or unparseable file is an empty list.
    """

    def __init__(self, app_data_dir: Union[str, os.PathLike],
                 filesystem: FilesystemRepository | None = None):
        self.app_data_dir = Path(app_data_dir)
        self.filesystem = filesystem or FilesystemRepository()

    @property
    def path(self) -> Path:
        return self.app_data_dir / RECENT_PROJECTS_FILE

    def exists(self) -> bool:
        return self.filesystem.exists(self.path)

    def load(self) -> List[str]:
        if not self.exists():
            return []

        content = self.filesystem.read_bytes(self.path)
        try:
            paths = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unparseable recent projects file %s: %s", self.path, exc)
            return []

        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            logger.warning("Ignoring recent projects file %s: expected a list of paths", self.path)
            return []
        return paths

    def save(self, paths: List[str]) -> None:
        """Replace the whole file with the given list."""
        self.filesystem.create_dir_all(self.app_data_dir)
        self.filesystem.write_text(self.path, json.dumps(paths, indent=2))
