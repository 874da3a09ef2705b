from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from ..errors import AlreadyExists, NoParent, NotFound
from ..models.project import ASSETS_DIR, DocumentKind, ProjectMetadata
from ..repositories.filesystem_repository import FilesystemRepository

logger = logging.getLogger(__name__)

ProjectRoot = Union[str, os.PathLike]


class DocumentService:
    """
    Reads and writes the JSON documents of a project folder:

        /project-name/
            project.json    metadata, its presence makes the folder a project
            map.json        terrain / map data
            settings.json   optional user settings
            assets/         created alongside the metadata

    Content is stored verbatim; callers own (de)serialization.
    """

    def __init__(self, filesystem: FilesystemRepository | None = None):
        self.filesystem = filesystem or FilesystemRepository()

    @staticmethod
    def document_path(root: ProjectRoot, kind: DocumentKind) -> Path:
        return Path(root) / kind.filename

    def is_valid_project(self, root: ProjectRoot) -> bool:
        return self.filesystem.exists(self.document_path(root, DocumentKind.METADATA))

    def open_project(self, root: ProjectRoot) -> Path:
        """Return the root if it is a project folder, raise NotFound otherwise."""
        if not self.is_valid_project(root):
            raise NotFound(f"Invalid project folder: {DocumentKind.METADATA.filename} not found in {root}")
        return Path(root)

    def read_document(self, root: ProjectRoot, kind: DocumentKind) -> str:
        """
        Args:
            root: project folder.
            kind: which document to read.

        Returns:
            The document text. A missing settings.json reads as "".

        Raises:
            NotFound: project.json or map.json does not exist.
        """
        path = self.document_path(root, kind)
        if not self.filesystem.exists(path):
            if kind.required:
                raise NotFound(f"{kind.filename} not found in {root}")
            return ""
        return self.filesystem.read_text(path)

    def write_document(self, root: ProjectRoot, kind: DocumentKind, content: str) -> None:
        root = Path(root)
        self.filesystem.create_dir_all(root)
        if kind is DocumentKind.METADATA:
            self.filesystem.create_dir_all(root / ASSETS_DIR)
        self.filesystem.write_text(self.document_path(root, kind), content)
        logger.debug("Saved %s in %s", kind.filename, root)

    def create_project(self, root: ProjectRoot, metadata: Union[str, ProjectMetadata]) -> None:
        """Create the project folder, its assets folder and project.json."""
        if isinstance(metadata, ProjectMetadata):
            metadata = metadata.to_json()
        self.write_document(root, DocumentKind.METADATA, metadata)
        logger.info("Created project at %s", root)

    def rename_project(self, root: ProjectRoot, new_name: str) -> Path:
        """
        Move the project folder to a sibling named new_name and return the new path.
        """
        root = Path(root)
        parent = root.parent
        if parent == root:
            raise NoParent(f"Cannot get parent directory of {root}")

        new_root = parent / new_name
        if self.filesystem.exists(new_root):
            raise AlreadyExists(f"Folder '{new_name}' already exists")

        self.filesystem.rename(root, new_root)
        logger.info("Renamed project %s -> %s", root, new_root)
        return new_root
