from __future__ import annotations

import logging
import os
from typing import List, Union

from ..models.project import MAX_RECENT_PROJECTS
from ..repositories.filesystem_repository import FilesystemRepository
from ..repositories.recent_projects_repository import RecentProjectsRepository
from .document_service import DocumentService

logger = logging.getLogger(__name__)

ProjectRef = Union[str, os.PathLike]


class RecentProjectsService:
    """
    Most-recent-first list of project paths, at most MAX_RECENT_PROJECTS long.

    Nothing is cached: every call re-reads recent_projects.json, and every
    mutation rewrites it completely.
    """

    def __init__(self, app_data_dir: Union[str, os.PathLike],
                 filesystem: FilesystemRepository | None = None,
                 document_service: DocumentService | None = None):
        filesystem = filesystem or FilesystemRepository()
        self.repository = RecentProjectsRepository(app_data_dir, filesystem)
        self.document_service = document_service or DocumentService(filesystem)

    def list(self) -> List[str]:
        """
        Stored paths that are still valid projects, in stored order.
        Stale entries are filtered out here but only dropped from disk by the next mutation.
        """
        return [p for p in self.repository.load() if self.document_service.is_valid_project(p)]

    def touch(self, ref: ProjectRef) -> None:
        """Move ref to the front (inserting it if new) and keep the newest entries only."""
        ref = os.fspath(ref)
        paths = [p for p in self.repository.load() if p != ref]
        paths.insert(0, ref)
        dropped = paths[MAX_RECENT_PROJECTS:]
        if dropped:
            logger.debug("Dropping %d old recent project(s): %s", len(dropped), dropped)
        self.repository.save(paths[:MAX_RECENT_PROJECTS])

    def remove(self, ref: ProjectRef) -> None:
        if not self.repository.exists():
            return
        ref = os.fspath(ref)
        paths = [p for p in self.repository.load() if p != ref]
        self.repository.save(paths)
