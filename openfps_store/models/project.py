from __future__ import annotations

import json
import time
from dataclasses import dataclass, asdict
from enum import Enum

PROJECT_VERSION = 1
ASSETS_DIR = "assets"
RECENT_PROJECTS_FILE = "recent_projects.json"
MAX_RECENT_PROJECTS = 10


class DocumentKind(Enum):
    """JSON documents stored directly under a project root."""
    METADATA = "project.json"
    MAP = "map.json"
    SETTINGS = "settings.json"

    @property
    def filename(self) -> str:
        return self.value

    @property
    def required(self) -> bool:
        # settings are optional and read back as empty when absent
        return self is not DocumentKind.SETTINGS


@dataclass
class ProjectMetadata:
    """Contents of project.json. Timestamps are epoch milliseconds."""
    name: str
    created: int
    modified: int
    version: int = PROJECT_VERSION

    @classmethod
    def create(cls, name: str) -> "ProjectMetadata":
        now = int(time.time() * 1000)
        return cls(name=name, created=now, modified=now)

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "ProjectMetadata":
        data = json.loads(text)
        return cls(
            name=data["name"],
            created=int(data["created"]),
            modified=int(data["modified"]),
            version=int(data.get("version", PROJECT_VERSION)),
        )
