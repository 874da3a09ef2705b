"""Configuration helpers for openfps_store."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_APP_DATA_DIR = Path.home() / ".local" / "share" / "openfps"
DEFAULT_SPLATMAP_RESOLUTION = 1024


@dataclass
class AppConfig:
    """Centralized application configuration."""

    app_data_dir: Path = DEFAULT_APP_DATA_DIR
    log_level: str = "INFO"
    splatmap_resolution: int = DEFAULT_SPLATMAP_RESOLUTION


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """Return an AppConfig built from the environment (and an optional extra .env file)."""
    if env_file:
        load_dotenv(env_file, override=True)

    app_data_dir = os.getenv("OPENFPS_APP_DATA_DIR")
    resolution = os.getenv("OPENFPS_SPLATMAP_RESOLUTION", str(DEFAULT_SPLATMAP_RESOLUTION))

    return AppConfig(
        app_data_dir=Path(app_data_dir).expanduser() if app_data_dir else DEFAULT_APP_DATA_DIR,
        log_level=os.getenv("OPENFPS_LOG_LEVEL", "INFO").strip().upper(),
        splatmap_resolution=int(resolution),
    )
