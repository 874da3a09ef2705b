from __future__ import annotations

import logging

LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'


def configure_logging(level: str | int = "INFO") -> None:
    """Centralized logging configuration; call once from an entry point."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt='%H:%M:%S'
    )
