"""Shared pytest fixtures."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Tuple

import numpy as np
import pytest
from PIL import Image as PILImage


@pytest.fixture
def make_image_bytes() -> Callable[..., bytes]:
    """Build an encoded image of the given Pillow mode from raw samples."""

    def _make(mode: str, size: Tuple[int, int], samples: bytes | None = None, fmt: str = "PNG") -> bytes:
        if samples is None:
            img = PILImage.new(mode, size)
        else:
            img = PILImage.frombytes(mode, size, samples)
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        return buf.getvalue()

    return _make


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def app_data_dir(tmp_path: Path) -> Path:
    return tmp_path / "app_data"


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[str], Path]:
    """Create a minimal valid project folder (just project.json) and return its path."""

    def _make(name: str) -> Path:
        root = tmp_path / "projects" / name
        root.mkdir(parents=True, exist_ok=True)
        (root / "project.json").write_text('{"name": "%s"}' % name, encoding="utf-8")
        return root

    return _make
