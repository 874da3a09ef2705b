"""openfps-store CLI tests."""

from __future__ import annotations

import json

import pytest

from openfps_store.cli.manage import main
from openfps_store.config import load_config
from openfps_store.models.project import RECENT_PROJECTS_FILE
from openfps_store.services import pixel_codec


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, app_data_dir):
    monkeypatch.setenv("OPENFPS_APP_DATA_DIR", str(app_data_dir))
    monkeypatch.setenv("OPENFPS_LOG_LEVEL", "warning")
    monkeypatch.setenv("OPENFPS_SPLATMAP_RESOLUTION", "256")


def test_load_config_reads_environment(app_data_dir):
    config = load_config()

    assert config.app_data_dir == app_data_dir
    assert config.log_level == "WARNING"
    assert config.splatmap_resolution == 256


def test_project_create_and_recent(tmp_path, app_data_dir, capsys):
    root = tmp_path / "island"

    assert main(["project", "create", str(root)]) == 0
    assert json.loads((root / "project.json").read_text(encoding="utf-8"))["name"] == "island"

    assert main(["recent", "add", str(root)]) == 0
    capsys.readouterr()
    assert main(["recent", "list"]) == 0
    assert capsys.readouterr().out.split() == [str(root.resolve())]

    assert main(["recent", "remove", str(root)]) == 0
    assert json.loads((app_data_dir / RECENT_PROJECTS_FILE).read_text(encoding="utf-8")) == []


def test_png_info_and_normalize(tmp_path, make_image_bytes, capsys):
    src = tmp_path / "height.png"
    src.write_bytes(make_image_bytes("L", (3, 2), bytes([1, 2, 3, 4, 5, 6])))
    dst = tmp_path / "out" / "height_rgba.png"

    assert main(["png", "info", str(src)]) == 0
    assert "3x2 L" in capsys.readouterr().out

    assert main(["png", "normalize", str(src), str(dst)]) == 0
    capsys.readouterr()
    assert main(["png", "info", str(dst)]) == 0
    assert "3x2 RGBA" in capsys.readouterr().out


def test_errors_exit_with_status_one(tmp_path, capsys):
    assert main(["project", "rename", "/", "x"]) == 1
    assert main(["png", "info", str(tmp_path / "missing.png")]) == 1
    assert "missing.png" in capsys.readouterr().err


def test_project_splatmap_uses_env_resolution(tmp_path, capsys):
    root = tmp_path / "island"
    assert main(["project", "create", str(root)]) == 0

    assert main(["project", "splatmap", str(root)]) == 0
    assert "Wrote default splatmap.png" in capsys.readouterr().out
    assert pixel_codec.decode((root / "splatmap.png").read_bytes()).width == 256

    assert main(["project", "splatmap", str(root), "--index", "2", "--resolution", "8"]) == 0
    assert pixel_codec.decode((root / "splatmap_2.png").read_bytes()).height == 8

    assert main(["project", "splatmap", str(root)]) == 0
    assert "Kept existing splatmap.png" in capsys.readouterr().out
