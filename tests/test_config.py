"""Tests for the config module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from attune.config import (
    get_db_path,
    load_config,
    reset_db_path,
    save_config,
    set_classifier_url,
    set_db_path,
)
from attune.models import AppConfig


def _patch_config_paths(tmp_path: Path):
    """Return context managers that redirect config dir/file and db dir to tmp_path."""
    cfg_dir = tmp_path / "config"
    cfg_file = cfg_dir / "config.json"
    return (
        patch("attune.config._CONFIG_DIR", cfg_dir),
        patch("attune.config._CONFIG_FILE", cfg_file),
        patch("attune.config._DB_DIR", tmp_path / "data"),
    )


class TestLoadSaveConfig:
    def test_load_default_when_missing(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            config = load_config()
            assert config.db_path is None
            assert config.classifier_url is None

    def test_save_and_load_roundtrip(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            cfg = AppConfig(db_path="/tmp/test.db", classifier_url="http://localhost:5000/predict")
            path = save_config(cfg)
            assert path.exists()

            loaded = load_config()
            assert loaded.db_path == "/tmp/test.db"
            assert loaded.classifier_url == "http://localhost:5000/predict"

    def test_load_handles_corrupt_file(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            cfg_dir = tmp_path / "config"
            cfg_dir.mkdir(parents=True, exist_ok=True)
            (cfg_dir / "config.json").write_text("not valid json{{{")
            config = load_config()
            assert config.db_path is None

    def test_load_handles_invalid_values(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            cfg_dir = tmp_path / "config"
            cfg_dir.mkdir(parents=True, exist_ok=True)
            (cfg_dir / "config.json").write_text('{"classifier_timeout": -1}')
            config = load_config()
            assert config.classifier_timeout == 10.0


class TestDbPath:
    def test_default_path(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            path = get_db_path()
            assert path.name == "attune.db"
            assert path.parent == tmp_path / "data"

    def test_set_db_path(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            custom = tmp_path / "custom" / "my.db"
            cfg = set_db_path(str(custom))
            assert cfg.db_path == str(custom)
            assert get_db_path() == custom

    def test_set_db_path_directory(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            d = tmp_path / "somedir"
            d.mkdir()
            cfg = set_db_path(str(d))
            assert cfg.db_path is not None
            assert cfg.db_path.endswith("attune.db")

    def test_reset_db_path(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            set_db_path(str(tmp_path / "custom.db"))
            cfg = reset_db_path()
            assert cfg.db_path is None


class TestClassifierUrl:
    def test_set_and_clear(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            cfg = set_classifier_url("http://localhost:5000/predict", timeout=3)
            assert cfg.classifier_url == "http://localhost:5000/predict"
            assert load_config().classifier_timeout == 3

            cfg = set_classifier_url(None)
            assert cfg.classifier_url is None
            assert load_config().classifier_url is None
