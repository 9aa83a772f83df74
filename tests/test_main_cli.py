import os

import pytest

pytest.importorskip("PySide6")

from app.main import build_config, parse_args  # noqa: E402


def test_cli_overrides_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LEVERLOG_HOME", str(tmp_path / "home"))
    cfg = build_config(parse_args(["--store", str(tmp_path / "x.json"), "--log-level", "warning"]))
    assert cfg.store_path == os.path.abspath(str(tmp_path / "x.json"))
    assert cfg.log_level == "WARNING"


def test_cli_defaults_come_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LEVERLOG_HOME", str(tmp_path))
    monkeypatch.delenv("LEVERLOG_LOG_LEVEL", raising=False)
    cfg = build_config(parse_args([]))
    assert cfg.store_path.startswith(str(tmp_path))
    assert cfg.log_level == "INFO"


def test_store_flag_does_not_create_default_folder(monkeypatch, tmp_path):
    monkeypatch.delenv("LEVERLOG_HOME", raising=False)
    monkeypatch.delenv("APPIMAGE", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    cfg = build_config(parse_args(["--store", str(tmp_path / "x.json")]))
    assert cfg.store_path == os.path.abspath(str(tmp_path / "x.json"))
    assert not (tmp_path / "home").exists()
