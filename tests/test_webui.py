# -*- coding: utf-8 -*-
"""Startup failures must stop the process before a socket is bound."""

from unittest.mock import patch

import pytest

import webui
from storefront.config import Config


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("SITE_ROOT", str(tmp_path))
    Config.reset_instance()
    yield
    Config.reset_instance()


def test_missing_templates_exit_with_error(monkeypatch):
    monkeypatch.setenv("FILE_PIPELINE_ENABLED", "false")
    with patch.object(webui, "WebServer") as server_cls:
        assert webui.main() == 1
    server_cls.assert_not_called()


def test_missing_pipeline_files_exit_with_error(monkeypatch, tmp_path):
    monkeypatch.setenv("FILE_PIPELINE_ENABLED", "true")
    (tmp_path / "txt").mkdir()
    with patch.object(webui, "WebServer") as server_cls:
        assert webui.main() == 1
    server_cls.assert_not_called()


def test_bad_port_exits_with_error(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    assert webui.main() == 1


def test_serves_with_shipped_assets(monkeypatch, project_root):
    monkeypatch.setenv("SITE_ROOT", str(project_root))
    monkeypatch.setenv("FILE_PIPELINE_ENABLED", "false")
    monkeypatch.setenv("PORT", "8123")
    with patch.object(webui, "WebServer") as server_cls:
        assert webui.main() == 0

    _, kwargs = server_cls.call_args
    assert kwargs == {"host": "127.0.0.1", "port": 8123}
    server_cls.return_value.run.assert_called_once_with()


def test_invalid_utf8_data_exits_with_error(monkeypatch, tmp_path, project_root):
    monkeypatch.setenv("FILE_PIPELINE_ENABLED", "false")
    templates = tmp_path / "templates"
    templates.mkdir()
    for template in (project_root / "templates").glob("*.html"):
        (templates / template.name).write_bytes(template.read_bytes())
    (tmp_path / "dev-data").mkdir()
    (tmp_path / "dev-data" / "data.json").write_bytes(b'[{"id": 0, "n": "\xff"}]')

    with patch.object(webui, "WebServer") as server_cls:
        assert webui.main() == 1
    server_cls.assert_not_called()


def test_invalid_utf8_pipeline_file_exits_with_error(monkeypatch, tmp_path):
    monkeypatch.setenv("FILE_PIPELINE_ENABLED", "true")
    txt_dir = tmp_path / "txt"
    txt_dir.mkdir()
    (txt_dir / "input.txt").write_bytes(b"\xff\xfe broken")
    (txt_dir / "append.txt").write_text("append", encoding="utf-8")

    with patch.object(webui, "WebServer") as server_cls:
        assert webui.main() == 1
    server_cls.assert_not_called()
