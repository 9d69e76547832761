# Settings resolution and persistence

import json

import pytest
import streamlit as st

from core.config import CONFIG_FILE_NAME, DEFAULT_API_URL, get_settings, persist_connection


def test_environment_wins_over_defaults(tmp_path):
    settings = get_settings()

    assert settings.api_base_url == "http://api.test"
    assert settings.data_dir == (tmp_path / "data").resolve()
    assert settings.data_dir.is_dir()


def test_defaults_without_environment(monkeypatch, tmp_path):
    monkeypatch.delenv("FLEX_ERP_API_URL")
    monkeypatch.delenv("FLEX_ERP_DATA_DIR")

    settings = get_settings()

    assert settings.api_base_url == DEFAULT_API_URL
    assert settings.data_dir == (tmp_path / "home" / ".flex_erp_admin").resolve()


def test_persisted_file_used_when_environment_is_unset(monkeypatch, tmp_path):
    monkeypatch.delenv("FLEX_ERP_API_URL")
    home = tmp_path / "home" / ".flex_erp_admin"
    home.mkdir(parents=True)
    (home / CONFIG_FILE_NAME).write_text(json.dumps({"api_base_url": "https://erp.example.com/"}), encoding="utf-8")

    assert get_settings().api_base_url == "https://erp.example.com"


def test_persist_connection_writes_both_folders(session_state, tmp_path):
    target = tmp_path / "elsewhere"

    persist_connection(" https://erp.example.com/ ", str(target))

    saved = json.loads((target / CONFIG_FILE_NAME).read_text(encoding="utf-8"))
    default = json.loads((tmp_path / "home" / ".flex_erp_admin" / CONFIG_FILE_NAME).read_text(encoding="utf-8"))
    assert saved == default == {"api_base_url": "https://erp.example.com", "data_dir": str(target.resolve())}
    assert session_state["flex_erp_api_url"] == "https://erp.example.com"


def test_persist_connection_rejects_bad_scheme(session_state, tmp_path):
    with pytest.raises(ValueError, match="http"):
        persist_connection("ftp://erp", str(tmp_path))

    assert not session_state


def test_connection_choice_stays_in_its_browser_session(monkeypatch, tmp_path):
    browser_a: dict = {}
    monkeypatch.setattr(st, "session_state", browser_a)
    persist_connection("https://erp.example.com", str(tmp_path / "a"))
    assert get_settings().api_base_url == "https://erp.example.com"

    monkeypatch.setattr(st, "session_state", {})
    assert get_settings().api_base_url == "http://api.test"
