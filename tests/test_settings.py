"""Tests for xdgicons.config.settings."""

from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from xdgicons.config.settings import AppSettings
from xdgicons.runtime_paths import bundled_theme_manifest


@pytest.fixture
def settings(tmp_path):
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(qs)


def test_defaults(settings):
    assert settings.system_theme_name == "default"
    assert settings.application_theme_path == bundled_theme_manifest()
    assert settings.extra_search_dirs == []
    assert settings.log_level == "INFO"


def test_system_theme_name_is_cleaned(settings):
    settings.system_theme_name = "  Papirus "
    assert settings.system_theme_name == "Papirus"
    settings.system_theme_name = "   "
    assert settings.system_theme_name == "default"


def test_application_theme_path_round_trip(settings, tmp_path):
    target = tmp_path / "bundled" / "index.theme"
    settings.application_theme_path = target
    assert settings.application_theme_path == target


def test_extra_search_dirs(settings, tmp_path):
    settings.extra_search_dirs = [tmp_path / "a", tmp_path / "b"]
    assert settings.extra_search_dirs == [tmp_path / "a", tmp_path / "b"]
    settings.extra_search_dirs = [tmp_path / "only"]
    assert settings.extra_search_dirs == [tmp_path / "only"]


def test_log_level_validation(settings):
    settings.log_level = "debug"
    assert settings.log_level == "DEBUG"
    assert settings.log_level_number == 10
    settings.log_level = "chatty"
    assert settings.log_level == "INFO"


def test_app_data_dir_follows_xdg_state_home(settings, tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    assert settings.app_data_dir == tmp_path / "state" / "xdgicons"
    assert settings.app_data_dir.is_dir()
