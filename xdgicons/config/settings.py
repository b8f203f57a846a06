"""Application settings via QSettings."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from PySide6.QtCore import QSettings

from xdgicons.runtime_paths import bundled_theme_manifest
from xdgicons.themes.constants import DEFAULT_THEME

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class AppSettings:
    """Wraps QSettings for persistent icon lookup configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("xdgicons", "xdgicons")

    # -- themes --

    @property
    def system_theme_name(self) -> str:
        raw = self._qs.value("themes/system_theme", DEFAULT_THEME, type=str)
        value = (raw or "").strip()
        return value or DEFAULT_THEME

    @system_theme_name.setter
    def system_theme_name(self, value: str) -> None:
        cleaned = (value or "").strip() or DEFAULT_THEME
        self._qs.setValue("themes/system_theme", cleaned)

    @property
    def application_theme_path(self) -> Path:
        raw = self._qs.value("themes/application_theme", "", type=str)
        value = (raw or "").strip()
        return Path(value) if value else bundled_theme_manifest()

    @application_theme_path.setter
    def application_theme_path(self, value: str | Path) -> None:
        self._qs.setValue("themes/application_theme", str(value or "").strip())

    @property
    def extra_search_dirs(self) -> list[Path]:
        raw = self._qs.value("themes/extra_search_dirs", [])
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, (list, tuple)):
            return []
        return [Path(item) for item in raw if isinstance(item, str) and item.strip()]

    @extra_search_dirs.setter
    def extra_search_dirs(self, value: list[str | Path]) -> None:
        cleaned = [str(item) for item in value if str(item).strip()]
        self._qs.setValue("themes/extra_search_dirs", cleaned)

    # -- logging --

    @property
    def log_level(self) -> str:
        raw = self._qs.value("logging/level", "INFO", type=str)
        level = (raw or "").strip().upper()
        if level in _LOG_LEVELS:
            return level
        return "INFO"

    @log_level.setter
    def log_level(self, value: str) -> None:
        level = (value or "").strip().upper()
        if level not in _LOG_LEVELS:
            level = "INFO"
        self._qs.setValue("logging/level", level)

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    # -- helpers --

    def sync(self) -> None:
        self._qs.sync()

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state")
        return base / "xdgicons"
