"""Icon lookup façade: system theme first, bundled application theme second."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage

from xdgicons.errors import ErrorCode, IconThemeError, ThemeNotFoundError
from xdgicons.themes.constants import DEFAULT_THEME, FALLBACK_THEME_NAME
from xdgicons.themes.desktop import ThemeNameProvider, desktop_icon_theme_name
from xdgicons.themes.discovery import system_supports_themes
from xdgicons.themes.models import IconSource
from xdgicons.themes.session import IconThemeSession
from xdgicons.themes.theme import Theme

logger = logging.getLogger(__name__)


class IconManager(QObject):
    """Resolve icon names against the system theme and the bundled theme.

    Pass ``DEFAULT_THEME`` as the system theme name to use the theme the
    desktop is configured with.
    """

    system_theme_changed = Signal(str)

    def __init__(
        self,
        application_manifest: str | Path | None,
        system_theme_name: str | None = None,
        *,
        session: IconThemeSession | None = None,
        theme_name_provider: ThemeNameProvider | None = None,
        supports_themes: bool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = session if session is not None else IconThemeSession()
        self._theme_name_provider = (
            theme_name_provider if theme_name_provider is not None else desktop_icon_theme_name
        )
        self._supports_themes = (
            system_supports_themes() if supports_themes is None else supports_themes
        )
        self._system_theme: Theme | None = None
        self._application_theme: Theme | None = None

        if system_theme_name is not None:
            if self._supports_themes:
                self.load_system_theme(system_theme_name)
            else:
                logger.info("System does not support icon themes; ignoring %r", system_theme_name)

        if application_manifest is not None:
            self._application_theme = self._session.application_theme(Path(application_manifest))

    @property
    def session(self) -> IconThemeSession:
        return self._session

    @property
    def system_theme(self) -> Theme | None:
        return self._system_theme

    @property
    def system_theme_name(self) -> str:
        theme = self._system_theme
        return theme.name if theme is not None else ""

    @property
    def application_theme(self) -> Theme | None:
        return self._application_theme

    @property
    def application_theme_name(self) -> str:
        theme = self._application_theme
        return theme.name if theme is not None else ""

    def load_system_theme(self, theme_name: str) -> bool:
        """Load theme_name as the system theme.

        Returns True if the active theme changed. On error the previous
        theme stays active. Raises IconThemeError with THEMES_UNSUPPORTED on
        systems without icon theme support.
        """
        if not self._supports_themes:
            raise IconThemeError(ErrorCode.THEMES_UNSUPPORTED, details={"theme": theme_name})
        theme = self._resolve_system_theme(theme_name)
        if theme is self._system_theme:
            return False
        self._system_theme = theme
        logger.info("Loaded system icon theme %r", theme.name)
        self.system_theme_changed.emit(theme.name)
        return True

    def get_icon(self, name: str, size: int) -> QImage | None:
        """Return the icon rendered at size, or None if no theme has it."""
        _check_size(size)
        system_theme = self._system_theme
        image: QImage | None = None
        if system_theme is not None:
            image = self._session.lookup(system_theme, name, size)
        if image is None and self._application_theme is not None:
            image = self._session.lookup(self._application_theme, name, size)
        return image

    def icon_source(self, name: str, size: int) -> IconSource | None:
        """Return the file get_icon would use, including scalable sources."""
        _check_size(size)
        system_theme = self._system_theme
        source: IconSource | None = None
        if system_theme is not None:
            source = self._session.find_source(system_theme, name, size)
        if source is None and self._application_theme is not None:
            source = self._session.find_source(self._application_theme, name, size)
        return source

    def _resolve_system_theme(self, theme_name: str) -> Theme:
        if theme_name != DEFAULT_THEME:
            return self._session.system_theme(theme_name)

        candidates = [self._configured_theme_name(), DEFAULT_THEME, FALLBACK_THEME_NAME]
        seen: set[str] = set()
        last_error: ThemeNotFoundError | None = None
        for candidate in candidates:
            if not candidate or candidate in seen:
                continue
            seen.add(candidate)
            try:
                return self._session.system_theme(candidate)
            except ThemeNotFoundError as exc:
                logger.info("Default icon theme candidate %r is not installed", candidate)
                last_error = exc
        raise ThemeNotFoundError(theme_name=FALLBACK_THEME_NAME) from last_error

    def _configured_theme_name(self) -> str | None:
        try:
            return self._theme_name_provider()
        except Exception as exc:  # pragma: no cover
            logger.info("Could not determine the desktop icon theme: %s", exc)
            return None


def _check_size(size: int) -> None:
    if size <= 0:
        raise ValueError(f"Icon size must be positive, got {size}")
