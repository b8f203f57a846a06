"""Registry of constructed system themes."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from xdgicons.themes.theme import Theme

logger = logging.getLogger(__name__)


class ThemeRegistry:
    """Holds every system theme constructed in a session, keyed by name.

    Each name is constructed at most once. A name that is still being
    constructed when it is requested again is an inheritance cycle; the
    request returns None so the cycle is broken instead of recursed.
    """

    def __init__(self) -> None:
        self._themes: dict[str, Theme] = {}
        self._constructing: list[str] = []
        self._load_errors: list[str] = []
        self._lock = threading.RLock()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._themes

    def __len__(self) -> int:
        with self._lock:
            return len(self._themes)

    def get_theme(self, name: str) -> Theme | None:
        with self._lock:
            return self._themes.get(name)

    def list_themes(self) -> list[str]:
        with self._lock:
            return sorted(self._themes)

    def is_constructing(self, name: str) -> bool:
        with self._lock:
            return name in self._constructing

    def load_errors(self) -> list[str]:
        with self._lock:
            return list(self._load_errors)

    def record_error(self, message: str) -> None:
        with self._lock:
            self._load_errors.append(message)

    def get_or_build(self, name: str, build: Callable[[], Theme]) -> Theme | None:
        """Return the registered theme, constructing and registering it if absent.

        Exceptions from build propagate and leave nothing registered.
        """
        with self._lock:
            existing = self._themes.get(name)
            if existing is not None:
                return existing
            if name in self._constructing:
                chain = " -> ".join([*self._constructing, name])
                message = f"Inheritance cycle detected: {chain}"
                logger.warning(message)
                self._load_errors.append(message)
                return None

            self._constructing.append(name)
            try:
                theme = build()
            finally:
                self._constructing.remove(name)
            self._themes[name] = theme
            logger.debug("Registered theme %r", name)
            return theme
