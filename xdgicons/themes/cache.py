"""In-memory cache of rendered icons."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from PySide6.QtGui import QImage

if TYPE_CHECKING:
    from xdgicons.themes.theme import Theme

# (theme name, is system theme, icon name, requested size)
CacheKey = tuple[str, bool, str, int]


@dataclass(frozen=True, slots=True)
class CachedIcon:
    """A rendered icon and the theme whose file it was rendered from."""

    image: QImage
    source_theme: str


class IconCache:
    """Caches rendered icons per (theme, icon name, requested size).

    Entries are only added; a theme's entries go away with invalidate_theme
    or clear.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, CachedIcon] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, theme: Theme, icon_name: str, size: int) -> CachedIcon | None:
        """Return the cached icon, or None on a miss."""
        with self._lock:
            return self._entries.get(self._key(theme, icon_name, size))

    def put(self, theme: Theme, icon_name: str, size: int, icon: CachedIcon) -> CachedIcon:
        """Insert icon unless an entry exists; return the stored entry."""
        with self._lock:
            return self._entries.setdefault(self._key(theme, icon_name, size), icon)

    def contains(self, theme: Theme, icon_name: str, size: int) -> bool:
        with self._lock:
            return self._key(theme, icon_name, size) in self._entries

    def invalidate_theme(self, theme: Theme) -> None:
        """Remove every entry of one theme."""
        with self._lock:
            stale = [
                key for key in self._entries
                if key[0] == theme.name and key[1] == theme.is_system_theme
            ]
            for key in stale:
                del self._entries[key]

    def clear(self) -> None:
        """Delete all cache entries."""
        with self._lock:
            self._entries.clear()

    @staticmethod
    def _key(theme: Theme, icon_name: str, size: int) -> CacheKey:
        return (theme.name, theme.is_system_theme, icon_name, int(size))
