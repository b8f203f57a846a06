"""Discovery of icon themes installed on the system."""

from __future__ import annotations

import logging
import os
import sys
import threading
from pathlib import Path
from typing import Iterable, Mapping, Protocol

from xdgicons.themes.constants import MANIFEST_FILENAME

logger = logging.getLogger(__name__)

_MAX_THEME_DIR_CANDIDATES = 4096
_THEME_PLATFORMS = ("linux", "freebsd", "openbsd", "netbsd", "dragonfly")


class ThemeDirectoryLocator(Protocol):
    def find_manifest_path(self, theme_name: str) -> Path | None: ...


def system_supports_themes(platform: str | None = None) -> bool:
    """Return True on systems that follow the freedesktop icon theme layout."""
    platform = (platform or sys.platform).lower()
    return platform.startswith(_THEME_PLATFORMS)


def default_search_dirs(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Icon theme roots in lookup order, most specific first."""
    env = os.environ if environ is None else environ
    home = env.get("HOME", "")
    candidates: list[Path] = []
    if home:
        candidates.append(Path(home) / ".icons")

    data_home = env.get("XDG_DATA_HOME", "")
    if data_home:
        candidates.append(Path(data_home) / "icons")
    elif home:
        candidates.append(Path(home) / ".local" / "share" / "icons")

    data_dirs = env.get("XDG_DATA_DIRS", "") or "/usr/local/share:/usr/share"
    for entry in data_dirs.split(os.pathsep):
        if entry.strip():
            candidates.append(Path(entry.strip()) / "icons")

    candidates.append(Path("/usr/local/share/icons"))
    candidates.append(Path("/usr/share/icons"))

    unique: list[Path] = []
    for path in candidates:
        if path not in unique:
            unique.append(path)
    return unique


class ThemeLocator:
    """Finds index.theme files under a list of icon roots.

    The first root providing a theme name wins.
    """

    def __init__(self, search_dirs: Iterable[str | Path] | None = None) -> None:
        if search_dirs is None:
            search_dirs = default_search_dirs()
        self._search_dirs = [Path(path) for path in search_dirs]
        self._themes: dict[str, Path] | None = None
        self._lock = threading.Lock()

    @property
    def search_dirs(self) -> list[Path]:
        return list(self._search_dirs)

    def refresh(self) -> None:
        with self._lock:
            self._themes = None

    def installed_themes(self) -> dict[str, Path]:
        with self._lock:
            if self._themes is None:
                self._themes = self._scan()
            return dict(self._themes)

    def find_manifest_path(self, theme_name: str) -> Path | None:
        return self.installed_themes().get(theme_name)

    def _scan(self) -> dict[str, Path]:
        found: dict[str, Path] = {}
        for root in self._search_dirs:
            for name, manifest_path in self._scan_root(root):
                found.setdefault(name, manifest_path)
        logger.info("Found %d installed icon themes", len(found))
        return found

    def _scan_root(self, root: Path) -> list[tuple[str, Path]]:
        if not root.exists():
            return []
        if not root.is_dir():
            logger.warning("Icon theme root %s is not a directory and cannot be opened", root)
            return []
        try:
            candidates = sorted(path for path in root.iterdir() if path.is_dir())
        except OSError as exc:
            logger.warning("Failed to list themes installed in %s: %s", root, exc)
            return []
        if len(candidates) > _MAX_THEME_DIR_CANDIDATES:
            logger.warning(
                "Theme directory limit exceeded in %s; only first %d folders were scanned",
                root,
                _MAX_THEME_DIR_CANDIDATES,
            )
            candidates = candidates[:_MAX_THEME_DIR_CANDIDATES]

        rows: list[tuple[str, Path]] = []
        for theme_dir in candidates:
            manifest_path = theme_dir / MANIFEST_FILENAME
            try:
                if manifest_path.is_file():
                    rows.append((theme_dir.name, manifest_path))
            except OSError as exc:
                logger.warning("Could not inspect theme directory %s: %s", theme_dir, exc)
        return rows
