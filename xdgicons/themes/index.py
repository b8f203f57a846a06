"""Per-theme index from icon name to icon files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from xdgicons.themes.constants import RASTER_EXTENSIONS, VECTOR_EXTENSIONS
from xdgicons.themes.models import SCALABLE, IconEntry, SizeClass

logger = logging.getLogger(__name__)

_MAX_LINK_DEPTH = 16


def icon_name_for(path: Path) -> str:
    """Return the icon name of a file: the file name without its extension."""
    return path.stem


def extensions_for(size: SizeClass) -> frozenset[str]:
    """Return the file extensions indexed in a directory of the given size class."""
    return VECTOR_EXTENSIONS if size is SCALABLE else RASTER_EXTENSIONS


class IconIndex:
    """Maps icon names to the files known for them at each size class."""

    def __init__(self) -> None:
        self._icons: dict[str, IconEntry] = {}

    def __contains__(self, icon_name: object) -> bool:
        return icon_name in self._icons

    def __len__(self) -> int:
        return len(self._icons)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._icons))

    def get(self, icon_name: str) -> IconEntry | None:
        return self._icons.get(icon_name)

    def add(self, icon_name: str, size: SizeClass, path: Path) -> IconEntry:
        """Register or extend the entry for an icon name."""
        entry = self._icons.get(icon_name)
        if entry is None:
            entry = IconEntry(name=icon_name)
            self._icons[icon_name] = entry
        entry.sizes[size] = path
        logger.debug("Icon %s of size %r was added from %s", icon_name, size, path)
        return entry

    def alias(self, alias_name: str, entry: IconEntry) -> IconEntry:
        """Make alias_name share an existing entry.

        Whatever alias_name pointed to before is replaced; the target entry is
        left unchanged.
        """
        self._icons[alias_name] = entry
        return entry

    def scan_directory(self, directory: Path, size: SizeClass) -> int:
        """Index the icon files directly inside directory.

        Unreadable directories are logged and skipped. Returns the number of
        files indexed.
        """
        if not directory.exists():
            logger.debug("Icon directory %s does not exist; skipping", directory)
            return 0
        if not directory.is_dir():
            logger.warning("Icon path %s is not a directory; skipping", directory)
            return 0
        extensions = extensions_for(size)
        try:
            candidates = sorted(
                path for path in directory.iterdir() if path.suffix.lower() in extensions
            )
        except OSError as exc:
            logger.warning("Failed to list icon directory %s: %s", directory, exc)
            return 0

        count = 0
        for path in candidates:
            if self._index_file(path, size, depth=0) is not None:
                count += 1
        return count

    def _index_file(self, path: Path, size: SizeClass, *, depth: int) -> IconEntry | None:
        icon_name = icon_name_for(path)
        if not path.is_symlink():
            if not path.is_file() or path.suffix.lower() not in extensions_for(size):
                return None
            return self.add(icon_name, size, path)

        if depth >= _MAX_LINK_DEPTH:
            logger.warning("Too many levels of icon symlinks at %s; skipping", path)
            return None
        try:
            target = Path(os.readlink(path))
        except OSError as exc:
            logger.warning("Cannot read icon symlink %s: %s", path, exc)
            return None
        if not target.is_absolute():
            target = path.parent / target
        if not target.exists():
            logger.debug("Icon symlink %s points to missing %s; skipping", path, target)
            return None

        target_name = icon_name_for(target)
        entry = self._icons.get(target_name)
        if entry is None or entry.sizes.get(size) is None:
            entry = self._index_file(target, size, depth=depth + 1)
            if entry is None:
                return None
        if target_name == icon_name:
            return entry
        return self.alias(icon_name, entry)
