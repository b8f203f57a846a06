"""Loaded icon theme: icon index plus references to inherited themes."""

from __future__ import annotations

import logging
import weakref
from pathlib import Path
from typing import Iterable, Sequence

from xdgicons.themes.constants import HICOLOR_THEME_NAME
from xdgicons.themes.index import IconIndex
from xdgicons.themes.models import SCALABLE, IconSource, ThemeManifest

logger = logging.getLogger(__name__)


def normalize_inherits(names: Iterable[str], theme_name: str) -> list[str]:
    """Return the inheritance order of a system theme.

    Duplicates and self references are dropped and hicolor is moved (or
    appended) to the end, exactly once.
    """
    ordered: list[str] = []
    for name in names:
        if name in (theme_name, HICOLOR_THEME_NAME) or name in ordered:
            continue
        ordered.append(name)
    ordered.append(HICOLOR_THEME_NAME)
    return ordered


class Theme:
    """One icon theme.

    Parents are held as weak references; the ThemeRegistry owns them.
    """

    def __init__(
        self,
        name: str,
        manifest: ThemeManifest,
        root_dir: Path,
        *,
        is_system_theme: bool,
        inherits: Sequence[Theme] = (),
    ) -> None:
        self._name = name
        self._manifest = manifest
        self._root_dir = root_dir
        self._is_system_theme = is_system_theme
        self._index = IconIndex()
        self._inherits = [weakref.ref(theme) for theme in inherits]

    def __repr__(self) -> str:
        kind = "system" if self._is_system_theme else "application"
        return f"<Theme {self._name!r} ({kind}, {len(self._index)} icons)>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def display_name(self) -> str:
        return self._manifest.name

    @property
    def manifest(self) -> ThemeManifest:
        return self._manifest

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    @property
    def is_system_theme(self) -> bool:
        return self._is_system_theme

    @property
    def is_hicolor(self) -> bool:
        return self._is_system_theme and self._name == HICOLOR_THEME_NAME

    @property
    def index(self) -> IconIndex:
        return self._index

    def inherited_themes(self) -> list[Theme]:
        themes: list[Theme] = []
        for ref in self._inherits:
            theme = ref()
            if theme is not None:
                themes.append(theme)
        return themes

    def inherited_names(self) -> list[str]:
        return [theme.name for theme in self.inherited_themes()]

    def index_directories(self) -> int:
        """Scan every manifest directory into the icon index."""
        total = 0
        for spec in self._manifest.directories:
            total += self._index.scan_directory(self._root_dir / spec.path, spec.size)
        logger.info("Theme %r indexed %d icon files in %d directories",
                    self._name, total, len(self._manifest.directories))
        return total

    def has_icon(self, icon_name: str) -> bool:
        return icon_name in self._index

    def find_local(self, icon_name: str, size: int) -> IconSource | None:
        """Choose this theme's own file for icon_name at size.

        An exact size wins, then the largest concrete size. A scalable file
        is only chosen when the icon has no concrete size at all.
        """
        entry = self._index.get(icon_name)
        if entry is None:
            return None

        path = entry.sizes.get(size)
        if path is not None:
            return IconSource(path=path, size_class=size, theme_name=self._name)

        concrete = entry.concrete_sizes()
        if concrete:
            largest = concrete[-1]
            return IconSource(path=entry.sizes[largest], size_class=largest, theme_name=self._name)

        if entry.has_scalable:
            return IconSource(path=entry.sizes[SCALABLE], size_class=SCALABLE, theme_name=self._name)
        return None
