"""Theme construction and icon lookup for one resolution session."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtGui import QImage

from xdgicons.errors import MalformedManifestError, RasterError, ThemeNotFoundError
from xdgicons.themes.cache import CachedIcon, IconCache
from xdgicons.themes.constants import HICOLOR_THEME_NAME
from xdgicons.themes.discovery import ThemeDirectoryLocator, ThemeLocator
from xdgicons.themes.loader import load_manifest
from xdgicons.themes.models import IconSource
from xdgicons.themes.raster import QtRasterizer, Rasterizer
from xdgicons.themes.registry import ThemeRegistry
from xdgicons.themes.theme import Theme, normalize_inherits

logger = logging.getLogger(__name__)


class IconThemeSession:
    """Owns the theme registry and render cache shared by all lookups.

    A theme name is constructed once per session, no matter how many other
    themes inherit it.
    """

    def __init__(
        self,
        locator: ThemeDirectoryLocator | None = None,
        rasterizer: Rasterizer | None = None,
        *,
        registry: ThemeRegistry | None = None,
        cache: IconCache | None = None,
    ) -> None:
        self._locator = locator if locator is not None else ThemeLocator()
        self._rasterizer = rasterizer if rasterizer is not None else QtRasterizer()
        self._registry = registry if registry is not None else ThemeRegistry()
        self._cache = cache if cache is not None else IconCache()

    @property
    def locator(self) -> ThemeDirectoryLocator:
        return self._locator

    @property
    def registry(self) -> ThemeRegistry:
        return self._registry

    @property
    def cache(self) -> IconCache:
        return self._cache

    # -- construction --

    def system_theme(self, name: str) -> Theme:
        """Return the named system theme, constructing it and its ancestors on first use."""
        existing = self._registry.get_theme(name)
        if existing is not None:
            return existing
        manifest_path = self._locator.find_manifest_path(name)
        if manifest_path is None:
            raise ThemeNotFoundError(theme_name=name)
        theme = self._registry.get_or_build(
            name, lambda: self._build(manifest_path, is_system_theme=True)
        )
        if theme is None:
            raise ThemeNotFoundError(
                theme_name=name,
                message=f"Theme {name!r} is already being constructed.",
            )
        return theme

    def application_theme(self, manifest_path: Path) -> Theme:
        """Construct a bundled theme: no inheritance, not shared through the registry.

        The new theme replaces any earlier application theme of the same name,
        so icons cached for that one are dropped.
        """
        theme = self._build(Path(manifest_path), is_system_theme=False)
        self._cache.invalidate_theme(theme)
        return theme

    def _build(self, manifest_path: Path, *, is_system_theme: bool) -> Theme:
        manifest = load_manifest(manifest_path)
        name = manifest_path.parent.name

        parents: list[Theme] = []
        if is_system_theme and name != HICOLOR_THEME_NAME:
            for parent_name in normalize_inherits(manifest.inherits, name):
                logger.info("Theme %r inherits theme %r", name, parent_name)
                parent = self._inherit(name, parent_name)
                if parent is not None:
                    parents.append(parent)

        theme = Theme(
            name,
            manifest,
            manifest_path.parent,
            is_system_theme=is_system_theme,
            inherits=parents,
        )
        theme.index_directories()
        return theme

    def _inherit(self, child_name: str, parent_name: str) -> Theme | None:
        existing = self._registry.get_theme(parent_name)
        if existing is not None:
            return existing
        manifest_path = self._locator.find_manifest_path(parent_name)
        if manifest_path is None:
            message = f"Theme {child_name!r} inherits {parent_name!r}, which is not installed"
            logger.error(message)
            self._registry.record_error(message)
            return None
        try:
            return self._registry.get_or_build(
                parent_name, lambda: self._build(manifest_path, is_system_theme=True)
            )
        except MalformedManifestError as exc:
            message = f"Theme {child_name!r} failed to inherit malformed theme {parent_name!r}: {exc.message}"
            logger.error(message)
            self._registry.record_error(message)
            return None

    # -- lookup --

    def lookup(self, theme: Theme, icon_name: str, size: int) -> QImage | None:
        """Render icon_name at size from theme or its fallback chain.

        Returns None when no theme in the chain can produce the icon.
        """
        cached = self._lookup(theme, icon_name, size, query_hicolor=True)
        return cached.image if cached is not None else None

    def find_source(self, theme: Theme, icon_name: str, size: int) -> IconSource | None:
        """Return the file the fallback chain would use, scalable files included."""
        return self._find_source(theme, icon_name, size, query_hicolor=True)

    def _lookup(
        self, theme: Theme, icon_name: str, size: int, *, query_hicolor: bool
    ) -> CachedIcon | None:
        cached = self._cache.get(theme, icon_name, size)
        if cached is not None and (query_hicolor or not self._came_from_hicolor(theme, cached)):
            logger.debug("Loading cached icon %r of size %d from theme %r", icon_name, size, theme.name)
            return cached

        found: CachedIcon | None = None
        source = theme.find_local(icon_name, size)
        if source is not None:
            image = self._render(source, size)
            if image is not None:
                found = CachedIcon(image=image, source_theme=theme.name)

        if found is None:
            for parent in theme.inherited_themes():
                if parent.is_hicolor and not query_hicolor:
                    continue
                found = self._lookup(parent, icon_name, size, query_hicolor=False)
                if found is not None:
                    break

        if found is None:
            return None
        if cached is not None:
            return found
        return self._cache.put(theme, icon_name, size, found)

    def _find_source(
        self, theme: Theme, icon_name: str, size: int, *, query_hicolor: bool
    ) -> IconSource | None:
        source = theme.find_local(icon_name, size)
        if source is not None:
            return source
        for parent in theme.inherited_themes():
            if parent.is_hicolor and not query_hicolor:
                continue
            source = self._find_source(parent, icon_name, size, query_hicolor=False)
            if source is not None:
                return source
        return None

    @staticmethod
    def _came_from_hicolor(theme: Theme, cached: CachedIcon) -> bool:
        # Below the top level, hicolor results belong to the top-level caller.
        return cached.source_theme == HICOLOR_THEME_NAME and not theme.is_hicolor

    def _render(self, source: IconSource, size: int) -> QImage | None:
        if not source.is_renderable:
            logger.info(
                "Icon %s in theme %r is scalable; rendering is left to an external rasterizer",
                source.path,
                source.theme_name,
            )
            return None
        try:
            data = source.path.read_bytes()
        except OSError as exc:
            logger.error("Could not load icon from file %s: %s", source.path, exc)
            return None
        try:
            image = self._rasterizer.decode(data)
            if source.size_class != size:
                logger.info(
                    "Theme %r does not have %s in size %d, resizing from %s",
                    source.theme_name,
                    source.path.name,
                    size,
                    source.size_class,
                )
                image = self._rasterizer.scale(image, size)
        except RasterError as exc:
            logger.error("Could not render icon %s: %s", source.path, exc.message)
            return None
        return image
