"""Tests for xdgicons.themes.cache."""

from pathlib import Path

from PySide6.QtGui import QImage

from xdgicons.themes.cache import CachedIcon, IconCache
from xdgicons.themes.models import ThemeManifest
from xdgicons.themes.theme import Theme


def _theme(name: str, *, is_system_theme: bool = True) -> Theme:
    manifest = ThemeManifest(name=name, inherits=(), directories=())
    return Theme(name, manifest, Path("/nonexistent") / name, is_system_theme=is_system_theme)


def _icon(theme: str = "hicolor") -> CachedIcon:
    return CachedIcon(image=QImage(8, 8, QImage.Format.Format_ARGB32), source_theme=theme)


def test_put_and_get_hit():
    cache = IconCache()
    theme = _theme("hicolor")
    icon = _icon()

    assert cache.put(theme, "edit-copy", 16, icon) is icon
    assert cache.get(theme, "edit-copy", 16) is icon
    assert cache.contains(theme, "edit-copy", 16)
    assert len(cache) == 1


def test_get_miss_for_other_size_or_name():
    cache = IconCache()
    theme = _theme("hicolor")
    cache.put(theme, "edit-copy", 16, _icon())

    assert cache.get(theme, "edit-copy", 32) is None
    assert cache.get(theme, "edit-paste", 16) is None


def test_put_keeps_first_entry():
    cache = IconCache()
    theme = _theme("hicolor")
    first = _icon()
    second = _icon()

    cache.put(theme, "edit-copy", 16, first)
    assert cache.put(theme, "edit-copy", 16, second) is first
    assert cache.get(theme, "edit-copy", 16) is first


def test_application_and_system_theme_with_same_name_do_not_collide():
    cache = IconCache()
    system = _theme("shared")
    bundled = _theme("shared", is_system_theme=False)
    cache.put(system, "edit-copy", 16, _icon("shared"))

    assert cache.get(bundled, "edit-copy", 16) is None


def test_invalidate_theme_and_clear():
    cache = IconCache()
    a = _theme("a")
    b = _theme("b")
    cache.put(a, "x", 16, _icon("a"))
    cache.put(a, "y", 16, _icon("a"))
    cache.put(b, "x", 16, _icon("b"))

    cache.invalidate_theme(a)
    assert cache.get(a, "x", 16) is None
    assert cache.get(b, "x", 16) is not None

    cache.clear()
    assert len(cache) == 0
