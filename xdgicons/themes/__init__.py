"""Freedesktop icon theme lookup exports."""

from xdgicons.themes.constants import DEFAULT_THEME, HICOLOR_THEME_NAME
from xdgicons.themes.discovery import ThemeLocator, system_supports_themes
from xdgicons.themes.loader import load_manifest, parse_manifest
from xdgicons.themes.models import SCALABLE, DirectorySpec, IconEntry, IconSource, ThemeManifest
from xdgicons.themes.registry import ThemeRegistry
from xdgicons.themes.service import IconManager
from xdgicons.themes.session import IconThemeSession
from xdgicons.themes.theme import Theme

__all__ = [
    "DEFAULT_THEME",
    "HICOLOR_THEME_NAME",
    "SCALABLE",
    "DirectorySpec",
    "IconEntry",
    "IconManager",
    "IconSource",
    "IconThemeSession",
    "Theme",
    "ThemeLocator",
    "ThemeManifest",
    "ThemeRegistry",
    "load_manifest",
    "parse_manifest",
    "system_supports_themes",
]
