"""Locations of resources shipped inside the package."""

from __future__ import annotations

from pathlib import Path

from xdgicons.themes.constants import MANIFEST_FILENAME


def package_root() -> Path:
    """Return the directory of the installed `xdgicons` package."""
    return Path(__file__).resolve().parent


def bundled_theme_manifest() -> Path:
    """Resolve the bundled application theme's index.theme."""
    return package_root() / "icons" / MANIFEST_FILENAME
