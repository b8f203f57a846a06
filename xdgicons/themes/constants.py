"""Icon theme framework constants."""

from __future__ import annotations

HICOLOR_THEME_NAME = "hicolor"
DEFAULT_THEME = "default"
FALLBACK_THEME_NAME = HICOLOR_THEME_NAME

MANIFEST_FILENAME = "index.theme"
INFO_SECTION = "Icon Theme"

NAME_KEY = "Name"
COMMENT_KEY = "Comment"
INHERITS_KEY = "Inherits"
DIRECTORIES_KEY = "Directories"
TYPE_KEY = "Type"
SIZE_KEY = "Size"

TYPE_FIXED = "fixed"
TYPE_SCALABLE = "scalable"

RASTER_EXTENSIONS: frozenset[str] = frozenset({".png", ".xpm"})
VECTOR_EXTENSIONS: frozenset[str] = frozenset({".svg", ".svgz"})
