"""Icon theme framework models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union

from xdgicons.themes.constants import RASTER_EXTENSIONS


class _Scalable(Enum):
    SCALABLE = "scalable"

    def __repr__(self) -> str:
        return "SCALABLE"


SCALABLE = _Scalable.SCALABLE

# A concrete pixel size or the SCALABLE sentinel.
SizeClass = Union[int, _Scalable]


@dataclass(frozen=True, slots=True)
class DirectorySpec:
    """One manifest subdirectory and the size class of the icons it holds."""

    path: str
    size: SizeClass

    @property
    def is_scalable(self) -> bool:
        return self.size is SCALABLE


@dataclass(frozen=True, slots=True)
class ThemeManifest:
    """Theme metadata parsed from index.theme."""

    name: str
    inherits: tuple[str, ...]
    directories: tuple[DirectorySpec, ...]
    comment: str = ""
    warnings: tuple[str, ...] = ()


@dataclass(slots=True)
class IconEntry:
    """All known files of one logical icon, keyed by size class.

    Symlinked icons share a single entry object with their target.
    """

    name: str
    sizes: dict[SizeClass, Path] = field(default_factory=dict)

    def concrete_sizes(self) -> list[int]:
        return sorted(size for size in self.sizes if size is not SCALABLE)

    @property
    def has_scalable(self) -> bool:
        return SCALABLE in self.sizes


@dataclass(frozen=True, slots=True)
class IconSource:
    """A chosen icon file, before decoding."""

    path: Path
    size_class: SizeClass
    theme_name: str

    @property
    def is_renderable(self) -> bool:
        return self.size_class is not SCALABLE and self.path.suffix.lower() in RASTER_EXTENSIONS
