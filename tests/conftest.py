"""Shared fixtures: icon theme trees built on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

import pytest
from PySide6.QtGui import QColor, QImage

from xdgicons.themes.discovery import ThemeLocator
from xdgicons.themes.raster import QtRasterizer
from xdgicons.themes.session import IconThemeSession


def write_png(path: Path, size: int, color: str = "#ff0000") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    image = QImage(size, size, QImage.Format.Format_ARGB32)
    image.fill(QColor(color))
    assert image.save(str(path), "PNG")
    return path


def write_theme(
    root: Path,
    name: str,
    *,
    inherits: Sequence[str] | None = None,
    sizes: Sequence[int] = (16, 32),
    scalable: bool = False,
    icons: Mapping[str, Sequence[int | str]] | None = None,
    color: str = "#ff0000",
) -> Path:
    """Write root/name/index.theme plus PNG (or SVG for "scalable") icons."""
    theme_dir = root / name
    theme_dir.mkdir(parents=True, exist_ok=True)
    directories = [f"{size}x{size}" for size in sizes]
    if scalable:
        directories.append("scalable")

    lines = ["[Icon Theme]", f"Name={name.title()}"]
    if inherits is not None:
        lines.append(f"Inherits={','.join(inherits)}")
    lines.append(f"Directories={','.join(directories)}")
    for size in sizes:
        lines += ["", f"[{size}x{size}]", f"Size={size}", "Type=Fixed"]
    if scalable:
        lines += ["", "[scalable]", "Size=48", "Type=Scalable"]
    (theme_dir / "index.theme").write_text("\n".join(lines) + "\n", encoding="utf-8")

    for icon_name, icon_sizes in (icons or {}).items():
        for size in icon_sizes:
            if size == "scalable":
                svg = theme_dir / "scalable" / f"{icon_name}.svg"
                svg.parent.mkdir(parents=True, exist_ok=True)
                svg.write_text("<svg xmlns='http://www.w3.org/2000/svg'/>", encoding="utf-8")
            else:
                write_png(theme_dir / f"{size}x{size}" / f"{icon_name}.png", int(size), color)
    return theme_dir / "index.theme"


class CountingRasterizer(QtRasterizer):
    """QtRasterizer that records the work it is asked to do."""

    def __init__(self) -> None:
        self.decodes = 0
        self.scales: list[int] = []

    def decode(self, data: bytes) -> QImage:
        self.decodes += 1
        return super().decode(data)

    def scale(self, image: QImage, size: int) -> QImage:
        self.scales.append(size)
        return super().scale(image, size)


@pytest.fixture
def icons_root(tmp_path: Path) -> Path:
    root = tmp_path / "icons"
    root.mkdir()
    return root


@pytest.fixture
def rasterizer() -> CountingRasterizer:
    return CountingRasterizer()


@pytest.fixture
def session(icons_root: Path, rasterizer: CountingRasterizer) -> IconThemeSession:
    return IconThemeSession(ThemeLocator([icons_root]), rasterizer)
