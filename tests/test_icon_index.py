"""Tests for xdgicons.themes.index."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from conftest import write_png
from xdgicons.themes.index import IconIndex, icon_name_for
from xdgicons.themes.models import SCALABLE


@pytest.fixture
def icon_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "16x16"
    write_png(directory / "document-open.png", 16)
    write_png(directory / "edit-copy.png", 16)
    (directory / "README.txt").write_text("not an icon", encoding="utf-8")
    return directory


def test_icon_name_strips_last_extension_only() -> None:
    assert icon_name_for(Path("org.example.App.png")) == "org.example.App"
    assert icon_name_for(Path("edit-copy.svg")) == "edit-copy"


def test_scan_indexes_icon_files(icon_dir: Path) -> None:
    index = IconIndex()
    assert index.scan_directory(icon_dir, 16) == 2
    assert list(index) == ["document-open", "edit-copy"]
    entry = index.get("document-open")
    assert entry is not None
    assert entry.sizes == {16: icon_dir / "document-open.png"}


def test_scan_extends_entry_across_sizes(tmp_path: Path) -> None:
    write_png(tmp_path / "16x16" / "go-up.png", 16)
    write_png(tmp_path / "32x32" / "go-up.png", 32)
    svg = tmp_path / "scalable" / "go-up.svg"
    svg.parent.mkdir()
    svg.write_text("<svg/>", encoding="utf-8")

    index = IconIndex()
    index.scan_directory(tmp_path / "16x16", 16)
    index.scan_directory(tmp_path / "32x32", 32)
    index.scan_directory(tmp_path / "scalable", SCALABLE)

    entry = index.get("go-up")
    assert entry is not None
    assert entry.concrete_sizes() == [16, 32]
    assert entry.has_scalable


def test_symlink_alias_shares_target_entry(icon_dir: Path) -> None:
    os.symlink("document-open.png", icon_dir / "fileopen.png")
    index = IconIndex()
    index.scan_directory(icon_dir, 16)

    alias = index.get("fileopen")
    target = index.get("document-open")
    assert alias is target
    assert alias is not None and alias.sizes == {16: icon_dir / "document-open.png"}


def test_symlink_alias_sees_later_sizes(tmp_path: Path) -> None:
    small = tmp_path / "16x16"
    large = tmp_path / "32x32"
    write_png(small / "folder.png", 16)
    os.symlink("folder.png", small / "aaa-folder-alias.png")
    write_png(large / "folder.png", 32)

    index = IconIndex()
    index.scan_directory(small, 16)
    index.scan_directory(large, 32)

    alias = index.get("aaa-folder-alias")
    assert alias is not None
    assert alias.concrete_sizes() == [16, 32]
    assert alias.sizes == index.get("folder").sizes


def test_symlink_indexed_before_its_target(tmp_path: Path) -> None:
    directory = tmp_path / "22x22"
    write_png(directory / "zzz-real.png", 22)
    os.symlink("zzz-real.png", directory / "aaa-link.png")

    index = IconIndex()
    assert index.scan_directory(directory, 22) == 2
    assert index.get("aaa-link") is index.get("zzz-real")


def test_broken_symlink_skipped(icon_dir: Path) -> None:
    os.symlink("missing.png", icon_dir / "dangling.png")
    index = IconIndex()
    index.scan_directory(icon_dir, 16)
    assert "dangling" not in index


def test_missing_directory_is_skipped(tmp_path: Path) -> None:
    index = IconIndex()
    assert index.scan_directory(tmp_path / "nope", 16) == 0
    assert len(index) == 0


def test_file_instead_of_directory_is_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    not_a_dir = tmp_path / "48x48"
    not_a_dir.write_text("", encoding="utf-8")
    index = IconIndex()
    with caplog.at_level("WARNING", logger="xdgicons.themes.index"):
        assert index.scan_directory(not_a_dir, 48) == 0
    assert "not a directory" in caplog.text


def test_alias_over_existing_name_leaves_target_untouched(tmp_path: Path) -> None:
    small = tmp_path / "16x16"
    large = tmp_path / "32x32"
    write_png(small / "foo.png", 16)
    write_png(large / "bar.png", 32)
    os.symlink("bar.png", large / "foo.png")

    index = IconIndex()
    index.scan_directory(small, 16)
    index.scan_directory(large, 32)

    bar = index.get("bar")
    assert bar is not None
    assert bar.sizes == {32: large / "bar.png"}
    assert index.get("foo") is bar


def test_fixed_directory_indexes_raster_files_only(tmp_path: Path) -> None:
    fixed = tmp_path / "48x48"
    write_png(fixed / "baz.png", 48)
    (fixed / "qux.svg").write_text("<svg/>", encoding="utf-8")
    scalable = tmp_path / "scalable"
    scalable.mkdir()
    (scalable / "baz.svg").write_text("<svg/>", encoding="utf-8")
    write_png(scalable / "qux.png", 48)

    index = IconIndex()
    assert index.scan_directory(fixed, 48) == 1
    assert index.scan_directory(scalable, SCALABLE) == 1

    assert "qux" not in index
    baz = index.get("baz")
    assert baz is not None
    assert baz.sizes == {48: fixed / "baz.png", SCALABLE: scalable / "baz.svg"}
