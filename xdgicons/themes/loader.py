"""index.theme parsing and validation."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from xdgicons.errors import ErrorCode, MalformedManifestError
from xdgicons.themes.constants import (
    COMMENT_KEY,
    DIRECTORIES_KEY,
    INFO_SECTION,
    INHERITS_KEY,
    NAME_KEY,
    SIZE_KEY,
    TYPE_FIXED,
    TYPE_KEY,
    TYPE_SCALABLE,
)
from xdgicons.themes.models import SCALABLE, DirectorySpec, SizeClass, ThemeManifest

logger = logging.getLogger(__name__)

_MAX_MANIFEST_BYTES = 1024 * 1024


def load_manifest(manifest_path: Path) -> ThemeManifest:
    """Read and parse an index.theme file.

    The theme directory name stands in for a missing ``Name`` key.
    """
    text = _read_text_limited(manifest_path, max_bytes=_MAX_MANIFEST_BYTES)
    return parse_manifest(
        text,
        source=str(manifest_path),
        fallback_name=manifest_path.parent.name,
    )


def parse_manifest(text: str, *, source: str = "<string>", fallback_name: str = "") -> ThemeManifest:
    """Parse manifest text into a ThemeManifest.

    Raises MalformedManifestError when the ``[Icon Theme]`` section or its
    ``Directories`` key is missing, or when no listed directory is usable.
    Lower-case section and key variants are accepted with a warning.
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        comment_prefixes=("#", ";"),
    )
    parser.optionxform = str  # keep key case so lower-case variants can be reported
    try:
        parser.read_string(text, source=source)
    except configparser.Error as exc:
        raise MalformedManifestError(
            message=f"Cannot parse theme file {source}: {exc}",
            details={"source": source},
        ) from exc

    reader = _ManifestReader(parser, source)
    return reader.read(fallback_name)


class _ManifestReader:
    """Section and key lookups with a recoverable-warning channel."""

    def __init__(self, parser: configparser.ConfigParser, source: str) -> None:
        self._parser = parser
        self._source = source
        self._warnings: list[str] = []

    def read(self, fallback_name: str) -> ThemeManifest:
        info = self._section(INFO_SECTION)
        if info is None:
            raise MalformedManifestError(
                message=f"Section [{INFO_SECTION}] missing from file: {self._source}",
                details={"source": self._source},
            )

        name = self._key(info, NAME_KEY)
        if not name:
            name = fallback_name
            self._warn(
                f"section [{INFO_SECTION}] does not contain key {NAME_KEY!r}; "
                f"substituting with {fallback_name!r}"
            )

        directory_names = _split_list(self._key(info, DIRECTORIES_KEY))
        if not directory_names:
            raise MalformedManifestError(
                message=(
                    f"Section [{INFO_SECTION}] does not contain a proper "
                    f"{DIRECTORIES_KEY} key: {self._source}"
                ),
                details={"source": self._source},
            )

        directories: list[DirectorySpec] = []
        for directory in directory_names:
            spec = self._directory(directory)
            if spec is not None:
                directories.append(spec)
        if not directories:
            raise MalformedManifestError(
                message=f"No usable icon directories declared in {self._source}",
                details={"source": self._source, "declared": ",".join(directory_names)},
            )

        return ThemeManifest(
            name=name,
            inherits=tuple(_split_list(self._key(info, INHERITS_KEY))),
            directories=tuple(directories),
            comment=self._key(info, COMMENT_KEY) or "",
            warnings=tuple(self._warnings),
        )

    def _directory(self, directory: str) -> DirectorySpec | None:
        section = self._section(directory)
        if section is None:
            self._warn(f"directory {directory!r} has no section; skipping")
            return None

        raw_type = (self._key(section, TYPE_KEY) or "").strip().lower()
        size: SizeClass
        if raw_type == TYPE_FIXED:
            raw_size = self._key(section, SIZE_KEY)
            try:
                size = int(raw_size or "")
            except ValueError:
                self._warn(f"directory {directory!r} has invalid {SIZE_KEY} {raw_size!r}; skipping")
                return None
            if size <= 0:
                self._warn(f"directory {directory!r} has non-positive {SIZE_KEY} {size}; skipping")
                return None
        elif raw_type == TYPE_SCALABLE:
            size = SCALABLE
        else:
            self._warn(f"directory {directory!r} has unsupported {TYPE_KEY} {raw_type!r}; skipping")
            return None
        return DirectorySpec(path=directory, size=size)

    def _section(self, name: str) -> configparser.SectionProxy | None:
        if self._parser.has_section(name):
            return self._parser[name]
        folded = name.casefold()
        for candidate in self._parser.sections():
            if candidate.casefold() == folded:
                self._warn(f"section [{candidate}] should be [{name}]")
                return self._parser[candidate]
        return None

    def _key(self, section: configparser.SectionProxy, key: str) -> str | None:
        if key in section:
            return section[key].strip()
        folded = key.casefold()
        for candidate in section:
            if candidate.casefold() == folded:
                self._warn(f"[{section.name}] key {candidate!r} should be {key!r}")
                return section[candidate].strip()
        return None

    def _warn(self, message: str) -> None:
        logger.warning("Malformed theme file %s: %s", self._source, message)
        self._warnings.append(message)


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    items: list[str] = []
    for item in value.split(","):
        cleaned = item.strip()
        if cleaned and cleaned not in items:
            items.append(cleaned)
    return items


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise MalformedManifestError(
            code=ErrorCode.MANIFEST_UNREADABLE,
            message=f"Unable to stat {path}: {exc}",
            path=path,
        ) from exc
    if size > max_bytes:
        raise MalformedManifestError(
            message=f"{path}: file exceeds max size ({max_bytes} bytes)",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedManifestError(
            code=ErrorCode.MANIFEST_UNREADABLE,
            message=f"Unable to read {path}: {exc}",
            path=path,
        ) from exc
