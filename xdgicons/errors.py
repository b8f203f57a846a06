"""Error codes and error handling utilities for xdgicons."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for icon theme operations."""

    # Manifest errors
    MANIFEST_MALFORMED = auto()
    MANIFEST_UNREADABLE = auto()

    # Theme errors
    THEME_NOT_FOUND = auto()
    THEMES_UNSUPPORTED = auto()

    # Raster errors
    ICON_DECODE_FAILED = auto()
    ICON_SCALE_FAILED = auto()

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()

    OPERATION_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MANIFEST_MALFORMED: "The icon theme's index.theme file is malformed.",
    ErrorCode.MANIFEST_UNREADABLE: "The icon theme's index.theme file could not be read.",
    ErrorCode.THEME_NOT_FOUND: "The icon theme is not installed. Check the theme name.",
    ErrorCode.THEMES_UNSUPPORTED: "This system does not support icon themes.",
    ErrorCode.ICON_DECODE_FAILED: "The icon file could not be decoded.",
    ErrorCode.ICON_SCALE_FAILED: "The icon could not be scaled to the requested size.",
    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions.",
    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",
}


@dataclass(eq=False)
class IconThemeError(Exception):
    """Base exception for xdgicons with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


@dataclass(eq=False)
class MalformedManifestError(IconThemeError):
    """Raised when an index.theme file is structurally unusable."""

    code: ErrorCode = ErrorCode.MANIFEST_MALFORMED


@dataclass(eq=False)
class ThemeNotFoundError(IconThemeError):
    """Raised when a named system theme is not among the installed themes."""

    code: ErrorCode = ErrorCode.THEME_NOT_FOUND
    theme_name: str = ""

    def __post_init__(self) -> None:
        if not self.message and self.theme_name:
            self.message = f"Theme {self.theme_name!r} is not installed."
        super().__post_init__()


@dataclass(eq=False)
class RasterError(IconThemeError):
    """Raised by a rasterizer when image bytes cannot be decoded or scaled."""

    code: ErrorCode = ErrorCode.ICON_DECODE_FAILED


def classify_exception(exc: Exception, path: Path | None = None) -> IconThemeError:
    """Classify a generic exception into an IconThemeError with appropriate code."""
    if isinstance(exc, IconThemeError):
        return exc
    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return IconThemeError(ErrorCode.FILE_NOT_FOUND, path=path, details={"original": exc_str})
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return IconThemeError(ErrorCode.FILE_ACCESS_DENIED, path=path, details={"original": exc_str})
    if isinstance(exc, UnicodeDecodeError):
        return MalformedManifestError(
            code=ErrorCode.MANIFEST_UNREADABLE, path=path, details={"original": exc_str}
        )

    return IconThemeError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: IconThemeError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, IconThemeError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n{error.suggestion}")
        if error.path:
            parts.append(f"\nFile: {error.path}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
