"""Tests for xdgicons.errors."""

from pathlib import Path

from xdgicons.errors import (
    ErrorCode,
    IconThemeError,
    MalformedManifestError,
    ThemeNotFoundError,
    classify_exception,
    format_error_for_user,
)


def test_theme_not_found_message_names_theme():
    error = ThemeNotFoundError(theme_name="Papirus")
    assert error.code is ErrorCode.THEME_NOT_FOUND
    assert "Papirus" in error.message
    assert error.to_dict()["code"] == "THEME_NOT_FOUND"


def test_malformed_manifest_defaults():
    error = MalformedManifestError(path=Path("/icons/x/index.theme"))
    assert error.code is ErrorCode.MANIFEST_MALFORMED
    assert error.message
    assert "/icons/x/index.theme" in str(error)
    assert isinstance(error, IconThemeError)


def test_classify_exception_file_errors():
    assert classify_exception(FileNotFoundError("gone")).code is ErrorCode.FILE_NOT_FOUND
    assert classify_exception(PermissionError("nope")).code is ErrorCode.FILE_ACCESS_DENIED
    assert classify_exception(RuntimeError("boom")).code is ErrorCode.OPERATION_FAILED


def test_classify_exception_passes_through_theme_errors():
    error = ThemeNotFoundError(theme_name="x")
    assert classify_exception(error) is error


def test_format_error_for_user_includes_suggestion():
    text = format_error_for_user(ThemeNotFoundError(theme_name="Papirus"))
    assert "Papirus" in text
    assert "Check the theme name" in text
    assert "boom" in format_error_for_user(RuntimeError("boom"))
