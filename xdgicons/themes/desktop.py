"""Query the desktop environment for the user's icon theme."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

ThemeNameProvider = Callable[[], Optional[str]]

_QUERY_TIMEOUT_SECONDS = 2.0

_QUERIES: tuple[tuple[str, ...], ...] = (
    ("gsettings", "get", "org.gnome.desktop.interface", "icon-theme"),
    ("dconf", "read", "/org/gnome/desktop/interface/icon-theme"),
)


def desktop_icon_theme_name() -> str | None:
    """Return the configured icon theme name, or None if it cannot be determined."""
    for command in _QUERIES:
        name = _run_query(command)
        if name:
            return name
    return None


def _run_query(command: Sequence[str]) -> str | None:
    if shutil.which(command[0]) is None:
        return None
    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            timeout=_QUERY_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.info("Could not determine default theme from %s: %s", command[0], exc)
        return None
    if result.returncode != 0:
        logger.info("Could not determine default theme from %s: exit %d", command[0], result.returncode)
        return None
    return parse_setting_value(result.stdout)


def parse_setting_value(raw: str) -> str | None:
    """Strip whitespace and GVariant string quotes from a setting value."""
    first_line = raw.strip().splitlines()[0] if raw.strip() else ""
    value = first_line.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1].strip()
    return value or None
