"""Command-line bootstrap."""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import Sequence

from xdgicons.config.settings import AppSettings
from xdgicons.errors import IconThemeError, format_error_for_user
from xdgicons.runtime_paths import package_root
from xdgicons.themes.discovery import ThemeLocator, default_search_dirs
from xdgicons.themes.service import IconManager
from xdgicons.themes.session import IconThemeSession

EXIT_OK = 0
EXIT_ICON_MISSING = 1
EXIT_THEME_ERROR = 2


def configure_logging(settings: AppSettings, *, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("xdgicons")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else settings.log_level_number)
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "xdgicons.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(console)
    logger.propagate = False
    return logger


def build_icon_manager(
    settings: AppSettings,
    *,
    theme_name: str | None = None,
    application_theme: Path | None = None,
) -> IconManager:
    """Create an IconManager from settings, with optional overrides."""
    search_dirs = [*settings.extra_search_dirs, *default_search_dirs()]
    session = IconThemeSession(ThemeLocator(search_dirs))
    app_manifest = application_theme or settings.application_theme_path
    if not app_manifest.exists():
        logging.getLogger("xdgicons").warning("application theme missing at %s", app_manifest)
        app_manifest = None
    return IconManager(
        app_manifest,
        theme_name or settings.system_theme_name,
        session=session,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xdgicons",
        description="Resolve a freedesktop icon name to an image file.",
    )
    parser.add_argument("icon", nargs="?", help="icon name, e.g. document-open")
    parser.add_argument("size", nargs="?", type=int, default=48, help="size in pixels")
    parser.add_argument("-t", "--theme", help="system icon theme (default: desktop setting)")
    parser.add_argument("-a", "--app-theme", type=Path, help="bundled index.theme to fall back to")
    parser.add_argument("-o", "--output", type=Path, help="write the rendered icon to this PNG")
    parser.add_argument("--list-themes", action="store_true", help="list installed themes and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="log to stderr")
    return parser


def run_cli(argv: Sequence[str] | None = None, settings: AppSettings | None = None) -> int:
    """Run the command line tool and return its exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = settings or AppSettings()
    logger = configure_logging(settings, verbose=args.verbose)
    logger.info("startup package_root=%s", package_root())

    if args.list_themes:
        locator = ThemeLocator([*settings.extra_search_dirs, *default_search_dirs()])
        for name, manifest_path in sorted(locator.installed_themes().items()):
            print(f"{name}\t{manifest_path.parent}")
        return EXIT_OK
    if not args.icon:
        parser.error("an icon name is required")
    if args.size <= 0:
        parser.error("size must be a positive number of pixels")

    try:
        manager = build_icon_manager(
            settings,
            theme_name=args.theme,
            application_theme=args.app_theme,
        )
    except IconThemeError as exc:
        logger.error("theme setup failed: %s", exc.to_dict())
        print(format_error_for_user(exc), file=sys.stderr)
        return EXIT_THEME_ERROR

    source = manager.icon_source(args.icon, args.size)
    if source is None:
        print(f"Icon {args.icon!r} not found in any available theme.", file=sys.stderr)
        return EXIT_ICON_MISSING
    print(source.path)

    if args.output is not None:
        image = manager.get_icon(args.icon, args.size)
        if image is None:
            print(f"Icon {args.icon!r} cannot be rendered from {source.path}.", file=sys.stderr)
            return EXIT_ICON_MISSING
        if not image.save(str(args.output), "PNG"):
            print(f"Could not write {args.output}.", file=sys.stderr)
            return EXIT_THEME_ERROR
    return EXIT_OK
