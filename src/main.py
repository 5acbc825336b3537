# src/main.py - v1
"""CLI entry point: build, key, invalidate, clean commands.

Usage:
    sonar build --theme bartik --file base=themes/bartik/base.scss --inline vars='$x: 1;'
    sonar key --theme bartik base vars
    sonar invalidate --theme bartik base vars
    sonar clean --theme bartik
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sonar.version import __version__

logger = logging.getLogger(__name__)


class _FragmentAction(argparse.Action):
    """Collect ``ID=VALUE`` options into one ordered list across flags."""

    def __call__(self, parser, namespace, values, option_string=None):  # noqa: ANN001
        fragment_id, sep, value = values.partition("=")
        if not sep or not fragment_id:
            parser.error(f"{option_string} expects ID=VALUE, got {values!r}")
        items = list(getattr(namespace, "fragments", None) or [])
        items.append((fragment_id, self.const, value))
        namespace.fragments = items


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="sonar",
        description=f"sonar v{__version__} - cached stylesheet builder",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- build ---
    p_build = subparsers.add_parser(
        "build", help="Build (or reuse) the stylesheet for a fragment set",
    )
    p_build.add_argument("--theme", default=None, help="Theme discriminator")
    p_build.add_argument(
        "--file", action=_FragmentAction, const="file", metavar="ID=PATH",
        help="File fragment (repeatable, order is preserved)",
    )
    p_build.add_argument(
        "--inline", action=_FragmentAction, const="inline", metavar="ID=SOURCE",
        help="Inline fragment (repeatable, order is preserved)",
    )
    p_build.add_argument(
        "--live", action="store_true", default=None,
        help="Live mode: skip source modification checks",
    )
    p_build.add_argument(
        "-d", "--destination", type=Path, default=None,
        help="Destination root (default: DESTINATION_ROOT setting)",
    )
    p_build.set_defaults(func=_cmd_build, fragments=[])

    # --- key ---
    p_key = subparsers.add_parser("key", help="Print the cache key for fragment ids")
    p_key.add_argument("--theme", default=None, help="Theme discriminator")
    p_key.add_argument("ids", nargs="+", help="Fragment ids in order")
    p_key.set_defaults(func=_cmd_key)

    # --- invalidate ---
    p_inv = subparsers.add_parser(
        "invalidate", help="Drop the compile record for fragment ids",
    )
    p_inv.add_argument("--theme", default=None, help="Theme discriminator")
    p_inv.add_argument("ids", nargs="+", help="Fragment ids in order")
    p_inv.set_defaults(func=_cmd_invalidate)

    # --- clean ---
    p_clean = subparsers.add_parser(
        "clean", help="Remove leftover temporary sources for a theme",
    )
    p_clean.add_argument("--theme", default=None, help="Theme discriminator")
    p_clean.set_defaults(func=_cmd_clean)

    return parser


async def _cmd_build(args: argparse.Namespace) -> int:
    """Build the stylesheet and print its path."""
    from sonar.api.facade import compile_styles, create_style_compiler
    from sonar.api.reporting import CollectingReporter
    from sonar.config.settings import Settings
    from sonar.core.models import Fragment

    if not args.fragments:
        logger.error("No fragments given; use --file and/or --inline")
        return 1

    overrides = {}
    if args.destination is not None:
        overrides["destination_root"] = args.destination
    settings = Settings(**overrides)

    fragments: dict[str, Fragment] = {}
    for fragment_id, kind, value in args.fragments:
        if kind == "file":
            fragments[fragment_id] = Fragment.file(Path(value).expanduser().resolve())
        else:
            fragments[fragment_id] = Fragment.inline(value)

    reporter = CollectingReporter()
    style_compiler = create_style_compiler(settings, reporter=reporter)
    result = await compile_styles(
        fragments,
        theme=args.theme,
        live_mode=args.live,
        settings=settings,
        style_compiler=style_compiler,
    )

    for error in reporter.errors:
        print(f"error: {error}", file=sys.stderr)
    if result.artifact_path is not None:
        print(result.artifact_path)
    return 0 if result.ok else 1


async def _cmd_key(args: argparse.Namespace) -> int:
    """Print the cache key."""
    from sonar.cache.identity import compute_key
    from sonar.config.settings import Settings

    theme = args.theme or Settings().default_theme
    print(compute_key(theme, args.ids))
    return 0


async def _cmd_invalidate(args: argparse.Namespace) -> int:
    """Drop a compile record."""
    from sonar.api.facade import create_style_compiler
    from sonar.config.settings import Settings

    settings = Settings()
    style_compiler = create_style_compiler(settings)
    key = await style_compiler.invalidate(args.theme or settings.default_theme, args.ids)
    print(key)
    return 0


async def _cmd_clean(args: argparse.Namespace) -> int:
    """Remove leftover temporary sources."""
    from sonar.api.facade import create_style_compiler
    from sonar.config.settings import Settings

    settings = Settings()
    style_compiler = create_style_compiler(settings)
    removed = await style_compiler.clear_temp_files(args.theme or settings.default_theme)
    print(f"Removed {removed} temporary file(s)")
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from sonar.config.settings import Settings
    from sonar.logging.logger import setup_logging

    settings = Settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
