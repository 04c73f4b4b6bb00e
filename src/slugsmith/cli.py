"""CLI command handlers for slugsmith.

Each public function corresponds to a CLI subcommand and encapsulates
the wiring and output for that command.  Handlers return the process
exit status.
"""

from __future__ import annotations

import argparse
import os

from slugsmith.config import Settings, validate_locale
from slugsmith.export.alfred import render_response
from slugsmith.export.renamer import ErrorPolicy, FileRenamer
from slugsmith.text import slugify_segments
from slugsmith.translit.table import locale_group, recognized_locales


def _locale(args: argparse.Namespace, settings: Settings) -> str | None:
    locale = args.locale if args.locale is not None else settings.slug.locale
    validate_locale(locale, field_name="--locale")
    return locale or None


def handle_slug(args: argparse.Namespace, settings: Settings) -> int:
    """Slugify one string and print the launcher response.

    The text is split on ``.`` and each segment slugified separately,
    so ``Report v2.final`` becomes ``report-v2.final``.  ``--plain``
    prints the bare slug instead of the JSON document.
    """
    fallback = args.fallback if args.fallback is not None else settings.slug.fallback
    slug = slugify_segments(
        os.fsencode(args.text),
        fallback=fallback,
        locale=_locale(args, settings),
        max_encoded_units=settings.slug.max_encoded_length,
    )

    if args.plain:
        print(slug)
    else:
        print(render_response(slug))
    return 0


def handle_files(args: argparse.Namespace, settings: Settings) -> int:
    """Rename each file to its slugified name in the same directory."""
    on_error = ErrorPolicy(args.on_error or settings.rename.on_error)
    renamer = FileRenamer(
        on_error=on_error,
        dry_run=args.dry_run or settings.rename.dry_run,
        locale=_locale(args, settings),
        max_encoded_units=settings.slug.max_encoded_length,
    )
    report = renamer.rename(args.paths)

    verb = "Would rename" if renamer.dry_run else "Renamed"
    for source, target in report.renamed:
        print(f"{verb}: {source} → {target.name}")

    print(
        f"\n{len(report.renamed)} renamed, "
        f"{len(report.unchanged)} unchanged, "
        f"{len(report.failed)} failed"
    )
    for failure in report.failed:
        print(f"  ! {failure.source}: {failure.reason}")

    if report.failed and on_error is ErrorPolicy.REPORT:
        return 1
    return 0


def handle_locales() -> int:
    """List locales that select a transliteration overlay."""
    print("Recognized locales:")
    for name in recognized_locales():
        print(f"  - {name} ({locale_group(name)})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="slugsmith",
        description="Turn titles and file names into lowercase ASCII slugs",
    )
    parser.add_argument(
        "--settings",
        type=str,
        default=None,
        metavar="PATH",
        help="Settings TOML (default: config/settings.toml if present)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # -- slug ----------------------------------------------------------------
    slug_p = sub.add_parser("slug", help="Slugify a string (launcher JSON output)")
    slug_p.add_argument("text", type=str, help="Text to slugify")
    slug_p.add_argument("--locale", type=str, default=None, help="Transliteration locale")
    slug_p.add_argument(
        "--fallback",
        type=str,
        default=None,
        help="Returned when the slug comes out empty",
    )
    slug_p.add_argument(
        "--plain",
        action="store_true",
        help="Print only the slug instead of the launcher JSON",
    )

    # -- files ---------------------------------------------------------------
    files_p = sub.add_parser("files", help="Rename files to their slugified names")
    files_p.add_argument("paths", nargs="+", help="Files to rename")
    files_p.add_argument("--locale", type=str, default=None, help="Transliteration locale")
    files_p.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the new names without renaming anything",
    )
    files_p.add_argument(
        "--on-error",
        choices=[p.value for p in ErrorPolicy],
        default=None,
        help="What to do when a rename fails (default: report)",
    )

    # -- locales -------------------------------------------------------------
    sub.add_parser("locales", help="List recognized transliteration locales")

    return parser
