"""CLI entry point for slugsmith."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING

from slugsmith.cli import build_parser, handle_files, handle_locales, handle_slug
from slugsmith.config import load_settings_or_default
from slugsmith.errors import ActionableError
from slugsmith.logging import configure_file_logging, logger

if TYPE_CHECKING:
    from collections.abc import Sequence


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings_or_default(args.settings)
        if settings.logging.file_logging:
            configure_file_logging(settings.logging.log_dir, level=settings.logging.level)

        if args.command == "slug":
            return handle_slug(args, settings)
        if args.command == "files":
            return handle_files(args, settings)
        return handle_locales()
    except ActionableError as exc:
        logger.error("%s", exc.error)
        print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
