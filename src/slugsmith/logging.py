"""Logging for slugsmith.

The ``slugsmith`` logger is the parent of every module logger in the
package (``slugsmith.export.renamer``, ``slugsmith.pipeline.slugify``,
...), so handlers attached here see all of them.

stderr only shows warnings and errors: the ``files`` command already
prints each rename on stdout, and the ``slug`` command's stdout is read
by the launcher, which must not see log noise.

:func:`configure_file_logging` adds a per-run file that keeps the INFO
record of every ``old → new`` rename.  Files are named
``slugsmith_<YYYY-MM-DDTHH-MM-SS>.log`` so a directory of runs sorts
chronologically and a batch can be traced back (and undone by hand)
from its log.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = "data/logs"
LOG_FILE_PREFIX = "slugsmith"


def _formatter() -> logging.Formatter:
    return logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)


logger = logging.getLogger(LOG_FILE_PREFIX)
logger.setLevel(logging.INFO)

handler = logging.StreamHandler(sys.stderr)
handler.setLevel(logging.WARNING)
handler.setFormatter(_formatter())
logger.addHandler(handler)


def configure_file_logging(
    log_dir: str = DEFAULT_LOG_DIR,
    *,
    level: int = logging.INFO,
) -> logging.FileHandler:
    """Record this run in ``<log_dir>/slugsmith_<timestamp>.log``.

    The directory is created if needed.  The handler is returned so the
    caller can detach it (tests do; the CLI keeps it for the process
    lifetime).  A *level* below the logger's current level lowers the
    logger too, so ``level=DEBUG`` also captures legacy-table routing and
    skipped files.
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    file_handler = logging.FileHandler(
        str(directory / f"{LOG_FILE_PREFIX}_{stamp}.log"), encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(_formatter())

    if level < logger.level:
        logger.setLevel(level)
    logger.addHandler(file_handler)
    return file_handler


__all__ = ["configure_file_logging", "logger"]
