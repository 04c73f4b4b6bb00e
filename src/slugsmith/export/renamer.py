"""Batch file renaming — give every file a slugified name in place.

Each file's base name is taken as raw bytes (``os.fsencode``), so names
that are not UTF-8 go through the legacy transliteration table instead
of failing.  Names are slugified segment by segment around the dots,
which keeps extensions intact.

Failure policy (:class:`ErrorPolicy`):

* ``report`` — log a warning, keep going, list failures in the report
* ``skip`` — log at debug level, keep going
* ``abort`` — raise :class:`~slugsmith.errors.ActionableError` on the
  first failure; renames already done are kept

An existing file is never overwritten, and two files in one batch never
claim the same target, so a dry run reports exactly what a real run
would do.  The move is a hard link followed by an unlink, which fails
instead of replacing a file that appeared after the existence check.
Where the filesystem has no hard links the move falls back to
:meth:`pathlib.Path.rename`, which can still overwrite such a file.
"""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from slugsmith.errors import ActionableError
from slugsmith.pipeline.normalizer import DEFAULT_ENCODED_UNITS
from slugsmith.text import slugify_segments

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class ErrorPolicy(StrEnum):
    """What to do when a single rename cannot be carried out."""

    REPORT = "report"
    SKIP = "skip"
    ABORT = "abort"


@dataclass
class RenameFailure:
    """A file that kept its old name, and why."""

    source: Path
    target: Path | None
    reason: str


@dataclass
class RenameReport:
    """Outcome of a batch, consumed by the CLI."""

    renamed: list[tuple[Path, Path]] = field(default_factory=list)
    unchanged: list[Path] = field(default_factory=list)
    failed: list[RenameFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def _same_file(a: Path, b: Path) -> bool:
    # Case-only renames on case-insensitive filesystems
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


# os.link errors meaning "no hard links here", not "cannot rename"
_NO_HARD_LINKS = frozenset(
    {errno.EPERM, errno.EXDEV, errno.EMLINK, errno.ENOTSUP, errno.EOPNOTSUPP, errno.ENOSYS}
)


def _move_no_clobber(source: Path, target: Path) -> None:
    """Move *source* to *target*, raising ``FileExistsError`` if *target* exists."""
    if _same_file(source, target):
        source.rename(target)
        return
    try:
        os.link(source, target, follow_symlinks=False)
    except OSError as exc:
        if exc.errno not in _NO_HARD_LINKS:
            raise
        logger.debug("No hard links for %s (%s) — falling back to rename", source, exc.strerror)
        source.rename(target)
        return
    os.unlink(source)


class FileRenamer:
    """Renames files to their slugified names within the same directory.

    Usage::

        renamer = FileRenamer(on_error=ErrorPolicy.REPORT)
        report = renamer.rename(["~/Downloads/Résumé (final).PDF"])
    """

    def __init__(
        self,
        *,
        on_error: ErrorPolicy | str = ErrorPolicy.REPORT,
        dry_run: bool = False,
        locale: str | None = None,
        max_encoded_units: int = DEFAULT_ENCODED_UNITS,
    ) -> None:
        self.on_error = ErrorPolicy(on_error)
        self.dry_run = dry_run
        self.locale = locale
        self.max_encoded_units = max_encoded_units

    def target_path(self, path: str | os.PathLike[str]) -> Path | None:
        """Where *path* would be renamed to, or ``None`` if no usable name remains."""
        source = Path(path)
        new_name = slugify_segments(
            os.fsencode(source.name),
            locale=self.locale,
            max_encoded_units=self.max_encoded_units,
        )
        if not new_name.strip("."):
            return None
        return source.parent / new_name

    def rename(self, paths: Iterable[str | os.PathLike[str]]) -> RenameReport:
        """Rename every path in *paths*; see the module docstring for failures."""
        report = RenameReport()
        claimed: set[Path] = set()

        for raw in paths:
            source = Path(raw)
            target = self.target_path(source)

            if target is None:
                self._fail(report, source, None, "name has no characters left after slugifying")
                continue
            if target == source:
                logger.debug("Already a slug: %s", source)
                report.unchanged.append(source)
                claimed.add(target)
                continue
            if not source.exists() and not source.is_symlink():
                self._fail(report, source, target, "no such file")
                continue
            if target in claimed or (target.exists() and not _same_file(source, target)):
                self._fail(report, source, target, "target already exists")
                continue

            if self.dry_run:
                logger.info("Would rename %s → %s", source, target.name)
                report.renamed.append((source, target))
                claimed.add(target)
                continue

            try:
                _move_no_clobber(source, target)
            except OSError as exc:
                self._fail(
                    report,
                    source,
                    target,
                    exc.strerror or str(exc),
                    error=ActionableError.from_exception(exc, "filesystem", "rename"),
                )
                continue

            logger.info("Renamed %s → %s", source, target.name)
            report.renamed.append((source, target))
            claimed.add(target)

        return report

    def _fail(
        self,
        report: RenameReport,
        source: Path,
        target: Path | None,
        reason: str,
        *,
        error: ActionableError | None = None,
    ) -> None:
        target_str = str(target) if target is not None else "(empty name)"
        if self.on_error is ErrorPolicy.ABORT:
            raise error or ActionableError.rename(str(source), target_str, reason)

        report.failed.append(RenameFailure(source=source, target=target, reason=reason))
        if self.on_error is ErrorPolicy.REPORT:
            logger.warning("Cannot rename %s → %s: %s", source, target_str, reason)
        else:
            logger.debug("Skipping %s: %s", source, reason)
