"""Export layer tests — launcher JSON and batch file renaming.

Covers :class:`TestLauncherResponse`, :class:`TestFileRenamer`,
:class:`TestRenameConflicts`, :class:`TestRenameErrorPolicy`,
:class:`TestBatchTargetClaims` and :class:`TestNoClobberMove`.
"""

from __future__ import annotations

import errno
import json
import logging
import os
from pathlib import Path

import pytest

from slugsmith.errors import ActionableError, ErrorType
from slugsmith.export import renamer as renamer_module
from slugsmith.export import (
    ErrorPolicy,
    FileRenamer,
    build_response,
    render_response,
)


class TestLauncherResponse:
    """
    REQUIREMENT: String mode emits the exact JSON shape the launcher expects.

    WHO: The launcher (Alfred script filter) reading stdout
    WHAT: One item whose subtitle, arg, text.copy and text.large_type are
          the slug, plus variables.slug; title is 'Slugify', type 'default'
    WHY: The launcher silently ignores responses with unexpected field names
    """

    def test_every_field_carries_the_slug(self) -> None:
        """subtitle, arg, copy, large_type and variables.slug all equal the slug."""
        response = build_response("cafe-au-lait")
        item = response["items"][0]

        assert item["subtitle"] == "cafe-au-lait"
        assert item["arg"] == "cafe-au-lait"
        assert item["text"]["copy"] == "cafe-au-lait"
        assert item["text"]["large_type"] == "cafe-au-lait"
        assert response["variables"]["slug"] == "cafe-au-lait"

    def test_item_title_and_type(self) -> None:
        """The single item is typed 'default' and titled 'Slugify'."""
        response = build_response("x")

        assert len(response["items"]) == 1
        assert response["items"][0]["type"] == "default"
        assert response["items"][0]["title"] == "Slugify"

    def test_rendered_response_is_valid_json(self) -> None:
        """render_response produces JSON that parses back to build_response."""
        assert json.loads(render_response("a.b")) == build_response("a.b")


class TestFileRenamer:
    """
    REQUIREMENT: Files are renamed to their slugified names in the same directory.

    WHO: Operators cleaning up downloads, scans and exported documents
    WHAT: Each base name is slugified per dot-segment from its raw bytes;
          the file stays in its directory; already-canonical names are
          left alone; dry runs rename nothing
    WHY: Moving a file to another directory, or renaming it twice, would
         surprise the operator
    """

    def test_file_is_renamed_in_place(self, make_files) -> None:
        """Résumé (Final).PDF → resume-final.pdf in the same directory."""
        (source,) = make_files("Résumé (Final).PDF")

        report = FileRenamer().rename([source])

        target = source.parent / "resume-final.pdf"
        assert report.renamed == [(source, target)]
        assert target.exists()
        assert not source.exists()

    def test_canonical_name_is_unchanged(self, make_files) -> None:
        """A name that is already a slug is reported as unchanged and not touched."""
        (source,) = make_files("already-clean.txt")

        report = FileRenamer().rename([source])

        assert report.unchanged == [source]
        assert report.renamed == []
        assert source.exists()

    def test_non_utf8_name_uses_legacy_table(self, make_files) -> None:
        """A Latin-1 file name (0xE9 for é) is renamed to its ASCII slug."""
        (source,) = make_files(b"caf\xe9 cr\xe8me.txt")

        report = FileRenamer().rename([source])

        target = source.parent / "cafe-creme.txt"
        assert report.renamed == [(source, target)]
        assert target.exists()

    def test_locale_is_applied(self, make_files) -> None:
        """The German overlay turns Müller into mueller."""
        (source,) = make_files("Müller.txt")

        FileRenamer(locale="de_DE").rename([source])

        assert (source.parent / "mueller.txt").exists()

    def test_dry_run_renames_nothing(self, make_files) -> None:
        """--dry-run reports the plan but leaves the file alone."""
        (source,) = make_files("My Notes.md")

        report = FileRenamer(dry_run=True).rename([source])

        assert report.renamed == [(source, source.parent / "my-notes.md")]
        assert source.exists()
        assert not (source.parent / "my-notes.md").exists()

    def test_target_path_does_not_touch_disk(self, tmp_path: Path) -> None:
        """target_path computes the new name even for a file that does not exist."""
        target = FileRenamer().target_path(tmp_path / "Ghost File.TXT")

        assert target == tmp_path / "ghost-file.txt"


class TestRenameConflicts:
    """
    REQUIREMENT: A rename never destroys another file.

    WHO: Operators renaming batches where two names collapse to one slug
    WHAT: An existing target is not overwritten; a missing source and a
          name that slugifies to nothing are failures, not crashes
    WHY: "Report.pdf" and "report.PDF" both slugify to "report.pdf"; the
         second rename must not silently delete the first file
    """

    def test_existing_target_is_not_overwritten(self, make_files) -> None:
        """When the slug is taken by another file, both files survive untouched."""
        taken, source = make_files("notes.txt", "Notes!.txt")

        report = FileRenamer().rename([source])

        assert len(report.failed) == 1
        assert report.failed[0].reason == "target already exists"
        assert source.exists()
        assert taken.read_bytes() == b"x"

    def test_missing_source_is_a_failure(self, tmp_path: Path) -> None:
        """A path that does not exist is reported, not raised."""
        report = FileRenamer().rename([tmp_path / "Does Not Exist.txt"])

        assert len(report.failed) == 1
        assert report.failed[0].reason == "no such file"

    def test_name_with_nothing_left_is_a_failure(self, make_files) -> None:
        """A name that slugifies to only dots has no usable target."""
        (source,) = make_files("***")

        report = FileRenamer().rename([source])

        assert len(report.failed) == 1
        assert report.failed[0].target is None
        assert source.exists()


class TestRenameErrorPolicy:
    """
    REQUIREMENT: The failure policy decides whether a batch continues.

    WHO: Operators choosing between best-effort and all-or-stop batches
    WHAT: report logs a warning and continues; skip logs quietly and
          continues; abort raises a RENAME ActionableError at the first
          failure, keeping renames already done
    WHY: Unattended batches want to finish; careful manual runs want to
         stop at the first surprise
    """

    def test_report_continues_and_warns(
        self, make_files, caplog: pytest.LogCaptureFixture
    ) -> None:
        """The failing file is reported and the next file is still renamed."""
        _taken, clash, other = make_files("a.txt", "A!.txt", "B B.txt")

        with caplog.at_level(logging.WARNING, logger="slugsmith"):
            report = FileRenamer(on_error=ErrorPolicy.REPORT).rename([clash, other])

        assert [f.source for f in report.failed] == [clash]
        assert (other.parent / "b-b.txt").exists()
        assert "target already exists" in caplog.text
        assert not report.ok

    def test_skip_continues_without_warning(
        self, make_files, caplog: pytest.LogCaptureFixture
    ) -> None:
        """skip records the failure but logs nothing at WARNING."""
        _taken, clash = make_files("a.txt", "A!.txt")

        with caplog.at_level(logging.WARNING, logger="slugsmith"):
            report = FileRenamer(on_error="skip").rename([clash])

        assert len(report.failed) == 1
        assert caplog.text == ""

    def test_abort_raises_and_keeps_earlier_renames(self, make_files) -> None:
        """The first rename is kept; the conflicting second raises RENAME."""
        first, _taken, clash = make_files("First File.txt", "a.txt", "A!.txt")

        with pytest.raises(ActionableError) as exc_info:
            FileRenamer(on_error=ErrorPolicy.ABORT).rename([first, clash])

        assert exc_info.value.error_type == ErrorType.RENAME
        assert (first.parent / "first-file.txt").exists()
        assert clash.exists()


    def test_os_error_is_reported(self, make_files, monkeypatch: pytest.MonkeyPatch) -> None:
        """An OSError from the move itself becomes a report entry."""
        (source,) = make_files("Locked File.txt")

        def _deny(src: object, dst: object, **kwargs: object) -> None:
            raise PermissionError(errno.EACCES, "Permission denied", os.fspath(src))

        monkeypatch.setattr(renamer_module.os, "link", _deny)
        report = FileRenamer().rename([source])

        assert report.failed[0].reason == "Permission denied"
        assert source.exists()

    def test_abort_classifies_os_error_as_rename(
        self, make_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Under abort, the OSError is classified with both paths in the context."""
        (source,) = make_files("Locked File.txt")
        target = source.parent / "locked-file.txt"

        def _deny(src: object, dst: object, **kwargs: object) -> None:
            raise PermissionError(
                errno.EACCES, "Permission denied", os.fspath(src), None, os.fspath(dst)
            )

        monkeypatch.setattr(renamer_module.os, "link", _deny)
        with pytest.raises(ActionableError) as exc_info:
            FileRenamer(on_error="abort").rename([source])

        assert exc_info.value.error_type == ErrorType.RENAME
        assert exc_info.value.context == {"source": str(source), "target": str(target)}


class TestBatchTargetClaims:
    """
    REQUIREMENT: Two files in one batch never end up with the same name.

    WHO: Operators previewing a batch with --dry-run before running it
    WHAT: The first file to claim a slug gets it; every later file mapping
          to the same slug fails with "target already exists", in dry runs
          and real runs alike; a file that is already a slug holds its name
    WHY: A preview that promises two renames when only one can happen
         is worse than no preview
    """

    def test_dry_run_matches_real_run(self, make_files) -> None:
        """'A B.txt' and 'a-b.TXT' both map to a-b.txt; one wins in both modes."""
        first, second = make_files("A B.txt", "a-b.TXT")
        target = first.parent / "a-b.txt"

        planned = FileRenamer(dry_run=True).rename([first, second])
        done = FileRenamer().rename([first, second])

        assert planned.renamed == done.renamed == [(first, target)]
        assert [f.source for f in planned.failed] == [second]
        assert [f.source for f in done.failed] == [second]
        assert planned.failed[0].reason == "target already exists"
        assert second.exists()

    def test_unchanged_name_holds_its_slug(self, make_files) -> None:
        """A canonical name listed first keeps its slug against a later claimant."""
        keeper, claimant = make_files("a-b.txt", "A B.txt")

        report = FileRenamer(dry_run=True).rename([keeper, claimant])

        assert report.unchanged == [keeper]
        assert [f.source for f in report.failed] == [claimant]


class TestNoClobberMove:
    """
    REQUIREMENT: The move itself refuses to replace an existing file.

    WHO: Batches running while other programs write into the same directory
    WHAT: A target that appears after the existence check makes the move
          fail with FileExistsError and both files keep their content;
          filesystems without hard links still get their files renamed
    WHY: A plain rename replaces the target silently on POSIX
    """

    def test_late_target_is_not_replaced(self, make_files) -> None:
        """Moving onto a file that already exists raises and keeps both files."""
        source, late = make_files("Draft.txt", "draft.txt")
        late.write_bytes(b"written by someone else")

        with pytest.raises(FileExistsError):
            renamer_module._move_no_clobber(source, late)

        assert source.exists()
        assert late.read_bytes() == b"written by someone else"

    def test_late_target_is_reported_by_rename(
        self, make_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A target created between the check and the move is a failure, not a loss."""
        source, late = make_files("Draft.txt", "draft.txt")
        late.write_bytes(b"written by someone else")
        real_exists = Path.exists
        monkeypatch.setattr(
            Path, "exists", lambda self, **kw: False if self == late else real_exists(self, **kw)
        )

        report = FileRenamer().rename([source])

        assert len(report.failed) == 1
        assert late.read_bytes() == b"written by someone else"
        assert source.exists()

    def test_missing_hard_links_fall_back_to_rename(
        self, make_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """EPERM from os.link (e.g. FAT volumes) still renames the file."""
        (source,) = make_files("Holiday Photo.JPG")

        def _unsupported(src: object, dst: object, **kwargs: object) -> None:
            raise OSError(errno.EPERM, "Operation not permitted")

        monkeypatch.setattr(renamer_module.os, "link", _unsupported)
        report = FileRenamer().rename([source])

        assert report.renamed == [(source, source.parent / "holiday-photo.jpg")]
        assert (source.parent / "holiday-photo.jpg").exists()
        assert not source.exists()
