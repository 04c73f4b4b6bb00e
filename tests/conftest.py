"""Global test configuration — shared fixtures.

This conftest provides:

1. **Settings factories** — ``make_settings`` builds a validated
   :class:`~slugsmith.config.Settings` without touching disk, and
   ``write_settings`` writes a TOML file under ``tmp_path`` for tests
   that exercise the loader or the ``--settings`` flag.

2. **Filesystem fixtures** — ``make_files`` creates named files (``str``
   or raw ``bytes`` names) in a per-test directory for the renamer and
   the ``files`` command.

3. **Settings isolation** — every test runs from an empty working
   directory so the repository's own ``config/settings.toml`` is never
   picked up by accident.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from slugsmith.config import LoggingConfig, RenameConfig, Settings, SlugConfig
from slugsmith.export.renamer import ErrorPolicy

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test from an empty directory under ``tmp_path``."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Factory fixture — returns a callable that produces a Settings instance.

    Keyword arguments override the slug/rename defaults::

        settings = make_settings(locale="de_DE", on_error="skip")
    """

    def _factory(
        *,
        locale: str | None = None,
        fallback: str = "",
        max_encoded_length: int = 200,
        on_error: str = "report",
        dry_run: bool = False,
    ) -> Settings:
        return Settings(
            slug=SlugConfig(
                locale=locale,
                fallback=fallback,
                max_encoded_length=max_encoded_length,
            ),
            rename=RenameConfig(on_error=ErrorPolicy(on_error), dry_run=dry_run),
            logging=LoggingConfig(),
        )

    return _factory


@pytest.fixture
def write_settings(tmp_path: Path) -> Callable[[str], Path]:
    """Factory fixture — writes TOML content and returns the file path."""

    def _write(content: str) -> Path:
        path = tmp_path / "settings.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_files(tmp_path: Path) -> Callable[..., list[Path]]:
    """Factory fixture — creates empty files and returns their paths.

    Names may be ``str`` or raw ``bytes``; bytes names are created
    verbatim so non-UTF-8 file names can be tested.
    """
    target_dir = tmp_path / "files"
    target_dir.mkdir()

    def _make(*names: str | bytes) -> list[Path]:
        paths: list[Path] = []
        for name in names:
            raw = name if isinstance(name, bytes) else name.encode("utf-8")
            full = os.path.join(os.fsencode(target_dir), raw)
            with open(full, "wb") as fh:
                fh.write(b"x")
            paths.append(Path(os.fsdecode(full)))
        return paths

    return _make
