"""Configuration loading and validation.

Loads ``settings.toml`` and validates all fields at startup, before any
file in a batch is touched.  A bad locale discovered halfway through a
rename batch would leave a directory half-converted; a startup failure
leaves it untouched.

The validated config is exposed as a :class:`Settings` dataclass with
typed fields for each section: ``slug``, ``rename`` and ``logging``.
Every section and key is optional.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from slugsmith.errors import ActionableError
from slugsmith.export.renamer import ErrorPolicy
from slugsmith.pipeline.normalizer import DEFAULT_ENCODED_UNITS
from slugsmith.translit.table import locale_group, recognized_locales

# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass
class SlugConfig:
    """Slug pipeline settings from ``[slug]``."""

    locale: str | None = None
    fallback: str = ""
    max_encoded_length: int = DEFAULT_ENCODED_UNITS


@dataclass
class RenameConfig:
    """Batch rename settings from ``[rename]``."""

    on_error: ErrorPolicy = ErrorPolicy.REPORT
    dry_run: bool = False


@dataclass
class LoggingConfig:
    """Log output settings from ``[logging]``."""

    file_logging: bool = False
    log_dir: str = "data/logs"
    level: int = logging.INFO


@dataclass
class Settings:
    """Top-level validated configuration."""

    slug: SlugConfig = field(default_factory=SlugConfig)
    rename: RenameConfig = field(default_factory=RenameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------------------------------------------------------------
# Default settings path
# ---------------------------------------------------------------------------

DEFAULT_SETTINGS_PATH = Path("config/settings.toml")


# ---------------------------------------------------------------------------
# Loading and validation
# ---------------------------------------------------------------------------


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load and validate settings from a TOML file.

    Raises :class:`~slugsmith.errors.ActionableError`:
      - CONFIG if the file is missing
      - PARSE if the TOML is malformed
      - VALIDATION if field values are out of range

    Returns a fully validated :class:`Settings` instance.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise ActionableError.config(
            field_name="settings_path",
            reason=f"Settings file not found: {filepath}",
            suggestion=f"Create {filepath} or copy from config/settings.toml",
        )

    raw_text = filepath.read_text(encoding="utf-8")
    try:
        data = tomllib.loads(raw_text)
    except tomllib.TOMLDecodeError as exc:
        raise ActionableError.parse(
            source=str(filepath),
            raw_error=str(exc),
            suggestion=f"Fix TOML syntax in {filepath}",
        ) from None

    return _validate(data)


def load_settings_or_default(path: str | Path | None = None) -> Settings:
    """Settings from *path*; built-in defaults when no path is given and the default file is absent."""
    if path is None:
        if not DEFAULT_SETTINGS_PATH.exists():
            return Settings()
        path = DEFAULT_SETTINGS_PATH
    return load_settings(path)


def _validate(data: dict[str, object]) -> Settings:
    """Validate raw TOML data and return a Settings instance."""

    # -- slug section --------------------------------------------------------
    slug_data = _section(data, "slug")

    locale = str(slug_data.get("locale", "")) or None
    validate_locale(locale, field_name="slug.locale")

    max_encoded_length = slug_data.get("max_encoded_length", DEFAULT_ENCODED_UNITS)
    if not isinstance(max_encoded_length, int) or isinstance(max_encoded_length, bool):
        raise ActionableError.validation(
            field_name="slug.max_encoded_length",
            reason=f"is {max_encoded_length!r} — must be an integer",
            suggestion="Set [slug].max_encoded_length to a whole number (0 = unbounded)",
        )
    if max_encoded_length < 0:
        raise ActionableError.validation(
            field_name="slug.max_encoded_length",
            reason=f"is {max_encoded_length} — must be >= 0",
            suggestion="Set [slug].max_encoded_length to 0 (unbounded) or a positive number",
        )

    slug = SlugConfig(
        locale=locale,
        fallback=str(slug_data.get("fallback", "")),
        max_encoded_length=max_encoded_length,
    )

    # -- rename section ------------------------------------------------------
    rename_data = _section(data, "rename")

    on_error = str(rename_data.get("on_error", ErrorPolicy.REPORT.value))
    if on_error not in {p.value for p in ErrorPolicy}:
        raise ActionableError.validation(
            field_name="rename.on_error",
            reason=f"'{on_error}' is not one of: {', '.join(p.value for p in ErrorPolicy)}",
            suggestion="Set [rename].on_error to report, skip or abort",
        )

    rename = RenameConfig(
        on_error=ErrorPolicy(on_error),
        dry_run=_flag(rename_data, "rename", "dry_run"),
    )

    # -- logging section -----------------------------------------------------
    logging_data = _section(data, "logging")

    level_name = str(logging_data.get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ActionableError.validation(
            field_name="logging.level",
            reason=f"'{level_name}' is not a logging level",
            suggestion="Set [logging].level to DEBUG, INFO, WARNING or ERROR",
        )

    log_config = LoggingConfig(
        file_logging=_flag(logging_data, "logging", "file_logging"),
        log_dir=str(logging_data.get("log_dir", "data/logs")),
        level=level,
    )

    return Settings(slug=slug, rename=rename, logging=log_config)


def validate_locale(locale: str | None, *, field_name: str = "locale") -> None:
    """Raise VALIDATION if *locale* is set but selects no overlay."""
    if locale and locale_group(locale) is None:
        raise ActionableError.validation(
            field_name=field_name,
            reason=f"'{locale}' is not a recognized locale",
            suggestion=f"Use one of: {', '.join(recognized_locales())} (or leave it empty)",
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _section(data: dict[str, object], name: str) -> dict[str, object]:
    """Return an optional top-level section, or raise CONFIG if it is not a table."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ActionableError.config(
            field_name=name,
            reason=f"[{name}] must be a table, not {type(section).__name__}",
            suggestion=f"Define [{name}] as a TOML table",
        )
    return section


def _flag(section: dict[str, object], section_name: str, key: str) -> bool:
    """Return an optional boolean key, or raise VALIDATION for anything but true/false."""
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ActionableError.validation(
            field_name=f"{section_name}.{key}",
            reason=f"is {value!r} — must be true or false",
            suggestion=f"Set [{section_name}].{key} to true or false (unquoted)",
        )
    return value
