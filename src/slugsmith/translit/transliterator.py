"""Accent removal — apply the transliteration tables to raw text.

Text with no byte ``>= 0x80`` is returned untouched.  Well-formed
UTF-8 gets a single left-to-right pass over the Unicode table (longest
key wins at each position, replacements are never re-scanned); anything
else is treated as a legacy single-byte encoding.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import TYPE_CHECKING, overload

from slugsmith.encoding.utf8 import has_high_bytes, is_well_formed_utf8, to_bytes
from slugsmith.translit.table import LEGACY_DOUBLE, LEGACY_SINGLE, group_table, locale_group

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

_LEGACY_TRANSLATION = bytes.maketrans(
    bytes(LEGACY_SINGLE),
    "".join(LEGACY_SINGLE.values()).encode("ascii"),
)
_LEGACY_DOUBLE_PATTERN = re.compile(b"[" + bytes(LEGACY_DOUBLE) + b"]")


@lru_cache(maxsize=None)
def _compile(group: str | None) -> tuple[re.Pattern[str], Mapping[str, str]]:
    """Alternation over every table key, longest keys first."""
    table = group_table(group)
    keys = sorted(table, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern, table


def _replace_legacy(raw: bytes) -> bytes:
    translated = raw.translate(_LEGACY_TRANSLATION)
    return _LEGACY_DOUBLE_PATTERN.sub(
        lambda m: LEGACY_DOUBLE[m.group()[0]].encode("ascii"), translated
    )


class Transliterator:
    """Replaces accented characters with ASCII for one locale.

    Usage::

        translit = Transliterator("de_DE")
        translit.transliterate("Grüße")  # "Gruesse"
    """

    def __init__(self, locale: str | None = None) -> None:
        self.locale = locale
        self._pattern, self._table = _compile(locale_group(locale))

    def transliterate_bytes(self, raw: bytes) -> bytes:
        """Transliterate raw bytes; the result is bytes as well."""
        if not has_high_bytes(raw):
            return raw

        if not is_well_formed_utf8(raw):
            logger.debug("Input is not UTF-8 — using the legacy single-byte table")
            return _replace_legacy(raw)

        text = raw.decode("utf-8", "surrogateescape")
        replaced = self._pattern.sub(lambda m: self._table[m.group()], text)
        return replaced.encode("utf-8", "surrogateescape")

    @overload
    def transliterate(self, text: str) -> str: ...

    @overload
    def transliterate(self, text: bytes) -> bytes: ...

    def transliterate(self, text: str | bytes) -> str | bytes:
        """Transliterate *text*, returning the same type it was given."""
        if isinstance(text, bytes):
            return self.transliterate_bytes(text)
        raw = to_bytes(text)
        if not has_high_bytes(raw):
            return text
        return self.transliterate_bytes(raw).decode("utf-8", "surrogateescape")


@overload
def remove_accents(text: str, *, locale: str | None = None) -> str: ...


@overload
def remove_accents(text: bytes, *, locale: str | None = None) -> bytes: ...


def remove_accents(text: str | bytes, *, locale: str | None = None) -> str | bytes:
    """Convert accented characters in *text* to ASCII equivalents.

    >>> remove_accents("Œuvre")
    'OEuvre'
    >>> remove_accents("€100")
    'E100'
    """
    return Transliterator(locale).transliterate(text)
