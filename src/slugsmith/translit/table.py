"""Static transliteration data.

Two independent tables:

* :data:`BASE_TABLE` — accented letters, ligatures and a couple of
  currency signs mapped to ASCII.  Keys are exact characters; a locale
  overlay swaps in replacements for a handful of keys (German umlauts,
  Danish vowels, the Catalan flown dot, Serbian/Bosnian Đ).
* :data:`LEGACY_SINGLE` / :data:`LEGACY_DOUBLE` — byte maps for input
  that is not UTF-8, assuming an ISO-8859-1 / Windows-1252 origin.
  Single-letter replacements are applied first, then the two-letter
  exceptions.

Everything here is read-only.  :func:`build_table` returns a
:class:`~types.MappingProxyType` cached per locale group, so tables can
be shared freely between callers.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

BASE_TABLE: Mapping[str, str] = MappingProxyType(
    {
        # Latin-1 Supplement
        "ª": "a", "º": "o",
        "À": "A", "Á": "A", "Â": "A", "Ã": "A", "Ä": "A", "Å": "A",
        "Æ": "AE", "Ç": "C",
        "È": "E", "É": "E", "Ê": "E", "Ë": "E",
        "Ì": "I", "Í": "I", "Î": "I", "Ï": "I",
        "Ð": "D", "Ñ": "N",
        "Ò": "O", "Ó": "O", "Ô": "O", "Õ": "O", "Ö": "O", "Ø": "O",
        "Ù": "U", "Ú": "U", "Û": "U", "Ü": "U",
        "Ý": "Y", "Þ": "TH", "ß": "s",
        "à": "a", "á": "a", "â": "a", "ã": "a", "ä": "a", "å": "a",
        "æ": "ae", "ç": "c",
        "è": "e", "é": "e", "ê": "e", "ë": "e",
        "ì": "i", "í": "i", "î": "i", "ï": "i",
        "ð": "d", "ñ": "n",
        "ò": "o", "ó": "o", "ô": "o", "õ": "o", "ö": "o", "ø": "o",
        "ù": "u", "ú": "u", "û": "u", "ü": "u",
        "ý": "y", "þ": "th", "ÿ": "y",
        # Latin Extended-A
        "Ā": "A", "ā": "a", "Ă": "A", "ă": "a", "Ą": "A", "ą": "a",
        "Ć": "C", "ć": "c", "Ĉ": "C", "ĉ": "c",
        "Ċ": "C", "ċ": "c", "Č": "C", "č": "c",
        "Ď": "D", "ď": "d", "Đ": "D", "đ": "d",
        "Ē": "E", "ē": "e", "Ĕ": "E", "ĕ": "e", "Ė": "E", "ė": "e",
        "Ę": "E", "ę": "e", "Ě": "E", "ě": "e",
        "Ĝ": "G", "ĝ": "g", "Ğ": "G", "ğ": "g",
        "Ġ": "G", "ġ": "g", "Ģ": "G", "ģ": "g",
        "Ĥ": "H", "ĥ": "h", "Ħ": "H", "ħ": "h",
        "Ĩ": "I", "ĩ": "i", "Ī": "I", "ī": "i", "Ĭ": "I", "ĭ": "i",
        "Į": "I", "į": "i", "İ": "I", "ı": "i",
        "Ĳ": "IJ", "ĳ": "ij",
        "Ĵ": "J", "ĵ": "j",
        "Ķ": "K", "ķ": "k", "ĸ": "k",
        "Ĺ": "L", "ĺ": "l", "Ļ": "L", "ļ": "l", "Ľ": "L", "ľ": "l",
        "Ŀ": "L", "ŀ": "l", "Ł": "L", "ł": "l",
        "Ń": "N", "ń": "n", "Ņ": "N", "ņ": "n", "Ň": "N", "ň": "n",
        "ŉ": "n", "Ŋ": "N", "ŋ": "n",
        "Ō": "O", "ō": "o", "Ŏ": "O", "ŏ": "o", "Ő": "O", "ő": "o",
        "Œ": "OE", "œ": "oe",
        "Ŕ": "R", "ŕ": "r", "Ŗ": "R", "ŗ": "r", "Ř": "R", "ř": "r",
        "Ś": "S", "ś": "s", "Ŝ": "S", "ŝ": "s",
        "Ş": "S", "ş": "s", "Š": "S", "š": "s",
        "Ţ": "T", "ţ": "t", "Ť": "T", "ť": "t", "Ŧ": "T", "ŧ": "t",
        "Ũ": "U", "ũ": "u", "Ū": "U", "ū": "u", "Ŭ": "U", "ŭ": "u",
        "Ů": "U", "ů": "u", "Ű": "U", "ű": "u", "Ų": "U", "ų": "u",
        "Ŵ": "W", "ŵ": "w",
        "Ŷ": "Y", "ŷ": "y", "Ÿ": "Y",
        "Ź": "Z", "ź": "z", "Ż": "Z", "ż": "z", "Ž": "Z", "ž": "z",
        "ſ": "s",
        # Latin Extended-B
        "Ș": "S", "ș": "s", "Ț": "T", "ț": "t",
        # Currency
        "€": "E",
        "£": "",
        # Vietnamese vowels: unmarked
        "Ơ": "O", "ơ": "o", "Ư": "U", "ư": "u",
        # grave
        "Ầ": "A", "ầ": "a", "Ằ": "A", "ằ": "a", "Ề": "E", "ề": "e",
        "Ồ": "O", "ồ": "o", "Ờ": "O", "ờ": "o", "Ừ": "U", "ừ": "u",
        "Ỳ": "Y", "ỳ": "y",
        # hook
        "Ả": "A", "ả": "a", "Ẩ": "A", "ẩ": "a", "Ẳ": "A", "ẳ": "a",
        "Ẻ": "E", "ẻ": "e", "Ể": "E", "ể": "e",
        "Ỉ": "I", "ỉ": "i",
        "Ỏ": "O", "ỏ": "o", "Ổ": "O", "ổ": "o", "Ở": "O", "ở": "o",
        "Ủ": "U", "ủ": "u", "Ử": "U", "ử": "u",
        "Ỷ": "Y", "ỷ": "y",
        # tilde
        "Ẫ": "A", "ẫ": "a", "Ẵ": "A", "ẵ": "a",
        "Ẽ": "E", "ẽ": "e", "Ễ": "E", "ễ": "e",
        "Ỗ": "O", "ỗ": "o", "Ỡ": "O", "ỡ": "o",
        "Ữ": "U", "ữ": "u",
        "Ỹ": "Y", "ỹ": "y",
        # acute
        "Ấ": "A", "ấ": "a", "Ắ": "A", "ắ": "a",
        "Ế": "E", "ế": "e",
        "Ố": "O", "ố": "o", "Ớ": "O", "ớ": "o",
        "Ứ": "U", "ứ": "u",
        # dot below
        "Ạ": "A", "ạ": "a", "Ậ": "A", "ậ": "a", "Ặ": "A", "ặ": "a",
        "Ẹ": "E", "ẹ": "e", "Ệ": "E", "ệ": "e",
        "Ị": "I", "ị": "i",
        "Ọ": "O", "ọ": "o", "Ộ": "O", "ộ": "o", "Ợ": "O", "ợ": "o",
        "Ụ": "U", "ụ": "u", "Ự": "U", "ự": "u",
        "Ỵ": "Y", "ỵ": "y",
        # Hanyu Pinyin vowels
        "ɑ": "a",
        "Ǖ": "U", "ǖ": "u",  # macron
        "Ǘ": "U", "ǘ": "u",  # acute
        "Ǎ": "A", "ǎ": "a", "Ǐ": "I", "ǐ": "i",  # caron
        "Ǒ": "O", "ǒ": "o", "Ǔ": "U", "ǔ": "u",
        "Ǚ": "U", "ǚ": "u",
        "Ǜ": "U", "ǜ": "u",  # grave
    }
)

# ---------------------------------------------------------------------------
# Locale overlays
# ---------------------------------------------------------------------------

LOCALE_OVERLAYS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "german": MappingProxyType(
            {"Ä": "Ae", "ä": "ae", "Ö": "Oe", "ö": "oe", "Ü": "Ue", "ü": "ue", "ß": "ss"}
        ),
        "danish": MappingProxyType(
            {"Æ": "Ae", "æ": "ae", "Ø": "Oe", "ø": "oe", "Å": "Aa", "å": "aa"}
        ),
        "catalan": MappingProxyType({"l·l": "ll"}),
        "serbian": MappingProxyType({"Đ": "DJ", "đ": "dj"}),
    }
)

_LOCALE_GROUPS: Mapping[str, str] = MappingProxyType(
    {
        "de_DE": "german",
        "de_DE_formal": "german",
        "de_CH": "german",
        "de_CH_informal": "german",
        "da_DK": "danish",
        "ca": "catalan",
        "sr_RS": "serbian",
        "bs_BA": "serbian",
    }
)

# ---------------------------------------------------------------------------
# Legacy single-byte fallback (input that is not UTF-8)
# ---------------------------------------------------------------------------

LEGACY_SINGLE: Mapping[int, str] = MappingProxyType(
    {
        0x80: "E", 0x83: "f", 0x8A: "S", 0x8E: "Z", 0x9A: "s", 0x9E: "z",
        0x9F: "Y", 0xA2: "c", 0xA5: "Y", 0xB5: "u",
        0xC0: "A", 0xC1: "A", 0xC2: "A", 0xC3: "A", 0xC4: "A", 0xC5: "A",
        0xC7: "C",
        0xC8: "E", 0xC9: "E", 0xCA: "E", 0xCB: "E",
        0xCC: "I", 0xCD: "I", 0xCE: "I", 0xCF: "I",
        0xD1: "N",
        0xD2: "O", 0xD3: "O", 0xD4: "O", 0xD5: "O", 0xD6: "O", 0xD8: "O",
        0xD9: "U", 0xDA: "U", 0xDB: "U", 0xDC: "U",
        0xDD: "Y",
        0xE0: "a", 0xE1: "a", 0xE2: "a", 0xE3: "a", 0xE4: "a", 0xE5: "a",
        0xE7: "c",
        0xE8: "e", 0xE9: "e", 0xEA: "e", 0xEB: "e",
        0xEC: "i", 0xED: "i", 0xEE: "i", 0xEF: "i",
        0xF1: "n",
        0xF2: "o", 0xF3: "o", 0xF4: "o", 0xF5: "o", 0xF6: "o", 0xF8: "o",
        0xF9: "u", 0xFA: "u", 0xFB: "u", 0xFC: "u",
        0xFD: "y", 0xFF: "y",
    }
)

LEGACY_DOUBLE: Mapping[int, str] = MappingProxyType(
    {
        0x8C: "OE", 0x9C: "oe",
        0xC6: "AE", 0xE6: "ae",
        0xD0: "DH", 0xF0: "dh",
        0xDE: "TH", 0xFE: "th",
        0xDF: "ss",
    }
)


# ---------------------------------------------------------------------------
# Table construction
# ---------------------------------------------------------------------------


def recognized_locales() -> list[str]:
    """Locale identifiers that select an overlay, sorted."""
    return sorted(_LOCALE_GROUPS)


def locale_group(locale: str | None) -> str | None:
    """Overlay group for *locale*, or ``None`` for the base table."""
    if not locale:
        return None
    return _LOCALE_GROUPS.get(locale)


def overlay(base: Mapping[str, str], group: str | None) -> Mapping[str, str]:
    """Return *base* with the entries of overlay *group* swapped in."""
    if group is None:
        return base
    merged = dict(base)
    merged.update(LOCALE_OVERLAYS[group])
    return MappingProxyType(merged)


@lru_cache(maxsize=None)
def group_table(group: str | None) -> Mapping[str, str]:
    """Cached table for overlay *group* (``None`` for the base table)."""
    return overlay(BASE_TABLE, group)


def build_table(locale: str | None = None) -> Mapping[str, str]:
    """Transliteration table for *locale*.

    Unrecognized or empty locales get the base table.  The result is
    immutable and shared between all callers asking for the same group.
    """
    return group_table(locale_group(locale))


def lookup(grapheme: str, locale: str | None = None) -> str | None:
    """ASCII replacement for *grapheme*, or ``None`` if it passes through."""
    return build_table(locale).get(grapheme)
