"""Dash/whitespace/markup normalization — the last stage of a slug.

Passes run in a fixed order; each one assumes the previous has run:

1. strip markup tags
2. keep ``%xx`` escapes, drop every other ``%``
3. lowercase (Unicode-aware + percent-encode when the text is UTF-8,
   ASCII-only otherwise)
4. ``save`` context only: fold encoded nbsp/dashes to ``-``, delete
   decorative punctuation, turn ``×`` into ``x``
5. drop HTML entities
6. ``.`` → ``-``
7. delete everything outside ``[%a-z0-9 _-]``
8. whitespace runs → ``-``
9. ``-`` runs → ``-``
10. trim ``-`` at both ends

The whole stage works on bytes so that input which is not UTF-8 flows
through unchanged until the character-class filter removes it.
"""

from __future__ import annotations

import re
from enum import StrEnum

from slugsmith.encoding.percent import percent_encode
from slugsmith.encoding.utf8 import is_well_formed_utf8, to_bytes

# Budget handed to the percent-encoder, in output slots
DEFAULT_ENCODED_UNITS = 200


class Context(StrEnum):
    """What the slug is for — ``save`` applies the stricter cleanup."""

    DISPLAY = "display"
    SAVE = "save"


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# Comments, processing instructions and tags; an unclosed tag runs to the end.
# "<" followed by whitespace is not a tag.
_TAG = re.compile(rb"<!--.*?(?:-->|\Z)|<\?.*?(?:\?>|\Z)|<[^\s<>][^>]*(?:>|\Z)", re.DOTALL)
_STRAY_PERCENT = re.compile(rb"%(?![0-9a-fA-F]{2})")
_ENTITY = re.compile(rb"&.+?;")
_DISALLOWED = re.compile(rb"[^%a-z0-9 _-]")
_WHITESPACE = re.compile(rb"\s+")
_DASHES = re.compile(rb"-+")

# nbsp, ndash, mdash — encoded and as entities
_DASH_LIKE: tuple[bytes, ...] = (
    b"%c2%a0", b"%e2%80%93", b"%e2%80%94",
    b"&nbsp;", b"&#160;", b"&ndash;", b"&#8211;", b"&mdash;", b"&#8212;",
)

_DECORATIVE: tuple[bytes, ...] = (
    # iexcl and iquest
    b"%c2%a1", b"%c2%bf",
    # angle quotes
    b"%c2%ab", b"%c2%bb", b"%e2%80%b9", b"%e2%80%ba",
    # curly quotes
    b"%e2%80%98", b"%e2%80%99", b"%e2%80%9c", b"%e2%80%9d",
    b"%e2%80%9a", b"%e2%80%9b", b"%e2%80%9e", b"%e2%80%9f",
    # copy, reg, deg, hellip, trade
    b"%c2%a9", b"%c2%ae", b"%c2%b0", b"%e2%80%a6", b"%e2%84%a2",
    # acute accents
    b"%c2%b4", b"%cb%8a", b"%cc%81", b"%cd%81",
    # grave accent, macron, caron
    b"%cc%80", b"%cc%84", b"%cc%8c",
)

_TIMES = b"%c3%97"


def strip_tags(data: bytes) -> bytes:
    """Remove markup tags, comments and processing instructions."""
    return _TAG.sub(b"", data)


def _lowercase(data: bytes, max_encoded_units: int) -> bytes:
    if is_well_formed_utf8(data):
        lowered = data.decode("utf-8", "surrogateescape").lower()
        data = percent_encode(lowered.encode("utf-8", "surrogateescape"), max_encoded_units).encode(
            "ascii"
        )
    return data.lower()


def _save_cleanup(data: bytes) -> bytes:
    for token in _DASH_LIKE:
        data = data.replace(token, b"-")
    for token in _DECORATIVE:
        data = data.replace(token, b"")
    return data.replace(_TIMES, b"x")


def normalize(
    text: str | bytes,
    context: Context | str = Context.DISPLAY,
    *,
    max_encoded_units: int = DEFAULT_ENCODED_UNITS,
) -> str:
    """Reduce *text* to a hyphen-separated slug over ``[%a-z0-9_-]``.

    Args:
        text: Title to normalize; ``str`` is treated as UTF-8.
        context: ``save`` additionally folds dashes and strips
            decorative punctuation before the character filter.
        max_encoded_units: Percent-encoder budget; ``0`` is unbounded.

    Returns:
        The slug, possibly empty.
    """
    data = strip_tags(to_bytes(text))
    data = _STRAY_PERCENT.sub(b"", data)
    data = _lowercase(data, max_encoded_units)

    if Context(context) is Context.SAVE:
        data = _save_cleanup(data)

    data = _ENTITY.sub(b"", data)
    data = data.replace(b".", b"-")
    data = _DISALLOWED.sub(b"", data)
    data = _WHITESPACE.sub(b"-", data)
    data = _DASHES.sub(b"-", data)
    return data.strip(b"-").decode("ascii")
