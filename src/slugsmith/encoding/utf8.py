"""UTF-8 well-formedness detection.

The classifier is deliberately permissive: it accepts the historical
5- and 6-byte lead patterns (``111110xx`` and ``1111110x``) that
RFC 3629 retired.  Callers route text through the Unicode
transliteration table only when this returns ``True``; everything else
goes through the legacy single-byte table.

Helpers here also define how ``str`` input becomes raw bytes for the
rest of the pipeline.
"""

from __future__ import annotations

import re

# (mask, pattern, continuation bytes) — checked in order
_LEAD_PATTERNS: tuple[tuple[int, int, int], ...] = (
    (0x80, 0x00, 0),  # 0xxxxxxx
    (0xE0, 0xC0, 1),  # 110xxxxx
    (0xF0, 0xE0, 2),  # 1110xxxx
    (0xF8, 0xF0, 3),  # 11110xxx
    (0xFC, 0xF8, 4),  # 111110xx
    (0xFE, 0xFC, 5),  # 1111110x
)

_HIGH_BYTE = re.compile(rb"[\x80-\xff]")


def to_bytes(text: str | bytes) -> bytes:
    """Return the raw bytes the pipeline operates on.

    ``str`` is encoded as UTF-8 with ``surrogateescape`` so that names
    decoded by :func:`os.fsdecode` come back as their original bytes.
    Lone surrogates outside the escape range fall back to
    ``surrogatepass``.
    """
    if isinstance(text, bytes):
        return text
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


def has_high_bytes(data: bytes) -> bool:
    """True if *data* contains any byte ``>= 0x80``."""
    return _HIGH_BYTE.search(data) is not None


def _continuation_count(lead: int) -> int | None:
    for mask, pattern, count in _LEAD_PATTERNS:
        if lead & mask == pattern:
            return count
    return None


def is_well_formed_utf8(data: str | bytes) -> bool:
    """Decide whether *data* fits the (permissive) UTF-8 model.

    Every lead byte announces ``n`` continuation bytes; exactly ``n``
    bytes of the form ``10xxxxxx`` must follow.  A stray continuation
    byte in lead position, a non-continuation byte inside a sequence,
    or running out of input mid-sequence is an immediate failure.

    >>> is_well_formed_utf8("Café".encode())
    True
    >>> is_well_formed_utf8(b"\\xc0A")
    False
    """
    raw = to_bytes(data)
    length = len(raw)
    i = 0
    while i < length:
        n = _continuation_count(raw[i])
        if n is None:
            return False
        for _ in range(n):
            i += 1
            if i == length or raw[i] & 0xC0 != 0x80:
                return False
        i += 1
    return True


__all__ = ["has_high_bytes", "is_well_formed_utf8", "to_bytes"]
