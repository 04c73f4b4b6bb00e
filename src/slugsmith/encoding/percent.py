"""Length-bounded percent-encoding for UTF-8 text.

ASCII bytes pass through as themselves; every multi-byte sequence is
rendered as ``%xx`` tokens (lowercase hex).  The optional budget counts
output slots: one per ASCII byte, three per encoded octet.  A sequence
is emitted whole or not at all — the encoder stops at the first unit
that would overflow the budget rather than splitting a character.
"""

from __future__ import annotations

from slugsmith.encoding.utf8 import to_bytes

# Slots consumed by a single ``%xx`` token
_OCTET_UNITS = 3


def sequence_length(lead: int) -> int:
    """Number of octets in the sequence started by *lead* (a byte >= 0x80)."""
    if lead < 0xE0:
        return 2
    if lead < 0xF0:
        return 3
    return 4


def percent_encode(text: str | bytes, max_units: int = 0) -> str:
    """Render *text* as an ASCII-safe, percent-escaped string.

    Args:
        text: Input text; ``str`` is encoded as UTF-8 first.
        max_units: Output budget in slots.  ``0`` means unbounded.

    Returns:
        The encoded string, truncated (never split mid-sequence) when
        the budget runs out.  A multi-byte sequence left incomplete at
        the end of input is dropped.
    """
    raw = to_bytes(text)
    out: list[str] = []
    used = 0
    pending: list[int] = []
    octets = 1

    for value in raw:
        if value < 0x80:
            if max_units and used >= max_units:
                break
            out.append(chr(value))
            used += 1
            continue

        if not pending:
            octets = sequence_length(value)
        pending.append(value)

        if max_units and used + octets * _OCTET_UNITS > max_units:
            break
        if len(pending) == octets:
            out.extend(f"%{octet:02x}" for octet in pending)
            used += octets * _OCTET_UNITS
            pending = []
            octets = 1

    return "".join(out)
