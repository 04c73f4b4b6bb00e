"""Slug pipeline — transliterate → normalize → fallback.

``save`` context (the default) removes accents before normalizing;
``display`` keeps them, so non-ASCII letters survive as ``%xx``
escapes.  An empty result is replaced by the caller's fallback.
"""

from __future__ import annotations

import logging

from slugsmith.pipeline.normalizer import DEFAULT_ENCODED_UNITS, Context, normalize
from slugsmith.translit.transliterator import Transliterator

logger = logging.getLogger(__name__)


def slugify(
    title: str | bytes,
    fallback: str = "",
    context: Context | str = Context.SAVE,
    *,
    locale: str | None = None,
    max_encoded_units: int = DEFAULT_ENCODED_UNITS,
) -> str:
    """Turn *title* into a canonical slug.

    Args:
        title: Arbitrary text; ``bytes`` need not be valid UTF-8.
        fallback: Returned when the slug comes out empty.
        context: ``save`` or ``display``.
        locale: Selects a transliteration overlay (``de_DE``, ``da_DK``,
            ``ca``, ``sr_RS``, ...).  Ignored in ``display`` context.
        max_encoded_units: Percent-encoder budget; ``0`` is unbounded.

    >>> slugify("Café au lait")
    'cafe-au-lait'
    >>> slugify("***", "untitled")
    'untitled'
    """
    context = Context(context)
    if context is Context.SAVE:
        title = Transliterator(locale).transliterate(title)

    slug = normalize(title, context, max_encoded_units=max_encoded_units)
    if not slug:
        logger.debug("Slug for %r came out empty — using fallback %r", title, fallback)
        return fallback
    return slug
