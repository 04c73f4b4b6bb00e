"""Dot-aware slugification for file names and launcher queries.

Pure functions with no filesystem access — safe to import from any
layer (CLI, export, renamer).
"""

from __future__ import annotations

from slugsmith.encoding.utf8 import to_bytes
from slugsmith.pipeline.normalizer import DEFAULT_ENCODED_UNITS, Context
from slugsmith.pipeline.slugify import slugify


def slugify_segments(
    text: str | bytes,
    *,
    fallback: str = "",
    locale: str | None = None,
    max_encoded_units: int = DEFAULT_ENCODED_UNITS,
) -> str:
    """Slugify each ``.``-separated segment of *text* and rejoin with ``.``.

    Keeps extensions and version dots intact, which a single
    :func:`~slugsmith.pipeline.slugify.slugify` call would turn into
    hyphens.  Each segment is slugified in ``save`` context.

    >>> slugify_segments("Résumé Final.PDF")
    'resume-final.pdf'
    """
    segments = to_bytes(text).split(b".")
    return ".".join(
        slugify(
            segment,
            fallback,
            Context.SAVE,
            locale=locale,
            max_encoded_units=max_encoded_units,
        )
        for segment in segments
    )
