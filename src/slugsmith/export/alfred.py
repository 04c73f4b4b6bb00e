"""Launcher (Alfred script filter) response for string mode.

The launcher reads a JSON document from stdout: a single item whose
subtitle, argument, copy text and large-type text are all the slug,
plus a ``slug`` workflow variable.  Field names are fixed by the
launcher and must not change.
"""

from __future__ import annotations

import json
from typing import Any


def build_response(slug: str) -> dict[str, Any]:
    """Response object carrying *slug* in every field the launcher reads."""
    return {
        "items": [
            {
                "type": "default",
                "title": "Slugify",
                "subtitle": slug,
                "arg": slug,
                "text": {
                    "copy": slug,
                    "large_type": slug,
                },
            }
        ],
        "variables": {"slug": slug},
    }


def render_response(slug: str) -> str:
    return json.dumps(build_response(slug))
