"""
Reference linker - ``[[id]]`` tokens to intra-app navigation links.

Existence of the referenced post is not checked here; callers decide how
to present references that do not resolve.
"""

from __future__ import annotations

import re

REFERENCE_RE = re.compile(r"\[\[([A-Za-z0-9_-]+)\]\]")

POST_FRAGMENT_PREFIX = "#post-"


def reference_anchor(post_id: str) -> str:
    """Build the anchor markup for a single reference."""
    safe_id = post_id.strip()
    return (
        f'<a href="{POST_FRAGMENT_PREFIX}{safe_id}" '
        f'data-post-reference="{safe_id}">[{safe_id}]</a>'
    )


def linkify_references(html: str) -> str:
    """Replace every ``[[id]]`` token with a reference anchor."""
    return REFERENCE_RE.sub(lambda match: reference_anchor(match.group(1)), html)


def extract_references(text: str) -> list[str]:
    """Referenced ids in first-occurrence order, without duplicates."""
    seen: dict[str, None] = {}
    for match in REFERENCE_RE.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)
