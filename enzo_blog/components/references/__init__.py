"""
References component - ``[[id]]`` cross-post linking.
"""

from ._impl import (
    POST_FRAGMENT_PREFIX,
    REFERENCE_RE,
    extract_references,
    linkify_references,
    reference_anchor,
)

__all__ = [
    "POST_FRAGMENT_PREFIX",
    "REFERENCE_RE",
    "extract_references",
    "linkify_references",
    "reference_anchor",
]
