"""
Text utilities for accent- and case-insensitive matching.

Used by the inventory search and category filters.
"""

import unicodedata
from typing import Optional


def normalize_search_text(text: Optional[str]) -> str:
    """
    Normalize text for comparison.

    Handles accents and mixed case:
    - "Café Molido" → "cafe molido"
    - "  LÁCTEOS " → "lacteos"

    Args:
        text: Original text (may have accents, mixed case, None)

    Returns:
        Lowercase ASCII-folded string, empty for None
    """
    if not text:
        return ""

    # NFD decomposition separates base chars from accents
    normalized = unicodedata.normalize('NFD', text.strip())

    # Remove accent marks (combining characters in Unicode category 'Mn')
    folded = ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )

    return folded.lower()


def contains_text(haystack: Optional[str], needle: Optional[str]) -> bool:
    """True if needle occurs in haystack after normalization. Empty needle matches."""
    target = normalize_search_text(needle)
    if not target:
        return True
    return target in normalize_search_text(haystack)
