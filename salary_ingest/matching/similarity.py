"""Fuzzy string comparison primitives.

Every "did the user mean X" decision in the ingestion pipeline goes through
this module: canonical value resolution, city suggestions and city
canonicalization all compare strings with the same normalization and the
same score so that their thresholds mean the same thing.

The score is the classic Levenshtein distance (unit cost insert, delete and
substitute) turned into a ratio:

    similarity = 1 - distance / max(len(a), len(b))
"""

import re
import unicodedata

from rapidfuzz.distance import Levenshtein

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize text for comparison.

    Lowercases, decomposes accented characters and drops the combining marks
    (so "Liège" and "liege" compare equal), trims, and collapses internal
    whitespace runs to one space.

    Args:
        text: Text to normalize

    Returns:
        Normalized text (empty string for empty input)

    Example:
        >>> normalize_text("  Brügge  ")
        'brugge'
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE_RE.sub(" ", stripped).strip()


def similarity(a: str, b: str) -> float:
    """Score how similar two strings are, from 0.0 to 1.0.

    Both strings are normalized with normalize_text() first. Two empty
    strings are identical (1.0). The function is pure and symmetric.

    Args:
        a: First string
        b: Second string

    Returns:
        1.0 for identical (after normalization), approaching 0.0 as they differ

    Example:
        >>> similarity("Bruxelles", "bruxelles")
        1.0
        >>> round(similarity("Antwerpen", "Antwerp"), 2)
        0.78
    """
    return Levenshtein.normalized_similarity(normalize_text(a), normalize_text(b))
