"""String similarity primitives shared by the normalization and location layers."""

from .similarity import normalize_text, similarity

__all__ = [
    "normalize_text",
    "similarity",
]
