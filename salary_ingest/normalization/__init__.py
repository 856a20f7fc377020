"""Canonical value normalization for salary posts.

- resolve free text to canonical tags (exact, substring, fuzzy)
- typed field normalizers (age, experience, booleans, currency, size)
- commute distance extraction
- PostNormalizer: raw post body to CanonicalRecord
"""

from .distance import extract_distance
from .fields import (
    FieldValueNormalizer,
    normalize_age,
    normalize_boolean,
    normalize_company_size,
    normalize_currency,
    normalize_dependents,
    normalize_field_value,
    normalize_integer,
    normalize_work_experience,
)
from .models import CanonicalRecord, NormalizationResult
from .resolver import normalize
from .service import PostNormalizer

__all__ = [
    "CanonicalRecord",
    "FieldValueNormalizer",
    "NormalizationResult",
    "PostNormalizer",
    "extract_distance",
    "normalize",
    "normalize_age",
    "normalize_boolean",
    "normalize_company_size",
    "normalize_currency",
    "normalize_dependents",
    "normalize_field_value",
    "normalize_integer",
    "normalize_work_experience",
]
