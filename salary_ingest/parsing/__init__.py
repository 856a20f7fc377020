"""Section detection and field extraction for raw post bodies."""

from .extractor import PLACEHOLDER_VALUES, clean_value, extract_fields, prepare_body
from .models import RawField, SectionMatch, SectionReport
from .sections import clean_body, detect_sections

__all__ = [
    "PLACEHOLDER_VALUES",
    "RawField",
    "SectionMatch",
    "SectionReport",
    "clean_body",
    "clean_value",
    "detect_sections",
    "extract_fields",
    "prepare_body",
]
