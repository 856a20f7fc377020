"""Per-source field extraction from cleaned post bodies."""

import re
from typing import Dict, Optional

from ..config.models import SourceConfig
from ..logging import get_logger
from .models import RawField
from .sections import clean_body

logger = get_logger(__name__, component="parsing")

# Answers that mean "not stated"
PLACEHOLDER_VALUES = frozenset({"", "-", "/", "n/a", "na", "none", "?", "nvt"})

# Bold/underline markers are removed from the whole body before matching so
# that "**Age:** 30" reads as "Age: 30"
_BODY_EMPHASIS_RE = re.compile(r"\*\*|__")
_VALUE_MARKUP_RE = re.compile(r"\*\*|__|~~|`|(?<!\w)[*_]|[*_](?!\w)")
_CURRENCY_SYMBOL_RE = re.compile(r"[€$£¥]")
_WHITESPACE_RE = re.compile(r"\s+")


def prepare_body(body: str) -> str:
    """Cleaned body with bold and underline markers removed."""
    return _BODY_EMPHASIS_RE.sub("", clean_body(body))


def clean_value(raw: Optional[str]) -> Optional[str]:
    """Strip markdown and currency symbols from a captured value.

    Placeholder answers ("-", "N/A", "/") become None.

    Example:
        >>> clean_value(" **€ 3.400** ")
        '3.400'
    """
    if raw is None:
        return None
    text = _VALUE_MARKUP_RE.sub("", raw)
    text = _CURRENCY_SYMBOL_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    if text.lower() in PLACEHOLDER_VALUES:
        return None
    return text


def extract_fields(body: str, source: SourceConfig) -> Dict[str, RawField]:
    """Capture the raw text of every configured field.

    Returns one RawField per entry of ``source.field_mappings``, in
    configured order. A field whose pattern does not match gets
    ``raw_text=None``; the remaining fields are still extracted.

    Args:
        body: Raw markdown body of a post
        source: Source whose field patterns apply

    Returns:
        Mapping of field name to RawField
    """
    prepared = prepare_body(body)
    fields: Dict[str, RawField] = {}

    for field_name, mapping in source.field_mappings.items():
        match = mapping.regex.search(prepared)
        raw_text = clean_value(match.group(1)) if match else None
        fields[field_name] = RawField(field_name=field_name, raw_text=raw_text)

    missing = [name for name, field in fields.items() if field.raw_text is None]
    logger.debug(
        "Extracted fields",
        extra={
            "event": "parsing.fields.extracted",
            "source_id": source.name,
            "fields_found": len(fields) - len(missing),
            "fields_missing": len(missing),
        },
    )
    return fields
