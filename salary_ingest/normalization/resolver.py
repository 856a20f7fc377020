"""Free text to canonical tag resolution.

Resolution runs an ordered chain of matchers. Each matcher receives the
normalized input and returns a tag or None; the first tag returned wins:

1. exact      - normalized input equals a normalized phrase
2. substring  - input contains a phrase, or a phrase contains the input
3. fuzzy      - best similarity score at or above the threshold

Tables are walked in declaration order, so the first-declared tag wins any
tie at every stage.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ..logging import get_logger
from ..matching import normalize_text, similarity
from .mappings import CanonicalMapping

logger = get_logger(__name__, component="normalization")

DEFAULT_THRESHOLD = 0.8
DEFAULT_MIN_SUBSTRING_LENGTH = 3


@dataclass(frozen=True)
class MatchOptions:
    """Tuning knobs shared by every matcher in the chain."""

    threshold: float = DEFAULT_THRESHOLD
    min_substring_length: int = DEFAULT_MIN_SUBSTRING_LENGTH


Matcher = Callable[[str, CanonicalMapping, MatchOptions], Optional[str]]


def _phrases(mapping: CanonicalMapping):
    for tag, phrases in mapping.items():
        for phrase in phrases:
            yield tag, normalize_text(phrase)


def match_exact(value: str, mapping: CanonicalMapping, options: MatchOptions) -> Optional[str]:
    for tag, phrase in _phrases(mapping):
        if phrase == value:
            return tag
    return None


def match_substring(
    value: str, mapping: CanonicalMapping, options: MatchOptions
) -> Optional[str]:
    """Containment in either direction.

    Phrases and inputs shorter than ``min_substring_length`` sit this stage
    out, so "ma" cannot claim every input that happens to contain "ma".
    """
    if len(value) < options.min_substring_length:
        return None

    for tag, phrase in _phrases(mapping):
        if len(phrase) < options.min_substring_length:
            continue
        if phrase in value or value in phrase:
            return tag
    return None


def match_fuzzy(value: str, mapping: CanonicalMapping, options: MatchOptions) -> Optional[str]:
    best_tag: Optional[str] = None
    best_score = 0.0

    for tag, phrase in _phrases(mapping):
        score = similarity(value, phrase)
        # Strict comparison keeps the earliest tag on ties
        if score > best_score:
            best_tag, best_score = tag, score

    if best_tag is not None and best_score >= options.threshold:
        return best_tag
    return None


MATCHERS: Tuple[Tuple[str, Matcher], ...] = (
    ("exact", match_exact),
    ("substring", match_substring),
    ("fuzzy", match_fuzzy),
)


def normalize(
    raw_value: Optional[str],
    mapping: CanonicalMapping,
    threshold: float = DEFAULT_THRESHOLD,
    min_substring_length: int = DEFAULT_MIN_SUBSTRING_LENGTH,
) -> Optional[str]:
    """Resolve free text to a canonical tag of ``mapping``.

    Args:
        raw_value: Text as written by the poster
        mapping: Ordered canonical tag to phrases table
        threshold: Minimum similarity accepted by the fuzzy stage
        min_substring_length: Shortest phrase or input allowed in the
            substring stage

    Returns:
        The canonical tag, or None when nothing matches. Unrecognized input
        never raises.

    Example:
        >>> from .mappings import EDUCATION
        >>> normalize("Prof Bachelor energy", EDUCATION)
        'bachelor'
        >>> normalize("MA", EDUCATION)
        'master'
    """
    if not raw_value:
        return None

    value = normalize_text(raw_value)
    if not value:
        return None

    options = MatchOptions(threshold=threshold, min_substring_length=min_substring_length)
    for stage, matcher in MATCHERS:
        tag = matcher(value, mapping, options)
        if tag is not None:
            logger.debug(
                "Resolved canonical value",
                extra={
                    "event": "normalization.value.resolved",
                    "stage": stage,
                    "canonical_tag": tag,
                },
            )
            return tag

    return None
