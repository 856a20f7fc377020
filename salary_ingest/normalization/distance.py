"""Commute distance extraction from mixed distance and duration answers.

People answer "Distance home-work" with things like "18km 25min",
"45 minutes 8km" or "1 hour 35km". The rules, in order:

1. a distance unit is present: the number right before it
2. only a time unit is present: the first number not bound to a time unit
3. the whole answer is a bare number or range: that
4. otherwise the first number anywhere
5. no digits: None

Numbers keep ranges ("20-30") and decimals ("10,5" becomes "10.5").
Distances above MAX_DISTANCE are implausible and yield None.
"""

import re
from typing import Optional

MAX_DISTANCE = 1000

_NUMBER = r"\d+(?:[.,]\d+)?"
_RANGE = rf"{_NUMBER}(?:\s*-\s*{_NUMBER})?"

_DISTANCE_UNITS = r"(?:kms?|kilomet(?:er|re)s?|kilomètres?|kilometern|miles?|mijl(?:en)?)"
_TIME_UNITS = (
    r"(?:min(?:s|utes?|uten)?|hours?|hrs?|uur|heures?|stunden?|h)"
)

_DISTANCE_RE = re.compile(rf"(?P<value>{_RANGE})\s*{_DISTANCE_UNITS}(?![a-z])", re.IGNORECASE)
_TIME_BOUND_RE = re.compile(rf"{_RANGE}\s*{_TIME_UNITS}(?![a-z])", re.IGNORECASE)
_HAS_TIME_UNIT_RE = re.compile(rf"(?<![a-z]){_TIME_UNITS}(?![a-z])", re.IGNORECASE)
_BARE_RE = re.compile(rf"^{_RANGE}$")
_RANGE_RE = re.compile(_RANGE)
_NUMBER_RE = re.compile(_NUMBER)


def _canonical_number(value: str) -> Optional[str]:
    """Normalize separators and apply the plausibility bound."""
    parts = [part.strip().replace(",", ".") for part in value.split("-")]
    if any(float(part) > MAX_DISTANCE for part in parts):
        return None
    return "-".join(parts)


def _first_unbound_number(text: str) -> Optional[str]:
    bound = [match.span() for match in _TIME_BOUND_RE.finditer(text)]
    for match in _RANGE_RE.finditer(text):
        start, end = match.span()
        if any(start < b_end and b_start < end for b_start, b_end in bound):
            continue
        return match.group()
    return None


def extract_distance(text: Optional[str]) -> Optional[str]:
    """Pick the distance out of a commute answer.

    Args:
        text: Raw answer, e.g. "30 km, 45 minutes"

    Returns:
        Numeric string ("30", "20-30", "10.5") or None

    Example:
        >>> extract_distance("18km 25min")
        '18'
        >>> extract_distance("45 minutes 8km")
        '8'
        >>> extract_distance("20-30 km")
        '20-30'
    """
    if not text:
        return None
    stripped = text.strip()
    if not any(ch.isdigit() for ch in stripped):
        return None

    distance = _DISTANCE_RE.search(stripped)
    if distance is not None:
        return _canonical_number(distance.group("value"))

    if _HAS_TIME_UNIT_RE.search(stripped):
        unbound = _first_unbound_number(stripped)
        return _canonical_number(unbound) if unbound is not None else None

    if _BARE_RE.match(stripped):
        return _canonical_number(stripped)

    first = _NUMBER_RE.search(stripped)
    return _canonical_number(first.group()) if first is not None else None
