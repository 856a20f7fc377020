"""Typed normalizers for individual survey fields.

Every function here takes the raw captured text (or None) and returns a
canonical value or None. None means "not stated or not recognized"; none of
these functions raise for unexpected input.
"""

import math
import re
from functools import partial
from typing import Callable, Dict, Optional

from ..location import canonical_city
from ..matching import normalize_text
from ..parsing.extractor import PLACEHOLDER_VALUES
from .mappings import (
    CIVIL_STATUS,
    COMPANY_SIZE,
    COMPANY_SIZE_BUCKETS,
    CONTRACT_TYPE,
    EDUCATION,
    FALSE_TOKENS,
    MONTH_UNITS,
    SECTOR,
    TRUE_TOKENS,
    WORK_ARRANGEMENT,
)
from .models import CanonicalValue
from .resolver import (
    DEFAULT_MIN_SUBSTRING_LENGTH,
    DEFAULT_THRESHOLD,
    MatchOptions,
    match_exact,
    normalize,
)

SECTOR_THRESHOLD = 0.75

# Plausibility bounds, inclusive
AGE_RANGE = (16, 100)
DEPENDENTS_RANGE = (0, 20)
WEEKLY_HOURS_RANGE = (0, 168)
TELEWORK_DAYS_RANGE = (0, 7)
VACATION_DAYS_RANGE = (0, 366)
EXPERIENCE_YEARS_RANGE = (0, 70)

_INTEGER_RE = re.compile(r"\d+")
_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")
_AMOUNT_RE = re.compile(
    r"(?P<amount>\d{1,3}(?:[ .,\u00a0']\d{3})+(?:[.,]\d{1,2})?|\d+(?:[.,]\d{1,2})?)"
    r"(?P<thousands>\s?k\b)?",
    re.IGNORECASE,
)
_DECIMAL_TAIL_RE = re.compile(r"[.,]\d{1,2}$")
_TOKEN_SPLIT_RE = re.compile(r"[\s,;:()!.]+")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(raw: Optional[str]) -> Optional[str]:
    """Collapse whitespace and map placeholder answers to None."""
    if raw is None:
        return None
    text = _WHITESPACE_RE.sub(" ", raw).strip()
    if text.lower() in PLACEHOLDER_VALUES:
        return None
    return text


def _bounded(value: Optional[int], bounds) -> Optional[int]:
    if value is None:
        return None
    low, high = bounds
    return value if low <= value <= high else None


def normalize_integer(
    raw: Optional[str],
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Optional[int]:
    """First integer in the text, optionally bounded.

    A value outside [minimum, maximum] is discarded, not clamped.
    """
    if not raw:
        return None
    match = _INTEGER_RE.search(raw)
    if match is None:
        return None
    value = int(match.group())
    if minimum is not None and value < minimum:
        return None
    if maximum is not None and value > maximum:
        return None
    return value


def normalize_age(raw: Optional[str]) -> Optional[int]:
    """Age in years; only [16, 100] is plausible.

    >>> normalize_age("42 jaar")
    42
    >>> normalize_age("150") is None
    True
    """
    return normalize_integer(raw, *AGE_RANGE)


def normalize_dependents(raw: Optional[str]) -> Optional[int]:
    return normalize_integer(raw, *DEPENDENTS_RANGE)


def normalize_work_experience(raw: Optional[str]) -> Optional[int]:
    """Whole years of experience.

    Takes the first number (decimals allowed). When the text mentions a
    month unit in any supported language the number is read as months and
    floor-divided by 12, otherwise it is floored as years.

    >>> normalize_work_experience("18 months")
    1
    >>> normalize_work_experience("2.5 Y")
    2
    """
    if not raw:
        return None
    match = _NUMBER_RE.search(raw)
    if match is None:
        return None

    number = float(match.group().replace(",", "."))
    lowered = raw.lower()
    if any(unit in lowered for unit in MONTH_UNITS):
        years = math.floor(number / 12)
    else:
        years = math.floor(number)
    return _bounded(years, EXPERIENCE_YEARS_RANGE)


def normalize_boolean(raw: Optional[str]) -> Optional[bool]:
    """Yes/no answers in English, Dutch, French and German.

    The whole answer is tried first, then its leading word, so "Yes, 3%"
    reads as True. Single-letter tokens only count as a whole answer.
    """
    if raw is None:
        return None
    value = normalize_text(raw)
    if value in TRUE_TOKENS:
        return True
    if value in FALSE_TOKENS:
        return False
    if value in PLACEHOLDER_VALUES:
        return None

    leading = _TOKEN_SPLIT_RE.split(value, maxsplit=1)[0]
    if len(leading) < 2:
        return None
    if leading in TRUE_TOKENS:
        return True
    if leading in FALSE_TOKENS:
        return False
    return None


def normalize_currency(raw: Optional[str]) -> Optional[int]:
    """Whole currency units from an amount written any common way.

    Thousands separators (space, dot, comma, apostrophe before exactly
    three digits) are removed, a one or two digit tail after the last
    separator is read as cents and dropped, and a trailing "k" multiplies
    by 1000.

    >>> normalize_currency("€ 3.250,50")
    3250
    >>> normalize_currency("4,500")
    4500
    """
    if not raw:
        return None
    match = _AMOUNT_RE.search(raw)
    if match is None:
        return None

    amount = match.group("amount")
    cents = ""
    tail = _DECIMAL_TAIL_RE.search(amount)
    if tail:
        cents = tail.group()[1:]
        amount = amount[: tail.start()]

    whole = int(re.sub(r"\D", "", amount))
    if match.group("thousands"):
        fraction = int(cents) / (10 ** len(cents)) if cents else 0
        return int(round((whole + fraction) * 1000))
    return whole


def normalize_company_size(
    raw: Optional[str],
    threshold: float = DEFAULT_THRESHOLD,
    min_substring_length: int = DEFAULT_MIN_SUBSTRING_LENGTH,
) -> Optional[str]:
    """Company size bucket from a label ("startup") or a head count ("~250").

    A phrase from the table wins when it matches exactly; otherwise a head
    count is bucketed by its largest number; otherwise the generic resolver
    gets the text.
    """
    value = clean_text(raw)
    if value is None:
        return None

    options = MatchOptions(threshold=threshold, min_substring_length=min_substring_length)
    exact = match_exact(normalize_text(value), COMPANY_SIZE, options)
    if exact is not None:
        return exact

    amounts = [normalize_currency(m.group()) for m in _AMOUNT_RE.finditer(value)]
    amounts = [amount for amount in amounts if amount is not None]
    if amounts:
        headcount = max(amounts)
        for upper, bucket in COMPANY_SIZE_BUCKETS:
            if headcount <= upper:
                return bucket
        return "5001+"

    return normalize(value, COMPANY_SIZE, threshold, min_substring_length)


class FieldValueNormalizer:
    """Field name keyed dispatch from raw text to canonical values.

    Text fields and integer fields each have their own table. Unknown text
    fields fall back to the cleaned text; unknown integer fields fall back
    to the first integer.
    """

    def __init__(
        self,
        country: Optional[str] = None,
        fuzzy_threshold: float = DEFAULT_THRESHOLD,
        sector_threshold: float = SECTOR_THRESHOLD,
        min_substring_length: int = DEFAULT_MIN_SUBSTRING_LENGTH,
        city_min_score: float = 0.6,
    ):
        self.country = country
        canonical = partial(
            self._canonical,
            threshold=fuzzy_threshold,
            min_substring_length=min_substring_length,
        )

        self._text: Dict[str, Callable[[Optional[str]], CanonicalValue]] = {
            "education": partial(canonical, mapping=EDUCATION),
            "civil_status": partial(canonical, mapping=CIVIL_STATUS),
            "contract_type": partial(canonical, mapping=CONTRACT_TYPE),
            "work_arrangement": partial(canonical, mapping=WORK_ARRANGEMENT),
            "sector": partial(
                self._canonical,
                mapping=SECTOR,
                threshold=sector_threshold,
                min_substring_length=min_substring_length,
            ),
            "employee_count": partial(
                normalize_company_size,
                threshold=fuzzy_threshold,
                min_substring_length=min_substring_length,
            ),
            "company_size": partial(
                normalize_company_size,
                threshold=fuzzy_threshold,
                min_substring_length=min_substring_length,
            ),
            "work_city": partial(self._city, min_score=city_min_score),
        }

        self._integer: Dict[str, Callable[[Optional[str]], Optional[int]]] = {
            "age": normalize_age,
            "dependents": normalize_dependents,
            "work_experience": normalize_work_experience,
            "seniority": normalize_work_experience,
            "official_hours": partial(normalize_integer, minimum=0, maximum=WEEKLY_HOURS_RANGE[1]),
            "average_hours": partial(normalize_integer, minimum=0, maximum=WEEKLY_HOURS_RANGE[1]),
            "telework_days": partial(normalize_integer, minimum=0, maximum=TELEWORK_DAYS_RANGE[1]),
            "vacation_days": partial(normalize_integer, minimum=0, maximum=VACATION_DAYS_RANGE[1]),
        }

    @staticmethod
    def _canonical(raw, mapping, threshold, min_substring_length) -> Optional[str]:
        return normalize(clean_text(raw), mapping, threshold, min_substring_length)

    def _city(self, raw, min_score) -> Optional[str]:
        value = clean_text(raw)
        if value is None:
            return None
        return canonical_city(value, self.country, min_score=min_score)

    def normalize_text_field(self, field_name: str, raw: Optional[str]) -> CanonicalValue:
        handler = self._text.get(field_name, clean_text)
        return handler(raw)

    def normalize_integer_field(self, field_name: str, raw: Optional[str]) -> Optional[int]:
        handler = self._integer.get(field_name, normalize_integer)
        return handler(raw)


_default_normalizer = FieldValueNormalizer()


def normalize_field_value(field_name: str, raw: Optional[str]) -> CanonicalValue:
    """Canonical value of a text field using the default thresholds.

    >>> normalize_field_value("education", "Prof Bachelor energy")
    'bachelor'
    >>> normalize_field_value("job_title", "  Data   Engineer ")
    'Data Engineer'
    """
    return _default_normalizer.normalize_text_field(field_name, raw)
