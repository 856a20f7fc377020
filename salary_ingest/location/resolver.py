"""Multi-language city and country resolution.

A name typed in any supported locale (or a known alias) resolves to the same
LocationEntry. Suggestions score every name variant of every city in scope,
not only the name in the caller's locale.
"""

import re
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..matching import normalize_text, similarity
from .models import CitySuggestion, LocationEntry
from .tables import CITIES, COUNTRIES

logger = get_logger(__name__, component="location")

MIN_QUERY_LENGTH = 2
DEFAULT_MIN_SCORE = 0.6
DEFAULT_LIMIT = 5

# Separators after which free-text city answers usually add a region
_QUALIFIER_RE = re.compile(r"\s*[,/(;]|\s+-\s+")


def _index(entries: Sequence[LocationEntry]) -> Dict[str, LocationEntry]:
    index: Dict[str, LocationEntry] = {}
    for entry in entries:
        for name in entry.all_names:
            index.setdefault(normalize_text(name), entry)
    return index


class LocationResolver:
    """Lookups and suggestions over immutable country and city tables."""

    def __init__(
        self,
        countries: Sequence[LocationEntry] = COUNTRIES,
        cities: Sequence[LocationEntry] = CITIES,
    ):
        self._countries = tuple(countries)
        self._cities = tuple(cities)
        self._country_index = _index(self._countries)
        self._city_index = _index(self._cities)

    def resolve_country(self, name: Optional[str]) -> Optional[LocationEntry]:
        if not name:
            return None
        return self._country_index.get(normalize_text(name))

    def resolve_city(
        self, name: Optional[str], country: Optional[str] = None
    ) -> Optional[LocationEntry]:
        """Entry for any localized name or alias of a city.

        With ``country`` set, only cities of that country resolve.
        """
        if not name:
            return None
        entry = self._city_index.get(normalize_text(name))
        if entry is None or country is None:
            return entry

        scope = self.resolve_country(country)
        if scope is not None and entry.country != scope.canonical_name:
            return None
        return entry

    def translate_country(self, name: str, locale: str) -> str:
        """Country name in ``locale``; unknown names pass through unchanged."""
        entry = self.resolve_country(name)
        return entry.name_for(locale) if entry is not None else name

    def translate_city(self, name: str, locale: str) -> str:
        """City name in ``locale``; unknown names pass through unchanged.

        Example:
            >>> get_resolver().translate_city("Anvers", "nl")
            'Antwerpen'
        """
        entry = self.resolve_city(name)
        return entry.name_for(locale) if entry is not None else name

    def _cities_in_scope(self, country: Optional[str]) -> Tuple[LocationEntry, ...]:
        if not country:
            return self._cities
        scope = self.resolve_country(country)
        if scope is None:
            logger.debug(
                "Unknown country scope, searching all cities",
                extra={"event": "location.scope.unknown_country", "country": country},
            )
            return self._cities
        return tuple(city for city in self._cities if city.country == scope.canonical_name)

    def suggest_cities(
        self,
        query: Optional[str],
        country: Optional[str] = None,
        locale: str = "en",
        min_score: float = DEFAULT_MIN_SCORE,
        limit: int = DEFAULT_LIMIT,
    ) -> List[CitySuggestion]:
        """Rank cities that look like ``query``.

        Each city scores the best similarity over all its names. Exact
        matches come first, then everything else by descending score; equal
        scores keep table order.

        Args:
            query: Text typed by the user
            country: Optional country (any locale or code) to restrict to
            locale: Locale of the returned display names
            min_score: Lowest similarity included
            limit: Maximum number of suggestions

        Returns:
            Up to ``limit`` suggestions; empty for queries under 2 characters
        """
        text = (query or "").strip()
        if len(text) < MIN_QUERY_LENGTH:
            return []

        normalized_query = normalize_text(text)
        candidates: List[CitySuggestion] = []
        for city in self._cities_in_scope(country):
            names = [normalize_text(name) for name in city.all_names]
            exact = normalized_query in names
            score = max(similarity(normalized_query, name) for name in names)
            if exact or score >= min_score:
                candidates.append(
                    CitySuggestion(
                        city=city.name_for(locale),
                        score=score,
                        is_exact_match=exact,
                        entry=city,
                    )
                )

        candidates.sort(key=lambda suggestion: (not suggestion.is_exact_match, -suggestion.score))
        return candidates[:limit]

    def cities_for_country(self, country: str, locale: str = "en") -> List[str]:
        scope = self.resolve_country(country)
        if scope is None:
            return []
        return sorted({
            city.name_for(locale)
            for city in self._cities
            if city.country == scope.canonical_name
        })

    def all_cities(self, locale: str = "en") -> List[str]:
        return sorted({city.name_for(locale) for city in self._cities})

    def canonical_city(
        self,
        text: str,
        country: Optional[str] = None,
        min_score: float = DEFAULT_MIN_SCORE,
    ) -> str:
        """Canonical city name for a free-text work location.

        Tries the whole answer, then the part before a qualifier such as
        "Gent, Oost-Vlaanderen", first as an exact name and then as the top
        suggestion. Text that matches nothing comes back trimmed.
        """
        cleaned = text.strip()
        head = _QUALIFIER_RE.split(cleaned, maxsplit=1)[0].strip()
        attempts = [cleaned] if head in ("", cleaned) else [cleaned, head]

        for attempt in attempts:
            entry = self.resolve_city(attempt, country)
            if entry is not None:
                return entry.canonical_name

        for attempt in attempts:
            suggestions = self.suggest_cities(attempt, country, min_score=min_score, limit=1)
            if suggestions:
                return suggestions[0].entry.canonical_name

        return cleaned


@lru_cache(maxsize=1)
def get_resolver() -> LocationResolver:
    """Process-wide resolver over the built-in tables."""
    return LocationResolver()


def resolve_city(name: Optional[str], country: Optional[str] = None) -> Optional[LocationEntry]:
    return get_resolver().resolve_city(name, country)


def resolve_country(name: Optional[str]) -> Optional[LocationEntry]:
    return get_resolver().resolve_country(name)


def translate_city(name: str, locale: str) -> str:
    return get_resolver().translate_city(name, locale)


def translate_country(name: str, locale: str) -> str:
    return get_resolver().translate_country(name, locale)


def suggest_cities(
    query: Optional[str],
    country: Optional[str] = None,
    locale: str = "en",
    min_score: float = DEFAULT_MIN_SCORE,
    limit: int = DEFAULT_LIMIT,
) -> List[CitySuggestion]:
    return get_resolver().suggest_cities(query, country, locale, min_score, limit)


def cities_for_country(country: str, locale: str = "en") -> List[str]:
    return get_resolver().cities_for_country(country, locale)


def all_cities(locale: str = "en") -> List[str]:
    return get_resolver().all_cities(locale)


def canonical_city(text: str, country: Optional[str] = None, min_score: float = DEFAULT_MIN_SCORE) -> str:
    return get_resolver().canonical_city(text, country, min_score)
