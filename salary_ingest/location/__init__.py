"""City and country canonicalization across en, nl, fr and de."""

from .models import SUPPORTED_LOCALES, CitySuggestion, LocationEntry
from .resolver import (
    LocationResolver,
    all_cities,
    canonical_city,
    cities_for_country,
    get_resolver,
    resolve_city,
    resolve_country,
    suggest_cities,
    translate_city,
    translate_country,
)
from .tables import CITIES, COUNTRIES

__all__ = [
    "CITIES",
    "COUNTRIES",
    "CitySuggestion",
    "LocationEntry",
    "LocationResolver",
    "SUPPORTED_LOCALES",
    "all_cities",
    "canonical_city",
    "cities_for_country",
    "get_resolver",
    "resolve_city",
    "resolve_country",
    "suggest_cities",
    "translate_city",
    "translate_country",
]
