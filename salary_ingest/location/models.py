"""Value types for the location tables and suggestion results."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

SUPPORTED_LOCALES = ("en", "nl", "fr", "de")


@dataclass(frozen=True)
class LocationEntry:
    """A country or city with its localized names.

    Cities carry the canonical name of their country; countries carry None.
    The canonical name doubles as the English name.
    """

    canonical_name: str
    localized_names: Mapping[str, str] = field(default_factory=dict)
    aliases: Tuple[str, ...] = ()
    country: Optional[str] = None

    def name_for(self, locale: str) -> str:
        """Name in ``locale``, or the canonical name when there is none."""
        return self.localized_names.get(locale, self.canonical_name)

    @property
    def all_names(self) -> Tuple[str, ...]:
        """Canonical name, localized names and aliases, without repeats."""
        names = [self.canonical_name, *self.localized_names.values(), *self.aliases]
        return tuple(dict.fromkeys(names))


@dataclass(frozen=True)
class CitySuggestion:
    city: str
    score: float
    is_exact_match: bool
    entry: LocationEntry

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "score": round(self.score, 4),
            "isExactMatch": self.is_exact_match,
        }
