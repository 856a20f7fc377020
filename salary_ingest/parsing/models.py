"""Extraction results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class SectionMatch(str, Enum):
    """How a section title was found in a post body."""

    VERBATIM = "verbatim"
    NORMALIZED = "normalized"
    MARKUP = "markup"


@dataclass(frozen=True)
class RawField:
    """Text captured for one configured field; None when not found."""

    field_name: str
    raw_text: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.raw_text is not None


@dataclass
class SectionReport:
    """Which configured section titles appear in a post body.

    Attributes:
        found: Titles present, in configured order
        missing: Titles absent, in configured order
        matched_by: How each found title was matched
    """

    found: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    matched_by: Dict[str, SectionMatch] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.missing
