"""Data models for the normalization layer.

- CanonicalRecord: the canonical values of one post, with a stable JSON form
- NormalizationResult: a record plus the diagnostics needed to judge it
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..parsing.models import RawField, SectionReport
from ..utils.hashing import compute_record_fingerprint

CanonicalValue = Union[str, int, bool, None]


@dataclass(frozen=True)
class CanonicalRecord:
    """Canonical field values of one post.

    ``fields`` holds exactly one entry per configured field of the source,
    None where the post did not state a recognizable value.
    """

    source: str
    country: str
    currency: str
    fields: Dict[str, CanonicalValue]
    post_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "post_id": self.post_id,
            "country": self.country,
            "currency": self.currency,
            "fields": dict(self.fields),
        }

    def to_json(self) -> str:
        """Canonical JSON: sorted keys, no insignificant whitespace.

        Identical input yields byte-identical output.
        """
        return json.dumps(
            self.to_dict(), sort_keys=True, ensure_ascii=False, separators=(",", ":")
        )

    def fingerprint(self) -> str:
        """SHA-256 of to_json()."""
        return compute_record_fingerprint(self.to_json())


@dataclass
class NormalizationResult:
    """Outcome of normalizing one post.

    Attributes:
        record: Canonical record (always present, possibly mostly None)
        raw_fields: Captured text per field, before conversion
        sections: Section title detection report
        missing_required: Required fields with no canonical value
    """

    record: CanonicalRecord
    raw_fields: Dict[str, RawField]
    sections: SectionReport
    missing_required: List[str] = field(default_factory=list)

    @property
    def missing_sections(self) -> List[str]:
        return list(self.sections.missing)

    @property
    def is_valid(self) -> bool:
        """All sections present and every required field has a value."""
        return not self.sections.missing and not self.missing_required

    @property
    def unrecognized(self) -> List[str]:
        """Fields where text was captured but no canonical value came out."""
        return [
            name
            for name, raw in self.raw_fields.items()
            if raw.raw_text is not None and self.record.fields.get(name) is None
        ]
