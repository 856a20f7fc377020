"""Post normalization service.

Turns a raw post body into a CanonicalRecord:
1. Detect section titles for validation
2. Extract raw field text with the source's patterns
3. Convert each field by its configured type
4. Flag missing required fields and sections
"""

import logging
from typing import Callable, Dict, Iterable, Iterator, Optional

from ..config.models import FieldType, NormalizationConfig, SourceConfig
from ..domain.models import RawPost
from ..logging import get_logger
from ..parsing import detect_sections, extract_fields
from .distance import extract_distance
from .fields import FieldValueNormalizer, normalize_boolean, normalize_currency
from .models import CanonicalRecord, CanonicalValue, NormalizationResult

logger = get_logger(__name__, component="normalization")

Converter = Callable[[str, Optional[str]], CanonicalValue]


class PostNormalizer:
    """Normalizes posts of one source into canonical records.

    The instance holds only read-only configuration, so one normalizer can
    be reused for every post of its source.
    """

    def __init__(
        self,
        source_config: SourceConfig,
        normalization_config: Optional[NormalizationConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize PostNormalizer.

        Args:
            source_config: Source whose patterns and country apply
            normalization_config: Matching thresholds (defaults when None)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.source = source_config
        settings = normalization_config or NormalizationConfig()
        self.logger = logger_instance or logger

        self._values = FieldValueNormalizer(
            country=source_config.country,
            fuzzy_threshold=settings.fuzzy_threshold,
            sector_threshold=settings.sector_threshold,
            min_substring_length=settings.min_substring_length,
            city_min_score=settings.city_min_score,
        )
        self._converters: Dict[FieldType, Converter] = {
            FieldType.TEXT: self._values.normalize_text_field,
            FieldType.INTEGER: self._values.normalize_integer_field,
            FieldType.CURRENCY: lambda name, raw: normalize_currency(raw),
            FieldType.BOOLEAN: lambda name, raw: normalize_boolean(raw),
            FieldType.DISTANCE: lambda name, raw: extract_distance(raw),
        }

    def normalize(self, raw_post: RawPost) -> NormalizationResult:
        """Normalize one fetched post.

        Raises:
            Unexpected exceptions propagate; the caller decides whether the
            rest of the batch continues.
        """
        result = self.normalize_text(raw_post.body, post_id=raw_post.post_id)

        self.logger.info(
            "Normalized post",
            extra={
                "event": "normalization.post.normalized",
                "post_id": raw_post.post_id,
                "is_valid": result.is_valid,
                "missing_sections": len(result.missing_sections),
                "missing_required": result.missing_required,
                "unrecognized": result.unrecognized,
            },
        )
        return result

    def normalize_text(self, body: str, post_id: Optional[str] = None) -> NormalizationResult:
        """Normalize a raw body that did not come from an adapter."""
        sections = detect_sections(body, self.source.section_titles)
        raw_fields = extract_fields(body, self.source)

        values: Dict[str, CanonicalValue] = {}
        for field_name, mapping in self.source.field_mappings.items():
            raw_text = raw_fields[field_name].raw_text
            value = self._converters[mapping.type](field_name, raw_text) if raw_text else None
            if raw_text and value is None:
                self.logger.debug(
                    "Field value not recognized",
                    extra={
                        "event": "normalization.field.unrecognized",
                        "field": field_name,
                        "field_type": mapping.type.value,
                    },
                )
            values[field_name] = value

        missing_required = [
            name for name in self.source.required_fields if values.get(name) is None
        ]

        record = CanonicalRecord(
            source=self.source.name,
            country=self.source.country,
            currency=self.source.currency,
            fields=values,
            post_id=post_id,
        )
        return NormalizationResult(
            record=record,
            raw_fields=raw_fields,
            sections=sections,
            missing_required=missing_required,
        )

    def process_batch(self, posts: Iterable[RawPost]) -> Iterator[NormalizationResult]:
        """Normalize posts one by one, skipping those that raise.

        Yields:
            NormalizationResult for each post normalized without error
        """
        for post in posts:
            try:
                yield self.normalize(post)
            except Exception as e:
                self.logger.error(
                    f"Error normalizing post {post.post_id} from {self.source.name}: {e}",
                    exc_info=True,
                    extra={"event": "normalization.post.failed", "post_id": post.post_id},
                )
