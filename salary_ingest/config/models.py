"""Configuration schema models using Pydantic."""

import re
from enum import Enum
from typing import Any, Dict, List, Optional, Pattern, Tuple

from apscheduler.triggers.cron import CronTrigger
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range

FIELD_PATTERN_FLAGS = re.IGNORECASE | re.MULTILINE


class FieldType(str, Enum):
    """How the captured text of a field is converted."""

    TEXT = "text"
    INTEGER = "integer"
    CURRENCY = "currency"
    BOOLEAN = "boolean"
    DISTANCE = "distance"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class FieldMapping(BaseModel):
    """Where one field lives in a post and how its value is typed.

    The pattern is compiled once, case-insensitive and multi-line, and must
    contain exactly one capture group holding the value.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(..., min_length=1)
    type: FieldType = FieldType.TEXT
    required: bool = False

    _regex: Pattern[str] = PrivateAttr()

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            compiled = re.compile(v, FIELD_PATTERN_FLAGS)
        except re.error as e:
            raise ValueError(f"Pattern does not compile: {e}") from e
        if compiled.groups != 1:
            raise ValueError(
                f"Pattern must have exactly one capture group, found {compiled.groups}"
            )
        return v

    def model_post_init(self, __context: Any) -> None:
        self._regex = re.compile(self.pattern, FIELD_PATTERN_FLAGS)

    @property
    def regex(self) -> Pattern[str]:
        return self._regex


class SourceConfig(BaseModel):
    """One origin community: its section layout and field patterns.

    ``field_mappings`` keeps declaration order; a plain string value is
    shorthand for an optional text field with that pattern.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Origin label, e.g. the subreddit name")
    country: str = Field(..., min_length=1, description="Country every post is located in")
    currency: str = Field("EUR", min_length=3, max_length=3)
    section_titles: Tuple[str, ...] = Field(default_factory=tuple)
    field_mappings: Dict[str, FieldMapping] = Field(..., min_length=1)
    platform: str = Field("reddit", description="Adapter used to fetch the source")
    enabled: bool = True
    required_flair: str = Field(
        "salary", description="Case-insensitive substring the post flair must contain; empty disables"
    )

    @field_validator("name", "country")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("platform")
    @classmethod
    def lower_platform(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("field_mappings", mode="before")
    @classmethod
    def expand_shorthand(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {
                name: {"pattern": entry} if isinstance(entry, str) else entry
                for name, entry in v.items()
            }
        return v

    @property
    def required_fields(self) -> List[str]:
        return [name for name, mapping in self.field_mappings.items() if mapping.required]


class NormalizationConfig(BaseModel):
    """Thresholds used when mapping free text to canonical values."""

    fuzzy_threshold: float = Field(0.8, gt=0.0, le=1.0)
    sector_threshold: float = Field(0.75, gt=0.0, le=1.0)
    min_substring_length: int = Field(3, ge=1, le=20)
    city_min_score: float = Field(0.6, gt=0.0, le=1.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format")

    model_config = ConfigDict(use_enum_values=True)


class AdvancedConfig(BaseModel):
    """Advanced runtime settings."""

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for listing fetches (seconds)"
    )
    user_agent: str = Field(
        "salary-ingest/1.0 (salary post normalizer)",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )
    max_posts_per_source: int = Field(
        50, ge=1, le=100, description="Posts requested per source listing"
    )
    fetch_comments: bool = Field(True, description="Fetch discussion threads of ingested posts")

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for the salary ingestion service."""

    sources: List[SourceConfig] = Field(
        default_factory=list, description="Extra or overriding sources"
    )
    include_default_sources: bool = Field(
        True, description="Start from the built-in source table"
    )
    scan_interval: str = Field("1d", description="Interval between scheduled runs")
    schedule: Optional[str] = Field(
        None, description="Crontab expression; takes precedence over scan_interval"
    )
    run_budget: str = Field("5m", description="Wall-clock budget for a whole run")
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig)

    # Computed fields
    scan_interval_seconds: Optional[int] = None
    run_budget_seconds: Optional[int] = None

    @field_validator("scan_interval")
    @classmethod
    def validate_scan_interval(cls, v: str) -> str:
        try:
            validate_duration_range(
                parse_duration(v), min_seconds=300, max_seconds=7 * 86400, label="Scan interval"
            )
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("run_budget")
    @classmethod
    def validate_run_budget(cls, v: str) -> str:
        try:
            validate_duration_range(
                parse_duration(v), min_seconds=10, max_seconds=6 * 3600, label="Run budget"
            )
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("schedule")
    @classmethod
    def validate_schedule(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        try:
            CronTrigger.from_crontab(v.strip())
        except ValueError as e:
            raise ValueError(f"Invalid crontab expression '{v}': {e}") from e
        return v.strip()

    @model_validator(mode="after")
    def validate_sources_and_compute_fields(self):
        seen = set()
        for source in self.sources:
            if source.name.lower() in seen:
                raise ValueError(f"Duplicate source: {source.name} appears multiple times")
            seen.add(source.name.lower())

        if not self.get_enabled_sources():
            raise ValueError(
                "At least one source must be enabled. Add a source or set include_default_sources."
            )

        self.scan_interval_seconds = parse_duration(self.scan_interval)
        self.run_budget_seconds = parse_duration(self.run_budget)
        return self

    def get_sources(self) -> List[SourceConfig]:
        """Built-in sources (if included) with configured sources layered on top.

        A configured source replaces the built-in one with the same name.
        """
        from .sources import DEFAULT_SOURCES

        merged: Dict[str, SourceConfig] = {}
        if self.include_default_sources:
            merged.update((source.name.lower(), source) for source in DEFAULT_SOURCES)
        merged.update((source.name.lower(), source) for source in self.sources)
        return list(merged.values())

    def get_enabled_sources(self) -> List[SourceConfig]:
        return [source for source in self.get_sources() if source.enabled]

    def get_source(self, name: str) -> Optional[SourceConfig]:
        for source in self.get_sources():
            if source.name.lower() == name.strip().lower():
                return source
        return None
