"""Pipeline orchestration for post fetching, normalization and storage."""

from .models import PipelineRunResult, SourceRunStats
from .runner import IngestionPipeline
from .sinks import BaseSink, InMemorySink, JsonLinesSink

__all__ = [
    "IngestionPipeline",
    "PipelineRunResult",
    "SourceRunStats",
    "BaseSink",
    "InMemorySink",
    "JsonLinesSink",
]
