"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class SourceRunStats:
    """
    Statistics for a single source's execution within a pipeline run.

    Attributes:
        source_id: Name of the source
        fetched_count: Posts returned by the adapter
        filtered_count: Posts dropped by the flair filter
        seen_count: Posts skipped because the sink already holds them
        normalized_count: Posts normalized without error
        saved_count: Valid records handed to the sink
        skipped_count: Normalized posts that were not valid records
        comment_count: Comment rows fetched for saved posts
        orphan_count: Comment rows left out of their trees
        error_count: Number of errors encountered
        duration_seconds: Time spent processing this source
        had_errors: Whether the source failed as a whole
        error_message: Optional error message if the source failed
    """

    source_id: str
    fetched_count: int = 0
    filtered_count: int = 0
    seen_count: int = 0
    normalized_count: int = 0
    saved_count: int = 0
    skipped_count: int = 0
    comment_count: int = 0
    orphan_count: int = 0
    error_count: int = 0
    duration_seconds: float = 0.0
    had_errors: bool = False
    error_message: Optional[str] = None


@dataclass
class PipelineRunResult:
    """
    Aggregate results from a complete pipeline execution.

    Attributes:
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        total_duration_seconds: Total time for the entire run
        total_fetched: Posts fetched across all sources
        total_normalized: Posts normalized
        total_saved: Records handed to the sink
        total_skipped: Invalid posts not saved
        total_errors: Errors encountered
        source_stats: Per-source execution statistics
        had_errors: Whether any source or post failed
        budget_exhausted: Whether the run stopped at its time budget
        skipped: Whether the run was skipped (lock already held)
    """

    run_started_at: datetime
    run_finished_at: datetime
    total_duration_seconds: float = 0.0
    total_fetched: int = 0
    total_normalized: int = 0
    total_saved: int = 0
    total_skipped: int = 0
    total_errors: int = 0
    source_stats: List[SourceRunStats] = field(default_factory=list)
    had_errors: bool = False
    budget_exhausted: bool = False
    skipped: bool = False

    def __post_init__(self):
        """Compute aggregate statistics from source stats if not already set."""
        if self.source_stats and self.total_fetched == 0:
            self.total_fetched = sum(s.fetched_count for s in self.source_stats)
            self.total_normalized = sum(s.normalized_count for s in self.source_stats)
            self.total_saved = sum(s.saved_count for s in self.source_stats)
            self.total_skipped = sum(s.skipped_count for s in self.source_stats)
            self.total_errors = sum(s.error_count for s in self.source_stats)
            self.had_errors = any(
                s.had_errors or s.error_count for s in self.source_stats
            )

        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()
