"""Pipeline orchestration for salary post ingestion."""

import threading
import time
from typing import Callable, List, Optional
from uuid import uuid4

from salary_ingest.adapters.base import BaseAdapter
from salary_ingest.adapters.exceptions import AdapterError
from salary_ingest.adapters.factory import get_adapter
from salary_ingest.comments import build_tree
from salary_ingest.config.models import AppConfig, SourceConfig
from salary_ingest.domain.models import RawPost
from salary_ingest.logging import get_logger
from salary_ingest.logging.context import log_context
from salary_ingest.normalization.service import PostNormalizer
from salary_ingest.utils.timestamps import utc_now

from .models import PipelineRunResult, SourceRunStats
from .sinks import BaseSink, InMemorySink

logger = get_logger(__name__, component="pipeline")


class IngestionPipeline:
    """
    Orchestrates a single ingestion run across all enabled sources.

    For each source the pipeline fetches the newest posts, keeps those with
    the required flair that the sink has not seen, normalizes them, saves
    valid records and, when enabled, the rebuilt comment tree of each saved
    post.
    """

    def __init__(
        self,
        app_config: AppConfig,
        sink: Optional[BaseSink] = None,
        adapter: Optional[BaseAdapter] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the ingestion pipeline.

        Args:
            app_config: Application configuration
            sink: Destination for records and comments (in-memory when None)
            adapter: Adapter used for every source; when None one is built
                per source from its platform
            clock: Monotonic clock used for the run budget
        """
        self.app_config = app_config
        self.sink = sink if sink is not None else InMemorySink()
        self.adapter = adapter
        self._clock = clock
        self._lock = threading.Lock()
        self._deadline = 0.0

    def run_once(self) -> PipelineRunResult:
        """
        Execute a complete ingestion run.

        Returns:
            PipelineRunResult with aggregate metrics and per-source stats.
            Source and post failures are captured in the result, never raised.
        """
        run_started_at = utc_now()
        run_id = uuid4().hex
        source_stats: List[SourceRunStats] = []
        budget_exhausted = False

        if not self._lock.acquire(blocking=False):
            with log_context(run_id=run_id):
                logger.warning(
                    "Pipeline run skipped: previous run still in progress",
                    extra={"event": "pipeline.run.skipped", "reason": "lock_held"},
                )
            return PipelineRunResult(
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                skipped=True,
            )

        try:
            with log_context(run_id=run_id):
                self._deadline = self._clock() + self.app_config.run_budget_seconds
                enabled_sources = self.app_config.get_enabled_sources()

                logger.info(
                    "Pipeline run started",
                    extra={
                        "event": "pipeline.run.started",
                        "enabled_source_count": len(enabled_sources),
                        "run_budget_seconds": self.app_config.run_budget_seconds,
                    },
                )

                for source_config in enabled_sources:
                    if self._budget_exhausted():
                        budget_exhausted = True
                        break
                    stats = self._process_source(source_config, run_id)
                    source_stats.append(stats)
                    if self._budget_exhausted():
                        budget_exhausted = True

                if budget_exhausted:
                    logger.warning(
                        "Run budget exhausted; remaining work not started",
                        extra={
                            "event": "pipeline.run.budget_exhausted",
                            "sources_processed": len(source_stats),
                            "sources_enabled": len(enabled_sources),
                        },
                    )

                result = PipelineRunResult(
                    run_started_at=run_started_at,
                    run_finished_at=utc_now(),
                    source_stats=source_stats,
                    budget_exhausted=budget_exhausted,
                )

                logger.info(
                    "Pipeline run completed",
                    extra={
                        "event": "pipeline.run.completed",
                        "duration_ms": int(result.total_duration_seconds * 1000),
                        "total_fetched": result.total_fetched,
                        "total_normalized": result.total_normalized,
                        "total_saved": result.total_saved,
                        "total_skipped": result.total_skipped,
                        "total_errors": result.total_errors,
                        "had_errors": result.had_errors,
                        "budget_exhausted": result.budget_exhausted,
                    },
                )
                return result
        finally:
            self._lock.release()

    def _budget_exhausted(self) -> bool:
        return self._clock() >= self._deadline

    def _process_source(self, source_config: SourceConfig, run_id: str) -> SourceRunStats:
        """
        Process a single source: fetch, filter, normalize, save.

        Returns:
            SourceRunStats with metrics for this source
        """
        source_start = time.time()
        stats = SourceRunStats(source_id=source_config.name)
        owns_adapter = self.adapter is None

        with log_context(run_id=run_id, source_id=source_config.name):
            logger.info(
                f"Processing source: {source_config.name}",
                extra={"event": "source.run.started", "platform": source_config.platform},
            )

            adapter: Optional[BaseAdapter] = None
            try:
                adapter = self.adapter or get_adapter(source_config, self.app_config.advanced)
                posts = adapter.fetch_posts(source_config)
                stats.fetched_count = len(posts)

                normalizer = PostNormalizer(source_config, self.app_config.normalization)
                for post in posts:
                    if self._budget_exhausted():
                        logger.info(
                            "Run budget reached; stopping source",
                            extra={"event": "source.run.budget_exhausted"},
                        )
                        break
                    if not post.has_flair(source_config.required_flair):
                        stats.filtered_count += 1
                        continue
                    if self.sink.has_post(source_config.name, post.post_id):
                        stats.seen_count += 1
                        continue
                    self._process_post(post, adapter, normalizer, stats)

            except AdapterError as e:
                stats.had_errors = True
                stats.error_count += 1
                stats.error_message = str(e)
                logger.error(
                    f"Adapter error for {source_config.name}: {e}",
                    extra={
                        "event": "source.run.failed",
                        "error_type": type(e).__name__,
                        "error": str(e),
                    },
                    exc_info=True,
                )

            finally:
                if owns_adapter and adapter is not None:
                    adapter.close()
                stats.duration_seconds = time.time() - source_start
                logger.info(
                    f"Source processing completed: {source_config.name}",
                    extra={
                        "event": "source.run.completed",
                        "fetched": stats.fetched_count,
                        "filtered": stats.filtered_count,
                        "seen": stats.seen_count,
                        "saved": stats.saved_count,
                        "skipped": stats.skipped_count,
                        "errors": stats.error_count,
                        "duration_seconds": stats.duration_seconds,
                    },
                )

        return stats

    def _process_post(
        self,
        post: RawPost,
        adapter: BaseAdapter,
        normalizer: PostNormalizer,
        stats: SourceRunStats,
    ) -> None:
        with log_context(post_id=post.post_id):
            try:
                result = normalizer.normalize(post)
                stats.normalized_count += 1

                if not result.is_valid:
                    stats.skipped_count += 1
                    logger.info(
                        "Post skipped: incomplete salary template",
                        extra={
                            "event": "pipeline.post.skipped",
                            "missing_sections": result.missing_sections,
                            "missing_required": result.missing_required,
                        },
                    )
                    return

                self.sink.save_record(result.record, post)
                stats.saved_count += 1

                if self.app_config.advanced.fetch_comments:
                    rows = adapter.fetch_comments(post.post_id)
                    tree = build_tree(rows)
                    self.sink.save_comments(post, tree)
                    stats.comment_count += tree.total_count
                    stats.orphan_count += len(tree.orphan_ids)

            except Exception as e:
                # One bad post must not stop the source
                stats.error_count += 1
                logger.error(
                    f"Error processing post {post.post_id}: {e}",
                    extra={"event": "pipeline.post.failed", "error": str(e)},
                    exc_info=True,
                )
