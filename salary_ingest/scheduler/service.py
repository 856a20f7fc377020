"""Scheduler service for periodic pipeline execution."""

import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.base import BaseTrigger
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from salary_ingest.logging import get_logger

logger = get_logger(__name__, component="scheduler")

JOB_ID = "salary-ingest"


class SchedulerService:
    """
    Wraps APScheduler to trigger the pipeline at a fixed interval or on a
    cron schedule.

    Uses BackgroundScheduler to run jobs in a separate thread while
    allowing the main thread to handle signals and coordinate shutdown.
    """

    def __init__(
        self,
        pipeline_callable: Callable[[], object],
        interval_seconds: int,
        cron: Optional[str] = None,
        shutdown_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the scheduler service.

        Args:
            pipeline_callable: Function to call on each scheduled run (e.g., pipeline.run_once)
            interval_seconds: Interval between runs in seconds
            cron: Crontab expression; takes precedence over the interval
            shutdown_event: Optional event to set on shutdown for coordination
        """
        self.pipeline_callable = pipeline_callable
        self.interval_seconds = interval_seconds
        self.cron = cron
        self.shutdown_event = shutdown_event

        self.scheduler = BackgroundScheduler(
            job_defaults={
                "max_instances": 1,  # Prevent overlapping runs
                "coalesce": True,  # If run is delayed, only execute once
                "misfire_grace_time": interval_seconds,
            },
            timezone=timezone.utc,
        )

    def build_trigger(self) -> BaseTrigger:
        if self.cron:
            return CronTrigger.from_crontab(self.cron, timezone=timezone.utc)
        return IntervalTrigger(seconds=self.interval_seconds, timezone=timezone.utc)

    def start(self) -> None:
        """
        Start the scheduler and register the pipeline job.

        With an interval the first run executes immediately; with a cron
        schedule the first run waits for the next matching time.
        """
        trigger = self.build_trigger()
        next_run = None if self.cron else datetime.now(timezone.utc)

        job_kwargs = {}
        if next_run is not None:
            job_kwargs["next_run_time"] = next_run

        self.scheduler.add_job(
            func=self.pipeline_callable,
            trigger=trigger,
            id=JOB_ID,
            name="Salary post ingestion",
            replace_existing=True,
            **job_kwargs,
        )
        self.scheduler.start()

        logger.info(
            "Scheduler started",
            extra={
                "event": "scheduler.started",
                "interval_seconds": None if self.cron else self.interval_seconds,
                "cron": self.cron,
                "next_run_time": (
                    next_run.isoformat() if next_run else str(self.get_next_run_time())
                ),
            },
        )

    def shutdown(self, wait: bool = False) -> None:
        """
        Shutdown the scheduler gracefully.

        Args:
            wait: If True, wait for running jobs to complete before returning
        """
        logger.info(
            "Shutting down scheduler",
            extra={"event": "scheduler.stopping", "wait_for_jobs": wait},
        )

        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)

        if self.shutdown_event:
            self.shutdown_event.set()

        logger.info("Scheduler shutdown complete", extra={"event": "scheduler.stopped"})

    def trigger_now(self) -> None:
        """Run the pipeline synchronously in the current thread."""
        logger.info("Triggering immediate pipeline run", extra={"event": "scheduler.trigger_now"})
        self.pipeline_callable()

    def is_running(self) -> bool:
        return self.scheduler.running

    def get_next_run_time(self) -> Optional[datetime]:
        job = self.scheduler.get_job(JOB_ID)
        return job.next_run_time if job else None
