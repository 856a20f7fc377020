"""Scheduling module for periodic execution of the ingestion pipeline."""

from .service import SchedulerService

__all__ = [
    "SchedulerService",
]
