"""Main entry point for the salary ingestion service."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import signal
import sys
import threading
import time
from pathlib import Path
from typing import List, Optional, Tuple

from salary_ingest.config.environment import EnvironmentConfig
from salary_ingest.config.exceptions import ConfigurationError
from salary_ingest.config.loader import load_config
from salary_ingest.config.models import AppConfig, SourceConfig
from salary_ingest.location import SUPPORTED_LOCALES, suggest_cities
from salary_ingest.logging import get_logger
from salary_ingest.logging.config import configure_logging
from salary_ingest.normalization import PostNormalizer
from salary_ingest.pipeline import BaseSink, InMemorySink, IngestionPipeline, JsonLinesSink
from salary_ingest.scheduler import SchedulerService

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig, str]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file (None for the lookup order)
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig, effective log level)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if env_config.user_agent:
        app_config.advanced = app_config.advanced.model_copy(
            update={"user_agent": env_config.user_agent}
        )

    # Log level priority: CLI > Environment > Config
    log_level = log_level_override or env_config.log_level or app_config.logging.level or "INFO"
    return app_config, env_config, log_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salary-ingest",
        description="Salary post ingestion - fetch, normalize and store salary disclosures",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        "--manual-run",
        action="store_true",
        help="Run a single ingestion immediately and exit",
    )
    modes.add_argument(
        "--parse-file",
        type=Path,
        metavar="PATH",
        help="Normalize one post body from a file and print the canonical record",
    )
    modes.add_argument(
        "--suggest-city",
        metavar="QUERY",
        help="Print city suggestions for a partial or misspelled name",
    )

    parser.add_argument("--source", help="Source used by --parse-file (default: first enabled)")
    parser.add_argument("--country", help="Country scope for --suggest-city")
    parser.add_argument(
        "--locale",
        default="en",
        choices=SUPPORTED_LOCALES,
        help="Display locale for --suggest-city (default: en)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for records.jsonl and comments.jsonl (default: keep in memory)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def select_source(app_config: AppConfig, name: Optional[str]) -> SourceConfig:
    """Source named on the command line, or the first enabled one.

    Raises:
        ConfigurationError: If the named source does not exist
    """
    if name:
        source = app_config.get_source(name)
        if source is None:
            known = ", ".join(s.name for s in app_config.get_sources())
            raise ConfigurationError(
                f"Unknown source: {name}",
                suggestions=[f"Use one of: {known}"],
            )
        return source
    return app_config.get_enabled_sources()[0]


def parse_file(app_config: AppConfig, path: Path, source_name: Optional[str]) -> int:
    """Normalize a saved post body and print the result as JSON.

    Returns:
        0 when the post is a valid record, 1 otherwise
    """
    source = select_source(app_config, source_name)
    try:
        body = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Cannot read {path}: {e}", file=sys.stderr)
        return 1

    normalizer = PostNormalizer(source, app_config.normalization)
    result = normalizer.normalize_text(body, post_id=path.stem)

    output = {
        "record": result.record.to_dict(),
        "valid": result.is_valid,
        "missingSections": result.missing_sections,
        "missingRequired": result.missing_required,
        "unrecognized": result.unrecognized,
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0 if result.is_valid else 1


def print_city_suggestions(query: str, country: Optional[str], locale: str) -> int:
    suggestions = suggest_cities(query, country=country, locale=locale)
    print(json.dumps([s.to_dict() for s in suggestions], indent=2, ensure_ascii=False))
    return 0


def build_sink(output: Optional[Path]) -> BaseSink:
    return JsonLinesSink(output) if output else InMemorySink()


def run_daemon(app_config: AppConfig, pipeline: IngestionPipeline, start_time: float) -> int:
    """Run the pipeline on schedule until SIGINT or SIGTERM."""
    shutdown_event = threading.Event()

    scheduler_service = SchedulerService(
        pipeline_callable=pipeline.run_once,
        interval_seconds=app_config.scan_interval_seconds,
        cron=app_config.schedule,
        shutdown_event=shutdown_event,
    )

    def signal_handler(signum, frame):
        logger.info(
            f"Received signal {signum}, shutting down",
            extra={"event": "service.signal_received", "signal": signum},
        )
        scheduler_service.shutdown(wait=False)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    scheduler_service.start()
    logger.info(
        "Scheduler started. Press Ctrl+C to stop",
        extra={"event": "service.daemon_mode.started"},
    )

    try:
        shutdown_event.wait()
    except KeyboardInterrupt:
        logger.info(
            "Keyboard interrupt received, shutting down",
            extra={"event": "service.keyboard_interrupt"},
        )
        scheduler_service.shutdown(wait=False)

    logger.info(
        "Salary ingestion stopped",
        extra={"event": "service.stopping", "uptime_seconds": round(time.time() - start_time, 2)},
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the salary ingestion service.

    Returns:
        Exit code (0 for success, 1 for configuration errors or a run with errors).
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config, log_level = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        if args.suggest_city is not None:
            return print_city_suggestions(args.suggest_city, args.country, args.locale)
        if args.parse_file is not None:
            return parse_file(app_config, args.parse_file, args.source)

        logger.info(
            "Salary ingestion starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "log_level": log_level,
                "manual_run": args.manual_run,
                "enabled_source_count": len(app_config.get_enabled_sources()),
                "scan_interval_seconds": app_config.scan_interval_seconds,
                "schedule": app_config.schedule,
            },
        )

        pipeline = IngestionPipeline(app_config=app_config, sink=build_sink(args.output))

        if not args.manual_run:
            return run_daemon(app_config, pipeline, start_time)

        logger.info("Executing manual run", extra={"event": "service.manual_run.starting"})
        result = pipeline.run_once()
        logger.info(
            f"Manual run completed: "
            f"{result.total_fetched} fetched, "
            f"{result.total_normalized} normalized, "
            f"{result.total_saved} saved, "
            f"{result.total_skipped} skipped",
            extra={
                "event": "service.manual_run.completed",
                "duration_seconds": result.total_duration_seconds,
                "had_errors": result.had_errors,
                "budget_exhausted": result.budget_exhausted,
            },
        )
        return 1 if result.had_errors else 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during startup",
            extra={
                "event": "service.startup.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
