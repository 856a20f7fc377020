#!/usr/bin/env python3
"""Sample ingestion harness for end-to-end validation.

This script provides a manual way to validate the salary ingestion pipeline
without running pytest. It can operate in two modes:

1. Fixture mode (default): Uses deterministic fixture posts from YAML files
2. Real endpoint mode: Reads live community listings (requires network access)

Usage:
    # Run with fixtures (no network required)
    python scripts/run_sample_ingest.py

    # Run with real endpoints (requires network)
    END_VALIDATION_REAL_RUN=1 python scripts/run_sample_ingest.py --config config.yaml

    # Keep the output for inspection
    python scripts/run_sample_ingest.py --output /tmp/salary-sample
"""

import argparse
import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from salary_ingest.config.loader import load_config
from salary_ingest.logging.config import configure_logging
from salary_ingest.pipeline import IngestionPipeline, JsonLinesSink
from tests.helpers.fixture_adapter import FixtureAdapter


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_summary_table(result):
    """Print a formatted summary table of pipeline results."""
    print_header("Pipeline Execution Summary")

    metrics = [
        ("Total Posts Fetched", result.total_fetched),
        ("Total Posts Normalized", result.total_normalized),
        ("Total Records Saved", result.total_saved),
        ("Total Posts Skipped", result.total_skipped),
        ("Total Errors", result.total_errors),
        ("Had Errors", "Yes" if result.had_errors else "No"),
        ("Budget Exhausted", "Yes" if result.budget_exhausted else "No"),
        ("Duration (seconds)", f"{result.total_duration_seconds:.2f}"),
    ]

    max_label_width = max(len(label) for label, _ in metrics)

    print("┌" + "─" * (max_label_width + 2) + "┬" + "─" * 22 + "┐")
    print(f"│ {'Metric':<{max_label_width}} │ {'Value':<20} │")
    print("├" + "─" * (max_label_width + 2) + "┼" + "─" * 22 + "┤")

    for label, value in metrics:
        print(f"│ {label:<{max_label_width}} │ {str(value):<20} │")

    print("└" + "─" * (max_label_width + 2) + "┴" + "─" * 22 + "┘")

    if result.source_stats:
        print("\n" + "-" * 80)
        print(" Per-Source Breakdown")
        print("-" * 80 + "\n")

        for stats in result.source_stats:
            print(f"Source: {stats.source_id}")
            print(f"  Fetched: {stats.fetched_count}")
            print(f"  Filtered (flair): {stats.filtered_count}")
            print(f"  Already seen: {stats.seen_count}")
            print(f"  Saved: {stats.saved_count}")
            print(f"  Skipped (incomplete): {stats.skipped_count}")
            print(f"  Comments: {stats.comment_count} ({stats.orphan_count} orphaned)")
            print(f"  Errors: {stats.error_count}")
            if stats.error_message:
                print(f"  Error Message: {stats.error_message}")
            print()


def main():
    """Main entry point for sample ingestion harness."""
    parser = argparse.ArgumentParser(
        description="Run a sample ingestion for end-to-end validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: built-in sources only)",
    )
    parser.add_argument(
        "--fixtures",
        type=Path,
        default=Path("tests/fixtures/end_validation/sample_posts.yaml"),
        help="Path to fixtures YAML file (default: tests/fixtures/end_validation/sample_posts.yaml)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for records.jsonl and comments.jsonl (default: a temporary directory)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    load_dotenv()

    use_real_endpoints = os.environ.get("END_VALIDATION_REAL_RUN", "0") == "1"

    print_header("Salary Ingest - Sample Ingestion Harness")

    print(f"Configuration file: {args.config or '(built-in defaults)'}")
    print(f"Log level: {args.log_level}")

    if use_real_endpoints:
        print("\n⚠️  REAL ENDPOINT MODE ENABLED")
        print("   The pipeline will make actual HTTP requests to community listings.")
        print("   Listings are rate-limited for anonymous clients.")
        response = input("\nContinue? [y/N]: ")
        if response.lower() != "y":
            print("Aborted.")
            return 1
    else:
        print(f"Fixture mode: {args.fixtures}")
        print("\nUsing fixture data (no network requests will be made)")

    if args.config and not args.config.exists():
        print(f"\n❌ Error: Configuration file not found: {args.config}")
        return 1

    if not use_real_endpoints and not args.fixtures.exists():
        print(f"\n❌ Error: Fixture file not found: {args.fixtures}")
        print("   Run with END_VALIDATION_REAL_RUN=1 to use real endpoints instead.")
        return 1

    output_dir = args.output or Path(tempfile.mkdtemp(prefix="salary-ingest-"))

    try:
        print("\n📋 Loading configuration...")
        app_config, _ = load_config(args.config)

        configure_logging(
            level=args.log_level,
            format_type=app_config.logging.format,
            environment="validation",
        )

        enabled_sources = app_config.get_enabled_sources()
        print(f"✓ {len(enabled_sources)} sources enabled: {', '.join(s.name for s in enabled_sources)}")

        pipeline = IngestionPipeline(app_config=app_config, sink=JsonLinesSink(output_dir))

        print("\n🚀 Executing ingestion run...")
        print(f"   Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

        if use_real_endpoints:
            result = pipeline.run_once()
        else:
            # Fixture mode - patch the adapter factory
            with patch("salary_ingest.pipeline.runner.get_adapter") as mock_get_adapter:
                mock_get_adapter.return_value = FixtureAdapter(args.fixtures)
                result = pipeline.run_once()

        print(f"   Completed at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

        print_summary_table(result)

        print_header("Output Locations")
        print(f"Records:  {(output_dir / JsonLinesSink.RECORDS_FILE).absolute()}")
        print(f"Comments: {(output_dir / JsonLinesSink.COMMENTS_FILE).absolute()}")
        print("\nRe-running with the same --output skips posts that were already saved.")

        print("\n" + "-" * 80)
        print(f"To clean up: rm -r {output_dir.absolute()}")
        print("-" * 80 + "\n")

        return 1 if result.had_errors else 0

    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
