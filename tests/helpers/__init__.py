"""Test helper utilities for salary ingestion tests."""

from .fixture_adapter import FIXTURES_DIR, FixtureAdapter, load_fixture_sources

__all__ = ["FIXTURES_DIR", "FixtureAdapter", "load_fixture_sources"]
