"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from salary_ingest.config.sources import BESALARY
from salary_ingest.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"
POSTS_DIR = FIXTURES_DIR / "posts"


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Environment with every override unset except a test label."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("USER_AGENT", raising=False)


@pytest.fixture(autouse=True)
def reset_log_context():
    """Keep log context from leaking between tests."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def besalary_source():
    return BESALARY


@pytest.fixture
def complete_post_body():
    return (POSTS_DIR / "besalary_complete.md").read_text(encoding="utf-8")


@pytest.fixture
def incomplete_post_body():
    return (POSTS_DIR / "besalary_incomplete.md").read_text(encoding="utf-8")


@pytest.fixture
def french_city_post_body():
    return (POSTS_DIR / "besalary_french_city.md").read_text(encoding="utf-8")
