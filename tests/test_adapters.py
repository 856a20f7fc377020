"""Unit tests for source adapters."""

import json
import logging
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

from salary_ingest.adapters import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
    RedditAdapter,
    flatten_listing,
    get_adapter,
)
from salary_ingest.adapters.base import BaseAdapter
from salary_ingest.config.models import AdvancedConfig, SourceConfig
from salary_ingest.config.sources import BESALARY

REDDIT_FIXTURES = Path(__file__).parent / "fixtures" / "reddit"


@pytest.fixture
def listing_response():
    with open(REDDIT_FIXTURES / "new_listing.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def comments_response():
    with open(REDDIT_FIXTURES / "comments.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def adapter():
    return RedditAdapter(timeout=10, user_agent="salary-ingest-tests/1.0", max_posts=25)


def _response(status_code=200, payload=None, reason="OK", json_error=False):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = payload
    return response


class TestBaseAdapter:
    def test_cannot_instantiate_abstract_class(self):
        with pytest.raises(TypeError):
            BaseAdapter()

    @pytest.mark.parametrize("timeout", [1, 301])
    def test_init_with_invalid_timeout(self, timeout):
        with pytest.raises(AdapterConfigurationError, match="Timeout"):
            RedditAdapter(timeout=timeout)

    def test_init_with_empty_user_agent(self):
        with pytest.raises(AdapterConfigurationError, match="user_agent"):
            RedditAdapter(user_agent="   ")

    def test_init_with_invalid_max_posts(self):
        with pytest.raises(AdapterConfigurationError, match="max_posts"):
            RedditAdapter(max_posts=0)

    def test_user_agent_header_set(self):
        session = requests.Session()
        RedditAdapter(user_agent=" bot/1.0 ", session=session)
        assert session.headers["User-Agent"] == "bot/1.0"

    def test_get_json_success(self):
        session = Mock()
        session.headers = {}
        session.get.return_value = _response(payload={"ok": True})
        adapter = RedditAdapter(session=session, timeout=12)

        assert adapter._get_json("https://example.test/a.json", params={"x": "1"}) == {"ok": True}
        session.get.assert_called_once_with(
            "https://example.test/a.json", params={"x": "1"}, timeout=12
        )

    def test_get_json_http_error(self):
        session = Mock()
        session.headers = {}
        session.get.return_value = _response(status_code=403, reason="Forbidden")
        adapter = RedditAdapter(session=session)

        with pytest.raises(AdapterHTTPError) as exc_info:
            adapter._get_json("https://example.test/a.json")
        assert exc_info.value.status_code == 403
        assert exc_info.value.url == "https://example.test/a.json"
        assert not exc_info.value.is_transient

    @pytest.mark.parametrize(
        "status_code,level,event",
        [
            (403, logging.ERROR, "adapter.fetch.error"),
            (429, logging.WARNING, "adapter.fetch.retryable_error"),
            (503, logging.WARNING, "adapter.fetch.retryable_error"),
        ],
    )
    def test_get_json_logs_by_transience(self, status_code, level, event, caplog):
        session = Mock()
        session.headers = {}
        session.get.return_value = _response(status_code=status_code, reason="Err")
        adapter = RedditAdapter(session=session)

        with caplog.at_level(logging.WARNING):
            with pytest.raises(AdapterHTTPError) as exc_info:
                adapter._get_json("https://example.test/a.json")

        assert exc_info.value.is_transient is (level == logging.WARNING)
        records = [r for r in caplog.records if getattr(r, "event", None) == event]
        assert len(records) == 1
        assert records[0].levelno == level

    def test_get_json_timeout(self):
        session = Mock()
        session.headers = {}
        session.get.side_effect = requests.exceptions.Timeout()
        adapter = RedditAdapter(session=session)

        with pytest.raises(AdapterTimeoutError):
            adapter._get_json("https://example.test/a.json")

    def test_get_json_connection_error(self):
        session = Mock()
        session.headers = {}
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        adapter = RedditAdapter(session=session)

        with pytest.raises(AdapterHTTPError) as exc_info:
            adapter._get_json("https://example.test/a.json")
        assert exc_info.value.status_code == 0
        assert exc_info.value.is_transient

    def test_get_json_invalid_body(self):
        session = Mock()
        session.headers = {}
        session.get.return_value = _response(json_error=True)
        adapter = RedditAdapter(session=session)

        with pytest.raises(AdapterResponseError):
            adapter._get_json("https://example.test/a.json")

    def test_close(self):
        session = Mock()
        session.headers = {}
        RedditAdapter(session=session).close()
        session.close.assert_called_once()

    def test_error_hierarchy(self):
        for error_class in (
            AdapterHTTPError,
            AdapterTimeoutError,
            AdapterResponseError,
            AdapterConfigurationError,
        ):
            assert issubclass(error_class, AdapterError)


class TestRedditPosts:
    def test_fetch_posts_success(self, adapter, listing_response):
        with patch.object(adapter, "_get_json", return_value=listing_response) as mock_get:
            posts = adapter.fetch_posts(BESALARY)

        mock_get.assert_called_once_with(
            "https://www.reddit.com/r/BESalary/new.json",
            params={"limit": "25", "raw_json": "1"},
        )
        # The removed post is skipped
        assert [post.post_id for post in posts] == ["1kq0a1", "1kq0d4"]

        first = posts[0]
        assert first.source == "BESalary"
        assert first.flair == "Salary"
        assert first.author == "throwaway_be_1"
        assert first.body.startswith("**1. PERSONALIA**")
        assert first.created_at.year == 2025
        assert first.created_at.tzinfo is not None
        assert first.has_flair("salary")
        assert posts[1].flair is None
        assert not posts[1].has_flair("salary")

    def test_fetch_posts_empty_listing(self, adapter):
        with patch.object(adapter, "_get_json", return_value={"data": {"children": []}}):
            assert adapter.fetch_posts(BESALARY) == []

    def test_fetch_posts_skips_non_posts(self, adapter):
        listing = {"data": {"children": [{"kind": "t1", "data": {"id": "c1"}}, {"kind": "t3", "data": {}}]}}
        with patch.object(adapter, "_get_json", return_value=listing):
            assert adapter.fetch_posts(BESALARY) == []

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    def test_fetch_posts_not_found_or_transient_returns_empty(self, adapter, status_code):
        error = AdapterHTTPError("HTTP error", status_code=status_code, url="https://x")
        with patch.object(adapter, "_get_json", side_effect=error):
            assert adapter.fetch_posts(BESALARY) == []

    def test_fetch_posts_other_http_error_raises(self, adapter):
        error = AdapterHTTPError("HTTP 403", status_code=403, url="https://x")
        with patch.object(adapter, "_get_json", side_effect=error):
            with pytest.raises(AdapterHTTPError):
                adapter.fetch_posts(BESALARY)

    def test_fetch_posts_malformed_response_raises(self, adapter):
        with patch.object(adapter, "_get_json", return_value=["not", "a", "listing"]):
            with pytest.raises(AdapterResponseError):
                adapter.fetch_posts(BESALARY)


class TestRedditComments:
    def test_fetch_comments(self, adapter, comments_response):
        with patch.object(adapter, "_get_json", return_value=comments_response) as mock_get:
            rows = adapter.fetch_comments("1kq0a1")

        url = mock_get.call_args[0][0]
        assert url == "https://www.reddit.com/comments/1kq0a1.json"
        # Oldest first; the deleted comment and the "more" stub are gone
        assert [row.id for row in rows] == ["c1", "c5", "c2", "c4"]
        by_id = {row.id: row for row in rows}
        assert by_id["c1"].parent_id is None
        assert by_id["c2"].parent_id == "c1"
        assert by_id["c4"].parent_id == "c3"
        assert by_id["c1"].score == 12

    def test_fetch_comments_404_returns_empty(self, adapter):
        error = AdapterHTTPError("HTTP 404", status_code=404, url="https://x")
        with patch.object(adapter, "_get_json", side_effect=error):
            assert adapter.fetch_comments("gone") == []

    def test_fetch_comments_malformed_response(self, adapter):
        with patch.object(adapter, "_get_json", return_value={"data": {}}):
            with pytest.raises(AdapterResponseError):
                adapter.fetch_comments("1kq0a1")

    def test_flatten_listing_handles_empty_replies(self):
        children = [
            {"kind": "t1", "data": {"id": "a", "body": "top", "replies": ""}},
            {"kind": "t1", "data": {"id": "b", "body": "[removed]", "replies": ""}},
            {"kind": "more", "data": {"id": "m"}},
        ]
        rows = flatten_listing(children)
        assert [row.id for row in rows] == ["a"]
        assert rows[0].author == "[unknown]"
        assert rows[0].created_at is None


class TestFactory:
    def test_reddit_adapter(self):
        config = AdvancedConfig(http_request_timeout=20, user_agent="bot/1.0", max_posts_per_source=10)
        adapter = get_adapter(BESALARY, config)

        assert isinstance(adapter, RedditAdapter)
        assert adapter.timeout == 20
        assert adapter.user_agent == "bot/1.0"
        assert adapter.max_posts == 10

    def test_unknown_platform(self):
        source = SourceConfig(
            name="Forum",
            country="Belgium",
            platform="discourse",
            field_mappings={"age": r"^Age: (.+)$"},
        )
        with pytest.raises(AdapterConfigurationError, match="Unknown platform"):
            get_adapter(source, AdvancedConfig())
