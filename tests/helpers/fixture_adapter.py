"""Fixture-based adapter for testing.

This module provides an adapter that loads posts and comment rows from YAML
fixtures instead of making HTTP requests. Used for deterministic
integration testing and the sample ingest script.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from salary_ingest.adapters.base import BaseAdapter
from salary_ingest.config.models import SourceConfig
from salary_ingest.domain.models import CommentRecord, RawPost
from salary_ingest.utils.timestamps import ensure_utc

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def load_fixture_sources(fixture_path: Path) -> Dict[str, Dict[str, Any]]:
    """Load post fixtures from a YAML file.

    Expected layout::

        sources:
          BESalary:
            posts:
              - post_id: abc
                body_file: posts/besalary_complete.md
            comments:
              abc:
                - {id: c1, parent_id: null, body: "..."}

    Raises:
        FileNotFoundError: If fixture file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    if not fixture_path.exists():
        raise FileNotFoundError(f"Fixture file not found: {fixture_path}")

    with open(fixture_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return data.get("sources", {})


class FixtureAdapter(BaseAdapter):
    """Adapter that returns posts from YAML fixtures.

    ``body_file`` entries are resolved relative to the fixture file's
    directory, so long post bodies can live in markdown files.

    Attributes:
        fixture_data: Source name to ``{"posts": [...], "comments": {...}}``
        comment_requests: Post ids passed to fetch_comments, in call order
    """

    def __init__(self, fixture_path: Path, **kwargs):
        super().__init__(**kwargs)
        self.fixture_path = fixture_path
        self.fixture_data = load_fixture_sources(fixture_path)
        self.comment_requests: List[str] = []

    def fetch_posts(self, source_config: SourceConfig) -> List[RawPost]:
        source_data = self.fixture_data.get(source_config.name)
        if not source_data:
            return []

        posts = []
        for post_dict in source_data.get("posts", []):
            posts.append(
                RawPost(
                    post_id=str(post_dict["post_id"]),
                    source=source_config.name,
                    title=post_dict.get("title", ""),
                    body=self._body(post_dict),
                    flair=post_dict.get("flair", "Salary"),
                    author=post_dict.get("author"),
                    permalink=post_dict.get("permalink"),
                    created_at=self._parse_fixture_timestamp(post_dict.get("created_at")),
                )
            )
        return posts[: self.max_posts]

    def fetch_comments(self, post_id: str) -> List[CommentRecord]:
        self.comment_requests.append(post_id)
        for source_data in self.fixture_data.values():
            rows = (source_data.get("comments") or {}).get(post_id)
            if rows is not None:
                return [CommentRecord(**row) for row in rows]
        return []

    def _body(self, post_dict: Dict[str, Any]) -> str:
        if "body_file" in post_dict:
            body_path = self.fixture_path.parent / post_dict["body_file"]
            return body_path.read_text(encoding="utf-8")
        return post_dict.get("body", "")

    def _parse_fixture_timestamp(self, timestamp_value: Optional[Any]) -> Optional[datetime]:
        if timestamp_value is None:
            return None
        if isinstance(timestamp_value, datetime):
            return ensure_utc(timestamp_value)
        if isinstance(timestamp_value, str):
            return ensure_utc(datetime.fromisoformat(timestamp_value.replace("Z", "+00:00")))
        return None
