"""Adapter for subreddit listings served as public JSON.

API details:
    Posts:    GET https://www.reddit.com/r/{name}/new.json?limit=N&raw_json=1
    Comments: GET https://www.reddit.com/comments/{post_id}.json?sort=old&raw_json=1
    Authentication: none; a descriptive User-Agent is expected

``raw_json=1`` turns off HTML entity escaping, so bodies arrive as the
author's markdown.
"""

from typing import Any, Dict, Iterable, List, Optional

from ..config.models import SourceConfig
from ..domain.models import CommentRecord, RawPost
from ..logging import get_logger
from ..utils.timestamps import unix_to_timestamp
from .base import BaseAdapter
from .exceptions import AdapterHTTPError, AdapterResponseError

logger = get_logger(__name__, component="adapter")

REMOVED_BODIES = frozenset({"[deleted]", "[removed]"})


def _children(listing: Any) -> List[Dict[str, Any]]:
    """``data.children`` of a listing object; empty for anything else."""
    if not isinstance(listing, dict):
        return []
    data = listing.get("data")
    if not isinstance(data, dict):
        return []
    children = data.get("children")
    return children if isinstance(children, list) else []


def flatten_listing(children: Iterable[Dict[str, Any]]) -> List[CommentRecord]:
    """Flatten a nested comment listing into rows ordered by creation time.

    ``more`` stubs and deleted or removed comments are skipped. Replies of
    a skipped comment keep their parent id and so become orphans for the
    tree builder. Parent ids are the plain ids of the enclosing comment;
    top-level comments have None.
    """
    rows: List[CommentRecord] = []
    stack = [(child, None) for child in reversed(list(children))]

    while stack:
        child, parent_id = stack.pop()
        if not isinstance(child, dict) or child.get("kind") != "t1":
            continue
        data = child.get("data") or {}
        comment_id = data.get("id")
        if not comment_id:
            continue

        body = (data.get("body") or "").strip()
        if body not in REMOVED_BODIES:
            created = data.get("created_utc")
            rows.append(
                CommentRecord(
                    id=comment_id,
                    parent_id=parent_id,
                    author=data.get("author") or "[unknown]",
                    body=body,
                    score=int(data.get("score") or 0),
                    created_at=unix_to_timestamp(created) if created is not None else None,
                )
            )

        # "replies" is an empty string when a comment has none
        replies = _children(data.get("replies"))
        stack.extend((reply, comment_id) for reply in reversed(replies))

    # Stable sort keeps traversal order for equal or missing timestamps
    rows.sort(key=lambda row: row.created_at.timestamp() if row.created_at else 0.0)
    return rows


class RedditAdapter(BaseAdapter):
    """Fetches posts and comment threads of a subreddit."""

    ADAPTER_NAME = "reddit"
    API_BASE_URL = "https://www.reddit.com"

    def fetch_posts(self, source_config: SourceConfig) -> List[RawPost]:
        """Fetch the newest posts of the subreddit named by the source.

        Returns:
            Posts newest first; empty when the subreddit does not exist or
            the API has a transient failure

        Raises:
            AdapterError: On other HTTP errors or a malformed listing
        """
        url = f"{self.API_BASE_URL}/r/{source_config.name}/new.json"
        params = {"limit": str(self.max_posts), "raw_json": "1"}

        logger.info(
            "Fetching posts",
            extra={"event": "adapter.posts.fetching", "source_id": source_config.name, "url": url},
        )

        try:
            listing = self._get_json(url, params=params)
        except AdapterHTTPError as e:
            if self._swallow(e, source_config.name):
                return []
            raise

        if not isinstance(listing, dict) or "data" not in listing:
            raise AdapterResponseError(
                f"Expected listing object from {url}, got {type(listing).__name__}"
            )

        posts: List[RawPost] = []
        for child in _children(listing):
            post = self._transform_post(child, source_config)
            if post is not None:
                posts.append(post)

        logger.info(
            "Fetched posts",
            extra={
                "event": "adapter.posts.fetched",
                "source_id": source_config.name,
                "count": len(posts),
            },
        )
        return posts

    def fetch_comments(self, post_id: str) -> List[CommentRecord]:
        """Fetch the comment thread of a post as flat rows, oldest first."""
        url = f"{self.API_BASE_URL}/comments/{post_id}.json"
        params = {"sort": "old", "raw_json": "1", "limit": "500"}

        try:
            payload = self._get_json(url, params=params)
        except AdapterHTTPError as e:
            if self._swallow(e, post_id):
                return []
            raise

        # [post listing, comment listing]
        if not isinstance(payload, list) or len(payload) < 2:
            raise AdapterResponseError(
                f"Expected [post, comments] listing pair from {url}, got {type(payload).__name__}"
            )

        rows = flatten_listing(_children(payload[1]))
        logger.debug(
            "Fetched comments",
            extra={"event": "adapter.comments.fetched", "post_id": post_id, "count": len(rows)},
        )
        return rows

    def _transform_post(self, child: Any, source_config: SourceConfig) -> Optional[RawPost]:
        if not isinstance(child, dict) or child.get("kind") != "t3":
            return None
        data = child.get("data") or {}
        body = data.get("selftext") or ""

        if not data.get("id"):
            return None
        if body.strip() in REMOVED_BODIES:
            logger.debug(
                "Skipping removed post",
                extra={"event": "adapter.posts.removed", "post_id": data.get("id")},
            )
            return None

        try:
            created = data.get("created_utc")
            return RawPost(
                post_id=data["id"],
                source=source_config.name,
                title=data.get("title") or "",
                body=body,
                flair=data.get("link_flair_text"),
                author=data.get("author"),
                permalink=data.get("permalink"),
                created_at=unix_to_timestamp(created) if created is not None else None,
            )
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(
                "Failed to transform post",
                extra={
                    "event": "adapter.posts.transform_failed",
                    "source_id": source_config.name,
                    "post_id": data.get("id"),
                    "error": str(e),
                },
            )
            return None

    def _swallow(self, error: AdapterHTTPError, target: str) -> bool:
        """Whether an HTTP error should yield an empty result instead of raising."""
        if error.status_code == 404:
            logger.warning(
                "Listing not found",
                extra={"event": "adapter.fetch.not_found", "target": target, "url": error.url},
            )
            return True
        if error.status_code >= 500:
            logger.warning(
                "Listing API error (transient)",
                extra={
                    "event": "adapter.fetch.transient",
                    "target": target,
                    "status_code": error.status_code,
                },
            )
            return True
        return False
