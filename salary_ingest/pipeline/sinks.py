"""Destinations for normalized records and comment threads.

A sink answers whether a post was already ingested and stores what the
pipeline produces for new posts. Keys are ``compute_post_key(source,
post_id)``, so the same post id from two sources never collides.
"""

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Set, Union

from ..comments.models import CommentTree
from ..domain.models import RawPost
from ..logging import get_logger
from ..normalization.models import CanonicalRecord
from ..utils.hashing import compute_post_key
from ..utils.timestamps import format_timestamp, utc_now

logger = get_logger(__name__, component="pipeline")


class BaseSink(ABC):
    """Storage interface used by the ingestion pipeline."""

    @abstractmethod
    def has_post(self, source: str, post_id: str) -> bool:
        """Whether a record for this post was already saved."""

    @abstractmethod
    def save_record(self, record: CanonicalRecord, post: RawPost) -> None:
        """Store the canonical record of a valid post."""

    @abstractmethod
    def save_comments(self, post: RawPost, tree: CommentTree) -> None:
        """Store the rebuilt discussion of a saved post."""


class InMemorySink(BaseSink):
    """Keeps everything in dictionaries. Used for manual runs and tests."""

    def __init__(self) -> None:
        self.records: Dict[str, CanonicalRecord] = {}
        self.comments: Dict[str, CommentTree] = {}
        self._lock = threading.Lock()

    def has_post(self, source: str, post_id: str) -> bool:
        return compute_post_key(source, post_id) in self.records

    def save_record(self, record: CanonicalRecord, post: RawPost) -> None:
        with self._lock:
            self.records[compute_post_key(post.source, post.post_id)] = record

    def save_comments(self, post: RawPost, tree: CommentTree) -> None:
        with self._lock:
            self.comments[compute_post_key(post.source, post.post_id)] = tree


class JsonLinesSink(BaseSink):
    """Appends one JSON object per line to ``records.jsonl`` and ``comments.jsonl``.

    Keys already present in ``records.jsonl`` are loaded on start, so a
    restarted daemon does not ingest the same post twice.
    """

    RECORDS_FILE = "records.jsonl"
    COMMENTS_FILE = "comments.jsonl"

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._seen: Set[str] = self._load_keys()

    @property
    def records_path(self) -> Path:
        return self.directory / self.RECORDS_FILE

    @property
    def comments_path(self) -> Path:
        return self.directory / self.COMMENTS_FILE

    def _load_keys(self) -> Set[str]:
        keys: Set[str] = set()
        if not self.records_path.exists():
            return keys
        with self.records_path.open(encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    keys.add(json.loads(line)["key"])
                except (ValueError, KeyError, TypeError):
                    logger.warning(
                        "Skipping unreadable record line",
                        extra={
                            "event": "pipeline.sink.line_skipped",
                            "path": str(self.records_path),
                            "line": line_number,
                        },
                    )
        logger.debug(
            "Loaded ingested post keys",
            extra={"event": "pipeline.sink.loaded", "count": len(keys)},
        )
        return keys

    def _append(self, path: Path, entry: Dict[str, Any]) -> None:
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry, sort_keys=True, ensure_ascii=False) + "\n")

    def has_post(self, source: str, post_id: str) -> bool:
        return compute_post_key(source, post_id) in self._seen

    def save_record(self, record: CanonicalRecord, post: RawPost) -> None:
        key = compute_post_key(post.source, post.post_id)
        entry = {
            "key": key,
            "ingested_at": format_timestamp(utc_now()),
            "permalink": post.permalink,
            "fingerprint": record.fingerprint(),
            "record": record.to_dict(),
        }
        with self._lock:
            self._append(self.records_path, entry)
            self._seen.add(key)

    def save_comments(self, post: RawPost, tree: CommentTree) -> None:
        entry: Dict[str, Any] = {
            "key": compute_post_key(post.source, post.post_id),
            "orphans": [str(comment_id) for comment_id in tree.orphan_ids],
        }
        entry.update(tree.to_response())
        with self._lock:
            self._append(self.comments_path, entry)

    def keys(self) -> List[str]:
        return sorted(self._seen)
