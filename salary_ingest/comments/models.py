"""Nested discussion structures."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..domain.models import CommentId, CommentRecord
from ..utils.timestamps import format_timestamp


@dataclass
class CommentNode:
    """A comment with its direct replies in chronological order."""

    id: CommentId
    parent_id: Optional[CommentId]
    author: str
    body: str
    score: int
    created_at: Optional[datetime]
    depth: int = 0
    children: List["CommentNode"] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: CommentRecord) -> "CommentNode":
        return cls(
            id=record.id,
            parent_id=record.parent_id,
            author=record.author,
            body=record.body,
            score=record.score,
            created_at=record.created_at,
        )

    def _fields(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "parentId": self.parent_id,
            "author": self.author,
            "body": self.body,
            "score": self.score,
            "createdAt": format_timestamp(self.created_at) or None,
            "depth": self.depth,
        }


@dataclass
class CommentTree:
    """Root comments plus the number of rows the tree was built from.

    ``total_count`` includes orphans and duplicates that did not make it
    into the tree.
    """

    roots: List[CommentNode] = field(default_factory=list)
    total_count: int = 0
    orphan_ids: List[CommentId] = field(default_factory=list)

    def iter_nodes(self):
        """Nodes in depth-first pre-order, without recursion."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_response(self) -> Dict[str, Any]:
        """API shape: ``{"comments": [...], "totalCount": n}`` with nested replies."""
        comments: List[Dict[str, Any]] = []
        # (node, list the serialized node is appended to)
        stack = [(node, comments) for node in reversed(self.roots)]
        while stack:
            node, target = stack.pop()
            payload = node._fields()
            payload["replies"] = []
            target.append(payload)
            stack.extend((child, payload["replies"]) for child in reversed(node.children))
        return {"comments": comments, "totalCount": self.total_count}
