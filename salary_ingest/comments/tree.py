"""Rebuild a nested discussion from flat comment rows.

Two passes over the input: the first indexes a node per id, the second
links each node under its parent or into the root list. Nothing recurses,
so arbitrarily deep threads are fine.
"""

from collections import deque
from typing import Dict, Iterable, List, Set

from ..domain.models import CommentId, CommentRecord
from ..logging import get_logger
from .models import CommentNode, CommentTree

logger = get_logger(__name__, component="comments")


def build_tree(rows: Iterable[CommentRecord]) -> CommentTree:
    """Build a comment tree from rows ordered by creation time.

    - ``parent_id`` None: the node is a root
    - parent present in the batch: the node is appended to its children,
      so replies keep input order
    - parent absent (or the node names itself): the node is an orphan and
      is left out of the tree
    - a repeated id keeps its first row

    Every input row counts towards ``total_count``.

    Example:
        >>> rows = [CommentRecord(id=1), CommentRecord(id=2, parent_id=1),
        ...         CommentRecord(id=3, parent_id=99)]
        >>> tree = build_tree(rows)
        >>> [child.id for child in tree.roots[0].children], tree.total_count
        ([2], 3)
    """
    rows = list(rows)

    # Pass 1: index
    index: Dict[CommentId, CommentNode] = {}
    ordered: List[CommentNode] = []
    for row in rows:
        if row.id in index:
            logger.debug(
                "Duplicate comment id ignored",
                extra={"event": "comments.tree.duplicate_dropped", "comment_id": row.id},
            )
            continue
        node = CommentNode.from_record(row)
        index[row.id] = node
        ordered.append(node)

    # Pass 2: link
    tree = CommentTree(total_count=len(rows))
    for node in ordered:
        if node.parent_id is None:
            tree.roots.append(node)
            continue
        parent = index.get(node.parent_id)
        if parent is None or parent is node:
            tree.orphan_ids.append(node.id)
            continue
        parent.children.append(node)

    reachable = _assign_depths(tree.roots)
    # Replies under an orphan, and parent chains that loop, never reach a root
    dropped = set(tree.orphan_ids)
    for node in ordered:
        if id(node) not in reachable and node.parent_id is not None and node.id not in dropped:
            tree.orphan_ids.append(node.id)
            dropped.add(node.id)

    if tree.orphan_ids:
        logger.debug(
            "Orphaned comments dropped",
            extra={
                "event": "comments.tree.orphan_dropped",
                "orphan_count": len(tree.orphan_ids),
                "orphan_ids": [str(orphan_id) for orphan_id in tree.orphan_ids],
            },
        )

    return tree


def _assign_depths(roots: List[CommentNode]) -> Set[int]:
    """Breadth-first depth assignment from the roots.

    Returns the identities of every node reached.
    """
    reached = {id(root) for root in roots}
    queue = deque(roots)
    while queue:
        node = queue.popleft()
        for child in node.children:
            child.depth = node.depth + 1
            reached.add(id(child))
            queue.append(child)
    return reached
