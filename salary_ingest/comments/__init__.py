"""Comment tree reconstruction."""

from .models import CommentNode, CommentTree
from .tree import build_tree

__all__ = ["CommentNode", "CommentTree", "build_tree"]
