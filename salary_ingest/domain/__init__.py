"""Domain models for the salary ingestion pipeline."""

from .models import CommentId, CommentRecord, RawPost

__all__ = ["CommentId", "CommentRecord", "RawPost"]
