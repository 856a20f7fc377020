"""Core domain models for posts and discussion comments.

- RawPost: a community post as fetched, before any parsing
- CommentRecord: one flat comment row of a post's discussion
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..utils.timestamps import ensure_utc

CommentId = Union[int, str]


class RawPost(BaseModel):
    """Post data from a source adapter before normalization."""

    post_id: str = Field(..., description="Post ID at the source")
    source: str = Field(..., description="Name of the source the post came from")
    title: str = Field("", description="Post title")
    body: str = Field("", description="Raw markdown body")
    flair: Optional[str] = Field(None, description="Post flair text")
    author: Optional[str] = Field(None, description="Author handle")
    permalink: Optional[str] = Field(None, description="Link to the post")
    created_at: Optional[datetime] = Field(None, description="When the post was created (UTC)")

    @field_validator("post_id", "source")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or whitespace-only")
        return v.strip()

    @field_validator("flair", "author", "permalink")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @field_validator("created_at")
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    def has_flair(self, required: str) -> bool:
        """Whether the flair contains ``required`` (case-insensitive).

        An empty requirement accepts every post.
        """
        if not required:
            return True
        return required.lower() in (self.flair or "").lower()

    model_config = {"json_schema_extra": {"example": {
        "post_id": "1abcde",
        "source": "BESalary",
        "title": "Data engineer, 28, Ghent",
        "body": "1. PERSONALIA\n- Age: 28\n...",
        "flair": "Salary",
        "author": "throwaway_be",
        "permalink": "/r/BESalary/comments/1abcde/data_engineer/",
        "created_at": "2025-11-01T12:00:00Z",
    }}}


class CommentRecord(BaseModel):
    """One comment as a flat row; ``parent_id`` is None for top-level comments."""

    id: CommentId
    parent_id: Optional[CommentId] = None
    author: str = "[unknown]"
    body: str = ""
    score: int = 0
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)
