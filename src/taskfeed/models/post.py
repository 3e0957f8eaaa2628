"""Post document model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated

from beanie import Document, Indexed, PydanticObjectId
from pydantic import ConfigDict, Field

from .common import utcnow


class PostVisibility(str, Enum):
    """Who may read a post."""

    PUBLIC = "public"
    PRIVATE = "private"


class Post(Document):
    """A board of tasks owned by ``creator_id``.

    Users listed in ``authorized_users`` are collaborators and may change the
    post's tasks and subtasks. The vote counters always equal the sizes of
    ``upvoted_by`` and ``downvoted_by``.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(max_length=120)
    creator_id: Annotated[PydanticObjectId, Indexed()]
    creator_username: str
    due_date: datetime | None = None
    color: str
    category: str
    visibility: PostVisibility = PostVisibility.PUBLIC
    upvotes: int = 0
    downvotes: int = 0
    authorized_users: list[PydanticObjectId] = Field(default_factory=list)
    upvoted_by: list[PydanticObjectId] = Field(default_factory=list)
    downvoted_by: list[PydanticObjectId] = Field(default_factory=list)
    tasks: list[PydanticObjectId] = Field(default_factory=list)
    comments: list[PydanticObjectId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "posts"


__all__ = ["Post", "PostVisibility"]
