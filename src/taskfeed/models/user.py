"""User document model."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from beanie import Document, Indexed, PydanticObjectId
from pydantic import ConfigDict, Field

from .common import utcnow


class User(Document):
    """A registered account together with its social relations.

    ``followers``, ``following`` and ``blocked`` hold user ids. Following is
    two-sided: when A follows B, ``A.following`` holds B and ``B.followers``
    holds A.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(max_length=64)
    last_name: str = Field(max_length=64)
    email: Annotated[str, Indexed(unique=True)]
    username: Annotated[str, Indexed(unique=True)]
    profile_picture: str = ""
    password_hash: str
    security_question: str = Field(max_length=255)
    security_answer_hash: str

    followers: list[PydanticObjectId] = Field(default_factory=list)
    following: list[PydanticObjectId] = Field(default_factory=list)
    blocked: list[PydanticObjectId] = Field(default_factory=list)
    posts: list[PydanticObjectId] = Field(default_factory=list)
    upvoted_posts: list[PydanticObjectId] = Field(default_factory=list)
    downvoted_posts: list[PydanticObjectId] = Field(default_factory=list)
    comments: list[PydanticObjectId] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "users"


__all__ = ["User"]
