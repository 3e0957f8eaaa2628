"""User-facing response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ..models import User
from .common import PublicModel, stringify_ids


class UserSummary(PublicModel):
    """Compact user representation used inside relation listings."""

    id: str = Field(alias="_id")
    username: str
    first_name: str
    last_name: str
    profile_picture: str = ""

    @classmethod
    def from_document(cls, user: User) -> "UserSummary":
        return cls(
            id=str(user.id),
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_picture=user.profile_picture,
        )


class UserPublic(UserSummary):
    """Full public profile. Credential digests are never exposed."""

    email: str
    followers: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)
    posts: list[str] = Field(default_factory=list)
    upvoted_posts: list[str] = Field(default_factory=list)
    downvoted_posts: list[str] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_document(cls, user: User) -> "UserPublic":
        return cls(
            id=str(user.id),
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_picture=user.profile_picture,
            email=user.email,
            followers=stringify_ids(user.followers),
            following=stringify_ids(user.following),
            posts=stringify_ids(user.posts),
            upvoted_posts=stringify_ids(user.upvoted_posts),
            downvoted_posts=stringify_ids(user.downvoted_posts),
            created_at=user.created_at,
        )


class LoginData(PublicModel):
    user: UserPublic
    token: str


class SecurityQuestionData(PublicModel):
    first_name: str
    username: str
    security_question: str


class PasswordResetData(PublicModel):
    id: str = Field(alias="_id")
    username: str


__all__ = [
    "LoginData",
    "PasswordResetData",
    "SecurityQuestionData",
    "UserPublic",
    "UserSummary",
]
