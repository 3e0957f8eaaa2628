"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .comment import CommentRead, NotificationRead
from .envelope import Envelope, HealthCheckResponse, failure, success
from .post import PostRead, SubtaskRead, TaskRead
from .user import LoginData, PasswordResetData, SecurityQuestionData, UserPublic, UserSummary

__all__ = [
    "CommentRead",
    "Envelope",
    "HealthCheckResponse",
    "LoginData",
    "NotificationRead",
    "PasswordResetData",
    "PostRead",
    "SecurityQuestionData",
    "SubtaskRead",
    "TaskRead",
    "UserPublic",
    "UserSummary",
    "failure",
    "success",
]
