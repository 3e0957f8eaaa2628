"""Comment and notification response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from ..models import Comment, Notification, NotificationAction
from .common import PublicModel


class CommentRead(PublicModel):
    id: str = Field(alias="_id")
    content: str
    post_id: str
    author_id: str
    author_username: str
    created_at: datetime

    @classmethod
    def from_document(cls, comment: Comment) -> "CommentRead":
        return cls(
            id=str(comment.id),
            content=comment.content,
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            author_username=comment.author_username,
            created_at=comment.created_at,
        )


class NotificationRead(PublicModel):
    id: str = Field(alias="_id")
    actor_id: str
    actor_username: str
    action: NotificationAction
    action_label: str
    summary: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    read: bool
    created_at: datetime

    @classmethod
    def from_document(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=str(notification.id),
            actor_id=str(notification.actor_id),
            actor_username=notification.actor_username,
            action=notification.action,
            action_label=notification.action_label,
            summary=notification.summary,
            metadata=notification.metadata,
            read=notification.read,
            created_at=notification.created_at,
        )


__all__ = ["CommentRead", "NotificationRead"]
