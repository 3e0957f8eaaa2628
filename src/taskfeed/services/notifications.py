from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from beanie import PydanticObjectId

from ..models import Comment, Notification, NotificationAction, Post, User
from ..repositories import NotificationRepository


class NotificationService:
    """Records and lists notifications. Acting on your own content notifies nobody."""

    def __init__(self, *, default_page_size: int = 25) -> None:
        self._default_page_size = max(default_page_size, 1)
        self._repository = NotificationRepository()

    async def record_event(
        self,
        *,
        action: NotificationAction,
        summary: str,
        actor: User,
        recipient_id: PydanticObjectId,
        metadata: Mapping[str, Any] | None = None,
    ) -> Notification | None:
        if recipient_id == actor.id:
            return None
        notification = Notification(
            recipient_id=recipient_id,
            actor_id=actor.id,
            actor_username=actor.username,
            action=action,
            summary=summary,
            metadata=dict(metadata or {}),
        )
        return await self._repository.insert(notification)

    async def record_followed(self, *, actor: User, followed: User) -> Notification | None:
        return await self.record_event(
            action=NotificationAction.FOLLOWED,
            summary=f"{actor.username} started following you",
            actor=actor,
            recipient_id=followed.id,
        )

    async def record_commented(self, *, actor: User, post: Post, comment: Comment) -> Notification | None:
        title = (post.title or "").strip()
        return await self.record_event(
            action=NotificationAction.COMMENTED,
            summary=f'{actor.username} commented on "{title}"',
            actor=actor,
            recipient_id=post.creator_id,
            metadata={"post_id": post.id, "comment_id": comment.id},
        )

    async def record_upvoted(self, *, actor: User, post: Post) -> Notification | None:
        title = (post.title or "").strip()
        return await self.record_event(
            action=NotificationAction.UPVOTED,
            summary=f'{actor.username} upvoted "{title}"',
            actor=actor,
            recipient_id=post.creator_id,
            metadata={"post_id": post.id, "upvotes": post.upvotes},
        )

    async def record_collaborator_added(self, *, actor: User, collaborator: User, post: Post) -> Notification | None:
        title = (post.title or "").strip()
        return await self.record_event(
            action=NotificationAction.COLLABORATOR_ADDED,
            summary=f'{actor.username} added you to "{title}"',
            actor=actor,
            recipient_id=collaborator.id,
            metadata={"post_id": post.id},
        )

    async def list_for_user(self, user_id: PydanticObjectId, *, limit: int | None = None) -> list[Notification]:
        page_size = self._default_page_size if limit is None else max(int(limit), 1)
        return await self._repository.list_for_recipient(user_id, limit=page_size)


__all__ = ["NotificationService"]
