"""Repository for notification documents."""

from __future__ import annotations

from beanie import PydanticObjectId

from ..models import Notification
from .base import BaseRepository, translate_store_errors


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self) -> None:
        super().__init__(Notification)

    async def list_for_recipient(self, recipient_id: PydanticObjectId, *, limit: int) -> list[Notification]:
        with translate_store_errors("list_for_recipient", self.collection_name):
            return (
                await Notification.find({"recipient_id": recipient_id})
                .sort("-created_at")
                .limit(limit)
                .to_list()
            )


__all__ = ["NotificationRepository"]
