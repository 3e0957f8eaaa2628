"""Notification document model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from beanie import Document, PydanticObjectId
from bson import ObjectId
from pydantic import ConfigDict, Field, computed_field, field_validator

from .common import utcnow


class NotificationAction(str, Enum):
    """Enumeration of events that notify another user."""

    FOLLOWED = "followed"
    COMMENTED = "commented"
    UPVOTED = "upvoted"
    COLLABORATOR_ADDED = "collaborator_added"


class Notification(Document):
    """Event delivered to ``recipient_id`` about something ``actor_id`` did."""

    model_config = ConfigDict(str_strip_whitespace=True)

    recipient_id: PydanticObjectId = Field(description="User the notification is addressed to.")
    actor_id: PydanticObjectId = Field(description="User whose action produced the notification.")
    actor_username: str = Field(description="Username of the actor at the time of the event.")
    action: NotificationAction = Field(description="Identifier describing the event type.")
    summary: str = Field(max_length=240, description="Human readable summary of the event.")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Structured event metadata.")
    read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("summary", mode="before")
    @classmethod
    def _clean_summary(cls, value: object) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("summary must not be empty")
        return text[:240]

    @field_validator("metadata", mode="before")
    @classmethod
    def _ensure_metadata(cls, value: object) -> dict[str, Any]:
        # Referenced ids are stored as hex strings so clients can use them as-is.
        if not isinstance(value, Mapping):
            return {}
        return {str(key): str(val) if isinstance(val, ObjectId) else val for key, val in value.items()}

    @computed_field(return_type=str)
    def action_label(self) -> str:
        lookup = {
            NotificationAction.FOLLOWED: "New follower",
            NotificationAction.COMMENTED: "New comment",
            NotificationAction.UPVOTED: "Post upvoted",
            NotificationAction.COLLABORATOR_ADDED: "Added as collaborator",
        }
        return lookup.get(self.action, self.action.value.replace("_", " ").title())

    class Settings:
        name = "notifications"


__all__ = ["Notification", "NotificationAction"]
