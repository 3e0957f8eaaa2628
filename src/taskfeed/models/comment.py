"""Comment document model."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from beanie import Document, Indexed, PydanticObjectId
from pydantic import ConfigDict, Field

from .common import utcnow


class Comment(Document):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(max_length=1000)
    post_id: Annotated[PydanticObjectId, Indexed()]
    author_id: PydanticObjectId
    author_username: str
    created_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "comments"


__all__ = ["Comment"]
