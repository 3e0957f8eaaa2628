"""Repository for comment documents."""

from __future__ import annotations

from beanie import PydanticObjectId

from ..models import Comment
from .base import BaseRepository, translate_store_errors


class CommentRepository(BaseRepository[Comment]):
    def __init__(self) -> None:
        super().__init__(Comment)

    async def list_for_post(self, post_id: PydanticObjectId) -> list[Comment]:
        """Return the comments on a post, oldest first."""

        with translate_store_errors("list_for_post", self.collection_name):
            return await Comment.find({"post_id": post_id}).sort("+created_at").to_list()


__all__ = ["CommentRepository"]
