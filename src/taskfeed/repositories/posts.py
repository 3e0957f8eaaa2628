"""Repository for post documents."""

from __future__ import annotations

from collections.abc import Sequence

from beanie import PydanticObjectId

from ..models import Post, PostVisibility
from .base import BaseRepository, translate_store_errors


class PostRepository(BaseRepository[Post]):
    def __init__(self) -> None:
        super().__init__(Post)

    async def list_timeline(
        self,
        owner_id: PydanticObjectId,
        followed_ids: Sequence[PydanticObjectId],
        *,
        limit: int,
        offset: int = 0,
    ) -> list[Post]:
        """Return the owner's posts and public posts by ``followed_ids``, newest first."""

        filters: list[dict] = [{"creator_id": owner_id}]
        if followed_ids:
            filters.append(
                {
                    "creator_id": {"$in": list(followed_ids)},
                    "visibility": PostVisibility.PUBLIC.value,
                }
            )
        with translate_store_errors("list_timeline", self.collection_name):
            return (
                await Post.find({"$or": filters})
                .sort("-created_at")
                .skip(offset)
                .limit(limit)
                .to_list()
            )


__all__ = ["PostRepository"]
