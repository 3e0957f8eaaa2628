"""Routes handling comments on posts."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status

from ...deps import (
    CallerDependency,
    CommentServiceDependency,
    NotificationServiceDependency,
    OptionalCallerDependency,
)
from ...errors import ValidationError
from ...schemas import CommentRead, Envelope, success

router = APIRouter(prefix="/comments", tags=["comments"])

JsonBody = Annotated[Any, Body()]
PostIdQuery = Annotated[str | None, Query(alias="postId", description="Post being commented on.")]


def _require_post_id(post_id: str | None) -> str:
    if not post_id:
        raise ValidationError("Bad Request!")
    return post_id


@router.post(
    "",
    response_model=Envelope[CommentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
)
async def create_comment(
    caller: CallerDependency,
    service: CommentServiceDependency,
    notifications: NotificationServiceDependency,
    post_id: PostIdQuery = None,
    payload: JsonBody = None,
) -> Envelope[CommentRead]:
    comment, post, author = await service.create_comment(_require_post_id(post_id), payload, caller)
    await notifications.record_commented(actor=author, post=post, comment=comment)
    return success("Comment created successfully!", CommentRead.from_document(comment))


@router.get("", response_model=Envelope[list[CommentRead]], summary="List comments on a post")
async def list_comments(
    caller: OptionalCallerDependency,
    service: CommentServiceDependency,
    post_id: PostIdQuery = None,
) -> Envelope[list[CommentRead]]:
    comments = await service.list_comments(_require_post_id(post_id), caller)
    return success("Comments successfully fetched!", [CommentRead.from_document(item) for item in comments])
