"""Routes handling posts, votes and collaborators."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status

from ...deps import (
    CallerDependency,
    NotificationServiceDependency,
    OptionalCallerDependency,
    PostServiceDependency,
)
from ...schemas import Envelope, PostRead, TaskRead, success
from ...services import PostTree

router = APIRouter(prefix="/posts", tags=["posts"])

JsonBody = Annotated[Any, Body()]
LimitQuery = Annotated[
    int,
    Query(ge=1, le=100, description="Maximum number of posts to return in a single response."),
]
OffsetQuery = Annotated[
    int,
    Query(ge=0, description="Number of posts to skip before collecting results."),
]


def _map_tree(tree: PostTree) -> PostRead:
    tasks = [TaskRead.from_document(item.task, item.subtasks) for item in tree.tasks]
    return PostRead.from_document(tree.post, tasks)


@router.post(
    "",
    response_model=Envelope[PostRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create a post owned by the caller",
)
async def create_post(
    caller: CallerDependency,
    service: PostServiceDependency,
    payload: JsonBody = None,
) -> Envelope[PostRead]:
    post = await service.create_post(payload, caller)
    return success("Post created successfully!", PostRead.from_document(post))


@router.get(
    "/timeline",
    response_model=Envelope[list[PostRead]],
    summary="List the caller's posts and public posts by followed users",
)
async def read_timeline(
    caller: CallerDependency,
    service: PostServiceDependency,
    limit: LimitQuery = 20,
    offset: OffsetQuery = 0,
) -> Envelope[list[PostRead]]:
    posts = await service.timeline(caller, limit=limit, offset=offset)
    return success("Timeline successfully fetched!", [PostRead.from_document(post) for post in posts])


@router.get("/{post_id}", response_model=Envelope[PostRead], summary="Fetch a post with its tasks")
async def read_post(
    post_id: str,
    caller: OptionalCallerDependency,
    service: PostServiceDependency,
) -> Envelope[PostRead]:
    tree = await service.get_post(post_id, caller)
    return success("Post successfully fetched!", _map_tree(tree))


@router.patch("/{post_id}/upvote", response_model=Envelope[PostRead])
async def upvote_post(
    post_id: str,
    caller: CallerDependency,
    service: PostServiceDependency,
    notifications: NotificationServiceDependency,
) -> Envelope[PostRead]:
    post, voter = await service.upvote(post_id, caller)
    await notifications.record_upvoted(actor=voter, post=post)
    return success("Post successfully upvoted!", PostRead.from_document(post))


@router.patch("/{post_id}/downvote", response_model=Envelope[PostRead])
async def downvote_post(
    post_id: str,
    caller: CallerDependency,
    service: PostServiceDependency,
) -> Envelope[PostRead]:
    post, _ = await service.downvote(post_id, caller)
    return success("Post successfully downvoted!", PostRead.from_document(post))


@router.patch("/{post_id}/collaborators/{user_id}", response_model=Envelope[PostRead])
async def add_collaborator(
    post_id: str,
    user_id: str,
    caller: CallerDependency,
    service: PostServiceDependency,
    notifications: NotificationServiceDependency,
) -> Envelope[PostRead]:
    post, collaborator = await service.add_collaborator(post_id, user_id, caller)
    owner = await service.get_creator(post)
    await notifications.record_collaborator_added(actor=owner, collaborator=collaborator, post=post)
    return success("Collaborator successfully added!", PostRead.from_document(post))


@router.delete("/{post_id}/collaborators/{user_id}", response_model=Envelope[PostRead])
async def remove_collaborator(
    post_id: str,
    user_id: str,
    caller: CallerDependency,
    service: PostServiceDependency,
) -> Envelope[PostRead]:
    post = await service.remove_collaborator(post_id, user_id, caller)
    return success("Collaborator successfully removed!", PostRead.from_document(post))
