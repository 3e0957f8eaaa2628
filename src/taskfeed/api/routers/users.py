"""Routes exposing user profiles and follow/block relations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from ...core.guard import ensure_same_identity
from ...deps import CallerDependency, NotificationServiceDependency, UserServiceDependency
from ...models import User
from ...schemas import Envelope, NotificationRead, UserPublic, UserSummary, success

router = APIRouter(prefix="/users", tags=["users"])

LimitQuery = Annotated[
    int,
    Query(ge=1, le=100, description="Maximum number of notifications to return."),
]


def _summaries(users: list[User]) -> list[UserSummary]:
    return [UserSummary.from_document(user) for user in users]


@router.get("/{user_id}", response_model=Envelope[UserPublic], summary="Fetch a user profile")
async def get_user(user_id: str, service: UserServiceDependency) -> Envelope[UserPublic]:
    user = await service.get_user(user_id)
    return success("User successfully fetched!", UserPublic.from_document(user))


@router.get("/{user_id}/following", response_model=Envelope[list[UserSummary]])
async def list_following(user_id: str, service: UserServiceDependency) -> Envelope[list[UserSummary]]:
    users = await service.list_following(user_id)
    return success("User following successfully fetched!", _summaries(users))


@router.get("/{user_id}/followers", response_model=Envelope[list[UserSummary]])
async def list_followers(user_id: str, service: UserServiceDependency) -> Envelope[list[UserSummary]]:
    users = await service.list_followers(user_id)
    return success("User followers successfully fetched!", _summaries(users))


@router.get("/{user_id}/blocked", response_model=Envelope[list[UserSummary]])
async def list_blocked(
    user_id: str,
    caller: CallerDependency,
    service: UserServiceDependency,
) -> Envelope[list[UserSummary]]:
    users = await service.list_blocked(user_id, caller)
    return success("User blocked successfully fetched!", _summaries(users))


@router.get(
    "/{user_id}/notifications",
    response_model=Envelope[list[NotificationRead]],
    summary="List the caller's most recent notifications",
)
async def list_notifications(
    user_id: str,
    caller: CallerDependency,
    service: UserServiceDependency,
    notifications: NotificationServiceDependency,
    limit: LimitQuery = 25,
) -> Envelope[list[NotificationRead]]:
    ensure_same_identity(caller, user_id)
    user = await service.get_user(user_id)
    events = await notifications.list_for_user(user.id, limit=limit)
    return success(
        "Notifications successfully fetched!",
        [NotificationRead.from_document(event) for event in events],
    )


@router.patch("/{user_id}/follow/{follower_id}", response_model=Envelope[UserPublic])
async def follow_user(
    user_id: str,
    follower_id: str,
    caller: CallerDependency,
    service: UserServiceDependency,
    notifications: NotificationServiceDependency,
) -> Envelope[UserPublic]:
    user, followed = await service.follow(user_id, follower_id, caller)
    await notifications.record_followed(actor=user, followed=followed)
    return success("User successfully followed!", UserPublic.from_document(user))


@router.patch("/{user_id}/unfollow/{follower_id}", response_model=Envelope[UserPublic])
async def unfollow_user(
    user_id: str,
    follower_id: str,
    caller: CallerDependency,
    service: UserServiceDependency,
) -> Envelope[UserPublic]:
    user, _ = await service.unfollow(user_id, follower_id, caller)
    return success("User successfully unfollowed!", UserPublic.from_document(user))


@router.patch("/{user_id}/block/{blocked_user_id}", response_model=Envelope[UserPublic])
async def block_user(
    user_id: str,
    blocked_user_id: str,
    caller: CallerDependency,
    service: UserServiceDependency,
) -> Envelope[UserPublic]:
    user, _ = await service.block(user_id, blocked_user_id, caller)
    return success("User successfully blocked!", UserPublic.from_document(user))


@router.patch("/{user_id}/unblock/{unblocked_user_id}", response_model=Envelope[UserPublic])
async def unblock_user(
    user_id: str,
    unblocked_user_id: str,
    caller: CallerDependency,
    service: UserServiceDependency,
) -> Envelope[UserPublic]:
    user = await service.unblock(user_id, unblocked_user_id, caller)
    return success("User successfully unblocked!", UserPublic.from_document(user))
