"""Profile reads and the follow and block relations between users."""

from __future__ import annotations

import logging

from ..core.guard import ensure_same_identity
from ..core.security import CallerIdentity
from ..errors import PreconditionFailedError, ValidationError
from ..models import User
from ..repositories import UserRepository
from .base import PipelineService
from .relations import FOLLOW, add_member, persist_pair, remove_member

logger = logging.getLogger(__name__)

INVALID_USER_ID_MESSAGE = "Invalid userId!"


class UserService(PipelineService):
    """Business orchestration for ``User`` relations."""

    def __init__(self) -> None:
        self._users = UserRepository()

    async def get_user(self, user_id: str) -> User:
        document_id = self.parse_id(user_id, INVALID_USER_ID_MESSAGE)
        return await self._users.get_or_raise(document_id, "User not found!")

    async def list_following(self, user_id: str) -> list[User]:
        user = await self.get_user(user_id)
        return await self._users.list_by_ids(user.following)

    async def list_followers(self, user_id: str) -> list[User]:
        user = await self.get_user(user_id)
        return await self._users.list_by_ids(user.followers)

    async def list_blocked(self, user_id: str, caller: CallerIdentity | None) -> list[User]:
        """Return the users ``user_id`` has blocked. Only the owner may read this list."""

        ensure_same_identity(caller, user_id)
        user = await self.get_user(user_id)
        return await self._users.list_by_ids(user.blocked)

    async def _load_pair(
        self,
        user_id: str,
        other_id: str,
        *,
        missing_message: str,
        action: str,
    ) -> tuple[User, User]:
        subject_id, target_id = self.parse_ids((user_id, other_id), INVALID_USER_ID_MESSAGE)
        if subject_id == target_id:
            raise ValidationError(f"You cannot {action} yourself!")
        user = await self._users.get_or_raise(subject_id, "User not found!")
        other = await self._users.get_or_raise(target_id, missing_message)
        return user, other

    async def follow(self, user_id: str, follower_id: str, caller: CallerIdentity | None) -> tuple[User, User]:
        """Make ``user_id`` follow ``follower_id``."""

        ensure_same_identity(caller, user_id)
        user, target = await self._load_pair(
            user_id,
            follower_id,
            missing_message="Follower not found!",
            action="follow",
        )
        if FOLLOW.contains(user, target):
            raise PreconditionFailedError("User is already followed by the follower!")

        FOLLOW.link(user, target)
        await persist_pair(self._users, user, self._users, target)
        logger.info("User followed", extra={"user_id": user_id, "target_id": follower_id})
        return user, target

    async def unfollow(self, user_id: str, follower_id: str, caller: CallerIdentity | None) -> tuple[User, User]:
        ensure_same_identity(caller, user_id)
        user, target = await self._load_pair(
            user_id,
            follower_id,
            missing_message="Follower not found!",
            action="unfollow",
        )
        if not FOLLOW.contains(user, target):
            raise PreconditionFailedError("User is not followed by the follower!")

        FOLLOW.unlink(user, target)
        await persist_pair(self._users, user, self._users, target)
        return user, target

    async def block(self, user_id: str, blocked_id: str, caller: CallerIdentity | None) -> tuple[User, User]:
        """Block ``blocked_id`` and drop the follow edge from the blocker to them."""

        ensure_same_identity(caller, user_id)
        user, target = await self._load_pair(
            user_id,
            blocked_id,
            missing_message="Blocked user not found!",
            action="block",
        )
        if target.id in user.blocked:
            raise PreconditionFailedError("User is already blocked!")

        FOLLOW.unlink(user, target)
        add_member(user.blocked, target.id)
        await persist_pair(self._users, user, self._users, target)
        logger.info("User blocked", extra={"user_id": user_id, "target_id": blocked_id})
        return user, target

    async def unblock(self, user_id: str, blocked_id: str, caller: CallerIdentity | None) -> User:
        ensure_same_identity(caller, user_id)
        user, target = await self._load_pair(
            user_id,
            blocked_id,
            missing_message="Unblocked user not found!",
            action="unblock",
        )
        if not remove_member(user.blocked, target.id):
            raise PreconditionFailedError("User is not blocked!")

        await self._users.save(user)
        return user


__all__ = ["INVALID_USER_ID_MESSAGE", "UserService"]
