"""Repository for user documents."""

from __future__ import annotations

from pymongo.errors import DuplicateKeyError

from ..errors import PreconditionFailedError
from ..models import User
from .base import BaseRepository, translate_store_errors

DUPLICATE_ACCOUNT_MESSAGE = "Username or email already exists!"


class UserRepository(BaseRepository[User]):
    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(self, username: str) -> User | None:
        return await self.find_one({"username": username})

    async def get_by_username_or_email(self, username: str, email: str | None = None) -> User | None:
        """Return the user whose username or email matches.

        With a single argument the value is compared against both fields.
        """

        # emails are stored lower-cased
        return await self.find_one({"$or": [{"username": username}, {"email": (email or username).lower()}]})

    async def insert(self, document: User) -> User:
        with translate_store_errors("insert", self.collection_name):
            try:
                return await document.insert()
            except DuplicateKeyError as exc:
                # a concurrent registration won the unique index
                raise PreconditionFailedError(DUPLICATE_ACCOUNT_MESSAGE) from exc


__all__ = ["DUPLICATE_ACCOUNT_MESSAGE", "UserRepository"]
