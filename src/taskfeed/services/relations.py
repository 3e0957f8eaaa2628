"""Helpers for id-list relations stored on documents.

A ``SymmetricRelation`` is kept as one id list on each participant. The
helpers always change both lists in memory; persisting the pair is two
separate document writes (``persist_pair``). Nothing makes those two writes
atomic: if the second write fails the first stays committed. A saga with a
compensating write would close that gap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from beanie import Document, PydanticObjectId

from ..repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def add_member(members: list[PydanticObjectId], member_id: PydanticObjectId) -> bool:
    """Append ``member_id`` unless present. Return whether the list changed."""

    if member_id in members:
        return False
    members.append(member_id)
    return True


def remove_member(members: list[PydanticObjectId], member_id: PydanticObjectId) -> bool:
    """Drop every occurrence of ``member_id``. Return whether the list changed."""

    kept = [item for item in members if item != member_id]
    changed = len(kept) != len(members)
    members[:] = kept
    return changed


@dataclass(frozen=True, slots=True)
class SymmetricRelation:
    """A relation from ``source`` to ``target`` mirrored on both documents.

    ``outgoing`` names the id list on the source, ``incoming`` the id list on
    the target.
    """

    outgoing: str
    incoming: str

    def contains(self, source: Document, target: Document) -> bool:
        return target.id in getattr(source, self.outgoing)

    def link(self, source: Document, target: Document) -> None:
        add_member(getattr(source, self.outgoing), target.id)
        add_member(getattr(target, self.incoming), source.id)

    def unlink(self, source: Document, target: Document) -> None:
        remove_member(getattr(source, self.outgoing), target.id)
        remove_member(getattr(target, self.incoming), source.id)


FOLLOW = SymmetricRelation(outgoing="following", incoming="followers")
UPVOTE = SymmetricRelation(outgoing="upvoted_posts", incoming="upvoted_by")
DOWNVOTE = SymmetricRelation(outgoing="downvoted_posts", incoming="downvoted_by")


async def persist_pair(
    first_repository: BaseRepository,
    first: Document,
    second_repository: BaseRepository,
    second: Document,
) -> None:
    """Save ``first`` then ``second``. Not atomic, see the module docstring."""

    await first_repository.save(first)
    try:
        await second_repository.save(second)
    except Exception:
        logger.error(
            "Second write of a relation pair failed; the first write is already committed",
            extra={
                "first_collection": first_repository.collection_name,
                "first_id": str(first.id),
                "second_collection": second_repository.collection_name,
                "second_id": str(second.id),
            },
        )
        raise


__all__ = [
    "DOWNVOTE",
    "FOLLOW",
    "UPVOTE",
    "SymmetricRelation",
    "add_member",
    "persist_pair",
    "remove_member",
]
