"""Generic repository over a Beanie document collection."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from beanie import Document, PydanticObjectId
from pymongo.errors import PyMongoError

from ..errors import NotFoundError, StoreError

DocumentT = TypeVar("DocumentT", bound=Document)

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(operation: str, collection: str) -> Iterator[None]:
    """Log driver failures and re-raise them as ``StoreError``."""

    try:
        yield
    except PyMongoError as exc:
        logger.error(
            "Document store %s failed",
            operation,
            exc_info=exc,
            extra={"collection": collection},
        )
        raise StoreError() from exc


class BaseRepository(Generic[DocumentT]):
    """Find and save helpers shared by every collection."""

    def __init__(self, model: type[DocumentT]) -> None:
        self.model = model

    @property
    def collection_name(self) -> str:
        return self.model.get_collection_name()

    async def get(self, document_id: PydanticObjectId) -> DocumentT | None:
        with translate_store_errors("get", self.collection_name):
            return await self.model.get(document_id)

    async def get_or_raise(self, document_id: PydanticObjectId, message: str) -> DocumentT:
        document = await self.get(document_id)
        if document is None:
            raise NotFoundError(message)
        return document

    async def find_one(self, filters: dict[str, Any]) -> DocumentT | None:
        with translate_store_errors("find_one", self.collection_name):
            return await self.model.find_one(filters)

    async def list_by_ids(self, ids: Sequence[PydanticObjectId]) -> list[DocumentT]:
        """Fetch documents for ``ids`` keeping the order of ``ids``."""

        if not ids:
            return []
        with translate_store_errors("list_by_ids", self.collection_name):
            found = await self.model.find({"_id": {"$in": list(ids)}}).to_list()
        by_id = {document.id: document for document in found}
        return [by_id[document_id] for document_id in ids if document_id in by_id]

    async def insert(self, document: DocumentT) -> DocumentT:
        with translate_store_errors("insert", self.collection_name):
            return await document.insert()

    async def save(self, document: DocumentT) -> DocumentT:
        with translate_store_errors("save", self.collection_name):
            return await document.save()


__all__ = ["BaseRepository", "DocumentT", "translate_store_errors"]
