"""MongoDB client lifecycle and Beanie initialisation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import OperationFailure

from ..core.config import get_settings
from ..models import DOCUMENT_MODELS, Notification

logger = logging.getLogger(__name__)

_NOTIFICATION_TTL_INDEX = "notification_created_at_ttl"

_client: AsyncIOMotorClient | None = None
_database: AsyncIOMotorDatabase | None = None
_initialized = False
_lock = asyncio.Lock()


def set_store_client(client: AsyncIOMotorClient | None) -> None:
    """Inject a custom motor client instance (primarily for tests)."""

    global _client, _database, _initialized
    _client = client
    _database = None
    _initialized = False


async def _ensure_notification_indexes(ttl_seconds: int) -> None:
    collection = Notification.get_motor_collection()
    existing = await collection.index_information()

    current_ttl = None
    ttl_index = existing.get(_NOTIFICATION_TTL_INDEX)
    if isinstance(ttl_index, Mapping):
        current_ttl = ttl_index.get("expireAfterSeconds")

    if current_ttl is not None and int(current_ttl) != ttl_seconds:
        try:
            await collection.drop_index(_NOTIFICATION_TTL_INDEX)
        except OperationFailure:
            logger.warning("Could not drop stale notification TTL index.", exc_info=True)

    await collection.create_index(
        [("recipient_id", ASCENDING), ("created_at", DESCENDING)],
        name="notification_recipient_created_at",
    )
    await collection.create_index(
        [("created_at", ASCENDING)],
        expireAfterSeconds=ttl_seconds,
        name=_NOTIFICATION_TTL_INDEX,
    )


async def init_document_store(*, client: AsyncIOMotorClient | None = None, force: bool = False) -> None:
    """Connect to MongoDB and register every document model with Beanie."""

    global _client, _database, _initialized

    async with _lock:
        if client is not None:
            set_store_client(client)

        if _initialized and not force:
            return

        settings = get_settings()
        if _client is None:
            _client = AsyncIOMotorClient(settings.mongo_url, tz_aware=True, uuidRepresentation="standard")
        _database = _client[settings.mongo_database]

        await init_beanie(database=_database, document_models=list(DOCUMENT_MODELS))
        await _ensure_notification_indexes(settings.notification_ttl_seconds)
        _initialized = True
        logger.info("Document store initialised", extra={"database": settings.mongo_database})


async def close_document_store() -> None:
    """Dispose the MongoDB client."""

    global _client, _database, _initialized
    client = _client
    if client is not None:
        client.close()
    _client = None
    _database = None
    _initialized = False


__all__ = [
    "close_document_store",
    "init_document_store",
    "set_store_client",
]
