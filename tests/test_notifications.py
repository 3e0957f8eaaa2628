from __future__ import annotations

import asyncio

import pytest
from mongomock_motor import AsyncMongoMockClient

from taskfeed.core.config import get_settings
from taskfeed.db import close_document_store, init_document_store
from taskfeed.models import Notification, NotificationAction, Post, User
from taskfeed.services import NotificationService

pytestmark = pytest.mark.asyncio


def _user(username: str) -> User:
    return User(
        first_name=username.capitalize(),
        last_name="Tester",
        email=f"{username}@example.com",
        username=username,
        password_hash="x",
        security_question="q",
        security_answer_hash="y",
    )


async def test_ttl_index_respects_settings() -> None:
    settings = get_settings()
    settings.mongo_database = "taskfeed_notification_ttl"
    previous_ttl = settings.notification_ttl_seconds
    settings.notification_ttl_seconds = 864
    try:
        await init_document_store(client=AsyncMongoMockClient(), force=True)
        info = await Notification.get_motor_collection().index_information()
        ttl_config = info.get("notification_created_at_ttl")
        assert ttl_config is not None
        assert ttl_config.get("expireAfterSeconds") == 864
    finally:
        settings.notification_ttl_seconds = previous_ttl
        await close_document_store()


async def test_events_on_own_content_are_skipped(document_store: None) -> None:
    alice = await _user("alice").insert()
    bob = await _user("bob").insert()
    service = NotificationService()

    assert await service.record_followed(actor=alice, followed=alice) is None
    await service.record_followed(actor=alice, followed=bob)
    await asyncio.sleep(0.01)
    await service.record_followed(actor=alice, followed=bob)

    events = await service.list_for_user(bob.id, limit=1)
    assert len(events) == 1
    assert events[0].action is NotificationAction.FOLLOWED
    assert events[0].summary == "alice started following you"
    assert await service.list_for_user(alice.id) == []


async def test_upvote_metadata_stores_ids_as_strings(document_store: None) -> None:
    alice = await _user("alice").insert()
    bob = await _user("bob").insert()
    post = Post(title="Launch plan", creator_id=alice.id, creator_username="alice", color="#ff8800", category="work")
    await post.insert()
    post.upvotes = 1

    recorded = await NotificationService().record_upvoted(actor=bob, post=post)

    assert recorded is not None
    stored = await Notification.get(recorded.id)
    assert stored.metadata == {"post_id": str(post.id), "upvotes": 1}
    assert stored.summary == 'bob upvoted "Launch plan"'
    assert stored.recipient_id == alice.id
