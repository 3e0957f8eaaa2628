from __future__ import annotations

import logging

import pytest
from httpx import AsyncClient

from taskfeed.errors import StoreError
from taskfeed.repositories import UserRepository

pytestmark = pytest.mark.asyncio


async def _profile(client: AsyncClient, user_id: str) -> dict:
    response = await client.get(f"/api/users/{user_id}")
    assert response.status_code == 200
    return response.json()["data"]


async def test_follow_updates_both_sides(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")

    response = await client.patch(f"/api/users/{alice['id']}/follow/{bob['id']}", headers=alice["headers"])

    assert response.status_code == 200
    assert response.json()["message"] == "User successfully followed!"
    assert (await _profile(client, alice["id"]))["following"] == [bob["id"]]
    assert (await _profile(client, bob["id"]))["followers"] == [alice["id"]]

    following = await client.get(f"/api/users/{alice['id']}/following")
    assert [item["username"] for item in following.json()["data"]] == ["bob"]


async def test_follow_twice_is_rejected(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    path = f"/api/users/{alice['id']}/follow/{bob['id']}"

    await client.patch(path, headers=alice["headers"])
    response = await client.patch(path, headers=alice["headers"])

    assert response.status_code == 400
    assert response.json() == {
        "message": "User is already followed by the follower!",
        "data": None,
        "ok": False,
    }
    assert (await _profile(client, bob["id"]))["followers"] == [alice["id"]]


async def test_follow_on_behalf_of_someone_else(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    carol = await create_account("carol")

    response = await client.patch(f"/api/users/{bob['id']}/follow/{carol['id']}", headers=alice["headers"])

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid Credentials!"
    assert (await _profile(client, bob["id"]))["following"] == []


async def test_follow_self_is_rejected(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")

    response = await client.patch(f"/api/users/{alice['id']}/follow/{alice['id']}", headers=alice["headers"])

    assert response.status_code == 400
    assert response.json()["message"] == "You cannot follow yourself!"


async def test_follow_unknown_user(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")

    response = await client.patch(
        f"/api/users/{alice['id']}/follow/{'0' * 24}",
        headers=alice["headers"],
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Follower not found!"


async def test_malformed_user_id(client: AsyncClient) -> None:
    response = await client.get("/api/users/not-an-id")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid userId!"


async def test_unfollow(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    await client.patch(f"/api/users/{alice['id']}/follow/{bob['id']}", headers=alice["headers"])

    response = await client.patch(f"/api/users/{alice['id']}/unfollow/{bob['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["message"] == "User successfully unfollowed!"
    assert (await _profile(client, bob["id"]))["followers"] == []

    again = await client.patch(f"/api/users/{alice['id']}/unfollow/{bob['id']}", headers=alice["headers"])
    assert again.status_code == 400
    assert again.json()["message"] == "User is not followed by the follower!"


async def test_block_removes_follow_edge(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    await client.patch(f"/api/users/{alice['id']}/follow/{bob['id']}", headers=alice["headers"])

    response = await client.patch(f"/api/users/{alice['id']}/block/{bob['id']}", headers=alice["headers"])

    assert response.status_code == 200
    assert response.json()["message"] == "User successfully blocked!"
    assert (await _profile(client, alice["id"]))["following"] == []
    assert (await _profile(client, bob["id"]))["followers"] == []

    blocked = await client.get(f"/api/users/{alice['id']}/blocked", headers=alice["headers"])
    assert blocked.status_code == 200
    assert [item["_id"] for item in blocked.json()["data"]] == [bob["id"]]

    again = await client.patch(f"/api/users/{alice['id']}/block/{bob['id']}", headers=alice["headers"])
    assert again.status_code == 400
    assert again.json()["message"] == "User is already blocked!"


async def test_blocked_list_is_private(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")

    response = await client.get(f"/api/users/{alice['id']}/blocked", headers=bob["headers"])

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid Credentials!"


async def test_unblock(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")

    not_blocked = await client.patch(f"/api/users/{alice['id']}/unblock/{bob['id']}", headers=alice["headers"])
    assert not_blocked.status_code == 400
    assert not_blocked.json()["message"] == "User is not blocked!"

    await client.patch(f"/api/users/{alice['id']}/block/{bob['id']}", headers=alice["headers"])
    response = await client.patch(f"/api/users/{alice['id']}/unblock/{bob['id']}", headers=alice["headers"])

    assert response.status_code == 200
    assert response.json()["message"] == "User successfully unblocked!"
    blocked = await client.get(f"/api/users/{alice['id']}/blocked", headers=alice["headers"])
    assert blocked.json()["data"] == []


async def test_follow_notifies_followed_user(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    await client.patch(f"/api/users/{alice['id']}/follow/{bob['id']}", headers=alice["headers"])

    response = await client.get(f"/api/users/{bob['id']}/notifications", headers=bob["headers"])

    assert response.status_code == 200
    events = response.json()["data"]
    assert len(events) == 1
    assert events[0]["action"] == "followed"
    assert events[0]["actionLabel"] == "New follower"
    assert events[0]["actorUsername"] == "alice"

    foreign = await client.get(f"/api/users/{bob['id']}/notifications", headers=alice["headers"])
    assert foreign.status_code == 400


async def test_failed_second_write_keeps_first(client: AsyncClient, create_account, monkeypatch, caplog) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    original_save = UserRepository.save
    calls: list[str] = []

    async def save_then_fail(self, document):
        calls.append(str(document.id))
        if len(calls) == 2:
            raise StoreError()
        return await original_save(self, document)

    monkeypatch.setattr(UserRepository, "save", save_then_fail)
    caplog.set_level(logging.ERROR)

    response = await client.patch(f"/api/users/{alice['id']}/follow/{bob['id']}", headers=alice["headers"])
    monkeypatch.undo()

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error", "data": None, "ok": False}
    assert calls == [alice["id"], bob["id"]]
    assert (await _profile(client, alice["id"]))["following"] == [bob["id"]]
    assert (await _profile(client, bob["id"]))["followers"] == []
    assert any(
        record.name == "taskfeed.services.relations" and record.levelno == logging.ERROR
        for record in caplog.records
    )
