from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_comment_and_list(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    post = await create_post(alice)

    created = await client.post(
        "/api/comments",
        params={"postId": post["_id"]},
        json={"content": "Looks great"},
        headers=bob["headers"],
    )
    assert created.status_code == 201
    assert created.json()["message"] == "Comment created successfully!"
    assert created.json()["data"]["authorUsername"] == "bob"

    listed = await client.get("/api/comments", params={"postId": post["_id"]})
    assert listed.status_code == 200
    assert [item["content"] for item in listed.json()["data"]] == ["Looks great"]

    events = (await client.get(f"/api/users/{alice['id']}/notifications", headers=alice["headers"])).json()["data"]
    assert [event["action"] for event in events] == ["commented"]


async def test_comment_requires_post_id(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")

    response = await client.post("/api/comments", json={"content": "Hi"}, headers=alice["headers"])

    assert response.status_code == 400
    assert response.json()["message"] == "Bad Request!"


async def test_blocked_user_cannot_comment(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    post = await create_post(alice)
    await client.patch(f"/api/users/{alice['id']}/block/{bob['id']}", headers=alice["headers"])

    response = await client.post(
        "/api/comments",
        params={"postId": post["_id"]},
        json={"content": "Let me in"},
        headers=bob["headers"],
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Unauthorized request!"
    listed = await client.get("/api/comments", params={"postId": post["_id"]})
    assert listed.json()["data"] == []


async def test_comments_on_private_post_are_hidden(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    post = await create_post(alice, visibility="private")

    response = await client.get("/api/comments", params={"postId": post["_id"]})

    assert response.status_code == 400
    assert response.json()["message"] == "Unauthorized request!"


async def test_empty_comment_is_rejected(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    post = await create_post(alice)

    response = await client.post(
        "/api/comments",
        params={"postId": post["_id"]},
        json={"content": "   "},
        headers=alice["headers"],
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid comment form data!"
