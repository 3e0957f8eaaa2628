from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_create_post_records_owner(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")

    post = await create_post(alice, title="Garden")

    assert post["creatorId"] == alice["id"]
    assert post["creatorUsername"] == "alice"
    assert post["visibility"] == "public"
    assert post["upvotes"] == post["downvotes"] == 0
    profile = await client.get(f"/api/users/{alice['id']}")
    assert profile.json()["data"]["posts"] == [post["_id"]]


async def test_create_post_rejects_bad_color(client: AsyncClient, create_account) -> None:
    alice = await create_account("alice")

    response = await client.post(
        "/api/posts",
        json={"title": "Garden", "color": "orange", "category": "home"},
        headers=alice["headers"],
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid post form data!"


async def test_upvote_then_downvote_keeps_counters_consistent(
    client: AsyncClient,
    create_account,
    create_post,
) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    post = await create_post(alice)

    upvoted = await client.patch(f"/api/posts/{post['_id']}/upvote", headers=bob["headers"])
    assert upvoted.status_code == 200
    assert upvoted.json()["data"]["upvotes"] == 1
    assert upvoted.json()["data"]["upvotedBy"] == [bob["id"]]

    repeated = await client.patch(f"/api/posts/{post['_id']}/upvote", headers=bob["headers"])
    assert repeated.status_code == 400
    assert repeated.json()["message"] == "Post is already upvoted!"

    downvoted = await client.patch(f"/api/posts/{post['_id']}/downvote", headers=bob["headers"])
    data = downvoted.json()["data"]
    assert downvoted.status_code == 200
    assert (data["upvotes"], data["downvotes"]) == (0, 1)
    assert data["upvotedBy"] == []
    assert data["downvotedBy"] == [bob["id"]]

    profile = (await client.get(f"/api/users/{bob['id']}")).json()["data"]
    assert profile["upvotedPosts"] == []
    assert profile["downvotedPosts"] == [post["_id"]]


async def test_upvote_notifies_creator(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    post = await create_post(alice)

    await client.patch(f"/api/posts/{post['_id']}/upvote", headers=alice["headers"])
    await client.patch(f"/api/posts/{post['_id']}/upvote", headers=bob["headers"])

    events = (await client.get(f"/api/users/{alice['id']}/notifications", headers=alice["headers"])).json()["data"]
    assert [event["action"] for event in events] == ["upvoted"]
    assert events[0]["metadata"]["post_id"] == post["_id"]


async def test_private_post_visibility(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    post = await create_post(alice, visibility="private")

    anonymous = await client.get(f"/api/posts/{post['_id']}")
    assert anonymous.status_code == 400
    assert anonymous.json()["message"] == "Unauthorized request!"

    stranger = await client.get(f"/api/posts/{post['_id']}", headers=bob["headers"])
    assert stranger.status_code == 400

    owner = await client.get(f"/api/posts/{post['_id']}", headers=alice["headers"])
    assert owner.status_code == 200
    assert owner.json()["message"] == "Post successfully fetched!"

    await client.patch(f"/api/posts/{post['_id']}/collaborators/{bob['id']}", headers=alice["headers"])
    collaborator = await client.get(f"/api/posts/{post['_id']}", headers=bob["headers"])
    assert collaborator.status_code == 200


async def test_get_unknown_post(client: AsyncClient) -> None:
    missing = await client.get(f"/api/posts/{'a' * 24}")
    malformed = await client.get("/api/posts/123")

    assert missing.status_code == 404
    assert missing.json()["message"] == "Post not found!"
    assert malformed.status_code == 400
    assert malformed.json()["message"] == "Invalid postId!"


async def test_only_creator_manages_collaborators(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    carol = await create_account("carol")
    post = await create_post(alice)

    denied = await client.patch(f"/api/posts/{post['_id']}/collaborators/{carol['id']}", headers=bob["headers"])
    assert denied.status_code == 400
    assert denied.json()["message"] == "Unauthorized request!"

    added = await client.patch(f"/api/posts/{post['_id']}/collaborators/{bob['id']}", headers=alice["headers"])
    assert added.status_code == 200
    assert added.json()["data"]["authorizedUsers"] == [bob["id"]]

    duplicate = await client.patch(f"/api/posts/{post['_id']}/collaborators/{bob['id']}", headers=alice["headers"])
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "User is already a collaborator!"

    events = (await client.get(f"/api/users/{bob['id']}/notifications", headers=bob["headers"])).json()["data"]
    assert [event["action"] for event in events] == ["collaborator_added"]

    removed = await client.delete(f"/api/posts/{post['_id']}/collaborators/{bob['id']}", headers=alice["headers"])
    assert removed.status_code == 200
    assert removed.json()["data"]["authorizedUsers"] == []


async def test_timeline_shows_followed_public_posts(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    carol = await create_account("carol")
    await client.patch(f"/api/users/{alice['id']}/follow/{bob['id']}", headers=alice["headers"])

    own = await create_post(alice, title="Mine", visibility="private")
    followed = await create_post(bob, title="Bob public")
    await create_post(bob, title="Bob private", visibility="private")
    await create_post(carol, title="Carol public")

    response = await client.get("/api/posts/timeline", headers=alice["headers"])

    assert response.status_code == 200
    titles = {item["title"] for item in response.json()["data"]}
    assert titles == {own["title"], followed["title"]}


async def test_timeline_excludes_blocked_users(client: AsyncClient, create_account, create_post) -> None:
    alice = await create_account("alice")
    bob = await create_account("bob")
    await client.patch(f"/api/users/{alice['id']}/follow/{bob['id']}", headers=alice["headers"])
    await create_post(bob, title="Bob public")
    await client.patch(f"/api/users/{alice['id']}/block/{bob['id']}", headers=alice["headers"])

    response = await client.get("/api/posts/timeline", headers=alice["headers"])

    assert response.json()["data"] == []
