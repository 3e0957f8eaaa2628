from __future__ import annotations

import os

os.environ.setdefault("TASKFEED_ENVIRONMENT", "test")

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from taskfeed.core.config import get_settings
from taskfeed.db import close_document_store, init_document_store
from taskfeed.main import create_app

PASSWORD = "correct-horse-1"
SECURITY_ANSWER = "Rex"

AccountFactory = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture()
async def document_store() -> AsyncIterator[None]:
    settings = get_settings()
    settings.mongo_database = "taskfeed_test"
    await init_document_store(client=AsyncMongoMockClient(), force=True)
    try:
        yield
    finally:
        await close_document_store()


@pytest.fixture()
def app() -> FastAPI:
    return create_app()


@pytest.fixture()
async def client(app: FastAPI, document_store: None) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


def registration_payload(username: str, **overrides: Any) -> dict[str, Any]:
    payload = {
        "firstName": username.capitalize(),
        "lastName": "Tester",
        "email": f"{username}@example.com",
        "username": username,
        "password": PASSWORD,
        "securityQuestion": "First pet?",
        "securityAnswer": SECURITY_ANSWER,
    }
    payload.update(overrides)
    return payload


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def create_account(client: AsyncClient) -> AccountFactory:
    """Register and log in a user, returning its id, token and auth headers."""

    async def _create(username: str) -> dict[str, Any]:
        registered = await client.post("/api/auth/register", json=registration_payload(username))
        assert registered.status_code == 200, registered.text
        login = await client.post("/api/auth/login", json={"username": username, "password": PASSWORD})
        assert login.status_code == 200, login.text
        data = login.json()["data"]
        return {
            "id": data["user"]["_id"],
            "username": username,
            "token": data["token"],
            "headers": bearer(data["token"]),
        }

    return _create


@pytest.fixture()
def create_post(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    async def _create(account: dict[str, Any], **overrides: Any) -> dict[str, Any]:
        payload = {"title": "Launch plan", "color": "#ff8800", "category": "work"}
        payload.update(overrides)
        response = await client.post("/api/posts", json=payload, headers=account["headers"])
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
