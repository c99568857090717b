"""Tests for database bootstrap (API key seeding + JSONPlaceholder sync)."""

from __future__ import annotations

import httpx
import pytest
from sqlalchemy import select

from app.core.auth import hash_api_key
from app.models.post import ApiKey, Post, SyncLog, User
from app.services.sync_service import DEFAULT_KEY_PERMISSIONS, initialize_database

USERS = [
    {"id": 1, "name": "Leanne Graham", "username": "Bret", "email": "leanne@example.com", "phone": "1-770", "website": "hildegard.org"},
    {"id": 2, "name": "Ervin Howell", "username": "Antonette", "email": "ervin@example.com"},
    {"id": 2, "name": "Duplicate", "username": "dup", "email": "dup@example.com"},
    {"name": "No id"},
]

POSTS = [
    {"id": 1, "userId": 1, "title": "sunt aut facere", "body": "quia et suscipit"},
    {"id": 2, "userId": 1, "title": "qui est esse", "body": "est rerum tempore"},
    {"id": 3, "userId": 2, "title": "ea molestias", "body": "et iusto sed quo"},
    {"id": 4, "userId": 99, "title": "orphan", "body": "unknown author"},
]


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), base_url="https://jsonplaceholder.test")


def _ok_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/users":
        return httpx.Response(200, json=USERS)
    if request.url.path == "/posts":
        return httpx.Response(200, json=POSTS)
    return httpx.Response(404)


def test_initialize_seeds_key_and_syncs(db):
    with _client(_ok_handler) as client:
        summary = initialize_database(db, client)

    assert summary.users_synced == 2
    assert summary.posts_synced == 3
    assert summary.users == 2
    assert summary.posts == 3
    assert summary.api_keys == 1
    assert summary.created_api_key.startswith("pk_")

    key = db.scalar(select(ApiKey))
    assert key.key_hash == hash_api_key(summary.created_api_key)
    assert key.permissions == DEFAULT_KEY_PERMISSIONS

    posts = db.scalars(select(Post).order_by(Post.external_id)).all()
    assert [p.external_id for p in posts] == [1, 2, 3]
    assert all(p.is_local is False for p in posts)
    assert db.get(User, 1).website == "hildegard.org"

    log = db.scalar(select(SyncLog))
    assert log.status == "SUCCESS"
    assert log.record_count == 3


def test_initialize_is_idempotent(db):
    with _client(_ok_handler) as client:
        initialize_database(db, client)
        second = initialize_database(db, client)

    assert second.created_api_key is None
    assert second.users_synced == 0
    assert second.posts_synced == 0
    assert second.api_keys == 1
    assert len(db.scalars(select(SyncLog)).all()) == 2


def test_initialize_without_client_only_seeds_key(db):
    summary = initialize_database(db)
    assert summary.created_api_key
    assert summary.users == 0
    assert summary.posts == 0


def test_initialize_failure_is_logged_and_rolled_back(db):
    def _failing(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "down"})

    with _client(_failing) as client:
        with pytest.raises(httpx.HTTPStatusError):
            initialize_database(db, client)

    assert db.scalar(select(ApiKey)) is None
    log = db.scalar(select(SyncLog))
    assert log.status == "FAILED"
    assert "503" in log.error_message
