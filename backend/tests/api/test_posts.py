import os
from unittest.mock import patch

import pytest

from app.core.config import get_settings
from tests.conftest import make_post


def _key(raw: str) -> dict:
    return {"X-API-Key": raw}


@pytest.mark.asyncio
async def test_list_posts_empty(client):
    r = await client.get("/api/v1/posts")
    assert r.status_code == 200
    data = r.json()
    assert data["posts"] == []
    assert data["pagination"] == {
        "current_page": 1,
        "total_pages": 0,
        "total_posts": 0,
        "has_next_page": False,
        "has_previous_page": False,
    }


@pytest.mark.asyncio
async def test_create_post(client, api_keys):
    r = await client.post(
        "/api/v1/posts",
        json={"title": "  Hello  ", "body": " First post body "},
        headers=_key(api_keys["writer"]),
    )
    assert r.status_code == 201
    data = r.json()
    assert data["title"] == "Hello"
    assert data["body"] == "First post body"
    assert data["is_local"] is True
    assert data["user_id"] == 1
    assert data["user"]["name"] == "User 1"
    assert data["user"]["email"] == "user1@example.com"


@pytest.mark.asyncio
async def test_create_post_with_bearer_all_key(client, api_keys):
    r = await client.post(
        "/api/v1/posts",
        json={"title": "T", "body": "B", "user_id": 7},
        headers={"Authorization": f"Bearer {api_keys['admin']}"},
    )
    assert r.status_code == 201
    assert r.json()["user"]["username"] == "user7"


@pytest.mark.asyncio
async def test_create_post_requires_key(client, api_keys):
    r = await client.post("/api/v1/posts", json={"title": "T", "body": "B"})
    assert r.status_code == 401
    assert r.json()["detail"] == "API key is required"


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["pk_not_a_real_key", None])
async def test_create_post_rejects_unknown_or_inactive_key(client, api_keys, raw):
    raw = raw or api_keys["inactive"]
    r = await client.post("/api/v1/posts", json={"title": "T", "body": "B"}, headers=_key(raw))
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid or inactive API key"


@pytest.mark.asyncio
async def test_create_post_requires_permission(client, api_keys):
    r = await client.post("/api/v1/posts", json={"title": "T", "body": "B"}, headers=_key(api_keys["reader"]))
    assert r.status_code == 403
    assert r.json()["detail"] == "Insufficient permissions. Required: CREATE_POST"


@pytest.mark.asyncio
async def test_create_post_blank_fields_rejected(client, api_keys):
    r = await client.post("/api/v1/posts", json={"title": "   ", "body": "B"}, headers=_key(api_keys["writer"]))
    assert r.status_code == 422
    r = await client.post("/api/v1/posts", json={"title": "T"}, headers=_key(api_keys["writer"]))
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_list_orders_local_first_and_paginates(client, api_keys, session_factory):
    session = session_factory()
    try:
        make_post(session, title="remote-1", is_local=False)
        make_post(session, title="remote-2", is_local=False)
        session.commit()
    finally:
        session.close()

    r = await client.post("/api/v1/posts", json={"title": "local", "body": "B"}, headers=_key(api_keys["writer"]))
    assert r.status_code == 201

    page1 = (await client.get("/api/v1/posts", params={"limit": 2})).json()
    assert [p["title"] for p in page1["posts"]] == ["local", "remote-1"]
    assert page1["pagination"]["total_posts"] == 3
    assert page1["pagination"]["total_pages"] == 2
    assert page1["pagination"]["has_next_page"] is True
    assert page1["pagination"]["has_previous_page"] is False

    page2 = (await client.get("/api/v1/posts", params={"limit": 2, "page": 2})).json()
    assert [p["title"] for p in page2["posts"]] == ["remote-2"]
    assert page2["pagination"]["has_next_page"] is False
    assert page2["pagination"]["has_previous_page"] is True


@pytest.mark.asyncio
async def test_list_rejects_bad_paging(client):
    assert (await client.get("/api/v1/posts", params={"page": 0})).status_code == 422
    assert (await client.get("/api/v1/posts", params={"limit": 0})).status_code == 422


@pytest.mark.asyncio
async def test_get_post_and_404(client, api_keys):
    r = await client.post("/api/v1/posts", json={"title": "T", "body": "B"}, headers=_key(api_keys["writer"]))
    pid = r.json()["id"]

    g = await client.get(f"/api/v1/posts/{pid}")
    assert g.status_code == 200
    assert g.json()["analysis"] is None

    missing = await client.get("/api/v1/posts/999999")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Post not found"


@pytest.mark.asyncio
async def test_update_post_partial(client, api_keys):
    r = await client.post(
        "/api/v1/posts", json={"title": "Old", "body": "Keep me"}, headers=_key(api_keys["writer"])
    )
    pid = r.json()["id"]

    u = await client.put(f"/api/v1/posts/{pid}", json={"title": "  New  "}, headers=_key(api_keys["writer"]))
    assert u.status_code == 200
    assert u.json()["title"] == "New"
    assert u.json()["body"] == "Keep me"


@pytest.mark.asyncio
async def test_update_post_permission_and_404(client, api_keys):
    r = await client.put("/api/v1/posts/1", json={"title": "X"}, headers=_key(api_keys["reader"]))
    assert r.status_code == 403
    r = await client.put("/api/v1/posts/424242", json={"title": "X"}, headers=_key(api_keys["writer"]))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_post_removes_analyses(client, api_keys):
    headers = _key(api_keys["writer"])
    pid = (await client.post("/api/v1/posts", json={"title": "T", "body": "good text"}, headers=headers)).json()["id"]
    assert (await client.post(f"/api/v1/posts/{pid}/analyze", headers=headers)).status_code == 201

    d = await client.delete(f"/api/v1/posts/{pid}", headers=headers)
    assert d.status_code == 200
    assert d.json() == {"message": "Post deleted successfully"}

    assert (await client.get(f"/api/v1/posts/{pid}")).status_code == 404
    assert (await client.get(f"/api/v1/posts/{pid}/analyze")).status_code == 404


@pytest.mark.asyncio
async def test_delete_requires_permission(client, api_keys):
    r = await client.delete("/api/v1/posts/1", headers=_key(api_keys["reader"]))
    assert r.status_code == 403
    assert r.json()["detail"] == "Insufficient permissions. Required: DELETE_POST"


def _seed_posts(session_factory, count: int) -> None:
    session = session_factory()
    try:
        for i in range(count):
            make_post(session, title=f"post-{i}")
        session.commit()
    finally:
        session.close()


@pytest.mark.asyncio
async def test_list_uses_configured_default_page_size(client, session_factory):
    _seed_posts(session_factory, 3)

    with patch.dict(os.environ, {"POSTS_PAGE_SIZE_DEFAULT": "2"}):
        get_settings.cache_clear()
        data = (await client.get("/api/v1/posts")).json()

    assert len(data["posts"]) == 2
    assert data["pagination"]["total_pages"] == 2
    assert data["pagination"]["has_next_page"] is True


@pytest.mark.asyncio
async def test_list_clamps_limit_to_max_page_size(client, session_factory):
    _seed_posts(session_factory, 3)

    with patch.dict(os.environ, {"POSTS_PAGE_SIZE_MAX": "2"}):
        get_settings.cache_clear()
        data = (await client.get("/api/v1/posts", params={"limit": 1000})).json()

    assert len(data["posts"]) == 2
    assert data["pagination"]["total_posts"] == 3
    assert data["pagination"]["total_pages"] == 2
    assert data["pagination"]["has_next_page"] is True

    get_settings.cache_clear()
    default_max = (await client.get("/api/v1/posts", params={"limit": 1000})).json()
    assert len(default_max["posts"]) == 3
    assert default_max["pagination"]["total_pages"] == 1
