"""Database bootstrap: default API key and JSONPlaceholder sync.

Idempotent: each step is skipped when its table already has rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.auth import create_api_key
from app.models.post import ApiKey, Post, SyncLog, User

logger = logging.getLogger(__name__)

DEFAULT_KEY_NAME = "Default Development Key"
DEFAULT_KEY_PERMISSIONS = ["CREATE_POST", "UPDATE_POST", "DELETE_POST", "ANALYZE_POST"]
INIT_ACTION = "INIT_DATABASE"


@dataclass
class InitSummary:
    users: int
    posts: int
    api_keys: int
    users_synced: int = 0
    posts_synced: int = 0
    created_api_key: Optional[str] = None


def _count(db: Session, model) -> int:
    return int(db.scalar(select(func.count()).select_from(model)) or 0)


def _fetch_list(client: httpx.Client, path: str) -> list[dict[str, Any]]:
    response = client.get(path)
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list from {path}")
    return data


def seed_default_api_key(db: Session) -> Optional[str]:
    if _count(db, ApiKey) > 0:
        logger.info("API keys already exist, skipping creation")
        return None
    _, raw_key = create_api_key(db, name=DEFAULT_KEY_NAME, permissions=DEFAULT_KEY_PERMISSIONS)
    return raw_key


def sync_users(db: Session, client: httpx.Client) -> int:
    seen: set[int] = set()
    for item in _fetch_list(client, "/users"):
        try:
            user = User(
                id=int(item["id"]),
                name=str(item["name"]),
                username=str(item["username"]),
                email=str(item["email"]),
                phone=item.get("phone"),
                website=item.get("website"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Failed to sync user %s: %s", item.get("id"), exc)
            continue
        if user.id in seen:
            logger.warning("Skipping duplicate user %s", user.id)
            continue
        seen.add(user.id)
        db.add(user)
    db.flush()
    return len(seen)


def sync_posts(db: Session, client: httpx.Client) -> int:
    known_users = set(db.scalars(select(User.id)).all())
    seen: set[int] = set()
    for item in _fetch_list(client, "/posts"):
        try:
            post = Post(
                external_id=int(item["id"]),
                title=str(item["title"]),
                body=str(item["body"]),
                user_id=int(item["userId"]),
                is_local=False,
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Failed to sync post %s: %s", item.get("id"), exc)
            continue
        if post.external_id in seen or post.user_id not in known_users:
            logger.warning("Skipping post %s (duplicate or unknown user)", post.external_id)
            continue
        seen.add(post.external_id)
        db.add(post)
    db.flush()
    return len(seen)


def initialize_database(db: Session, client: Optional[httpx.Client] = None) -> InitSummary:
    """Seed an API key and, when a client is given, sync users and posts.

    Commits on success and records a SyncLog row either way.
    """
    try:
        raw_key = seed_default_api_key(db)

        users_synced = posts_synced = 0
        if client is not None:
            if _count(db, User) == 0:
                users_synced = sync_users(db, client)
            else:
                logger.info("Users already exist, skipping sync")
            if _count(db, Post) == 0:
                posts_synced = sync_posts(db, client)
            else:
                logger.info("Posts already exist, skipping sync")

        db.add(SyncLog(action=INIT_ACTION, status="SUCCESS", record_count=posts_synced))
        db.commit()
    except Exception as exc:
        db.rollback()
        logger.error("Database initialization failed: %s", exc)
        db.add(SyncLog(action=INIT_ACTION, status="FAILED", error_message=str(exc)[:2000]))
        db.commit()
        raise

    return InitSummary(
        users=_count(db, User),
        posts=_count(db, Post),
        api_keys=_count(db, ApiKey),
        users_synced=users_synced,
        posts_synced=posts_synced,
        created_api_key=raw_key,
    )
