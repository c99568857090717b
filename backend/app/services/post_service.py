from __future__ import annotations

import logging
import math
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.post import Post, User

logger = logging.getLogger(__name__)


def ensure_user(db: Session, user_id: int) -> User:
    """Return the user, creating a placeholder account when it does not exist."""
    user = db.get(User, user_id)
    if user is not None:
        return user
    user = User(
        id=user_id,
        name=f"User {user_id}",
        username=f"user{user_id}",
        email=f"user{user_id}@example.com",
    )
    db.add(user)
    db.flush()
    logger.info("Created placeholder user id=%s", user_id)
    return user


def list_posts(db: Session, *, page: int, limit: int) -> tuple[list[Post], int]:
    """Local posts first, then by id ascending."""
    total = db.scalar(select(func.count()).select_from(Post)) or 0
    stmt = (
        select(Post)
        .order_by(Post.is_local.desc(), Post.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(db.scalars(stmt).all()), int(total)


def build_pagination(*, page: int, limit: int, total: int) -> dict:
    return {
        "current_page": page,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "total_posts": total,
        "has_next_page": (page - 1) * limit + limit < total,
        "has_previous_page": page > 1,
    }


def create_post(db: Session, *, title: str, body: str, user_id: int) -> Post:
    ensure_user(db, user_id)
    post = Post(title=title.strip(), body=body.strip(), user_id=user_id, is_local=True)
    db.add(post)
    db.flush()
    return post


def update_post(db: Session, post: Post, *, title: Optional[str] = None, body: Optional[str] = None) -> Post:
    if title is not None:
        post.title = title.strip()
    if body is not None:
        post.body = body.strip()
    db.add(post)
    db.flush()
    return post


def delete_post(db: Session, post: Post) -> None:
    db.delete(post)
    db.flush()
