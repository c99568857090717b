"""Posts CRUD endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.auth import CurrentApiKey, require_permission
from app.core.config import get_settings
from app.core.dependencies import get_db
from app.models.post import Post
from app.schemas.post import (
    AnalysisOut,
    DeleteResponse,
    Pagination,
    PostCreate,
    PostListResponse,
    PostOut,
    PostUpdate,
)
from app.services import post_service
from app.services.analysis.service import latest_analysis

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_post_or_404(db: Session, post_id: int) -> Post:
    post = db.get(Post, post_id)
    if not post:
        raise HTTPException(404, "Post not found")
    return post


def _post_out(db: Session, post: Post, *, include_analysis: bool) -> PostOut:
    out = PostOut.model_validate(post)
    if include_analysis:
        row = latest_analysis(db, post.id)
        if row is not None:
            out.analysis = AnalysisOut.model_validate(row)
    return out


@router.get("/posts", response_model=PostListResponse)
def list_posts(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    include_analysis: bool = Query(False),
    db: Session = Depends(get_db),
):
    settings = get_settings()
    if limit is None:
        limit = settings.posts_page_size_default
    limit = min(limit, settings.posts_page_size_max)

    posts, total = post_service.list_posts(db, page=page, limit=limit)
    return PostListResponse(
        posts=[_post_out(db, p, include_analysis=include_analysis) for p in posts],
        pagination=Pagination(**post_service.build_pagination(page=page, limit=limit, total=total)),
    )


@router.post("/posts", response_model=PostOut, status_code=201)
def create_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    api_key: CurrentApiKey = Depends(require_permission("CREATE_POST")),
):
    post = post_service.create_post(db, title=payload.title, body=payload.body, user_id=payload.user_id)
    db.commit()
    db.refresh(post)
    logger.info("Post created id=%s by api_key=%s", post.id, api_key.id)
    return _post_out(db, post, include_analysis=False)


@router.get("/posts/{post_id}", response_model=PostOut)
def get_post(
    post_id: int,
    include_analysis: bool = Query(True),
    db: Session = Depends(get_db),
):
    post = _get_post_or_404(db, post_id)
    return _post_out(db, post, include_analysis=include_analysis)


@router.put("/posts/{post_id}", response_model=PostOut)
def update_post(
    post_id: int,
    payload: PostUpdate,
    db: Session = Depends(get_db),
    api_key: CurrentApiKey = Depends(require_permission("UPDATE_POST")),
):
    post = _get_post_or_404(db, post_id)
    post_service.update_post(db, post, title=payload.title, body=payload.body)
    db.commit()
    db.refresh(post)
    logger.info("Post updated id=%s by api_key=%s", post.id, api_key.id)
    return _post_out(db, post, include_analysis=False)


@router.delete("/posts/{post_id}", response_model=DeleteResponse)
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    api_key: CurrentApiKey = Depends(require_permission("DELETE_POST")),
):
    post = _get_post_or_404(db, post_id)
    post_service.delete_post(db, post)
    db.commit()
    logger.info("Post deleted id=%s by api_key=%s", post_id, api_key.id)
    return DeleteResponse(message="Post deleted successfully")
