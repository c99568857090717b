"""Content analysis endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.auth import CurrentApiKey, require_permission
from app.core.dependencies import check_database, get_db
from app.models.post import Post
from app.schemas.post import AnalysisOut, AnalysisRunResponse, TextAnalysisRequest, TextAnalysisResponse
from app.services.analysis.service import analyze_post, latest_analysis, run_analysis

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/posts/{post_id}/analyze", response_model=AnalysisRunResponse, status_code=201)
def analyze_post_endpoint(
    post_id: int,
    db: Session = Depends(get_db),
    api_key: CurrentApiKey = Depends(require_permission("ANALYZE_POST")),
):
    post = db.get(Post, post_id)
    if not post:
        raise HTTPException(404, "Post not found")

    try:
        row, outcome = analyze_post(db, post)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Failed to analyze post=%s", post_id)
        raise HTTPException(500, "Failed to analyze post")

    db.refresh(row)
    base = AnalysisOut.model_validate(row)
    return AnalysisRunResponse(
        **base.model_dump(),
        analysis_time=datetime.now(timezone.utc),
        warning=outcome.warning,
    )


@router.get("/posts/{post_id}/analyze", response_model=AnalysisOut)
def get_latest_analysis(post_id: int, db: Session = Depends(get_db)):
    row = latest_analysis(db, post_id)
    if row is None:
        raise HTTPException(404, "No analysis found for this post")
    return AnalysisOut.model_validate(row)


@router.post("/analyze", response_model=TextAnalysisResponse)
def analyze_text_endpoint(
    body: TextAnalysisRequest,
    api_key: CurrentApiKey = Depends(require_permission("ANALYZE_POST")),
):
    outcome = run_analysis(body.text, strategy=body.strategy.value, max_keywords=body.max_keywords)
    result = outcome.result
    return TextAnalysisResponse(
        word_count=result.word_count,
        sentiment=result.sentiment,
        sentiment_label=result.sentiment_label.value,
        keywords=list(result.keywords),
        complexity=result.complexity,
        reading_time=result.reading_time,
        source=outcome.source,
    )


@router.get("/health/db")
def database_health(db: Session = Depends(get_db)):
    ok, message = check_database(db)
    if not ok:
        raise HTTPException(503, message)
    return {"status": "ok", "message": message}
