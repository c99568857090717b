"""Post analysis service.

Runs the text analyzer for stored posts and records each run as a
PostAnalysis row. The analyzer is picked per call:
- "advanced": the full lexicon/readability engine
- "basic": the cruder substring scorer

If the advanced engine fails and fallback is enabled, the basic scorer is
used instead and the row is tagged source="fallback". Invalid input is never
retried; it propagates to the caller unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.models.post import Post, PostAnalysis

from .contracts import AnalysisResult, InvalidInputError
from .engine import analyze
from .fallback import basic_analyze

logger = logging.getLogger(__name__)

STRATEGY_ADVANCED = "advanced"
STRATEGY_BASIC = "basic"
SOURCE_FALLBACK = "fallback"

FALLBACK_WARNING = "Advanced analysis failed, used basic fallback"

ANALYZERS: dict[str, Callable[..., AnalysisResult]] = {
    STRATEGY_ADVANCED: analyze,
    STRATEGY_BASIC: basic_analyze,
}


@dataclass
class AnalysisOutcome:
    result: AnalysisResult
    source: str
    warning: Optional[str] = None


def _truncate(text: Any, max_chars: int) -> Any:
    if isinstance(text, str) and len(text) > max_chars:
        logger.info("Analysis input truncated from %s to %s chars", len(text), max_chars)
        return text[:max_chars]
    return text


def run_analysis(
    text: Any,
    *,
    strategy: str = STRATEGY_ADVANCED,
    max_keywords: Optional[int] = None,
    allow_fallback: Optional[bool] = None,
) -> AnalysisOutcome:
    settings = get_settings()
    analyzer = ANALYZERS.get(strategy)
    if analyzer is None:
        raise ValueError(f"Unknown analysis strategy: {strategy}")
    if max_keywords is None:
        max_keywords = settings.analysis_max_keywords
    if allow_fallback is None:
        allow_fallback = settings.enable_analysis_fallback

    text = _truncate(text, settings.analysis_max_input_chars)

    try:
        result = analyzer(text, max_keywords=max_keywords)
    except InvalidInputError:
        raise
    except Exception:
        if strategy == STRATEGY_BASIC or not allow_fallback:
            raise
        logger.warning("Advanced analysis failed, falling back to basic", exc_info=True)
        result = basic_analyze(text, max_keywords=max_keywords)
        return AnalysisOutcome(result=result, source=SOURCE_FALLBACK, warning=FALLBACK_WARNING)

    return AnalysisOutcome(result=result, source=strategy)


def analyze_post(
    db: Session,
    post: Post,
    *,
    strategy: str = STRATEGY_ADVANCED,
) -> tuple[PostAnalysis, AnalysisOutcome]:
    """Analyze ``post.body`` and add the result to the session (flushed, not committed)."""
    outcome = run_analysis(post.body, strategy=strategy)
    result = outcome.result

    row = PostAnalysis(
        post_id=post.id,
        word_count=result.word_count,
        sentiment=result.sentiment,
        sentiment_label=result.sentiment_label.value,
        keywords=list(result.keywords),
        reading_time=result.reading_time,
        complexity=result.complexity,
        source=outcome.source,
    )
    db.add(row)
    db.flush()

    logger.info(
        "Analyzed post=%s source=%s words=%s sentiment=%s label=%s keywords=%s complexity=%s reading_time=%s",
        post.id,
        outcome.source,
        result.word_count,
        result.sentiment,
        result.sentiment_label.value,
        len(result.keywords),
        result.complexity,
        result.reading_time,
    )
    return row, outcome


def latest_analysis(db: Session, post_id: int) -> Optional[PostAnalysis]:
    stmt = (
        select(PostAnalysis)
        .where(PostAnalysis.post_id == post_id)
        .order_by(PostAnalysis.created_at.desc(), PostAnalysis.id.desc())
        .limit(1)
    )
    return db.scalar(stmt)
