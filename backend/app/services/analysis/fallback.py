"""Basic analyzer used when the full engine fails.

Cruder than the engine: raw whitespace word count, substring lexicon hits and
average-word-length complexity. Same result shape and bounds.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from .contracts import DEFAULT_MAX_KEYWORDS, SCORE_PRECISION, AnalysisResult, SentimentLabel, ensure_text, label_for
from .engine import KEYWORD_MIN_LENGTH, reading_time_for_count
from .lexicon import BASIC_NEGATIVE_WORDS, BASIC_POSITIVE_WORDS, STOP_WORDS

BASIC_SENTIMENT_SCALE = 10.0
BASIC_WORD_LENGTH_SCALE = 10.0


def _clean(word: str) -> str:
    return "".join(ch for ch in word if ch.isascii() and (ch.isalnum() or ch == "_")).lower()


def basic_analyze(text: Any, *, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> AnalysisResult:
    text = ensure_text(text)
    words = text.split()
    if not words:
        return AnalysisResult(
            word_count=0,
            sentiment=0.0,
            sentiment_label=SentimentLabel.NEUTRAL,
            keywords=[],
            complexity=0.0,
            reading_time=0,
        )

    lowered = text.lower()
    hits = sum(1 for w in BASIC_POSITIVE_WORDS if w in lowered)
    hits -= sum(1 for w in BASIC_NEGATIVE_WORDS if w in lowered)
    score = max(-1.0, min(1.0, hits / BASIC_SENTIMENT_SCALE))
    sentiment = round(score, SCORE_PRECISION) or 0.0

    freq: Counter[str] = Counter()
    for word in words:
        cleaned = _clean(word)
        if len(cleaned) >= KEYWORD_MIN_LENGTH and cleaned not in STOP_WORDS:
            freq[cleaned] += 1
    keywords = [word for word, _ in freq.most_common(max(0, max_keywords))]

    avg_length = sum(len(word) for word in words) / len(words)
    complexity = round(min(1.0, avg_length / BASIC_WORD_LENGTH_SCALE), 2)

    return AnalysisResult(
        word_count=len(words),
        sentiment=sentiment,
        sentiment_label=label_for(sentiment),
        keywords=keywords,
        complexity=complexity,
        reading_time=reading_time_for_count(len(words)),
    )
