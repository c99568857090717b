from .contracts import (
    AnalysisResult,
    InvalidInputError,
    SentimentLabel,
    label_for,
)
from .engine import (
    ReadabilityStats,
    analyze,
    count_syllables,
    count_words,
    estimate_reading_time,
    extract_keywords,
    readability_stats,
    score_complexity,
    score_sentiment,
    tokenize,
)
from .fallback import basic_analyze

__all__ = [
    "AnalysisResult",
    "InvalidInputError",
    "ReadabilityStats",
    "SentimentLabel",
    "analyze",
    "basic_analyze",
    "count_syllables",
    "count_words",
    "estimate_reading_time",
    "extract_keywords",
    "label_for",
    "readability_stats",
    "score_complexity",
    "score_sentiment",
    "tokenize",
]
