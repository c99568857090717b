"""Contracts for post content analysis."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

POSITIVE_THRESHOLD = 0.1
NEGATIVE_THRESHOLD = -0.1

WORDS_PER_MINUTE = 225
DEFAULT_MAX_KEYWORDS = 10
SCORE_PRECISION = 3


class InvalidInputError(TypeError):
    """Raised when the analyzer is handed something other than a string."""

    def __init__(self, value: Any) -> None:
        self.value_type = type(value).__name__
        super().__init__(f"text must be a str, got {self.value_type}")


class SentimentLabel(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


def label_for(score: float) -> SentimentLabel:
    if score > POSITIVE_THRESHOLD:
        return SentimentLabel.POSITIVE
    if score < NEGATIVE_THRESHOLD:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable analysis of a single text."""

    word_count: int
    sentiment: float  # -1.0–1.0, 3 places
    sentiment_label: SentimentLabel
    keywords: list[str] = field(default_factory=list)
    complexity: float = 0.0  # 0.0–1.0
    reading_time: int = 0  # minutes

    def as_dict(self) -> dict[str, Any]:
        """Render using the camelCase keys callers serialize."""
        data = asdict(self)
        return {
            "wordCount": data["word_count"],
            "sentiment": data["sentiment"],
            "sentimentLabel": self.sentiment_label.value,
            "keywords": list(data["keywords"]),
            "complexity": data["complexity"],
            "readingTime": data["reading_time"],
        }


def ensure_text(text: Any) -> str:
    if not isinstance(text, str):
        raise InvalidInputError(text)
    return text
