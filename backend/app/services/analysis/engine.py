"""Deterministic text analysis: word count, lexicon sentiment, keywords,
readability-derived complexity and reading time.

All functions are pure. Lexicons are module-level read-only tables, so the
engine can be called concurrently without locking.

Two token-length floors are in play and must not be merged:
- sentiment, complexity and word count keep tokens longer than 2 chars;
- keyword ranking keeps tokens longer than 3 chars (and drops stop words).
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Any

from .contracts import (
    DEFAULT_MAX_KEYWORDS,
    SCORE_PRECISION,
    WORDS_PER_MINUTE,
    AnalysisResult,
    ensure_text,
    label_for,
)
from .lexicon import INTENSIFIERS, NEGATIVE_WORDS, POSITIVE_WORDS, STOP_WORDS

WORD_MIN_LENGTH = 3
KEYWORD_MIN_LENGTH = 4

SENTIMENT_WINDOW_WORDS = 10.0
SENTIMENT_SCALE = 5.0

_NON_WORD_RE = re.compile(r"[^\w]", re.ASCII)
_SENTENCE_END_RE = re.compile(r"[.!?]")
_VOWELS = frozenset("aeiou")


@dataclass(frozen=True)
class ReadabilityStats:
    word_count: int
    avg_word_length: float
    avg_sentence_length: float
    total_syllables: int
    flesch_score: float


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _clean(word: str) -> str:
    return _NON_WORD_RE.sub("", word).lower()


def tokenize(text: Any, *, min_length: int = WORD_MIN_LENGTH) -> list[str]:
    """Split on whitespace, strip non-word chars, lowercase, drop short tokens."""
    text = ensure_text(text)
    words: list[str] = []
    for raw in text.split():
        word = _clean(raw)
        if len(word) >= min_length:
            words.append(word)
    return words


def count_words(text: Any) -> int:
    return len(tokenize(text))


# --- Sentiment ---


def _sentiment_from_words(words: list[str]) -> float:
    score = 0.0
    multiplier = 1.0
    for word in words:
        boost = INTENSIFIERS.get(word)
        if boost is not None:
            multiplier = boost
            continue
        weight = POSITIVE_WORDS.get(word)
        if weight is None:
            weight = NEGATIVE_WORDS.get(word)
        if weight is not None:
            score += weight * multiplier
        # An intensifier only reaches the very next token.
        multiplier = 1.0

    normalized = score / max(1.0, len(words) / SENTIMENT_WINDOW_WORDS)
    return _clamp(normalized / SENTIMENT_SCALE, -1.0, 1.0)


def score_sentiment(text: Any) -> float:
    """Lexicon sentiment in [-1.0, 1.0]; 0.0 for empty text."""
    text = ensure_text(text)
    if not text:
        return 0.0
    return _sentiment_from_words(tokenize(text))


# --- Keywords ---


def _keywords_from_words(words: list[str], max_keywords: int) -> list[str]:
    if max_keywords <= 0:
        return []
    freq = Counter(
        word for word in words if len(word) >= KEYWORD_MIN_LENGTH and word not in STOP_WORDS
    )
    # Highest count first, longer word wins ties, first-seen order otherwise.
    ranked = sorted(freq.items(), key=lambda item: (-item[1], -len(item[0])))
    return [word for word, _ in ranked[:max_keywords]]


def extract_keywords(text: Any, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> list[str]:
    text = ensure_text(text)
    return _keywords_from_words(tokenize(text, min_length=KEYWORD_MIN_LENGTH), max_keywords)


# --- Complexity ---


def count_syllables(word: str) -> int:
    """Vowel-group count, floored at 1."""
    syllables = 0
    prev_vowel = False
    for char in word:
        is_vowel = char in _VOWELS
        if is_vowel and not prev_vowel:
            syllables += 1
        prev_vowel = is_vowel
    return max(1, syllables)


def _readability_from_words(text: str, words: list[str]) -> ReadabilityStats | None:
    if not words:
        return None
    total = len(words)
    sentences = max(1, len(_SENTENCE_END_RE.findall(text)))
    avg_sentence_length = total / sentences
    syllables = sum(count_syllables(word) for word in words)
    flesch = 206.835 - 1.015 * avg_sentence_length - 84.6 * (syllables / total)
    return ReadabilityStats(
        word_count=total,
        avg_word_length=sum(len(word) for word in words) / total,
        avg_sentence_length=avg_sentence_length,
        total_syllables=syllables,
        flesch_score=flesch,
    )


def readability_stats(text: Any) -> ReadabilityStats | None:
    """Flesch inputs for ``text``; None when no countable words."""
    text = ensure_text(text)
    return _readability_from_words(text, tokenize(text))


def _complexity_from_stats(stats: ReadabilityStats | None) -> float:
    if stats is None:
        return 0.0
    complexity = _clamp((100.0 - stats.flesch_score) / 100.0, 0.0, 1.0)
    return round(complexity, SCORE_PRECISION)


def score_complexity(text: Any) -> float:
    """Inverted, normalized Flesch Reading Ease in [0.0, 1.0]."""
    return _complexity_from_stats(readability_stats(text))


# --- Reading time ---


def reading_time_for_count(word_count: int) -> int:
    if word_count <= 0:
        return 0
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def estimate_reading_time(text: Any) -> int:
    """Minutes at 225 wpm; 0 only when there are no countable words."""
    return reading_time_for_count(count_words(text))


# --- Aggregate ---


def analyze(text: Any, *, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> AnalysisResult:
    text = ensure_text(text)
    words = tokenize(text)

    # `or 0.0` folds -0.0 into 0.0.
    sentiment = round(_sentiment_from_words(words), SCORE_PRECISION) or 0.0
    return AnalysisResult(
        word_count=len(words),
        sentiment=sentiment,
        sentiment_label=label_for(sentiment),
        keywords=_keywords_from_words(words, max_keywords),
        complexity=_complexity_from_stats(_readability_from_words(text, words)),
        reading_time=reading_time_for_count(len(words)),
    )
