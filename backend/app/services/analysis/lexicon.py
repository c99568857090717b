"""Fixed English lexicons used by the analyzer (read-only)."""

from __future__ import annotations

from types import MappingProxyType

POSITIVE_WORDS = MappingProxyType(
    {
        "excellent": 3.0,
        "amazing": 3.0,
        "outstanding": 3.0,
        "fantastic": 3.0,
        "wonderful": 2.5,
        "great": 2.0,
        "good": 1.5,
        "nice": 1.5,
        "happy": 2.0,
        "joy": 2.5,
        "love": 2.5,
        "like": 1.0,
        "positive": 1.5,
        "perfect": 2.5,
        "brilliant": 2.5,
        "superb": 2.5,
        "awesome": 2.0,
        "terrific": 2.0,
        "magnificent": 2.5,
        "delightful": 2.0,
    }
)

NEGATIVE_WORDS = MappingProxyType(
    {
        "terrible": -3.0,
        "awful": -3.0,
        "horrible": -3.0,
        "disgusting": -3.0,
        "bad": -2.0,
        "poor": -1.5,
        "sad": -1.5,
        "angry": -2.0,
        "hate": -2.5,
        "dislike": -1.5,
        "disappointed": -2.0,
        "frustrated": -2.0,
        "annoying": -1.5,
        "boring": -1.0,
        "worst": -3.0,
        "useless": -2.5,
    }
)

INTENSIFIERS = MappingProxyType(
    {
        "very": 1.5,
        "extremely": 2.0,
        "incredibly": 2.0,
        "absolutely": 1.8,
        "completely": 1.7,
        "totally": 1.6,
        "really": 1.3,
        "quite": 1.2,
    }
)

STOP_WORDS = frozenset(
    {
        # articles, conjunctions
        "the", "and", "or", "but",
        # prepositions
        "in", "on", "at", "to", "for", "of", "with", "by", "from", "up",
        "about", "into", "through", "during", "before", "after", "above",
        "below", "between", "among",
        # determiners, pronouns
        "this", "that", "these", "those",
        "i", "me", "my", "myself", "we", "our", "ours", "ourselves",
        "you", "your", "yours", "yourself", "yourselves",
        "he", "him", "his", "himself", "she", "her", "hers", "herself",
        "it", "its", "itself", "they", "them", "their", "theirs", "themselves",
        "what", "which", "who", "whom", "whose",
        # auxiliaries, modals
        "am", "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "having", "do", "does", "did", "doing",
        "will", "would", "could", "should", "may", "might", "must", "can",
        "shall",
    }
)

# Substring lists for the basic analyzer.
BASIC_POSITIVE_WORDS = (
    "good",
    "great",
    "excellent",
    "amazing",
    "wonderful",
    "fantastic",
    "love",
    "like",
    "happy",
    "joy",
)
BASIC_NEGATIVE_WORDS = (
    "bad",
    "terrible",
    "awful",
    "horrible",
    "hate",
    "dislike",
    "sad",
    "angry",
    "frustrated",
)
