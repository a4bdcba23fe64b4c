"""Local word-frequency analysis over the combined document text."""

from __future__ import annotations

import re
from collections import Counter

from docbench.models.analysis import WordCount

DEFAULT_LIMIT = 20

_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_STOP_WORDS = frozenset(
    {"that", "this", "with", "from", "have", "were", "will", "your", "they", "could", "which"}
)


def top_terms(text: str, limit: int = DEFAULT_LIMIT) -> list[WordCount]:
    """Return the *limit* most frequent terms of *text*, most frequent first.

    Tokens of three characters or fewer and common stop-words are dropped.
    Ties keep first-encounter order.
    """
    cleaned = _PUNCTUATION_RE.sub("", text.lower())
    # Counter preserves insertion order and most_common() sorts stably.
    counts = Counter(
        word for word in cleaned.split() if len(word) > 3 and word not in _STOP_WORDS
    )
    return [WordCount(name=word, value=count) for word, count in counts.most_common(limit)]
