"""Keyword extraction used by the bio/description criterion."""

import re
from collections import Counter
from typing import List

STOP_WORDS = frozenset([
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
    "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
    "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
    "or", "an", "will", "my", "one", "all", "would", "there", "their",
    "what", "so", "up", "out", "if", "about", "who", "get", "which", "go",
])

MAX_KEYWORDS = 15

_NON_WORD = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str) -> List[str]:
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [w for w in cleaned.split() if len(w) > 2 and w not in STOP_WORDS]


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """
    Return the most frequent salient words of ``text``.

    Only words seen more than once qualify. Ordering is by descending
    frequency, ties in first-seen order.
    """
    counts = Counter(tokenize(text))
    repeated = [(word, n) for word, n in counts.items() if n > 1]
    repeated.sort(key=lambda item: item[1], reverse=True)
    return [word for word, _ in repeated[:limit]]
