"""
Tokenization and scoring primitives shared by the analyzers.

Everything here is pure and deterministic: no I/O, no randomness, no
dependence on dict ordering beyond insertion order.
"""

import math
import re
from collections import Counter
from typing import Any, Iterable, List, Sequence, Tuple

from ..core.exceptions import AnalysisError

SENTENCE_DELIMITERS = re.compile(r"[.!?]+")
NON_WORD = re.compile(r"[^\w]")
VOWEL_GROUPS = re.compile(r"[aeiouy]+", re.IGNORECASE)

# Control characters other than tab/newline/carriage return mark binary payloads
BINARY_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def ensure_text(content: Any) -> str:
    """Return ``content`` if it is analyzable text, else raise AnalysisError."""
    if isinstance(content, (bytes, bytearray, memoryview)):
        raise AnalysisError("Binary payloads cannot be analyzed; decode the text first")
    if not isinstance(content, str):
        raise AnalysisError(f"Expected text content, got {type(content).__name__}")
    if BINARY_CONTROL.search(content):
        raise AnalysisError("Content contains binary control characters")
    return content


def tokenize(content: str) -> List[str]:
    return content.split()


def clean_word(token: str) -> str:
    return NON_WORD.sub("", token.lower())


def split_sentences(content: str) -> List[str]:
    return [s.strip() for s in SENTENCE_DELIMITERS.split(content) if s.strip()]


def sentence_count(content: str) -> int:
    """Number of non-empty ``.!?``-delimited segments, never less than 1."""
    return max(1, len(split_sentences(content)))


def count_syllables(word: str) -> int:
    return max(1, len(VOWEL_GROUPS.findall(word)))


def flesch_reading_ease(words: Sequence[str], sentences: int) -> float:
    """Flesch Reading Ease clamped to [0, 100]; 0 when there are no words."""
    if not words:
        return 0.0
    sentences = max(1, sentences)
    avg_words_per_sentence = len(words) / sentences
    avg_syllables_per_word = sum(count_syllables(w) for w in words) / len(words)
    score = 206.835 - (1.015 * avg_words_per_sentence) - (84.6 * avg_syllables_per_word)
    return clamp(score, 0.0, 100.0)


def matched_terms(text: str, terms: Iterable[str]) -> List[str]:
    """Terms occurring as substrings of ``text`` (already lowercased), in table order."""
    return [term for term in terms if term in text]


def matched_words(text: str, words: Iterable[str]) -> List[str]:
    """Like ``matched_terms`` but each entry must appear as a whole word."""
    return [
        word for word in words
        if re.search(rf"(?<!\w){re.escape(word)}(?!\w)", text)
    ]


def rank_by_frequency(items: Iterable[str], limit: int = None) -> List[Tuple[str, int]]:
    """Sort by descending count; equal counts keep first-seen order."""
    counts = Counter()
    for item in items:
        counts[item] += 1
    ranked = sorted(counts.items(), key=lambda pair: -pair[1])
    return ranked[:limit] if limit is not None else ranked


def jaccard(first: Iterable[str], second: Iterable[str]) -> float:
    """Case-insensitive Jaccard overlap; two empty sets are identical (1.0)."""
    a = {item.lower() for item in first}
    b = {item.lower() for item in second}
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def mean_and_stdev(values: Sequence[float]) -> Tuple[float, float]:
    """Population mean and standard deviation."""
    if not values:
        return 0.0, 0.0
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return mean, math.sqrt(variance)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))
