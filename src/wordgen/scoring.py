from __future__ import annotations

import math
import re
from typing import Iterable

from .models import Candidate, GenerationStatistics

MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 10

REPEATED_RE = re.compile(r"(.+?)\1+")
ALTERNATION_RE = re.compile(r"[aeiou][^aeiou]|[^aeiou][aeiou]")


def complexity_score(word: str) -> int:
    """
    Score how difficult a candidate string looks on a 1-10 scale.

    The raw score adds a length term (log2(length) * 2), a uniqueness term
    (distinct / length * 3) and 0.5 per vowel/consonant alternation match,
    then subtracts one per repeated-substring match. Halves round up.
    """
    text = word.lower()
    length = len(text)
    if length == 0:
        return MIN_COMPLEXITY

    score = math.log2(length) * 2
    score += (len(set(text)) / length) * 3
    score -= sum(1 for _ in REPEATED_RE.finditer(text))
    score += sum(1 for _ in ALTERNATION_RE.finditer(text)) * 0.5

    rounded = math.floor(score + 0.5)
    return max(MIN_COMPLEXITY, min(MAX_COMPLEXITY, rounded))


def compute_statistics(candidates: Iterable[Candidate]) -> GenerationStatistics:
    """Aggregate length, complexity and validity counts over candidates."""
    items = list(candidates)
    if not items:
        return GenerationStatistics()
    valid = sum(1 for c in items if c.is_valid)
    return GenerationStatistics(
        average_length=sum(c.length for c in items) / len(items),
        average_complexity=sum(c.complexity for c in items) / len(items),
        valid_words=valid,
        invalid_words=len(items) - valid,
    )
