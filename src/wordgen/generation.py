from __future__ import annotations

import logging
import sys
import time
from typing import Callable, List, Tuple

from .config import GenerationLimits
from .models import Candidate, ComplexityRange, PermutationResult, Truncation
from .scoring import complexity_score

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# Approximate per-entry overhead of the seen-set, on top of the string itself.
SET_ENTRY_BYTES = 16


class PermutationGenerator:
    """
    Enumerate the distinct arrangements of a multiset of letters.

    Arrangements are built one letter at a time from an explicit stack, so
    depth never depends on the interpreter's recursion limit. The count, time
    and memory ceilings are checked before every expansion; hitting one stops
    enumeration and the partial result is returned with ``truncated.status``
    set rather than an exception.
    """

    def __init__(
        self,
        limits: GenerationLimits | None = None,
        *,
        clock: Clock = time.perf_counter,
    ) -> None:
        self._limits = limits or GenerationLimits()
        self._clock = clock

    @property
    def limits(self) -> GenerationLimits:
        return self._limits

    def generate(
        self,
        characters: str,
        min_length: int,
        max_length: int,
        complexity_range: ComplexityRange | None = None,
    ) -> PermutationResult:
        letters = characters.lower()
        limits = self._limits
        memory_limit_bytes = int(limits.memory_limit_mb * 1024 * 1024)
        start = self._clock()

        seen: set[str] = set()
        combinations: List[Candidate] = []
        total_generated = 0
        footprint = 0
        truncated = Truncation()
        stack: List[Tuple[str, str]] = [("", letters)]

        while stack:
            elapsed_ms = (self._clock() - start) * 1000
            if elapsed_ms > limits.timeout_ms:
                truncated = Truncation(
                    True, f"Exceeded generation time limit of {limits.timeout_ms} ms", "time"
                )
                break
            if footprint > memory_limit_bytes:
                truncated = Truncation(
                    True,
                    f"Exceeded generation memory limit of {limits.memory_limit_mb} MB",
                    "memory",
                )
                break

            prefix, remaining = stack.pop()
            length = len(prefix)
            if min_length <= length <= max_length and prefix not in seen:
                if len(combinations) >= limits.max_combinations:
                    truncated = Truncation(
                        True,
                        f"Exceeded maximum combinations limit of {limits.max_combinations}",
                        "count",
                    )
                    break
                seen.add(prefix)
                total_generated += 1
                footprint += sys.getsizeof(prefix) + SET_ENTRY_BYTES
                complexity = complexity_score(prefix)
                if complexity_range is None or complexity_range.contains(complexity):
                    candidate = Candidate(word=prefix, length=length, complexity=complexity)
                    combinations.append(candidate)
                    footprint += sys.getsizeof(candidate)

            if length >= max_length:
                continue
            stack.extend(reversed(_expand(prefix, remaining)))

        elapsed_ms = (self._clock() - start) * 1000
        if truncated.status:
            logger.warning(
                "Generation truncated after %s unique arrangements: %s",
                total_generated,
                truncated.reason,
            )
        logger.debug(
            "Generated %s arrangements (%s kept) from %s letters in %.1f ms",
            total_generated,
            len(combinations),
            len(letters),
            elapsed_ms,
        )
        return PermutationResult(
            combinations=combinations,
            total_generated=total_generated,
            truncated=truncated,
            elapsed_ms=elapsed_ms,
            memory_bytes=footprint,
        )


def generate_combinations(
    characters: str,
    min_length: int,
    max_length: int,
    complexity_range: ComplexityRange | None = None,
    limits: GenerationLimits | None = None,
) -> PermutationResult:
    """Convenience wrapper around PermutationGenerator.generate."""
    return PermutationGenerator(limits).generate(
        characters, min_length, max_length, complexity_range
    )


def _expand(prefix: str, remaining: str) -> List[Tuple[str, str]]:
    # Picking the same letter twice at one level yields an identical subtree.
    children: List[Tuple[str, str]] = []
    used: set[str] = set()
    for idx, letter in enumerate(remaining):
        if letter in used:
            continue
        used.add(letter)
        children.append((prefix + letter, remaining[:idx] + remaining[idx + 1 :]))
    return children
