from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Dict, List, Sequence

from .batching import split_into_batches, unique_in_order
from .breaker import CircuitBreaker
from .cache import CacheStore
from .dictionaries import DictionaryLookup
from .errors import RequestTimeoutError
from .languages import Language
from .models import Definition, LookupResult, ValidationResult
from .scoring import complexity_score
from .textutils import normalize_word, validation_cache_key

logger = logging.getLogger(__name__)


class BatchValidator:
    """
    Check candidate words against a dictionary, cache first.

    Words are normalized and deduplicated, split into fixed-size batches and
    each batch is resolved from the cache before the provider is asked about
    the misses through the shared circuit breaker. A failing batch degrades
    its words to ``source="error"`` instead of failing the whole call.
    """

    def __init__(
        self,
        dictionary: DictionaryLookup,
        breaker: CircuitBreaker,
        cache: CacheStore,
        *,
        batch_size: int = 100,
        parallel_batches: int = 4,
        cache_ttl_seconds: int = 3_600,
    ) -> None:
        self._dictionary = dictionary
        self._breaker = breaker
        self._cache = cache
        self._batch_size = max(1, batch_size)
        self._parallel_batches = max(1, parallel_batches)
        self._cache_ttl_seconds = cache_ttl_seconds

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    def validate_word(self, word: str, language: Language) -> ValidationResult:
        return self.validate_batch([word], language)[0]

    def validate_batch(
        self,
        words: Sequence[str],
        language: Language,
        timeout: float | None = None,
    ) -> List[ValidationResult]:
        """Validate words, returning one result per input word in input order."""
        normalized = [normalize_word(word, language) for word in words]
        unique = [word for word in unique_in_order(normalized) if word]
        batches = split_into_batches(unique, self._batch_size)
        logger.debug(
            "Validating %s words (%s unique) in %s batches", len(words), len(unique), len(batches)
        )

        resolved: Dict[str, ValidationResult] = {}
        if len(batches) <= 1 or self._parallel_batches == 1:
            deadline = time.monotonic() + timeout if timeout is not None else None
            for batch in batches:
                if deadline is not None and time.monotonic() > deadline:
                    raise RequestTimeoutError(f"Validation exceeded {timeout:.2f} s.")
                resolved.update(self._process_batch(batch, language))
        else:
            resolved.update(self._process_parallel(batches, language, timeout))

        return [
            resolved[word] if word else _empty_result(original)
            for word, original in zip(normalized, words)
        ]

    def _process_parallel(
        self, batches: List[List[str]], language: Language, timeout: float | None
    ) -> Dict[str, ValidationResult]:
        workers = min(self._parallel_batches, len(batches))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="wordgen-validate")
        try:
            futures: List[Future[Dict[str, ValidationResult]]] = [
                executor.submit(self._process_batch, batch, language) for batch in batches
            ]
            _, not_done = wait(futures, timeout=timeout)
            if not_done:
                for future in not_done:
                    future.cancel()
                raise RequestTimeoutError(
                    f"Validation exceeded {timeout:.2f} s with {len(not_done)} batches pending."
                )
            merged: Dict[str, ValidationResult] = {}
            for future in futures:
                merged.update(future.result())
            return merged
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _process_batch(self, batch: List[str], language: Language) -> Dict[str, ValidationResult]:
        keys = [validation_cache_key(word, language) for word in batch]
        cached = self._cache_multi_get(keys)

        results: Dict[str, ValidationResult] = {}
        misses: List[tuple[str, str]] = []
        for word, key, entry in zip(batch, keys, cached):
            if entry is None:
                misses.append((word, key))
                continue
            definition = entry.get("definition")
            results[word] = ValidationResult(
                word=word,
                is_valid=bool(entry["isValid"]),
                complexity=complexity_score(word),
                source="cache",
                definition=Definition.from_dict(definition) if definition else None,
            )
        if not misses:
            return results

        miss_words = [word for word, _ in misses]
        try:
            answers = self._breaker.call(self._dictionary.lookup_batch, miss_words, language)
        except Exception as exc:
            logger.warning(
                "Dictionary lookup failed for a batch of %s words: %s", len(miss_words), exc
            )
            for word in miss_words:
                results[word] = ValidationResult(
                    word=word,
                    is_valid=False,
                    complexity=complexity_score(word),
                    source="error",
                    error=str(exc) or exc.__class__.__name__,
                )
            return results

        for word, key in misses:
            answer = answers.get(word) or LookupResult(is_valid=False)
            results[word] = ValidationResult(
                word=word,
                is_valid=answer.is_valid,
                complexity=complexity_score(word),
                source="dictionary",
                definition=answer.definition,
            )
            self._cache_set(
                key,
                {
                    "isValid": answer.is_valid,
                    "definition": answer.definition.to_dict() if answer.definition else None,
                },
            )
        return results

    def _cache_multi_get(self, keys: List[str]) -> List[Any]:
        try:
            return self._cache.multi_get(keys)
        except Exception as exc:
            logger.warning("Validation cache read failed; treating as miss: %s", exc)
            return [None] * len(keys)

    def _cache_set(self, key: str, value: Dict[str, Any]) -> None:
        try:
            self._cache.set(key, value, self._cache_ttl_seconds)
        except Exception as exc:
            logger.warning("Validation cache write failed: %s", exc)


def _empty_result(original: str) -> ValidationResult:
    return ValidationResult(
        word="",
        is_valid=False,
        complexity=complexity_score(""),
        source="error",
        error=f"'{original}' has no letters after normalization.",
    )
