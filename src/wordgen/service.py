from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from .breaker import CircuitBreaker
from .cache import CacheStore, InMemoryCache
from .config import WordGenConfig
from .constraints import apply_sorting, build_request, check_request
from .dictionaries import DictionaryLookup, build_dictionary_from_config
from .errors import (
    ErrorCode,
    ErrorDetails,
    InvalidInputError,
    RequestTimeoutError,
    get_error_details,
)
from .generation import PermutationGenerator
from .models import (
    CacheInfo,
    Candidate,
    GenerationRequest,
    GenerationResponse,
    GenerationResult,
    PerformanceMetrics,
    ValidationResult,
)
from .scoring import compute_statistics
from .textutils import generation_cache_key
from .validation import BatchValidator

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024
DEGRADED_CEILINGS = {"time", "memory"}


class WordService:
    """
    Generate candidate words from a set of letters and validate them.

    A call first consults the generation cache. On a miss the permutation
    generator runs, its output goes through the batch validator, validity is
    merged back onto the candidates and the finished result is cached. Only
    invalid input fails the call; dictionary and cache trouble are reported
    in the response instead.
    """

    def __init__(
        self,
        config: WordGenConfig,
        validator: BatchValidator,
        cache: CacheStore,
        generator: PermutationGenerator | None = None,
        *,
        clock: Callable[[], float] = time.perf_counter,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._validator = validator
        self._cache = cache
        self._generator = generator or PermutationGenerator(config.limits)
        self._clock = clock
        self._wall_clock = wall_clock

    @property
    def validator(self) -> BatchValidator:
        return self._validator

    def generate_words(self, request: GenerationRequest) -> GenerationResponse:
        check_request(request)
        ttl = self._config.cache.ttl_seconds
        key = generation_cache_key(request)

        hit = self._decode_cached(key, self._read_cache(key))
        if hit is not None:
            result, stored_at, cached_error = hit
            age = max(0.0, self._wall_clock() - stored_at)
            logger.debug("Generation cache hit for %s (age %.1f s)", key, age)
            return GenerationResponse(
                success=True,
                data=_present(result, request),
                cache_info=CacheInfo(hit=True, source="cache", age=age, ttl=ttl),
                error=cached_error,
            )

        started = self._clock()
        logger.info(
            "Starting word generation: %s letters, language=%s, lengths %s-%s",
            len(request.characters),
            request.language.value,
            request.min_length,
            request.max_length,
        )
        generated = self._generator.generate(
            request.characters,
            request.min_length,
            request.max_length,
            request.complexity_range,
        )

        validation_started = self._clock()
        validations = self._validator.validate_batch(
            [candidate.word for candidate in generated.combinations],
            request.language,
            timeout=self._config.request_timeout_seconds,
        )
        validation_ms = (self._clock() - validation_started) * 1000

        combinations, error = _merge(generated.combinations, validations)
        total_ms = (self._clock() - started) * 1000
        result = GenerationResult(
            combinations=tuple(combinations),
            total_generated=generated.total_generated,
            truncated=generated.truncated,
            statistics=compute_statistics(combinations),
            performance_metrics=_metrics(
                total_ms,
                generated.elapsed_ms,
                validation_ms,
                generated.memory_bytes,
                generated.total_generated,
                len(validations),
            ),
        )

        if total_ms > self._config.limits.target_generation_time_ms:
            logger.warning(
                "Generation took %.0f ms, above the %s ms target",
                total_ms,
                self._config.limits.target_generation_time_ms,
            )
        if self._should_cache(result, error):
            self._write_cache(
                key,
                {
                    "storedAt": self._wall_clock(),
                    "data": result.to_dict(),
                    "error": error.to_dict() if error else None,
                },
            )
        logger.info(
            "Generated %s combinations (%s valid) in %.1f ms",
            len(combinations),
            result.statistics.valid_words,
            total_ms,
        )
        return GenerationResponse(
            success=True,
            data=_present(result, request),
            cache_info=CacheInfo(hit=False, source="generation", age=0.0, ttl=ttl),
            error=error,
        )

    def handle_payload(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Run a request body through the engine and return the response body."""
        try:
            request = build_request(payload, self._config)
            response = self.generate_words(request)
        except (InvalidInputError, RequestTimeoutError) as exc:
            logger.info("Rejected generation request: %s", exc)
            response = GenerationResponse(success=False, error=exc.details())
        return response.to_dict()

    def _should_cache(self, result: GenerationResult, error: ErrorDetails | None) -> bool:
        if self._config.cache.cache_degraded_results:
            return True
        return error is None and result.truncated.ceiling not in DEGRADED_CEILINGS

    def _read_cache(self, key: str) -> Dict[str, Any] | None:
        try:
            return self._cache.get(key)
        except Exception as exc:
            logger.warning("Generation cache read failed; treating as miss: %s", exc)
            return None

    def _decode_cached(
        self, key: str, cached: Any
    ) -> Tuple[GenerationResult, float, ErrorDetails | None] | None:
        if cached is None:
            return None
        try:
            result = GenerationResult.from_dict(cached["data"])
            stored_at = float(cached["storedAt"])
            cached_error = cached.get("error")
            error = ErrorDetails.from_dict(cached_error) if cached_error else None
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Unreadable generation cache entry %s; treating as miss: %r", key, exc)
            return None
        return result, stored_at, error

    def _write_cache(self, key: str, value: Dict[str, Any]) -> None:
        try:
            self._cache.set(key, value, self._config.cache.ttl_seconds)
        except Exception as exc:
            logger.warning("Generation cache write failed: %s", exc)


def build_service(
    config: WordGenConfig | None = None,
    dictionary: DictionaryLookup | None = None,
    cache: CacheStore | None = None,
) -> WordService:
    """Wire a WordService with one breaker for its dictionary provider."""
    cfg = config or WordGenConfig()
    provider = dictionary or build_dictionary_from_config(cfg)
    store = cache or InMemoryCache(cfg.cache.max_entries)
    breaker = CircuitBreaker(cfg.breaker, name=type(provider).__name__)
    validator = BatchValidator(
        provider,
        breaker,
        store,
        batch_size=cfg.batch_size,
        parallel_batches=cfg.parallel_batches,
        cache_ttl_seconds=cfg.cache.ttl_seconds,
    )
    return WordService(cfg, validator, store, PermutationGenerator(cfg.limits))


def _merge(
    combinations: Sequence[Candidate], validations: Sequence[ValidationResult]
) -> Tuple[List[Candidate], ErrorDetails | None]:
    merged = [
        replace(
            candidate,
            word=validation.word or candidate.word,
            is_valid=validation.is_valid,
            definition=validation.definition if validation.is_valid else None,
        )
        for candidate, validation in zip(combinations, validations)
    ]
    failures = [v for v in validations if v.source == "error"]
    if not failures:
        return merged, None
    message = (
        f"{len(failures)} of {len(validations)} words could not be validated: "
        f"{failures[0].error}"
    )
    logger.warning("Dictionary degraded during generation: %s", message)
    return merged, get_error_details(ErrorCode.DICTIONARY_UNAVAILABLE, message)


def _metrics(
    total_ms: float,
    generation_ms: float,
    validation_ms: float,
    memory_bytes: int,
    generated: int,
    validated: int,
) -> PerformanceMetrics:
    return PerformanceMetrics(
        cpu_time_ms=round(total_ms, 3),
        generation_time_ms=round(generation_ms, 3),
        validation_time_ms=round(validation_ms, 3),
        memory_usage_mb=round(memory_bytes / BYTES_PER_MB, 3),
        combinations_per_second=_per_second(generated, generation_ms),
        validations_per_second=_per_second(validated, validation_ms),
    )


def _per_second(count: int, elapsed_ms: float) -> float:
    if elapsed_ms <= 0:
        return 0.0
    return round(count / (elapsed_ms / 1000), 1)


def _present(result: GenerationResult, request: GenerationRequest) -> GenerationResult:
    if request.sort_by is None:
        return result
    ordered = apply_sorting(result.combinations, request.sort_by, request.sort_order)
    return replace(result, combinations=tuple(ordered))
