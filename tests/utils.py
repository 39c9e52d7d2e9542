from __future__ import annotations

import time
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from wordgen.cache import CacheStore
from wordgen.dictionaries import DictionaryLookup
from wordgen.errors import CacheUnavailableError, DictionaryUnavailableError
from wordgen.languages import Language
from wordgen.models import Definition, LookupResult


class FakeClock:
    """Manually advanced clock; each call optionally ticks by ``step``."""

    def __init__(self, start: float = 0.0, step: float = 0.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StaticDictionary(DictionaryLookup):
    """Recognizes a fixed word set and records every batch it is asked about."""

    def __init__(
        self, words: Iterable[str], definitions: Mapping[str, str] | None = None
    ) -> None:
        self.words = set(words)
        self.definitions = dict(definitions or {})
        self.batches: List[List[str]] = []

    def lookup(self, word: str, language: Language) -> LookupResult:
        if word not in self.words:
            return LookupResult(is_valid=False)
        text = self.definitions.get(word)
        return LookupResult(True, Definition(text=text) if text else None)

    def lookup_batch(
        self, words: Sequence[str], language: Language
    ) -> Dict[str, LookupResult]:
        self.batches.append(list(words))
        return super().lookup_batch(words, language)


class FailingDictionary(DictionaryLookup):
    def __init__(self) -> None:
        self.calls = 0

    def lookup(self, word: str, language: Language) -> LookupResult:
        self.calls += 1
        raise DictionaryUnavailableError("provider down")


class SlowDictionary(StaticDictionary):
    def __init__(self, words: Iterable[str], delay: float) -> None:
        super().__init__(words)
        self.delay = delay

    def lookup(self, word: str, language: Language) -> LookupResult:
        time.sleep(self.delay)
        return super().lookup(word, language)


class BrokenCache(CacheStore):
    def get(self, key: str) -> Any | None:
        raise CacheUnavailableError("cache offline")

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        raise CacheUnavailableError("cache offline")

    def delete(self, key: str) -> None:  # pragma: no cover - trivial
        raise CacheUnavailableError("cache offline")
