from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Sequence

from ..languages import Language
from ..models import LookupResult


class DictionaryLookup(ABC):
    """Abstract provider that decides whether a string is a word."""

    @abstractmethod
    def lookup(self, word: str, language: Language) -> LookupResult:
        """Return validity (and a definition when known) for a normalized word."""
        raise NotImplementedError

    def lookup_batch(
        self, words: Sequence[str], language: Language
    ) -> Dict[str, LookupResult]:
        """Look up several words; providers with a bulk endpoint should override."""
        return {word: self.lookup(word, language) for word in words}
