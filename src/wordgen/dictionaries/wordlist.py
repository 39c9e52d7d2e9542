from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Mapping, Set

from ..languages import Language, parse_language
from ..models import Definition, LookupResult
from ..textutils import normalize_word
from .base import DictionaryLookup

logger = logging.getLogger(__name__)

# Small built-in list so the engine runs without any word files.
DEFAULT_ENGLISH_WORDS = {
    "act", "an", "as", "at", "bad", "bat", "be", "bed", "cab", "cat", "dab",
    "do", "dog", "ear", "eat", "go", "god", "he", "in", "is", "it", "listen",
    "me", "no", "of", "on", "or", "rat", "sat", "sea", "silent", "so", "star",
    "tab", "tac", "tar", "tea", "to", "up", "us", "we", "word", "zoo",
}


class WordListDictionary(DictionaryLookup):
    """Dictionary backed by in-memory word sets, one per language."""

    def __init__(
        self,
        words: Mapping[Language, Iterable[str]] | None = None,
        definitions: Mapping[Language, Mapping[str, str]] | None = None,
    ) -> None:
        if words is None:
            words = {Language.ENGLISH: DEFAULT_ENGLISH_WORDS}
        self._words: Dict[Language, Set[str]] = {}
        self._definitions: Dict[Language, Dict[str, str]] = {}
        for language, entries in words.items():
            normalized = (normalize_word(entry, language) for entry in entries if entry.strip())
            self._words[language] = {entry for entry in normalized if entry}
        for language, mapping in (definitions or {}).items():
            self._definitions[language] = {
                normalize_word(word, language): text for word, text in mapping.items()
            }

    @classmethod
    def from_files(cls, paths: Mapping[str, str | Path]) -> "WordListDictionary":
        """
        Load word lists keyed by language code.

        Each line holds a word, optionally followed by a tab and a definition.
        Blank lines and lines starting with '#' are skipped.
        """
        words: Dict[Language, Set[str]] = {}
        definitions: Dict[Language, Dict[str, str]] = {}
        for code, raw_path in paths.items():
            language = parse_language(code)
            path = Path(raw_path)
            if not path.exists():
                raise FileNotFoundError(f"Word list not found: {path}")
            entries, defs = _read_word_file(path)
            words.setdefault(language, set()).update(entries)
            definitions.setdefault(language, {}).update(defs)
            logger.info("Loaded %s %s words from %s", len(entries), language.value, path)
        return cls(words, definitions)

    def lookup(self, word: str, language: Language) -> LookupResult:
        key = normalize_word(word, language)
        if key not in self._words.get(language, set()):
            return LookupResult(is_valid=False)
        text = self._definitions.get(language, {}).get(key)
        return LookupResult(
            is_valid=True, definition=Definition(text=text) if text else None
        )


def _read_word_file(path: Path) -> tuple[Set[str], Dict[str, str]]:
    entries: Set[str] = set()
    definitions: Dict[str, str] = {}
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            word, _, definition = line.partition("\t")
            word = word.strip()
            if not word:
                continue
            entries.add(word)
            if definition.strip():
                definitions[word] = definition.strip()
    return entries, definitions
