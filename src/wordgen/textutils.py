from __future__ import annotations

import hashlib
import json
import re
import unicodedata
from typing import Dict

from .errors import InvalidInputError
from .languages import Language
from .models import GenerationRequest

ALPHABETIC_RE = re.compile(r"[a-zA-Z]+")
NON_ALPHA_RE = re.compile(r"[^a-z]")

# Per-language folding applied before dictionary lookup.
CHAR_FOLDINGS: Dict[Language, Dict[str, str]] = {
    Language.ENGLISH: {},
    Language.SPANISH: {
        "á": "a", "é": "e", "í": "i", "ó": "o", "ú": "u", "ñ": "n", "ü": "u",
    },
    Language.FRENCH: {
        "à": "a", "â": "a", "é": "e", "è": "e", "ê": "e", "ë": "e", "î": "i",
        "ï": "i", "ô": "o", "û": "u", "ù": "u", "ü": "u", "ÿ": "y", "ç": "c",
    },
    Language.GERMAN: {"ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss"},
}


def is_alphabetic(text: str) -> bool:
    """Return True when text consists solely of ASCII letters."""
    return ALPHABETIC_RE.fullmatch(text) is not None


def normalize_word(word: str, language: Language = Language.ENGLISH) -> str:
    """
    Canonicalize a word into its dictionary lookup key.

    Steps:
    1) Compose, trim and lowercase.
    2) Fold language-specific letters (e.g. German "ß" -> "ss").
    3) Drop anything outside a-z.
    """
    if not word or not word.strip():
        raise InvalidInputError("Word cannot be empty.")
    normalized = unicodedata.normalize("NFC", word).strip().lower()
    for special, plain in CHAR_FOLDINGS[language].items():
        normalized = normalized.replace(special, plain)
    return NON_ALPHA_RE.sub("", normalized)


def validation_cache_key(word: str, language: Language) -> str:
    """Cache key for a single word lookup."""
    normalized = normalize_word(word, language)
    digest = hashlib.sha256(f"{language.value}:{normalized}".encode("utf-8")).hexdigest()
    return f"dict:{language.value}:{digest}"


def generation_cache_key(request: GenerationRequest) -> str:
    """Cache key for a full generation result."""
    complexity = request.complexity_range
    key_data = {
        "characters": request.characters.lower(),
        "language": request.language.value,
        "min_length": request.min_length,
        "max_length": request.max_length,
        "complexity": [complexity.minimum, complexity.maximum] if complexity else None,
    }
    digest = hashlib.sha256(json.dumps(key_data, sort_keys=True).encode("utf-8")).hexdigest()
    return f"wordgen:{request.language.value}:{digest}"
