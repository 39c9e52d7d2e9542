from __future__ import annotations

from enum import Enum
from typing import Dict

from .errors import ErrorCode, InvalidInputError


class Language(str, Enum):
    """Languages supported by generation and validation (ISO 639-1)."""

    ENGLISH = "en"
    SPANISH = "es"
    FRENCH = "fr"
    GERMAN = "de"


DEFAULT_LANGUAGE = Language.ENGLISH

LANGUAGE_NAMES: Dict[Language, str] = {
    Language.ENGLISH: "English",
    Language.SPANISH: "Spanish",
    Language.FRENCH: "French",
    Language.GERMAN: "German",
}

NATIVE_LANGUAGE_NAMES: Dict[Language, str] = {
    Language.ENGLISH: "English",
    Language.SPANISH: "Español",
    Language.FRENCH: "Français",
    Language.GERMAN: "Deutsch",
}


def parse_language(value: str | Language | None) -> Language:
    """Resolve a language code (case-insensitive), defaulting to English."""
    if isinstance(value, Language):
        return value
    if value is None or not str(value).strip():
        return DEFAULT_LANGUAGE
    normalized = str(value).strip().lower()
    try:
        return Language(normalized)
    except ValueError:
        supported = ", ".join(lang.value for lang in Language)
        raise InvalidInputError(
            f"Unsupported language '{value}'. Supported languages: {supported}",
            code=ErrorCode.INVALID_LANGUAGE,
        ) from None
