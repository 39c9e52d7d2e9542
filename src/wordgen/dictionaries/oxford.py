from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict
from urllib.parse import quote

import requests

from ..config import OxfordSettings
from ..errors import DictionaryUnavailableError
from ..languages import Language
from ..models import Definition, LookupResult
from .base import DictionaryLookup

logger = logging.getLogger(__name__)

SOURCE_LANGUAGES: Dict[Language, str] = {
    Language.ENGLISH: "en-gb",
    Language.SPANISH: "es",
    Language.FRENCH: "fr",
    Language.GERMAN: "de",
}

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class OxfordDictionary(DictionaryLookup):
    """Dictionary provider backed by the Oxford Dictionaries API v2."""

    def __init__(
        self,
        settings: OxfordSettings,
        app_id: str,
        app_key: str,
        *,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not app_id or not app_key:
            raise ValueError("Oxford app_id and app_key are required.")
        self._settings = settings
        self._session = session or requests.Session()
        self._session.headers.update(
            {"app_id": app_id, "app_key": app_key, "Accept": "application/json"}
        )
        self._sleep = sleep
        self._max_attempts = max(1, settings.max_attempts)

    @property
    def settings(self) -> OxfordSettings:
        return self._settings

    def lookup(self, word: str, language: Language) -> LookupResult:
        url = (
            f"{self._settings.base_url.rstrip('/')}/entries/"
            f"{SOURCE_LANGUAGES[language]}/{quote(word.lower())}"
        )
        attempt = 0
        last_error: Exception | None = None
        while attempt < self._max_attempts:
            attempt += 1
            try:
                response = self._session.get(url, timeout=self._settings.request_timeout)
            except requests.RequestException as exc:
                last_error = exc
            else:
                if response.status_code == 404:
                    return LookupResult(is_valid=False)
                if response.status_code in RETRYABLE_STATUS:
                    last_error = requests.HTTPError(
                        f"Oxford API returned {response.status_code}", response=response
                    )
                elif response.status_code >= 400:
                    raise DictionaryUnavailableError(
                        f"Oxford API rejected lookup with status {response.status_code}"
                    )
                else:
                    return LookupResult(
                        is_valid=True, definition=_parse_definition(response.json())
                    )
            logger.warning(
                "Oxford lookup failed for language=%s (attempt %s/%s): %s",
                language.value,
                attempt,
                self._max_attempts,
                last_error,
            )
            if attempt < self._max_attempts:
                self._sleep(min(2 ** (attempt - 1), 5))
        raise DictionaryUnavailableError(
            "Oxford API lookup failed after retries."
        ) from last_error


def _parse_definition(payload: Any) -> Definition | None:
    """Pull the first sense out of an entries response."""
    try:
        lexical_entry = payload["results"][0]["lexicalEntries"][0]
        sense = lexical_entry["entries"][0]["senses"][0]
        text = sense["definitions"][0]
    except (KeyError, IndexError, TypeError):
        return None
    category = lexical_entry.get("lexicalCategory") or {}
    part_of_speech = category.get("text") if isinstance(category, dict) else str(category)
    examples = tuple(
        example["text"]
        for example in sense.get("examples", [])
        if isinstance(example, dict) and example.get("text")
    )
    return Definition(text=text, part_of_speech=part_of_speech, examples=examples)
