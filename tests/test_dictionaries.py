from pathlib import Path
from typing import Any, Dict, List

import pytest
import requests
from pytest import MonkeyPatch

from wordgen.config import OxfordSettings, WordGenConfig
from wordgen.dictionaries import (
    OxfordDictionary,
    WordListDictionary,
    build_dictionary_from_config,
    create_dictionary,
)
from wordgen.errors import DictionaryUnavailableError
from wordgen.languages import Language

ENTRY_PAYLOAD = {
    "results": [
        {
            "lexicalEntries": [
                {
                    "lexicalCategory": {"id": "noun", "text": "Noun"},
                    "entries": [
                        {
                            "senses": [
                                {
                                    "definitions": ["a small domesticated carnivorous mammal"],
                                    "examples": [{"text": "the cat sat on the mat"}],
                                }
                            ]
                        }
                    ],
                }
            ]
        }
    ]
}


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        return self._payload


class FakeSession:
    def __init__(self, responses: List[Any]) -> None:
        self.headers: Dict[str, str] = {}
        self.responses = list(responses)
        self.urls: List[str] = []

    def get(self, url: str, timeout: float) -> FakeResponse:
        self.urls.append(url)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _oxford(responses: List[Any], sleeps: List[float]) -> tuple[OxfordDictionary, FakeSession]:
    session = FakeSession(responses)
    client = OxfordDictionary(
        OxfordSettings(), "id", "key", session=session, sleep=sleeps.append  # type: ignore[arg-type]
    )
    return client, session


def test_default_wordlist_knows_common_words():
    dictionary = WordListDictionary()
    assert dictionary.lookup("cat", Language.ENGLISH).is_valid
    assert dictionary.lookup("CAT", Language.ENGLISH).is_valid
    assert not dictionary.lookup("cta", Language.ENGLISH).is_valid
    assert not dictionary.lookup("cat", Language.FRENCH).is_valid


def test_wordlist_from_files_reads_definitions(tmp_path: Path):
    words = tmp_path / "fr.txt"
    words.write_text(
        "# French sample\nchat\tFélin domestique\n\nCafé\nchien\n", encoding="utf-8"
    )
    dictionary = WordListDictionary.from_files({"fr": words})

    chat = dictionary.lookup("chat", Language.FRENCH)
    assert chat.is_valid
    assert chat.definition.text == "Félin domestique"
    assert dictionary.lookup("cafe", Language.FRENCH).is_valid
    assert dictionary.lookup("chien", Language.FRENCH).definition is None
    assert not dictionary.lookup("french", Language.FRENCH).is_valid


def test_wordlist_from_files_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        WordListDictionary.from_files({"en": tmp_path / "missing.txt"})


def test_lookup_batch_answers_each_word():
    dictionary = WordListDictionary({Language.ENGLISH: ["cat", "act"]})
    answers = dictionary.lookup_batch(["cat", "tca"], Language.ENGLISH)
    assert answers["cat"].is_valid
    assert not answers["tca"].is_valid


def test_create_dictionary_factory():
    assert isinstance(create_dictionary("wordlist"), WordListDictionary)
    memory = create_dictionary("Memory", words={Language.ENGLISH: ["a"]})
    assert isinstance(memory, WordListDictionary)
    with pytest.raises(ValueError):
        create_dictionary("thesaurus")


def test_build_dictionary_from_config_uses_wordlist_paths(tmp_path: Path):
    words = tmp_path / "en.txt"
    words.write_text("zebra\n", encoding="utf-8")
    config = WordGenConfig(wordlist_paths={"en": str(words)})
    dictionary = build_dictionary_from_config(config)
    assert dictionary.lookup("zebra", Language.ENGLISH).is_valid
    assert not dictionary.lookup("cat", Language.ENGLISH).is_valid


def test_build_dictionary_from_config_reads_oxford_env(monkeypatch: MonkeyPatch):
    monkeypatch.setenv("OXFORD_APP_ID", "env-id")
    monkeypatch.setenv("OXFORD_APP_KEY", "env-key")
    dictionary = build_dictionary_from_config(WordGenConfig(dictionary_name="oxford"))
    assert isinstance(dictionary, OxfordDictionary)


def test_build_dictionary_from_config_requires_oxford_credentials(monkeypatch: MonkeyPatch):
    monkeypatch.delenv("OXFORD_APP_ID", raising=False)
    monkeypatch.delenv("OXFORD_APP_KEY", raising=False)
    with pytest.raises(RuntimeError):
        build_dictionary_from_config(WordGenConfig(dictionary_name="oxford"))


def test_oxford_lookup_parses_definition():
    sleeps: List[float] = []
    client, session = _oxford([FakeResponse(200, ENTRY_PAYLOAD)], sleeps)
    result = client.lookup("cat", Language.ENGLISH)

    assert result.is_valid
    assert result.definition.text == "a small domesticated carnivorous mammal"
    assert result.definition.part_of_speech == "Noun"
    assert result.definition.examples == ("the cat sat on the mat",)
    assert session.urls == ["https://od-api.oxforddictionaries.com/api/v2/entries/en-gb/cat"]
    assert session.headers["app_id"] == "id"
    assert sleeps == []


def test_oxford_lookup_treats_404_as_unknown_word():
    client, _ = _oxford([FakeResponse(404)], [])
    assert not client.lookup("cta", Language.FRENCH).is_valid


def test_oxford_lookup_retries_transient_failures():
    sleeps: List[float] = []
    client, session = _oxford(
        [requests.ConnectionError("reset"), FakeResponse(503), FakeResponse(200, {})], sleeps
    )
    result = client.lookup("cat", Language.GERMAN)
    assert result.is_valid
    assert result.definition is None
    assert sleeps == [1, 2]
    assert all("/entries/de/" in url for url in session.urls)


def test_oxford_lookup_gives_up_after_max_attempts():
    sleeps: List[float] = []
    client, _ = _oxford([FakeResponse(500)] * 3, sleeps)
    with pytest.raises(DictionaryUnavailableError):
        client.lookup("cat", Language.ENGLISH)
    assert sleeps == [1, 2]


def test_oxford_lookup_does_not_retry_client_errors():
    sleeps: List[float] = []
    client, session = _oxford([FakeResponse(403)], sleeps)
    with pytest.raises(DictionaryUnavailableError):
        client.lookup("cat", Language.SPANISH)
    assert len(session.urls) == 1
    assert sleeps == []


def test_oxford_requires_credentials():
    with pytest.raises(ValueError):
        OxfordDictionary(OxfordSettings(), "", "key", session=FakeSession([]))  # type: ignore[arg-type]
