import pytest

from wordgen.errors import (
    ERROR_CATALOG,
    CircuitOpenError,
    DictionaryUnavailableError,
    ErrorCode,
    ErrorDetails,
    ErrorSeverity,
    InvalidInputError,
    RequestTimeoutError,
    get_error_details,
)
from wordgen.languages import (
    DEFAULT_LANGUAGE,
    LANGUAGE_NAMES,
    NATIVE_LANGUAGE_NAMES,
    Language,
    parse_language,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("en", Language.ENGLISH),
        (" FR ", Language.FRENCH),
        ("", DEFAULT_LANGUAGE),
        (None, DEFAULT_LANGUAGE),
    ],
)
def test_parse_language(value, expected):
    assert parse_language(value) is expected


def test_parse_language_unknown_code():
    with pytest.raises(InvalidInputError) as excinfo:
        parse_language("klingon")
    assert excinfo.value.code is ErrorCode.INVALID_LANGUAGE


def test_every_language_has_names():
    assert set(LANGUAGE_NAMES) == set(Language) == set(NATIVE_LANGUAGE_NAMES)
    assert NATIVE_LANGUAGE_NAMES[Language.GERMAN] == "Deutsch"


def test_error_catalog_covers_every_code():
    assert set(ERROR_CATALOG) == set(ErrorCode)
    details = get_error_details(ErrorCode.GENERATION_TIMEOUT, "took too long")
    assert details.message == "took too long"
    assert details.severity is ErrorSeverity.MEDIUM


def test_error_details_serialize_with_recovery_action():
    details = get_error_details(ErrorCode.DICTIONARY_UNAVAILABLE)
    data = details.to_dict()
    assert data["code"] == "E002"
    assert data["severity"] == "HIGH"
    assert ErrorDetails.from_dict(data) == details


def test_exception_codes():
    assert CircuitOpenError("open").details().code is ErrorCode.DICTIONARY_UNAVAILABLE
    assert isinstance(CircuitOpenError("open"), DictionaryUnavailableError)
    assert RequestTimeoutError("slow").details().code is ErrorCode.GENERATION_TIMEOUT
    assert isinstance(InvalidInputError("bad"), ValueError)
