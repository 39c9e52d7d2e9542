from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping

from .config import WordGenConfig
from .errors import InvalidInputError
from .languages import parse_language
from .models import Candidate, ComplexityRange, GenerationRequest
from .scoring import MAX_COMPLEXITY, MIN_COMPLEXITY
from .textutils import is_alphabetic

MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 15
SORT_FIELDS = ("length", "complexity", "alphabetical")
SORT_ORDERS = ("asc", "desc")


def build_request(
    payload: Mapping[str, Any], config: WordGenConfig | None = None
) -> GenerationRequest:
    """Turn a deserialized request body into a checked GenerationRequest."""
    cfg = config or WordGenConfig()
    characters = payload.get("characters")
    if not isinstance(characters, str):
        raise InvalidInputError("'characters' is required and must be a string.")

    filters = payload.get("filters") or {}
    if not isinstance(filters, Mapping):
        raise InvalidInputError("'filters' must be an object.")

    complexity_range = None
    min_complexity = filters.get("minComplexity")
    max_complexity = filters.get("maxComplexity")
    if min_complexity is not None or max_complexity is not None:
        complexity_range = ComplexityRange(
            minimum=_as_int(min_complexity, "minComplexity", MIN_COMPLEXITY),
            maximum=_as_int(max_complexity, "maxComplexity", MAX_COMPLEXITY),
        )

    request = GenerationRequest(
        characters=characters,
        language=parse_language(payload.get("language") or cfg.default_language),
        min_length=_as_int(payload.get("minLength"), "minLength", cfg.min_length),
        max_length=_as_int(payload.get("maxLength"), "maxLength", cfg.max_length),
        complexity_range=complexity_range,
        sort_by=filters.get("sortBy"),
        sort_order=filters.get("sortOrder") or "asc",
    )
    check_request(request)
    return request


def check_request(request: GenerationRequest) -> None:
    """Raise InvalidInputError if the request breaks any input constraint."""
    characters = request.characters
    if not is_alphabetic(characters):
        raise InvalidInputError("Characters must be alphabetic (a-z) only.")
    if not MIN_WORD_LENGTH <= len(characters) <= MAX_WORD_LENGTH:
        raise InvalidInputError(
            f"Characters must contain between {MIN_WORD_LENGTH} and "
            f"{MAX_WORD_LENGTH} letters, got {len(characters)}."
        )
    for name, value in (("minLength", request.min_length), ("maxLength", request.max_length)):
        if not MIN_WORD_LENGTH <= value <= MAX_WORD_LENGTH:
            raise InvalidInputError(
                f"{name} must be between {MIN_WORD_LENGTH} and {MAX_WORD_LENGTH}, got {value}."
            )
    if request.min_length > request.max_length:
        raise InvalidInputError(
            f"minLength {request.min_length} exceeds maxLength {request.max_length}."
        )

    complexity = request.complexity_range
    if complexity is not None:
        if not (
            MIN_COMPLEXITY <= complexity.minimum <= MAX_COMPLEXITY
            and MIN_COMPLEXITY <= complexity.maximum <= MAX_COMPLEXITY
        ):
            raise InvalidInputError(
                f"Complexity bounds must lie within [{MIN_COMPLEXITY}, {MAX_COMPLEXITY}]."
            )
        if complexity.minimum > complexity.maximum:
            raise InvalidInputError("minComplexity exceeds maxComplexity.")

    if request.sort_by is not None and request.sort_by not in SORT_FIELDS:
        raise InvalidInputError(
            f"sortBy must be one of {', '.join(SORT_FIELDS)}, got '{request.sort_by}'."
        )
    if request.sort_order not in SORT_ORDERS:
        raise InvalidInputError(
            f"sortOrder must be one of {', '.join(SORT_ORDERS)}, got '{request.sort_order}'."
        )


def apply_sorting(
    combinations: Iterable[Candidate], sort_by: str | None, sort_order: str = "asc"
) -> List[Candidate]:
    """Return combinations ordered for presentation; generation order when sort_by is None."""
    items = list(combinations)
    if sort_by is None:
        return items
    reverse = sort_order == "desc"
    if sort_by == "length":
        return sorted(items, key=lambda c: c.length, reverse=reverse)
    if sort_by == "complexity":
        return sorted(items, key=lambda c: c.complexity, reverse=reverse)
    return sorted(items, key=lambda c: c.word, reverse=reverse)


def _as_int(value: Any, name: str, default: int) -> int:
    if value is None:
        return default
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or int(value) != value
    ):
        raise InvalidInputError(f"'{name}' must be an integer.")
    return int(value)
