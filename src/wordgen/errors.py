from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    INVALID_INPUT = "E001"
    DICTIONARY_UNAVAILABLE = "E002"
    GENERATION_TIMEOUT = "E003"
    MEMORY_LIMIT_EXCEEDED = "E005"
    INVALID_LANGUAGE = "E006"
    CACHE_UNAVAILABLE = "E008"


class ErrorSeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True, slots=True)
class ErrorDetails:
    """Caller-facing description of a failure or degradation."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity
    recovery_action: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "recoveryAction": self.recovery_action,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorDetails":
        return cls(
            code=ErrorCode(data["code"]),
            message=data["message"],
            severity=ErrorSeverity(data["severity"]),
            recovery_action=data["recoveryAction"],
        )


ERROR_CATALOG: Dict[ErrorCode, ErrorDetails] = {
    ErrorCode.INVALID_INPUT: ErrorDetails(
        ErrorCode.INVALID_INPUT,
        "Invalid input characters provided",
        ErrorSeverity.LOW,
        "Please provide valid alphabetic characters only",
    ),
    ErrorCode.DICTIONARY_UNAVAILABLE: ErrorDetails(
        ErrorCode.DICTIONARY_UNAVAILABLE,
        "Dictionary service is currently unavailable",
        ErrorSeverity.HIGH,
        "System will use cached dictionary. Please try again later",
    ),
    ErrorCode.GENERATION_TIMEOUT: ErrorDetails(
        ErrorCode.GENERATION_TIMEOUT,
        "Word generation process timed out",
        ErrorSeverity.MEDIUM,
        "Try reducing the number of input characters",
    ),
    ErrorCode.MEMORY_LIMIT_EXCEEDED: ErrorDetails(
        ErrorCode.MEMORY_LIMIT_EXCEEDED,
        "Memory limit exceeded during word generation",
        ErrorSeverity.HIGH,
        "Reduce input complexity or try again later",
    ),
    ErrorCode.INVALID_LANGUAGE: ErrorDetails(
        ErrorCode.INVALID_LANGUAGE,
        "Invalid language code. Supported languages: en, es, fr, de",
        ErrorSeverity.LOW,
        "Please provide a supported language code",
    ),
    ErrorCode.CACHE_UNAVAILABLE: ErrorDetails(
        ErrorCode.CACHE_UNAVAILABLE,
        "Cache store is currently unavailable",
        ErrorSeverity.MEDIUM,
        "Results will be computed without caching",
    ),
}


def get_error_details(code: ErrorCode, message: str | None = None) -> ErrorDetails:
    """Look up the catalog entry for code, optionally overriding its message."""
    details = ERROR_CATALOG[code]
    if message:
        return ErrorDetails(details.code, message, details.severity, details.recovery_action)
    return details


class WordGenError(RuntimeError):
    """Base class for errors raised by the word generation engine."""

    code: ErrorCode = ErrorCode.INVALID_INPUT

    def details(self) -> ErrorDetails:
        return get_error_details(self.code, str(self) or None)


class InvalidInputError(WordGenError, ValueError):
    """Raised when a request fails validation before any work is done."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_INPUT) -> None:
        super().__init__(message)
        self.code = code


class DictionaryUnavailableError(WordGenError):
    """Raised when the dictionary provider cannot answer a lookup."""

    code = ErrorCode.DICTIONARY_UNAVAILABLE


class CircuitOpenError(DictionaryUnavailableError):
    """Raised when the circuit breaker rejects a call without trying it."""


class CacheUnavailableError(WordGenError):
    """Raised by cache stores that cannot reach their backend."""

    code = ErrorCode.CACHE_UNAVAILABLE


class RequestTimeoutError(WordGenError):
    """Raised when a request exceeds its overall timeout."""

    code = ErrorCode.GENERATION_TIMEOUT
