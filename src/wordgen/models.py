from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import ErrorDetails
from .languages import DEFAULT_LANGUAGE, Language


@dataclass(frozen=True, slots=True)
class ComplexityRange:
    """Inclusive filter on the 1-10 complexity scale."""

    minimum: int = 1
    maximum: int = 10

    def contains(self, complexity: int) -> bool:
        return self.minimum <= complexity <= self.maximum


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Input to a generation call."""

    characters: str
    language: Language = DEFAULT_LANGUAGE
    min_length: int = 2
    max_length: int = 15
    complexity_range: ComplexityRange | None = None
    sort_by: str | None = None
    sort_order: str = "asc"


@dataclass(frozen=True, slots=True)
class Definition:
    """Structured meaning returned by a dictionary provider."""

    text: str
    part_of_speech: str | None = None
    examples: Tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "partOfSpeech": self.part_of_speech,
            "examples": list(self.examples),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Definition":
        return cls(
            text=data["text"],
            part_of_speech=data.get("partOfSpeech"),
            examples=tuple(data.get("examples") or ()),
        )


@dataclass(frozen=True, slots=True)
class LookupResult:
    """Answer from a dictionary provider for one word."""

    is_valid: bool
    definition: Definition | None = None


@dataclass(frozen=True, slots=True)
class Candidate:
    """One generated arrangement of the input letters."""

    word: str
    length: int
    complexity: int
    is_valid: bool = False
    definition: Definition | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "word": self.word,
            "length": self.length,
            "complexity": self.complexity,
            "isValid": self.is_valid,
        }
        if self.definition is not None:
            payload["definition"] = self.definition.to_dict()
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Candidate":
        definition = data.get("definition")
        return cls(
            word=data["word"],
            length=data["length"],
            complexity=data["complexity"],
            is_valid=data["isValid"],
            definition=Definition.from_dict(definition) if definition else None,
        )


@dataclass(frozen=True, slots=True)
class Truncation:
    """Whether enumeration stopped early, and which ceiling stopped it."""

    status: bool = False
    reason: str | None = None
    ceiling: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "reason": self.reason, "ceiling": self.ceiling}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Truncation":
        return cls(
            status=data["status"], reason=data.get("reason"), ceiling=data.get("ceiling")
        )


@dataclass(frozen=True, slots=True)
class GenerationStatistics:
    average_length: float = 0.0
    average_complexity: float = 0.0
    valid_words: int = 0
    invalid_words: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "averageLength": self.average_length,
            "averageComplexity": self.average_complexity,
            "validWords": self.valid_words,
            "invalidWords": self.invalid_words,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationStatistics":
        return cls(
            average_length=data["averageLength"],
            average_complexity=data["averageComplexity"],
            valid_words=data["validWords"],
            invalid_words=data["invalidWords"],
        )


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    cpu_time_ms: float = 0.0
    generation_time_ms: float = 0.0
    validation_time_ms: float = 0.0
    memory_usage_mb: float = 0.0
    combinations_per_second: float = 0.0
    validations_per_second: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "cpuTimeMs": self.cpu_time_ms,
            "generationTimeMs": self.generation_time_ms,
            "validationTimeMs": self.validation_time_ms,
            "memoryUsageMB": self.memory_usage_mb,
            "combinationsPerSecond": self.combinations_per_second,
            "validationsPerSecond": self.validations_per_second,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerformanceMetrics":
        return cls(
            cpu_time_ms=data["cpuTimeMs"],
            generation_time_ms=data["generationTimeMs"],
            validation_time_ms=data["validationTimeMs"],
            memory_usage_mb=data["memoryUsageMB"],
            combinations_per_second=data["combinationsPerSecond"],
            validations_per_second=data["validationsPerSecond"],
        )


@dataclass(frozen=True, slots=True)
class PermutationResult:
    """Raw output of the permutation generator, before validation."""

    combinations: List[Candidate]
    total_generated: int
    truncated: Truncation
    elapsed_ms: float
    memory_bytes: int


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Aggregate output of a generation call."""

    combinations: Tuple[Candidate, ...]
    total_generated: int
    truncated: Truncation
    statistics: GenerationStatistics
    performance_metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    def to_dict(self) -> dict[str, Any]:
        return {
            "combinations": [candidate.to_dict() for candidate in self.combinations],
            "totalGenerated": self.total_generated,
            "truncated": self.truncated.to_dict(),
            "statistics": self.statistics.to_dict(),
            "performanceMetrics": self.performance_metrics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationResult":
        return cls(
            combinations=tuple(Candidate.from_dict(item) for item in data["combinations"]),
            total_generated=data["totalGenerated"],
            truncated=Truncation.from_dict(data["truncated"]),
            statistics=GenerationStatistics.from_dict(data["statistics"]),
            performance_metrics=PerformanceMetrics.from_dict(data["performanceMetrics"]),
        )


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of one dictionary check."""

    word: str
    is_valid: bool
    complexity: int
    source: str
    definition: Definition | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "isValid": self.is_valid,
            "definition": self.definition.to_dict() if self.definition else None,
            "complexity": self.complexity,
            "source": self.source,
            "error": self.error,
        }


@dataclass(frozen=True, slots=True)
class CacheInfo:
    hit: bool
    source: str
    age: float
    ttl: int

    def to_dict(self) -> dict[str, Any]:
        return {"hit": self.hit, "source": self.source, "age": self.age, "ttl": self.ttl}


@dataclass(frozen=True, slots=True)
class GenerationResponse:
    """Envelope returned to the calling layer."""

    success: bool
    data: Optional[GenerationResult] = None
    cache_info: Optional[CacheInfo] = None
    error: Optional[ErrorDetails] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "data": self.data.to_dict() if self.data else None,
            "cacheInfo": self.cache_info.to_dict() if self.cache_info else None,
            "error": self.error.to_dict() if self.error else None,
        }
