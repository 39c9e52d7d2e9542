from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Type, TypeVar

import yaml

SectionT = TypeVar("SectionT")


@dataclass(slots=True)
class GenerationLimits:
    """Hard ceilings that bound permutation enumeration."""

    max_combinations: int = 100_000
    timeout_ms: int = 5_000
    memory_limit_mb: float = 512.0
    target_generation_time_ms: int = 1_000


@dataclass(slots=True)
class BreakerSettings:
    """Circuit breaker guarding the dictionary provider."""

    error_threshold_percentage: float = 50.0
    reset_timeout_seconds: float = 30.0
    rolling_window_seconds: float = 10.0
    volume_threshold: int = 0


@dataclass(slots=True)
class CacheSettings:
    """TTL and sizing for the generation and validation caches."""

    ttl_seconds: int = 3_600
    max_entries: int = 100_000
    cache_degraded_results: bool = False


@dataclass(slots=True)
class OxfordSettings:
    """Configuration block for the Oxford Dictionaries API provider."""

    base_url: str = "https://od-api.oxforddictionaries.com/api/v2"
    app_id: str | None = None
    app_id_env: str = "OXFORD_APP_ID"
    app_key: str | None = None
    app_key_env: str = "OXFORD_APP_KEY"
    request_timeout: float = 10.0
    max_attempts: int = 3


@dataclass(slots=True)
class WordGenConfig:
    """Configuration options for the word generation engine."""

    default_language: str = "en"
    min_length: int = 2
    max_length: int = 15
    batch_size: int = 100
    parallel_batches: int = 4
    request_timeout_seconds: float | None = None
    dictionary_name: str = "wordlist"
    wordlist_paths: Dict[str, str] = field(default_factory=dict)
    limits: GenerationLimits = field(default_factory=GenerationLimits)
    breaker: BreakerSettings = field(default_factory=BreakerSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    oxford: OxfordSettings = field(default_factory=OxfordSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


_SECTIONS: Dict[str, type] = {
    "limits": GenerationLimits,
    "breaker": BreakerSettings,
    "cache": CacheSettings,
    "oxford": OxfordSettings,
}


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(WordGenConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    for name, section_cls in _SECTIONS.items():
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, section_cls):
            kwargs[name] = value
        elif isinstance(value, Mapping):
            kwargs[name] = _build_section(section_cls, value)
        else:
            kwargs.pop(name, None)
    if "wordlist_paths" in kwargs:
        kwargs["wordlist_paths"] = {
            str(lang): str(path) for lang, path in (kwargs["wordlist_paths"] or {}).items()
        }
    return kwargs


def _build_section(section_cls: Type[SectionT], data: Mapping[str, Any]) -> SectionT:
    allowed = {field.name for field in fields(section_cls)}  # type: ignore[arg-type]
    filtered = {key: data[key] for key in data if key in allowed}
    return section_cls(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> WordGenConfig:
    """Build a WordGenConfig from a dictionary-like input."""
    if data is None:
        return WordGenConfig()
    return WordGenConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> WordGenConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> WordGenConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return WordGenConfig()
    return config_from_yaml(path)
