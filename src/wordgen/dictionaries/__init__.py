from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from .base import DictionaryLookup
from .oxford import OxfordDictionary
from .wordlist import WordListDictionary

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..config import WordGenConfig

__all__ = [
    "DictionaryLookup",
    "OxfordDictionary",
    "WordListDictionary",
    "create_dictionary",
    "build_dictionary_from_config",
]


def create_dictionary(name: str, **kwargs: Any) -> DictionaryLookup:
    """Factory for building dictionary providers by name."""
    normalized = name.lower().strip()
    if normalized in {"wordlist", "memory"}:
        paths = kwargs.get("paths")
        if paths:
            return WordListDictionary.from_files(paths)
        return WordListDictionary(kwargs.get("words"), kwargs.get("definitions"))
    if normalized == "oxford":
        return OxfordDictionary(**kwargs)
    raise ValueError(f"Unknown dictionary '{name}'.")


def build_dictionary_from_config(config: "WordGenConfig") -> DictionaryLookup:
    """Convenience helper to build a dictionary provider from WordGenConfig."""
    normalized = config.dictionary_name.lower().strip()
    if normalized == "oxford":
        settings = config.oxford
        return create_dictionary(
            "oxford",
            settings=settings,
            app_id=_resolve_credential(settings.app_id, settings.app_id_env, "app_id"),
            app_key=_resolve_credential(settings.app_key, settings.app_key_env, "app_key"),
        )
    return create_dictionary(config.dictionary_name, paths=config.wordlist_paths)


def _resolve_credential(explicit: str | None, env_name: str, label: str) -> str:
    """Resolve an Oxford credential from config or the configured environment variable."""
    if explicit:
        return explicit
    if env_name and os.environ.get(env_name):
        return os.environ[env_name]
    raise RuntimeError(
        f"Oxford {label} not provided. Set it in the config or via ${env_name}."
    )
