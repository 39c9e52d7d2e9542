"""
wordgen package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import WordGenConfig, config_from_dict, config_from_yaml, load_config
from .dictionaries import build_dictionary_from_config, create_dictionary
from .generation import PermutationGenerator, generate_combinations
from .scoring import complexity_score
from .service import WordService, build_service

__all__ = [
    "WordGenConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "create_dictionary",
    "build_dictionary_from_config",
    "PermutationGenerator",
    "generate_combinations",
    "complexity_score",
    "WordService",
    "build_service",
]

__version__ = "0.1.0"
