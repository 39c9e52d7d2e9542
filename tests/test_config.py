from pathlib import Path

import pytest

from wordgen.config import (
    GenerationLimits,
    WordGenConfig,
    config_from_dict,
    config_from_yaml,
    load_config,
)


def test_defaults_match_documented_limits():
    config = WordGenConfig()
    assert config.limits.max_combinations == 100_000
    assert config.limits.timeout_ms == 5_000
    assert config.limits.memory_limit_mb == 512.0
    assert config.breaker.error_threshold_percentage == 50.0
    assert config.breaker.reset_timeout_seconds == 30.0
    assert config.cache.ttl_seconds == 3_600
    assert config.batch_size == 100


def test_config_from_dict_builds_sections_and_ignores_unknown_keys():
    config = config_from_dict(
        {
            "default_language": "es",
            "batch_size": 25,
            "limits": {"max_combinations": 10, "bogus": 1},
            "cache": {"cache_degraded_results": True},
            "wordlist_paths": {"en": Path("/tmp/en.txt")},
            "unknown": "value",
        }
    )
    assert config.default_language == "es"
    assert config.batch_size == 25
    assert config.limits == GenerationLimits(max_combinations=10)
    assert config.cache.cache_degraded_results is True
    assert config.cache.ttl_seconds == 3_600
    assert config.wordlist_paths == {"en": "/tmp/en.txt"}


def test_config_from_dict_none_returns_defaults():
    assert config_from_dict(None) == WordGenConfig()


def test_config_from_yaml(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "max_length: 8\nbreaker:\n  volume_threshold: 5\noxford:\n  max_attempts: 2\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.max_length == 8
    assert config.breaker.volume_threshold == 5
    assert config.oxford.max_attempts == 2


def test_config_from_yaml_rejects_non_mapping(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        config_from_yaml(path)


def test_load_config_without_path():
    assert load_config() == WordGenConfig()


def test_to_dict_is_yaml_friendly():
    data = WordGenConfig().to_dict()
    assert data["limits"]["max_combinations"] == 100_000
    assert data["oxford"]["app_key_env"] == "OXFORD_APP_KEY"
