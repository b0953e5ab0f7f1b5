"""Tests for presets: registration, provider lookup, config validity."""

from __future__ import annotations

from context_compressor.config import load_config, validate_config
from context_compressor.presets import get_preset, list_presets, preset_for_provider
from context_compressor.presets.providers import STANDARD_CONFIG, STRICT_CONFIG


def test_builtin_presets_registered():
    names = [p.name for p in list_presets()]
    assert "standard" in names
    assert "strict" in names


def test_unknown_preset_returns_none():
    assert get_preset("nonexistent") is None


def test_groq_uses_strict_preset():
    assert preset_for_provider("groq").name == "strict"
    assert preset_for_provider("Groq").name == "strict"


def test_other_providers_use_standard():
    for provider in ("openai", "anthropic", "gemini", ""):
        assert preset_for_provider(provider).name == "standard"


def test_strict_is_tighter_than_standard():
    for key in ("max_tools", "max_examples", "max_recommendations", "max_description_length"):
        assert STRICT_CONFIG[key] < STANDARD_CONFIG[key], key


def test_presets_keep_important_optional_params():
    for preset in list_presets():
        assert preset.config_dict["keep_only_required_params"] is False
        assert preset.config_dict["truncate_descriptions"] is True


def test_presets_produce_valid_configs():
    for preset in list_presets():
        settings = load_config(config_dict={"preset": preset.name})
        assert validate_config(settings) == [], preset.name


def test_standard_matches_defaults():
    settings = load_config(config_dict={"preset": "standard"})
    assert settings.compression == load_config(config_dict={}).compression
