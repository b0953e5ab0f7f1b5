"""Provider presets: standard context windows vs. small, strict ones."""

from __future__ import annotations

from .base import Preset, register_preset

STANDARD_CONFIG: dict = {
    "max_tools": 15,
    "max_examples": 4,
    "max_recommendations": 5,
    "truncate_descriptions": True,
    "max_description_length": 250,
    "keep_only_required_params": False,
}

# Providers with small context windows (e.g. Groq) keep fewer items and
# shorter descriptions, but still keep important optional params.
STRICT_CONFIG: dict = {
    "max_tools": 12,
    "max_examples": 3,
    "max_recommendations": 4,
    "truncate_descriptions": True,
    "max_description_length": 200,
    "keep_only_required_params": False,
}

register_preset(Preset(
    name="standard",
    description="Default limits for providers with large context windows",
    config_dict=STANDARD_CONFIG,
))

register_preset(Preset(
    name="strict",
    description="Tighter limits for providers with small context windows",
    config_dict=STRICT_CONFIG,
    providers=["groq"],
))
