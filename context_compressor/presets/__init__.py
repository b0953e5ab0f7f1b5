"""Presets: compression limits tuned per LLM provider."""

from .base import get_preset, list_presets, preset_for_provider, register_preset  # noqa: F401

# Import presets to trigger registration
from . import providers  # noqa: F401
