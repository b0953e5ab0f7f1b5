"""Preset registry: register, lookup, and list presets."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Preset:
    name: str
    description: str
    config_dict: dict
    providers: list[str] = field(default_factory=list)  # provider names that default to this preset


_PRESETS: dict[str, Preset] = {}

DEFAULT_PRESET = "standard"


def register_preset(preset: Preset) -> None:
    """Register a preset by name."""
    _PRESETS[preset.name] = preset


def get_preset(name: str) -> Preset | None:
    """Return a preset by name, or None if not found."""
    return _PRESETS.get(name)


def list_presets() -> list[Preset]:
    """Return all registered presets."""
    return list(_PRESETS.values())


def preset_for_provider(provider: str) -> Preset:
    """Return the preset registered for ``provider`` (case-insensitive), else the default."""
    provider = provider.lower()
    for preset in _PRESETS.values():
        if provider in preset.providers:
            return preset
    return _PRESETS[DEFAULT_PRESET]
