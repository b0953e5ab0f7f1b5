"""Configuration loading, validation, and defaults."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml

from .patterns import DEFAULT_IMPORTANT_PARAM_PATTERNS
from .presets import get_preset
from .types import CompressionConfig, CompressorSettings, ConfigError

CONFIG_FILENAMES = [
    "context-compressor.yaml",
    "context-compressor.yml",
    "context-compressor.json",
]

DEFAULT_CONFIG = CompressionConfig()

TOKEN_COUNTER_MODES = ("estimate", "tiktoken")

_SETTINGS_KEYS = {"version", "preset", "token_counter", "important_param_patterns", "compression"}


def _discover_config() -> Path | None:
    """Search CWD then parent dirs up to home for a config file."""
    cwd = Path.cwd()
    home = Path.home()
    search = cwd
    while True:
        for name in CONFIG_FILENAMES:
            candidate = search / name
            if candidate.is_file():
                return candidate
        if search == home or search == search.parent:
            break
        search = search.parent
    return None


def _build_config(raw: dict[str, Any]) -> CompressorSettings:
    """Build CompressorSettings from a raw dict.

    Compression limits may sit under a ``compression:`` section or at the
    top level. A ``preset:`` is applied first; explicit limits override it.
    """
    section = raw.get("compression")
    if section is None:
        section = {k: v for k, v in raw.items() if k not in _SETTINGS_KEYS}
    elif not isinstance(section, dict):
        raise ConfigError("'compression' must be a mapping")

    preset_name = raw.get("preset")
    base = DEFAULT_CONFIG
    if preset_name:
        preset = get_preset(preset_name)
        if preset is None:
            raise ConfigError(f"Unknown preset: {preset_name}")
        base = base.merged(preset.config_dict)

    token_counter = raw.get("token_counter", "estimate")
    if not isinstance(token_counter, str):
        raise ConfigError(f"token_counter must be a string (got {token_counter!r})")

    return CompressorSettings(
        version=str(raw.get("version", "1.0")),
        compression=base.merged(section),
        token_counter=token_counter,
        important_param_patterns=list(raw.get("important_param_patterns") or []),
        preset=preset_name,
    )


def load_patterns(settings: CompressorSettings) -> list[str]:
    """Return the configured importance patterns, or the defaults."""
    return list(settings.important_param_patterns or DEFAULT_IMPORTANT_PARAM_PATTERNS)


def validate_config(settings: CompressorSettings) -> list[str]:
    """Validate settings. Returns list of error strings (empty = valid)."""
    errors: list[str] = []
    config = settings.compression

    for name in ("max_tools", "max_examples", "max_recommendations"):
        value = getattr(config, name)
        if not isinstance(value, int) or value < 1:
            errors.append(f"{name} must be a positive integer (got {value!r})")

    if not isinstance(config.truncate_descriptions, bool):
        errors.append("truncate_descriptions must be true or false")
    if not isinstance(config.keep_only_required_params, bool):
        errors.append("keep_only_required_params must be true or false")

    # Room for at least a few characters plus the "..." suffix
    length = config.max_description_length
    if not isinstance(length, int) or length < 20:
        errors.append(
            f"max_description_length ({length!r}) must be an integer >= 20"
        )

    mode = settings.token_counter
    if not isinstance(mode, str) or (
        mode not in TOKEN_COUNTER_MODES and not mode.startswith("callable:")
    ):
        errors.append(
            f"Unknown token_counter '{mode}' (expected one of "
            f"{', '.join(TOKEN_COUNTER_MODES)} or callable:module:func)"
        )

    for pattern in settings.important_param_patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            errors.append(f"Invalid important_param_patterns entry '{pattern}': {e}")

    return errors


def load_config(
    config_path: str | Path | None = None,
    config_dict: dict | None = None,
) -> CompressorSettings:
    """Load settings from dict, explicit path, or auto-discover."""
    if config_dict is not None:
        return _build_config(config_dict)

    if config_path is not None:
        path = Path(config_path)
    else:
        path = _discover_config()

    if path is None:
        # Return defaults
        return _build_config({})

    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    text = path.read_text()
    if path.suffix == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text) or {}

    return _build_config(raw)
