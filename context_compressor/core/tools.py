"""ToolSetCompressor: bound tool count, description length and schema size."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Sequence

from ..patterns import DEFAULT_IMPORTANT_PARAM_PATTERNS
from ..types import CompressionConfig, ToolCompression, ToolDescriptor

FIRST_SENTENCE_MAX_FRACTION = 0.6
ELLIPSIS_RESERVE = 10
SCHEMA_COMPRESSION_MIN_PARAMS = 8  # compress only schemas with more params than this
MIN_KEPT_PARAMS = 6


def shorten_description(description: str, max_length: int) -> str:
    """Shorten a description to about ``max_length`` chars.

    A short first sentence is kept whole and followed by as much of the rest
    as fits; otherwise the text is hard-cut.
    """
    if len(description) <= max_length:
        return description

    first_end = description.find(".")
    if 0 < first_end < max_length * FIRST_SENTENCE_MAX_FRACTION:
        first_sentence = description[: first_end + 1]
        remaining = max(0, max_length - len(first_sentence) - ELLIPSIS_RESERVE)
        rest = description[len(first_sentence): len(first_sentence) + remaining]
        return f"{first_sentence} {rest}..."

    return description[:max_length] + "..."


class ToolSetCompressor:
    """Keep the first ``max_tools`` tools and trim each one.

    Required schema parameters always survive. Optional parameters whose
    names match ``important_patterns`` are kept next, then others in
    declaration order until MIN_KEPT_PARAMS are present.
    """

    def __init__(
        self,
        config: CompressionConfig | None = None,
        important_patterns: Sequence[str] | None = None,
    ) -> None:
        self.config = config or CompressionConfig()
        patterns = DEFAULT_IMPORTANT_PARAM_PATTERNS if important_patterns is None else important_patterns
        self._patterns = [re.compile(p, re.IGNORECASE) for p in patterns]

    def compress(
        self,
        tools: Sequence[ToolDescriptor],
        config: CompressionConfig | None = None,
    ) -> ToolCompression:
        config = config or self.config
        actions: list[str] = []

        kept = list(tools)
        if len(kept) > config.max_tools:
            kept = kept[: config.max_tools]
            actions.append(f"Limited tools from {len(tools)} to {config.max_tools}")

        compressed = [self._compress_tool(tool, config, actions) for tool in kept]
        return ToolCompression(tools=compressed, actions=actions)

    def is_important(self, param_name: str) -> bool:
        return any(p.search(param_name) for p in self._patterns)

    def _compress_tool(
        self,
        tool: ToolDescriptor,
        config: CompressionConfig,
        actions: list[str],
    ) -> ToolDescriptor:
        description = tool.description
        if config.truncate_descriptions and description:
            description = shorten_description(description, config.max_description_length)

        schema = tool.input_schema
        if schema and schema.get("properties") and config.keep_only_required_params:
            schema = self._compress_schema(tool.name, schema, actions)

        if description is tool.description and schema is tool.input_schema:
            return tool
        return replace(tool, description=description, input_schema=schema)

    def _compress_schema(self, tool_name: str, schema: dict, actions: list[str]) -> dict:
        properties: dict = schema["properties"]
        if len(properties) <= SCHEMA_COMPRESSION_MIN_PARAMS:
            return schema

        required = list(schema.get("required") or [])
        important = [
            name for name in properties
            if name not in required and self.is_important(name)
        ]

        kept: dict = {}
        for name in required:
            if name in properties:
                kept[name] = properties[name]
        for name in important:
            kept[name] = properties[name]

        if len(kept) < MIN_KEPT_PARAMS:
            for name in properties:
                if len(kept) >= MIN_KEPT_PARAMS:
                    break
                if name not in kept and name not in required:
                    kept[name] = properties[name]

        if len(kept) < len(properties):
            actions.append(
                f"Compressed schema for {tool_name}: kept {len(kept)} of {len(properties)} params "
                f"(required: {len(required)}, important optional: {len(important)})"
            )
        return {**schema, "properties": kept}
