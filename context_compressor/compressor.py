"""ContextCompressor: wires the per-kind compressors to one config."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from .config import DEFAULT_CONFIG, load_config, load_patterns
from .core.assembler import ContextAssembler
from .core.examples import ExampleSetCompressor
from .core.messages import MessageCompressor
from .core.recommendations import RecommendationCompressor
from .core.system_prompt import SystemPromptCompressor
from .core.tools import ToolSetCompressor
from .token_counter import create_token_counter, estimate_tokens
from .types import (
    CompressionConfig,
    CompressionResult,
    CompressorSettings,
    ExampleCompression,
    Message,
    PlanningContext,
    PromptCompression,
    RankedExample,
    RecommendationCompression,
    RecommendationSet,
    RegistryCompression,
    RegistryContext,
    TokenCounter,
    ToolCompression,
    ToolDescriptor,
)

logger = logging.getLogger(__name__)

ConfigOverrides = CompressionConfig | dict[str, Any] | None

# Below this compressed/original ratio, compress_messages logs a warning
AGGRESSIVE_COMPRESSION_RATIO = 0.7


class ContextCompressor:
    """Prepare prompt context for an LLM call within a token ceiling.

    Usage:
        compressor = ContextCompressor(config={"max_tools": 12})

        # Trim the registry listing, examples and recommendations
        planning = compressor.compress_planning_context(context, examples, recs)

        # Fit the final conversation into the provider's limit
        result = compressor.compress_messages(messages, max_tokens=6000)

    Per-call ``config`` overrides merge over the instance config. Nothing
    here keeps state between calls.
    """

    def __init__(
        self,
        config: ConfigOverrides = None,
        token_counter: TokenCounter | None = None,
        important_patterns: Sequence[str] | None = None,
    ) -> None:
        self.config = DEFAULT_CONFIG.merged(config)
        self._token_counter = token_counter or estimate_tokens

        self._tools = ToolSetCompressor(self.config, important_patterns)
        self._examples = ExampleSetCompressor(self.config)
        self._recommendations = RecommendationCompressor(self.config)
        self._system_prompt = SystemPromptCompressor(self._token_counter)
        self._messages = MessageCompressor(self._token_counter)
        self._assembler = ContextAssembler(self.config, tool_compressor=self._tools)

    @classmethod
    def from_settings(cls, settings: CompressorSettings) -> ContextCompressor:
        return cls(
            config=settings.compression,
            token_counter=create_token_counter(settings.token_counter),
            important_patterns=load_patterns(settings),
        )

    @classmethod
    def from_config_file(cls, config_path: str | Path | None = None) -> ContextCompressor:
        """Build from a YAML/JSON config file (auto-discovered when omitted)."""
        return cls.from_settings(load_config(config_path))

    def _resolve(self, config: ConfigOverrides) -> CompressionConfig:
        return self.config.merged(config)

    def compress_mcp_tools(
        self,
        tools: Sequence[ToolDescriptor],
        config: ConfigOverrides = None,
    ) -> ToolCompression:
        result = self._tools.compress(tools, self._resolve(config))
        _log_actions("tools", result.actions)
        return result

    def compress_similar_examples(
        self,
        examples: Sequence[RankedExample],
        config: ConfigOverrides = None,
    ) -> ExampleCompression:
        result = self._examples.compress(examples, self._resolve(config))
        _log_actions("similar examples", result.actions)
        return result

    def compress_tool_recommendations(
        self,
        recommendations: RecommendationSet | None,
        config: ConfigOverrides = None,
    ) -> RecommendationCompression:
        result = self._recommendations.compress(recommendations, self._resolve(config))
        _log_actions("tool recommendations", result.actions)
        return result

    def compress_system_prompt(self, prompt: str, max_tokens: int) -> PromptCompression:
        result = self._system_prompt.compress(prompt, max_tokens)
        _log_actions("system prompt", result.actions)
        return result

    def compress_messages(
        self,
        messages: Sequence[Message],
        max_tokens: int,
        force_compression: bool = False,
        config: ConfigOverrides = None,
    ) -> CompressionResult:
        """Fit ``messages`` into ``max_tokens``.

        ``compressed_token_count`` is re-estimated from the returned messages;
        callers that need a hard guarantee must check it themselves. Count
        limits in ``config`` do not apply to messages.
        """
        result = self._messages.compress(messages, max_tokens, force_compression)
        if result.original_token_count != result.compressed_token_count:
            logger.debug(
                f"Compressed messages from {result.original_token_count} to "
                f"{result.compressed_token_count} tokens (ratio {result.compression_ratio:.2f})"
            )
        if result.compression_ratio < AGGRESSIVE_COMPRESSION_RATIO:
            logger.warning(
                f"Aggressive compression (ratio {result.compression_ratio:.2f}) "
                f"may drop context the model needs: {'; '.join(result.actions)}"
            )
        _log_actions("messages", [a for a in result.actions if a != "No compression needed"])
        return result

    def compress_mcp_context(
        self,
        context: RegistryContext,
        config: ConfigOverrides = None,
    ) -> RegistryCompression:
        result = self._assembler.assemble(context, self._resolve(config))
        _log_actions("registry context", result.actions)
        return result

    def compress_planning_context(
        self,
        context: RegistryContext,
        examples: Sequence[RankedExample] = (),
        recommendations: RecommendationSet | None = None,
        config: ConfigOverrides = None,
    ) -> PlanningContext:
        """Compress everything that goes into a planner's system prompt."""
        resolved = self._resolve(config)
        registry = self.compress_mcp_context(context, resolved)
        ranked = self.compress_similar_examples(examples, resolved)
        recs = self.compress_tool_recommendations(recommendations, resolved)
        return PlanningContext(
            context=registry.context,
            examples=ranked.examples,
            recommendations=recs.recommendations,
            actions=registry.actions + ranked.actions + recs.actions,
        )


def _log_actions(kind: str, actions: list[str]) -> None:
    if actions:
        logger.debug(f"Compressed {kind}: {'; '.join(actions)}")


# ---------------------------------------------------------------------------
# Module-level helpers backed by a default, stateless instance
# ---------------------------------------------------------------------------

_default = ContextCompressor()


def compress_mcp_tools(tools: Sequence[ToolDescriptor], config: ConfigOverrides = None) -> ToolCompression:
    return _default.compress_mcp_tools(tools, config)


def compress_similar_examples(
    examples: Sequence[RankedExample],
    config: ConfigOverrides = None,
) -> ExampleCompression:
    return _default.compress_similar_examples(examples, config)


def compress_tool_recommendations(
    recommendations: RecommendationSet | None,
    config: ConfigOverrides = None,
) -> RecommendationCompression:
    return _default.compress_tool_recommendations(recommendations, config)


def compress_system_prompt(prompt: str, max_tokens: int) -> PromptCompression:
    return _default.compress_system_prompt(prompt, max_tokens)


def compress_messages(
    messages: Sequence[Message],
    max_tokens: int,
    force_compression: bool = False,
    config: ConfigOverrides = None,
) -> CompressionResult:
    return _default.compress_messages(messages, max_tokens, force_compression, config)


def compress_mcp_context(context: RegistryContext, config: ConfigOverrides = None) -> RegistryCompression:
    return _default.compress_mcp_context(context, config)


def compress_planning_context(
    context: RegistryContext,
    examples: Sequence[RankedExample] = (),
    recommendations: RecommendationSet | None = None,
    config: ConfigOverrides = None,
) -> PlanningContext:
    return _default.compress_planning_context(context, examples, recommendations, config)
