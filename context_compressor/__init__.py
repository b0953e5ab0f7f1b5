"""context-compressor: fit LLM prompt context into a provider's token ceiling."""

from .compressor import (
    ContextCompressor,
    compress_mcp_context,
    compress_mcp_tools,
    compress_messages,
    compress_planning_context,
    compress_similar_examples,
    compress_system_prompt,
    compress_tool_recommendations,
)
from .config import DEFAULT_CONFIG, load_config, load_patterns, validate_config
from .token_counter import (
    count_tokens_in_messages,
    create_token_counter,
    estimate_tokens,
    get_token_breakdown,
)
from .types import (
    CompressionConfig,
    CompressionResult,
    CompressorSettings,
    Message,
    RankedExample,
    RecommendationSet,
    RegistryContext,
    ToolChain,
    ToolDescriptor,
    ToolRecommendation,
)

__version__ = "0.1.0"

__all__ = [
    "ContextCompressor",
    "DEFAULT_CONFIG",
    "load_config",
    "load_patterns",
    "validate_config",
    "estimate_tokens",
    "count_tokens_in_messages",
    "get_token_breakdown",
    "create_token_counter",
    "compress_mcp_context",
    "compress_mcp_tools",
    "compress_messages",
    "compress_planning_context",
    "compress_similar_examples",
    "compress_system_prompt",
    "compress_tool_recommendations",
    "CompressionConfig",
    "CompressionResult",
    "CompressorSettings",
    "Message",
    "RankedExample",
    "RecommendationSet",
    "RegistryContext",
    "ToolChain",
    "ToolDescriptor",
    "ToolRecommendation",
]
