"""All dataclasses and type aliases for context-compressor."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Literal

TokenCounter = Callable[[str], int]

Role = Literal["system", "user", "assistant"]


class ConfigError(ValueError):
    """Raised when config contains unknown keys or values of the wrong kind."""


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Message:
    role: Role
    content: str


@dataclass(frozen=True)
class MessageTokens:
    role: Role
    tokens: int
    preview: str  # first 100 chars of content


@dataclass(frozen=True)
class TokenBreakdown:
    total: int
    per_message: list[MessageTokens] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompressionConfig:
    """Limits applied by the compressors.

    Overrides merge shallowly over the defaults: ``None`` is ignored and a
    numeric limit of zero or less falls back to the default.
    """
    max_tools: int = 15
    max_examples: int = 4
    max_recommendations: int = 5
    truncate_descriptions: bool = True
    max_description_length: int = 250
    keep_only_required_params: bool = False

    def merged(self, overrides: CompressionConfig | dict[str, Any] | None = None) -> CompressionConfig:
        """Return a new config with ``overrides`` applied over this one.

        A ``CompressionConfig`` override contributes only the fields it sets
        away from the class defaults. Numeric strings are coerced; values of
        the wrong kind raise ``ConfigError``.
        """
        if overrides is None:
            return self
        defaults = {f.name: f.default for f in fields(self)}
        if isinstance(overrides, CompressionConfig):
            overrides = {
                name: getattr(overrides, name)
                for name in defaults
                if getattr(overrides, name) != defaults[name]
            }

        values = {name: getattr(self, name) for name in defaults}
        for key, value in overrides.items():
            if key not in defaults:
                raise ConfigError(f"Unknown compression option: {key}")
            if value is None:
                continue
            if isinstance(defaults[key], bool):
                if not isinstance(value, bool):
                    raise ConfigError(f"{key} must be true or false (got {value!r})")
                values[key] = value
                continue
            if isinstance(value, bool):
                raise ConfigError(f"{key} must be an integer (got {value!r})")
            try:
                number = int(value)
            except (TypeError, ValueError):
                raise ConfigError(f"{key} must be an integer (got {value!r})") from None
            if number > 0:
                values[key] = number
        return CompressionConfig(**values)


# ---------------------------------------------------------------------------
# Registry listing (tools, prompts, resources)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str = ""
    input_schema: dict | None = None  # {"properties": {...}, "required": [...]}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ToolDescriptor:
        schema = raw.get("inputSchema", raw.get("input_schema"))
        return cls(
            name=raw.get("name", ""),
            description=raw.get("description") or "",
            input_schema=schema,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "description": self.description}
        if self.input_schema is not None:
            data["inputSchema"] = self.input_schema
        return data


@dataclass(frozen=True)
class PromptDescriptor:
    name: str
    description: str = ""
    arguments: list[dict] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> PromptDescriptor:
        return cls(
            name=raw.get("name", ""),
            description=raw.get("description") or "",
            arguments=list(raw.get("arguments") or []),
        )


@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    name: str = ""
    description: str = ""
    mime_type: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ResourceDescriptor:
        return cls(
            uri=raw.get("uri", ""),
            name=raw.get("name", ""),
            description=raw.get("description") or "",
            mime_type=raw.get("mimeType", raw.get("mime_type")),
        )


@dataclass(frozen=True)
class RegistryContext:
    """Listing returned by a remote tool-and-resource registry."""
    tools: list[ToolDescriptor] = field(default_factory=list)
    prompts: list[PromptDescriptor] = field(default_factory=list)
    resources: list[ResourceDescriptor] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> RegistryContext:
        return cls(
            tools=[ToolDescriptor.from_dict(t) for t in raw.get("tools", [])],
            prompts=[PromptDescriptor.from_dict(p) for p in raw.get("prompts", [])],
            resources=[ResourceDescriptor.from_dict(r) for r in raw.get("resources", [])],
        )


# ---------------------------------------------------------------------------
# Examples & recommendations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RankedExample:
    example: Any  # opaque few-shot payload
    similarity: float


@dataclass(frozen=True)
class ToolRecommendation:
    tool_name: str
    priority: float
    rationale: str = ""
    example_usage: str | None = None
    tool_chain: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ToolRecommendation:
        return cls(
            tool_name=raw.get("toolName", raw.get("tool_name", "")),
            priority=float(raw.get("priority", 0.0)),
            rationale=raw.get("rationale", ""),
            example_usage=raw.get("exampleUsage", raw.get("example_usage")),
            tool_chain=list(raw.get("toolChain", raw.get("tool_chain")) or []),
        )


@dataclass(frozen=True)
class ToolChain:
    sequence: list[str] = field(default_factory=list)
    rationale: str = ""
    success_rate: float | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ToolChain:
        return cls(
            sequence=list(raw.get("sequence") or []),
            rationale=raw.get("rationale", ""),
            success_rate=raw.get("successRate", raw.get("success_rate")),
        )


@dataclass(frozen=True)
class RecommendationSet:
    recommended_tools: list[ToolRecommendation] = field(default_factory=list)
    tool_chains: list[ToolChain] = field(default_factory=list)
    memory_matches: list[dict] = field(default_factory=list)  # passed through untouched

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> RecommendationSet:
        return cls(
            recommended_tools=[
                ToolRecommendation.from_dict(r)
                for r in raw.get("recommendedTools", raw.get("recommended_tools", []))
            ],
            tool_chains=[
                ToolChain.from_dict(c)
                for c in raw.get("toolChains", raw.get("tool_chains", []))
            ],
            memory_matches=list(raw.get("memoryMatches", raw.get("memory_matches", []))),
        )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class TruncationResult:
    """Outcome of the bounded truncate-and-re-estimate loop."""
    text: str
    tokens: int
    iterations: int
    converged: bool


@dataclass
class ToolCompression:
    tools: list[ToolDescriptor] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)


@dataclass
class ExampleCompression:
    examples: list[RankedExample] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)


@dataclass
class RecommendationCompression:
    recommendations: RecommendationSet | None = None
    actions: list[str] = field(default_factory=list)


@dataclass
class PromptCompression:
    prompt: str = ""
    actions: list[str] = field(default_factory=list)
    truncation: TruncationResult | None = None  # None when no truncation was needed


@dataclass
class RegistryCompression:
    context: RegistryContext = field(default_factory=RegistryContext)
    actions: list[str] = field(default_factory=list)


@dataclass
class PlanningContext:
    """Registry listing, examples and recommendations compressed together."""
    context: RegistryContext = field(default_factory=RegistryContext)
    examples: list[RankedExample] = field(default_factory=list)
    recommendations: RecommendationSet | None = None
    actions: list[str] = field(default_factory=list)


@dataclass
class CompressionResult:
    messages: list[Message] = field(default_factory=list)
    original_token_count: int = 0
    compressed_token_count: int = 0
    compression_ratio: float = 1.0
    actions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CompressorSettings:
    """Everything a config file can set."""
    version: str = "1.0"
    compression: CompressionConfig = field(default_factory=CompressionConfig)
    token_counter: str = "estimate"
    important_param_patterns: list[str] = field(default_factory=list)  # empty = defaults
    preset: str | None = None
