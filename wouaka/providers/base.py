"""Abstract adapter and shared types for AI providers.

Every provider adapter maps the same AICompletionRequest onto its own wire
format and maps the raw reply back into one AICompletionResponse shape, so
the router never branches on provider-specific JSON.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class ProviderId(Enum):
    """Registered AI providers."""

    LOVABLE = "lovable"
    DEEPSEEK = "deepseek"
    OLLAMA = "ollama"

    @classmethod
    def parse(cls, value: str | None, default: "ProviderId | None" = None) -> "ProviderId":
        """Resolve a provider ID from a config string (case-insensitive).

        Args:
            value: Raw value, e.g. from AI_PROVIDER.
            default: Returned for missing or unknown values (LOVABLE if None).

        Returns:
            The matching ProviderId, or the default.
        """
        fallback = default or cls.LOVABLE
        if not value:
            return fallback
        try:
            return cls(value.strip().lower())
        except ValueError:
            return fallback


class TaskType(Enum):
    """Logical task names used for per-provider model routing."""

    FRAUD_DETECTION = "fraud-detection"
    DOCUMENT_ANALYSIS = "document-analysis"
    SCORING = "scoring"
    GENERAL = "general"


class AuthStyle(Enum):
    BEARER = "bearer"
    NONE = "none"


@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of one provider.

    Attributes:
        id: Provider ID.
        base_url: API root, e.g. "https://api.deepseek.com/v1".
        default_model: Model used when a task has no dedicated mapping.
        auth_style: How the API key is sent.
        api_key_env: Environment variable holding the API key ("" if none).
        task_models: Task name -> model ID overrides.
    """

    id: ProviderId
    base_url: str
    default_model: str
    auth_style: AuthStyle = AuthStyle.BEARER
    api_key_env: str = ""
    task_models: Mapping[str, str] = field(default_factory=dict)

    @property
    def requires_api_key(self) -> bool:
        return self.auth_style is AuthStyle.BEARER

    def model_for_task(self, task: "TaskType | str | None") -> str:
        """Return the model for a task, or the default model."""
        if task is None:
            return self.default_model
        name = task.value if isinstance(task, TaskType) else task
        return self.task_models.get(name, self.default_model)


@dataclass
class AIMessage:
    """Chat message.

    Attributes:
        role: "system", "user" or "assistant".
        content: Text content.
    """

    role: str
    content: str


@dataclass
class ToolDefinition:
    """Function the model may call (structured output).

    Attributes:
        name: Function name (e.g., "report_fraud_analysis").
        description: What the function does.
        parameters: JSON Schema for the arguments object.
    """

    name: str
    description: str
    parameters: dict[str, Any]

    def to_openai(self) -> dict[str, Any]:
        """Convert to the OpenAI ``tools[]`` entry format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass
class ToolCall:
    """Structured call returned by the model.

    Attributes:
        name: Function name.
        arguments: JSON-encoded arguments, as sent by the provider.
    """

    name: str
    arguments: str

    def parsed_arguments(self) -> dict[str, Any]:
        """Decode the arguments.

        Raises:
            ValueError: If the arguments are not a JSON object.
        """
        value = json.loads(self.arguments)
        if not isinstance(value, dict):
            raise ValueError("Tool call arguments are not a JSON object")
        return value


@dataclass
class AICompletionRequest:
    """Provider-agnostic completion request.

    Attributes:
        messages: Conversation, system message first.
        model: Explicit model ID for the primary provider (skips task routing).
        tools: Functions the model may call.
        tool_choice: Name of the function the model must call.
        temperature: Sampling temperature.
        max_tokens: Output token cap.
    """

    messages: list[AIMessage]
    model: str | None = None
    tools: list[ToolDefinition] | None = None
    tool_choice: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None


@dataclass
class AICompletionResponse:
    """Normalized provider response.

    Attributes:
        success: False when the provider failed; ``error`` says why.
        provider: Provider that produced this response.
        content: Text answer, if any.
        tool_calls: Structured calls, if any.
        error: Failure description.
        latency_ms: Wall-clock time spent on this provider.
    """

    success: bool
    provider: ProviderId
    content: str | None = None
    tool_calls: list[ToolCall] | None = None
    error: str | None = None
    latency_ms: float = 0.0

    @property
    def structured_call(self) -> ToolCall | None:
        """First tool call, or None."""
        return self.tool_calls[0] if self.tool_calls else None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["provider"] = self.provider.value
        return data


class AIProviderAdapter(ABC):
    """Base class for provider adapters.

    Subclasses implement one wire format. ``complete`` returns a normalized
    response on any 2xx reply and raises ProviderError for everything else
    (missing credentials, transport failures, non-2xx statuses).
    """

    def __init__(
        self,
        descriptor: ProviderDescriptor,
        api_key: str | None = None,
        timeout_seconds: float = 60.0,
    ) -> None:
        """Initialize the adapter.

        Args:
            descriptor: Provider description (URL, models, auth).
            api_key: Credential, if the provider needs one.
            timeout_seconds: Per-request timeout.
        """
        self.descriptor = descriptor
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    @property
    def provider_id(self) -> ProviderId:
        return self.descriptor.id

    @property
    def is_configured(self) -> bool:
        """True when the adapter has the credential it needs."""
        return bool(self.api_key) or not self.descriptor.requires_api_key

    @abstractmethod
    def build_payload(self, request: AICompletionRequest, model: str) -> dict[str, Any]:
        """Build the provider-specific request body."""
        ...

    @abstractmethod
    def normalize(self, raw: Any, request: AICompletionRequest) -> AICompletionResponse:
        """Map a raw provider reply to AICompletionResponse."""
        ...

    @abstractmethod
    async def complete(
        self, request: AICompletionRequest, model: str
    ) -> AICompletionResponse:
        """Send the request and return the normalized response.

        Raises:
            ProviderError: On any failure that produced no usable reply.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""
        return None
