"""AI router API request schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from wouaka.providers.base import (
    AICompletionRequest,
    AIMessage,
    ProviderId,
    ToolDefinition,
)

# =============================================================================
# Request Schemas
# =============================================================================


class CompletionMessage(BaseModel):
    """One chat message in a completion request."""

    role: Literal["system", "user", "assistant"]
    content: str = Field(..., max_length=100_000)


class CompletionTool(BaseModel):
    """Function the model may call.

    Attributes:
        name: Function name.
        description: What the function does.
        parameters: JSON Schema for the arguments object.
    """

    name: str = Field(..., min_length=1, max_length=64)
    description: str = ""
    parameters: dict[str, Any] = Field(default_factory=dict)


class CompletionRequest(BaseModel):
    """Request body for POST /ai/completions.

    Attributes:
        messages: Conversation, system message first.
        task: Logical task used to pick each provider's model.
        provider: Preferred provider; the configured default if omitted.
        fallback: Try the other providers once if the preferred one fails.
        model: Explicit model for the preferred provider.
        tools: Functions the model may call.
        tool_choice: Name of the function the model must call.
        temperature: Sampling temperature.
        max_tokens: Output token cap.
    """

    messages: list[CompletionMessage] = Field(..., min_length=1)
    task: str | None = Field(default=None, max_length=50)
    provider: Literal["lovable", "deepseek", "ollama"] | None = None
    fallback: bool = True
    model: str | None = Field(default=None, max_length=200)
    tools: list[CompletionTool] | None = None
    tool_choice: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)

    @property
    def provider_id(self) -> ProviderId | None:
        return ProviderId(self.provider) if self.provider else None

    def to_ai_request(self) -> AICompletionRequest:
        """Convert to the router's request type."""
        return AICompletionRequest(
            messages=[AIMessage(role=m.role, content=m.content) for m in self.messages],
            model=self.model,
            tools=(
                [
                    ToolDefinition(
                        name=t.name, description=t.description, parameters=t.parameters
                    )
                    for t in self.tools
                ]
                if self.tools
                else None
            ),
            tool_choice=self.tool_choice,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
