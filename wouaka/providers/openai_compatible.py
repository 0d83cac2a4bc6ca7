"""Adapter for OpenAI-compatible chat-completion gateways.

Serves the Lovable AI gateway and DeepSeek, which both expose
``POST {base_url}/chat/completions`` with the OpenAI request/response schema.
"""

from typing import Any

import httpx
import openai
import structlog
from openai import AsyncOpenAI

from wouaka.providers.base import (
    AICompletionRequest,
    AICompletionResponse,
    AIProviderAdapter,
    ProviderDescriptor,
    ToolCall,
)
from wouaka.providers.errors import (
    ProviderError,
    ProviderNotConfiguredError,
    ProviderResponseError,
    TransientError,
)

logger = structlog.get_logger()

# Keep provider error bodies short in messages and logs.
_MAX_ERROR_BODY_CHARS = 500


def _classify_openai_error(error: openai.OpenAIError, provider: str) -> ProviderError:
    """Map OpenAI SDK exceptions to the provider error taxonomy.

    Returns a ProviderError subclass instance (does not raise).
    """
    if isinstance(error, openai.APIConnectionError):
        # Includes APITimeoutError.
        return TransientError(f"Connection error: {error}", provider)

    if isinstance(error, openai.APIStatusError):
        body = error.response.text[:_MAX_ERROR_BODY_CHARS]
        return ProviderResponseError(
            f"API error ({error.status_code}): {body}",
            provider,
            status_code=error.status_code,
            body=body,
        )

    return ProviderError(str(error), provider)


class OpenAICompatibleAdapter(AIProviderAdapter):
    """Chat-completions adapter using the OpenAI SDK with a custom base URL."""

    def __init__(
        self,
        descriptor: ProviderDescriptor,
        api_key: str | None = None,
        timeout_seconds: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            descriptor: Provider description (base URL, default model).
            api_key: Bearer credential; without it every call fails with
                ProviderNotConfiguredError.
            timeout_seconds: Per-request timeout.
            http_client: Optional httpx client handed to the SDK.
        """
        super().__init__(descriptor, api_key, timeout_seconds)
        self.client: AsyncOpenAI | None = None
        if api_key:
            # Retries and fallback are handled by the router.
            self.client = AsyncOpenAI(
                api_key=api_key,
                base_url=descriptor.base_url,
                timeout=timeout_seconds,
                max_retries=0,
                http_client=http_client,
            )

    def build_payload(self, request: AICompletionRequest, model: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": message.role, "content": message.content}
                for message in request.messages
            ],
            "stream": False,
        }
        if request.tools:
            payload["tools"] = [tool.to_openai() for tool in request.tools]
        if request.tool_choice:
            payload["tool_choice"] = {
                "type": "function",
                "function": {"name": request.tool_choice},
            }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens
        return payload

    def normalize(self, raw: Any, request: AICompletionRequest) -> AICompletionResponse:
        """Read ``choices[0].message.{content, tool_calls}``."""
        choices = getattr(raw, "choices", None) or []
        if not choices:
            return AICompletionResponse(
                success=False,
                provider=self.provider_id,
                error="No response choice returned",
            )

        message = choices[0].message
        tool_calls: list[ToolCall] | None = None
        if message.tool_calls:
            tool_calls = [
                ToolCall(name=tc.function.name, arguments=tc.function.arguments)
                for tc in message.tool_calls
                if getattr(tc, "function", None) is not None
            ] or None

        return AICompletionResponse(
            success=True,
            provider=self.provider_id,
            content=message.content,
            tool_calls=tool_calls,
        )

    async def complete(
        self, request: AICompletionRequest, model: str
    ) -> AICompletionResponse:
        if self.client is None:
            raise ProviderNotConfiguredError(
                f"{self.descriptor.api_key_env} is not configured",
                self.provider_id.value,
            )

        payload = self.build_payload(request, model)
        try:
            response = await self.client.chat.completions.create(**payload)
        except openai.OpenAIError as e:
            logger.error(
                "ai_provider_call_failed",
                provider=self.provider_id.value,
                model=model,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise _classify_openai_error(e, self.provider_id.value) from e

        return self.normalize(response, request)

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.close()
