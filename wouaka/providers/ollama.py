"""Adapter for a self-hosted Ollama server.

Ollama's ``/generate`` endpoint takes a single prompt and has no native tool
calling. Chat messages are flattened into one prompt and, when tools are
requested, the model is asked to answer with JSON matching the first tool's
schema. The JSON is then recovered from the free-text answer.
"""

import json
import re
from typing import Any

import httpx
import structlog

from wouaka.providers.base import (
    AICompletionRequest,
    AICompletionResponse,
    AIProviderAdapter,
    ProviderDescriptor,
    ToolCall,
)
from wouaka.providers.errors import ProviderResponseError, TransientError

logger = structlog.get_logger()

DEFAULT_TEMPERATURE = 0.7
DEFAULT_NUM_PREDICT = 2048

JSON_INSTRUCTION = (
    "IMPORTANT: Retourne ta réponse au format JSON conforme à ce schéma:"
)

_OBJECT_START = re.compile(r"\{")
_decoder = json.JSONDecoder()

_MAX_ERROR_BODY_CHARS = 500


def extract_json_object(text: str) -> str | None:
    """Return the first top-level JSON object embedded in text.

    Args:
        text: Free-text model output.

    Returns:
        The JSON object's source text, or None if no object parses.
    """
    for match in _OBJECT_START.finditer(text):
        try:
            value, end = _decoder.raw_decode(text, match.start())
        except ValueError:
            continue
        if isinstance(value, dict):
            return text[match.start() : end]
    return None


def build_prompt(request: AICompletionRequest) -> str:
    """Flatten chat messages into one prompt.

    The first system message leads, followed by a blank line and the user
    messages joined by newlines. Assistant turns are not included.
    """
    system_prompt = next(
        (m.content for m in request.messages if m.role == "system"), ""
    )
    user_text = "\n".join(m.content for m in request.messages if m.role == "user")
    prompt = f"{system_prompt}\n\n{user_text}" if system_prompt else user_text

    if request.tools:
        schema = json.dumps(request.tools[0].parameters, indent=2, ensure_ascii=False)
        prompt = f"{prompt}\n\n{JSON_INSTRUCTION}\n{schema}"
    return prompt


class OllamaAdapter(AIProviderAdapter):
    """Single-prompt completion adapter (``POST {base_url}/generate``)."""

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
            api_key: Unused; local Ollama needs no credential.
            timeout_seconds: Per-request timeout.
            http_client: Optional pre-built httpx client.
        """
        super().__init__(descriptor, api_key, timeout_seconds)
        self._owns_http_client = http_client is None
        self.http = http_client or httpx.AsyncClient()

    def build_payload(self, request: AICompletionRequest, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "prompt": build_prompt(request),
            "stream": False,
            "options": {
                "temperature": (
                    request.temperature
                    if request.temperature is not None
                    else DEFAULT_TEMPERATURE
                ),
                "num_predict": request.max_tokens or DEFAULT_NUM_PREDICT,
            },
        }

    def normalize(self, raw: Any, request: AICompletionRequest) -> AICompletionResponse:
        """Read ``response`` and recover a structured call when tools were requested.

        ``total_duration`` is ignored; the router records wall-clock latency.
        """
        content = raw.get("response") if isinstance(raw, dict) else None
        if not isinstance(content, str):
            content = ""

        tool_calls: list[ToolCall] | None = None
        if request.tools:
            extracted = extract_json_object(content)
            if extracted is not None:
                tool_calls = [ToolCall(name=request.tools[0].name, arguments=extracted)]

        return AICompletionResponse(
            success=True,
            provider=self.provider_id,
            content=content,
            tool_calls=tool_calls,
        )

    async def complete(
        self, request: AICompletionRequest, model: str
    ) -> AICompletionResponse:
        url = f"{self.descriptor.base_url}/generate"
        payload = self.build_payload(request, model)

        try:
            response = await self.http.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_seconds,
            )
        except httpx.RequestError as e:
            logger.error(
                "ai_provider_call_failed",
                provider=self.provider_id.value,
                model=model,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransientError(
                f"Connection error: {e}", self.provider_id.value
            ) from e

        if not response.is_success:
            body = response.text[:_MAX_ERROR_BODY_CHARS]
            raise ProviderResponseError(
                f"API error ({response.status_code}): {body}",
                self.provider_id.value,
                status_code=response.status_code,
                body=body,
            )

        try:
            raw = response.json()
        except ValueError as e:
            raise ProviderResponseError(
                "Invalid JSON in provider response", self.provider_id.value
            ) from e

        return self.normalize(raw, request)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http.aclose()
