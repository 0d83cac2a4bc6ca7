"""AI completion router with provider fallback.

Routes one logical completion request to the configured provider and, when
asked, walks the fixed fallback order once. The router reports provider
failures as ``AICompletionResponse(success=False)`` and never raises for
them; callers decide what to do when every provider is down.
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from wouaka.providers.base import (
    AICompletionRequest,
    AICompletionResponse,
    AIProviderAdapter,
    ProviderDescriptor,
    ProviderId,
    TaskType,
)
from wouaka.providers.config import ProviderConfig
from wouaka.providers.errors import AIRequestError, ProviderError
from wouaka.providers.ollama import OllamaAdapter
from wouaka.providers.openai_compatible import OpenAICompatibleAdapter
from wouaka.providers.registry import FALLBACK_ORDER, build_descriptors

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProviderAvailability:
    provider: ProviderId
    configured: bool


@dataclass(frozen=True)
class ProviderStatus:
    """Monitoring snapshot.

    Attributes:
        current: Configured default provider.
        available: Every registered provider and whether it has credentials.
    """

    current: ProviderId
    available: list[ProviderAvailability]

    def to_dict(self) -> dict:
        return {
            "current": self.current.value,
            "available": [
                {"provider": a.provider.value, "configured": a.configured}
                for a in self.available
            ],
        }


def create_adapter(
    descriptor: ProviderDescriptor, config: ProviderConfig
) -> AIProviderAdapter:
    """Build the adapter matching a descriptor's wire format."""
    if descriptor.id is ProviderId.OLLAMA:
        return OllamaAdapter(
            descriptor, timeout_seconds=config.request_timeout_seconds
        )
    return OpenAICompatibleAdapter(
        descriptor,
        api_key=config.api_key_for(descriptor.id),
        timeout_seconds=config.request_timeout_seconds,
    )


class AIRouter:
    """Routes completion requests across registered AI providers."""

    def __init__(
        self,
        config: ProviderConfig | None = None,
        adapters: Mapping[ProviderId, AIProviderAdapter] | None = None,
    ) -> None:
        """Initialize the router.

        Args:
            config: Provider configuration. Loaded from environment if None.
            adapters: Pre-built adapters keyed by provider (tests). Missing
                providers get a default adapter built from config.
        """
        self.config = config or ProviderConfig.from_env()
        self.descriptors = build_descriptors(self.config)
        self.adapters: dict[ProviderId, AIProviderAdapter] = dict(adapters or {})
        for provider_id, descriptor in self.descriptors.items():
            if provider_id not in self.adapters:
                self.adapters[provider_id] = create_adapter(descriptor, self.config)

    @property
    def default_provider(self) -> ProviderId:
        return self.config.default_provider

    def get_model_for_task(
        self, task: TaskType | str | None, provider: ProviderId | None = None
    ) -> str:
        """Return the model a task maps to on a provider (default provider if None)."""
        descriptor = self.descriptors[provider or self.default_provider]
        return descriptor.model_for_task(task)

    def get_status(self) -> ProviderStatus:
        return ProviderStatus(
            current=self.default_provider,
            available=[
                ProviderAvailability(
                    provider=provider_id,
                    configured=self.adapters[provider_id].is_configured,
                )
                for provider_id in FALLBACK_ORDER
            ],
        )

    async def call_with_fallback(
        self,
        request: AICompletionRequest,
        *,
        task: TaskType | str | None = None,
        provider: ProviderId | None = None,
        fallback: bool = False,
    ) -> AICompletionResponse:
        """Run a completion, optionally falling back to other providers.

        Args:
            request: Completion request. ``request.model`` applies to the
                primary provider only.
            task: Logical task used for model routing.
            provider: Preferred provider; the configured default if None.
            fallback: Try every other provider once, in FALLBACK_ORDER, if
                the primary fails.

        Returns:
            The first successful response, or the last failure when every
            attempted provider failed.

        Raises:
            AIRequestError: If the request has no messages.
        """
        if not request.messages:
            raise AIRequestError("Completion request must contain at least one message")

        primary = provider or self.default_provider
        result = await self._call_provider(primary, request, task, request.model)
        if result.success or not fallback:
            return result

        for candidate in FALLBACK_ORDER:
            if candidate is primary:
                continue
            logger.info(
                "ai_fallback_attempt",
                provider=candidate.value,
                failed_provider=result.provider.value,
            )
            result = await self._call_provider(candidate, request, task)
            if result.success:
                logger.info("ai_fallback_succeeded", provider=candidate.value)
                return result

        logger.error(
            "ai_all_providers_failed",
            primary=primary.value,
            last_provider=result.provider.value,
            error=result.error,
        )
        return result

    async def _call_provider(
        self,
        provider_id: ProviderId,
        request: AICompletionRequest,
        task: TaskType | str | None,
        model: str | None = None,
    ) -> AICompletionResponse:
        """Call one provider; provider errors become a failed response."""
        adapter = self.adapters[provider_id]
        model = model or adapter.descriptor.model_for_task(task)

        logger.info(
            "ai_request_start",
            provider=provider_id.value,
            model=model,
            task=task.value if isinstance(task, TaskType) else task,
            message_count=len(request.messages),
        )

        start_time = time.monotonic()
        try:
            result = await adapter.complete(request, model)
        except ProviderError as e:
            result = AICompletionResponse(
                success=False, provider=provider_id, error=str(e)
            )
        result.latency_ms = (time.monotonic() - start_time) * 1000

        logger.info(
            "ai_request_complete",
            provider=provider_id.value,
            model=model,
            success=result.success,
            latency_ms=result.latency_ms,
            error=result.error,
        )
        return result

    async def aclose(self) -> None:
        """Close every adapter's network resources."""
        for adapter in self.adapters.values():
            await adapter.aclose()
