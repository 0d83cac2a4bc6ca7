"""Tests for the AI completion router.

Tests behavior of routing and fallback:
- The configured (or requested) provider is called first
- Fallback walks the fixed order once, skipping the primary
- The first success short-circuits; the last failure is returned
- Provider exceptions become failed responses
"""

import pytest

from tests.conftest import FakeAdapter, failed, fake_adapters, ok
from wouaka.providers.base import AICompletionRequest, AIMessage, ProviderId, TaskType
from wouaka.providers.config import ProviderConfig
from wouaka.providers.errors import (
    AIRequestError,
    ProviderNotConfiguredError,
    TransientError,
)
from wouaka.providers.ollama import OllamaAdapter
from wouaka.providers.openai_compatible import OpenAICompatibleAdapter
from wouaka.providers.registry import DEFAULT_DESCRIPTORS
from wouaka.providers.router import AIRouter, create_adapter

LOVABLE = ProviderId.LOVABLE
DEEPSEEK = ProviderId.DEEPSEEK
OLLAMA = ProviderId.OLLAMA


@pytest.fixture
def completion_request():
    return AICompletionRequest(
        messages=[
            AIMessage(role="system", content="Tu es un analyste."),
            AIMessage(role="user", content="Analyse ce profil."),
        ]
    )


def _router(config=None, **outcomes) -> AIRouter:
    config = config or ProviderConfig()
    return AIRouter(config, adapters=fake_adapters(config, **outcomes))


class TestPrimaryCall:
    """Test calls without fallback."""

    @pytest.mark.asyncio
    async def test_uses_default_provider(self, completion_request):
        """Should call the configured default provider."""
        router = _router(ProviderConfig(ai_provider="deepseek"))

        result = await router.call_with_fallback(completion_request)

        assert result.success is True
        assert result.provider is DEEPSEEK
        assert len(router.adapters[DEEPSEEK].calls) == 1
        assert router.adapters[LOVABLE].calls == []

    @pytest.mark.asyncio
    async def test_explicit_provider_overrides_default(self, completion_request):
        """Should call the requested provider."""
        router = _router()

        result = await router.call_with_fallback(completion_request, provider=OLLAMA)

        assert result.provider is OLLAMA

    @pytest.mark.asyncio
    async def test_failure_without_fallback_is_returned(self, completion_request):
        """Should return the primary's failure and call nothing else."""
        router = _router(lovable=[failed(LOVABLE, "quota")])

        result = await router.call_with_fallback(completion_request)

        assert result.success is False
        assert result.error == "quota"
        assert router.adapters[DEEPSEEK].calls == []
        assert router.adapters[OLLAMA].calls == []

    @pytest.mark.asyncio
    async def test_provider_exception_becomes_failed_response(self, completion_request):
        """Should turn ProviderError into success=False with its message."""
        router = _router(
            lovable=[ProviderNotConfiguredError("LOVABLE_API_KEY is not configured", "lovable")]
        )

        result = await router.call_with_fallback(completion_request)

        assert result.success is False
        assert result.provider is LOVABLE
        assert result.error == "LOVABLE_API_KEY is not configured"

    @pytest.mark.asyncio
    async def test_records_latency(self, completion_request):
        """Should set a non-negative latency on the response."""
        router = _router()

        result = await router.call_with_fallback(completion_request)

        assert result.latency_ms >= 0

    @pytest.mark.asyncio
    async def test_empty_messages_raise(self):
        """Should reject requests without messages."""
        router = _router()

        with pytest.raises(AIRequestError):
            await router.call_with_fallback(AICompletionRequest(messages=[]))


class TestFallback:
    """Test fallback across providers."""

    @pytest.mark.asyncio
    async def test_first_success_short_circuits(self, completion_request):
        """Should stop at the first provider that succeeds."""
        router = _router(lovable=[failed(LOVABLE)], deepseek=[ok(DEEPSEEK, "from deepseek")])

        result = await router.call_with_fallback(completion_request, fallback=True)

        assert result.success is True
        assert result.provider is DEEPSEEK
        assert result.content == "from deepseek"
        assert router.adapters[OLLAMA].calls == []

    @pytest.mark.asyncio
    async def test_skips_primary_in_fallback_order(self, completion_request):
        """Should try lovable then ollama when deepseek is primary."""
        router = _router(
            ProviderConfig(ai_provider="deepseek"),
            deepseek=[failed(DEEPSEEK)],
            lovable=[failed(LOVABLE)],
        )

        result = await router.call_with_fallback(completion_request, fallback=True)

        assert result.provider is OLLAMA
        assert len(router.adapters[DEEPSEEK].calls) == 1
        assert len(router.adapters[LOVABLE].calls) == 1

    @pytest.mark.asyncio
    async def test_all_failed_returns_last_failure(self, completion_request):
        """Should return the last attempted provider's failure."""
        router = _router(
            lovable=[failed(LOVABLE, "l")],
            deepseek=[TransientError("Connection error: refused", "deepseek")],
            ollama=[failed(OLLAMA, "o")],
        )

        result = await router.call_with_fallback(completion_request, fallback=True)

        assert result.success is False
        assert result.provider is OLLAMA
        assert result.error == "o"

    @pytest.mark.asyncio
    async def test_each_provider_called_once(self, completion_request):
        """Should never call a provider twice in one logical request."""
        router = _router(
            lovable=[failed(LOVABLE)],
            deepseek=[failed(DEEPSEEK)],
            ollama=[failed(OLLAMA)],
        )

        await router.call_with_fallback(completion_request, fallback=True)

        for provider_id in (LOVABLE, DEEPSEEK, OLLAMA):
            assert len(router.adapters[provider_id].calls) == 1


class TestModelResolution:
    """Test model selection per provider."""

    @pytest.mark.asyncio
    async def test_task_selects_model(self, completion_request):
        """Should pass the task's model to the adapter."""
        router = _router()

        await router.call_with_fallback(completion_request, task=TaskType.DOCUMENT_ANALYSIS)

        _, model = router.adapters[LOVABLE].calls[0]
        assert model == "google/gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_explicit_model_applies_to_primary_only(self):
        """Should send request.model to the primary and task models to fallbacks."""
        request = AICompletionRequest(
            messages=[AIMessage(role="user", content="hi")], model="custom-model"
        )
        router = _router(lovable=[failed(LOVABLE)])

        await router.call_with_fallback(request, task="scoring", fallback=True)

        assert router.adapters[LOVABLE].calls[0][1] == "custom-model"
        assert router.adapters[DEEPSEEK].calls[0][1] == "deepseek-chat"

    def test_get_model_for_task(self):
        """Should resolve models for the default or a given provider."""
        router = _router()

        assert router.get_model_for_task("scoring") == "google/gemini-2.5-flash"
        assert router.get_model_for_task("scoring", OLLAMA) == "deepseek-r1:8b"
        assert router.get_model_for_task(None) == "google/gemini-3-flash-preview"


class TestStatus:
    """Test provider status reporting."""

    def test_reports_current_and_configured(self):
        """Should list every provider with its configured flag."""
        config = ProviderConfig(ai_provider="ollama")
        router = AIRouter(
            config,
            adapters={
                LOVABLE: FakeAdapter(DEFAULT_DESCRIPTORS[LOVABLE], configured=False),
                DEEPSEEK: FakeAdapter(DEFAULT_DESCRIPTORS[DEEPSEEK]),
                OLLAMA: FakeAdapter(DEFAULT_DESCRIPTORS[OLLAMA], configured=False),
            },
        )

        assert router.get_status().to_dict() == {
            "current": "ollama",
            "available": [
                {"provider": "lovable", "configured": False},
                {"provider": "deepseek", "configured": True},
                {"provider": "ollama", "configured": True},
            ],
        }

    def test_status_from_real_adapters(self):
        """Should reflect which API keys are configured."""
        router = AIRouter(ProviderConfig(deepseek_api_key="dk"))

        available = {a.provider: a.configured for a in router.get_status().available}

        assert available == {LOVABLE: False, DEEPSEEK: True, OLLAMA: True}


class TestAdapterConstruction:
    """Test default adapter creation."""

    def test_creates_adapter_per_wire_format(self):
        """Should use the Ollama adapter for Ollama, OpenAI-compatible otherwise."""
        config = ProviderConfig(lovable_api_key="lk", request_timeout_seconds=5)

        lovable = create_adapter(DEFAULT_DESCRIPTORS[LOVABLE], config)
        ollama = create_adapter(DEFAULT_DESCRIPTORS[OLLAMA], config)

        assert isinstance(lovable, OpenAICompatibleAdapter)
        assert lovable.api_key == "lk"
        assert isinstance(ollama, OllamaAdapter)
        assert ollama.timeout_seconds == 5

    def test_missing_adapters_are_filled_in(self):
        """Should build defaults for providers not supplied."""
        fake = FakeAdapter(DEFAULT_DESCRIPTORS[LOVABLE])
        router = AIRouter(ProviderConfig(), adapters={LOVABLE: fake})

        assert router.adapters[LOVABLE] is fake
        assert isinstance(router.adapters[DEEPSEEK], OpenAICompatibleAdapter)
        assert isinstance(router.adapters[OLLAMA], OllamaAdapter)

    @pytest.mark.asyncio
    async def test_aclose_closes_every_adapter(self):
        """Should close all adapters."""
        router = _router()

        await router.aclose()

        assert all(adapter.closed for adapter in router.adapters.values())
