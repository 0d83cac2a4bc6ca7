"""Shared test fixtures."""

from collections.abc import Callable, Iterator

import httpx
import pytest

from wouaka.providers import factory
from wouaka.providers.base import (
    AICompletionRequest,
    AICompletionResponse,
    AIProviderAdapter,
    ProviderDescriptor,
    ProviderId,
)
from wouaka.providers.config import ProviderConfig
from wouaka.providers.registry import build_descriptors
from wouaka.sdk.client import WouakaClient
from wouaka.sdk.config import WouakaConfig

TEST_API_KEY = "wk_test_0123456789abcdef"  # nosec B105  # gitleaks:allow
TEST_BASE_URL = "https://api.test.wouaka"


class Recorder:
    """Request handler that replays scripted outcomes and records requests.

    Each outcome is an httpx.Response to return or an exception to raise;
    the last outcome repeats.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def reset_router_singleton() -> Iterator[None]:
    """Drop the AI router singleton around every test."""
    factory.reset_ai_router()
    yield
    factory.reset_ai_router()


@pytest.fixture
def make_client() -> Callable[..., WouakaClient]:
    """Build a WouakaClient whose transport is the given request handler."""

    def _make(handler, **config_overrides) -> WouakaClient:
        config = WouakaConfig(
            api_key=TEST_API_KEY, base_url=TEST_BASE_URL, **config_overrides
        )
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return WouakaClient(config, http_client=http_client)

    return _make


class FakeAdapter(AIProviderAdapter):
    """Adapter returning scripted outcomes and recording calls.

    Each outcome is an AICompletionResponse to return or a ProviderError to
    raise; the last outcome repeats.
    """

    def __init__(self, descriptor: ProviderDescriptor, *outcomes, configured=True):
        super().__init__(descriptor, api_key="test-key" if configured else None)
        self.outcomes = list(outcomes) or [
            AICompletionResponse(success=True, provider=descriptor.id, content="ok")
        ]
        self.calls: list[tuple[AICompletionRequest, str]] = []
        self.closed = False

    def build_payload(self, request, model):
        return {"model": model}

    def normalize(self, raw, request):
        return raw

    async def complete(self, request, model):
        self.calls.append((request, model))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def aclose(self):
        self.closed = True


def ok(provider: ProviderId, content: str = "ok") -> AICompletionResponse:
    return AICompletionResponse(success=True, provider=provider, content=content)


def failed(provider: ProviderId, error: str = "boom") -> AICompletionResponse:
    return AICompletionResponse(success=False, provider=provider, error=error)


def fake_adapters(config: ProviderConfig, **outcomes) -> dict[ProviderId, FakeAdapter]:
    """Build a FakeAdapter per provider; keyword names are provider values."""
    descriptors = build_descriptors(config)
    return {
        provider_id: FakeAdapter(descriptor, *outcomes.get(provider_id.value, ()))
        for provider_id, descriptor in descriptors.items()
    }
