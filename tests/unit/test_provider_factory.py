"""Tests for the AI router singleton factory."""

from unittest.mock import patch

import pytest

from wouaka.providers.base import ProviderId
from wouaka.providers.config import ProviderConfig
from wouaka.providers.factory import close_ai_router, get_ai_router, reset_ai_router


class TestGetAIRouter:
    """Test singleton behavior."""

    def setup_method(self):
        """Reset singleton before each test."""
        reset_ai_router()

    def test_returns_same_instance(self):
        """Should return the same router on repeated calls."""
        first = get_ai_router(ProviderConfig())

        assert get_ai_router() is first

    def test_first_config_wins(self):
        """Should ignore config passed after the router exists."""
        router = get_ai_router(ProviderConfig(ai_provider="deepseek"))

        get_ai_router(ProviderConfig(ai_provider="ollama"))

        assert router.default_provider is ProviderId.DEEPSEEK

    def test_loads_config_from_environment(self):
        """Should read the environment when no config is given."""
        with patch.dict("os.environ", {"AI_PROVIDER": "ollama"}, clear=True):
            router = get_ai_router()

        assert router.default_provider is ProviderId.OLLAMA

    def test_reset_creates_new_instance(self):
        """Should build a fresh router after reset."""
        first = get_ai_router(ProviderConfig())

        reset_ai_router()

        assert get_ai_router(ProviderConfig()) is not first

    @pytest.mark.asyncio
    async def test_close_drops_instance(self):
        """Should close and forget the router."""
        first = get_ai_router(ProviderConfig())

        await close_ai_router()

        assert get_ai_router(ProviderConfig()) is not first

    @pytest.mark.asyncio
    async def test_close_without_router_is_noop(self):
        """Should do nothing when no router was created."""
        await close_ai_router()
