"""AI provider configuration management.

Environment variables:
    AI_PROVIDER: "lovable" | "deepseek" | "ollama" (default "lovable").
    LOVABLE_API_KEY, DEEPSEEK_API_KEY: Provider credentials.
    LOVABLE_BASE_URL, DEEPSEEK_BASE_URL, OLLAMA_BASE_URL: Endpoint overrides.
    LOVABLE_MODEL, DEEPSEEK_MODEL, OLLAMA_MODEL: Default model overrides.
    AI_REQUEST_TIMEOUT_SECONDS: Per-request timeout (default 60).
"""

import os
from dataclasses import dataclass

from wouaka.providers.base import ProviderId


@dataclass
class ProviderConfig:
    """Centralized AI provider configuration.

    Attributes:
        ai_provider: Default provider ID (unknown values resolve to lovable).
        lovable_api_key: Lovable AI gateway key.
        deepseek_api_key: DeepSeek API key.
        lovable_base_url: Override for the Lovable gateway URL.
        deepseek_base_url: Override for the DeepSeek API URL.
        ollama_base_url: Override for the Ollama API URL.
        lovable_model: Override for Lovable's default model.
        deepseek_model: Override for DeepSeek's default model.
        ollama_model: Override for Ollama's default model.
        request_timeout_seconds: Per-request timeout for every provider.
    """

    ai_provider: str = "lovable"

    # API keys (loaded from environment)
    lovable_api_key: str | None = None
    deepseek_api_key: str | None = None

    # Endpoint overrides
    lovable_base_url: str | None = None
    deepseek_base_url: str | None = None
    ollama_base_url: str | None = None

    # Default model overrides
    lovable_model: str | None = None
    deepseek_model: str | None = None
    ollama_model: str | None = None

    request_timeout_seconds: float = 60.0

    @property
    def default_provider(self) -> ProviderId:
        return ProviderId.parse(self.ai_provider)

    def api_key_for(self, provider: ProviderId) -> str | None:
        """Return the configured credential for a provider (None for Ollama)."""
        return getattr(self, f"{provider.value}_api_key", None) or None

    def base_url_for(self, provider: ProviderId) -> str | None:
        return getattr(self, f"{provider.value}_base_url", None) or None

    def model_for(self, provider: ProviderId) -> str | None:
        return getattr(self, f"{provider.value}_model", None) or None

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        """Load configuration from environment variables.

        Returns:
            ProviderConfig instance with values from environment.
        """
        return cls(
            ai_provider=os.getenv("AI_PROVIDER", "lovable").lower(),
            lovable_api_key=os.getenv("LOVABLE_API_KEY"),
            deepseek_api_key=os.getenv("DEEPSEEK_API_KEY"),
            lovable_base_url=os.getenv("LOVABLE_BASE_URL"),
            deepseek_base_url=os.getenv("DEEPSEEK_BASE_URL"),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL"),
            lovable_model=os.getenv("LOVABLE_MODEL"),
            deepseek_model=os.getenv("DEEPSEEK_MODEL"),
            ollama_model=os.getenv("OLLAMA_MODEL"),
            request_timeout_seconds=float(
                os.getenv("AI_REQUEST_TIMEOUT_SECONDS", "60")
            ),
        )
