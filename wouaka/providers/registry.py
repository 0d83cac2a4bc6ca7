"""Provider registry: descriptors, task routing and fallback order."""

import dataclasses
from types import MappingProxyType

from wouaka.providers.base import AuthStyle, ProviderDescriptor, ProviderId
from wouaka.providers.config import ProviderConfig

# Fallback candidates are tried in this order, skipping the primary.
FALLBACK_ORDER: tuple[ProviderId, ...] = (
    ProviderId.LOVABLE,
    ProviderId.DEEPSEEK,
    ProviderId.OLLAMA,
)

# Only tasks that differ from the provider's default model are listed, so a
# default-model override applies to every other task.
DEFAULT_DESCRIPTORS: dict[ProviderId, ProviderDescriptor] = {
    ProviderId.LOVABLE: ProviderDescriptor(
        id=ProviderId.LOVABLE,
        base_url="https://ai.gateway.lovable.dev/v1",
        default_model="google/gemini-3-flash-preview",
        auth_style=AuthStyle.BEARER,
        api_key_env="LOVABLE_API_KEY",
        task_models=MappingProxyType(
            {
                "document-analysis": "google/gemini-2.5-flash",
                "scoring": "google/gemini-2.5-flash",
            }
        ),
    ),
    ProviderId.DEEPSEEK: ProviderDescriptor(
        id=ProviderId.DEEPSEEK,
        base_url="https://api.deepseek.com/v1",
        default_model="deepseek-chat",
        auth_style=AuthStyle.BEARER,
        api_key_env="DEEPSEEK_API_KEY",
    ),
    ProviderId.OLLAMA: ProviderDescriptor(
        id=ProviderId.OLLAMA,
        base_url="http://localhost:11434/api",
        default_model="deepseek-r1:8b",
        auth_style=AuthStyle.NONE,
    ),
}


def build_descriptors(config: ProviderConfig) -> dict[ProviderId, ProviderDescriptor]:
    """Apply base-URL and default-model overrides from config.

    Args:
        config: Provider configuration.

    Returns:
        Descriptor per provider ID, in FALLBACK_ORDER.
    """
    descriptors: dict[ProviderId, ProviderDescriptor] = {}
    for provider_id in FALLBACK_ORDER:
        descriptor = DEFAULT_DESCRIPTORS[provider_id]
        base_url = config.base_url_for(provider_id)
        model = config.model_for(provider_id)
        descriptors[provider_id] = dataclasses.replace(
            descriptor,
            base_url=(base_url or descriptor.base_url).rstrip("/"),
            default_model=model or descriptor.default_model,
        )
    return descriptors
