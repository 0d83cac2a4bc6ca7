"""Tests for provider descriptors and task-to-model routing."""

import pytest

from wouaka.providers.base import AuthStyle, ProviderId, TaskType
from wouaka.providers.config import ProviderConfig
from wouaka.providers.registry import (
    DEFAULT_DESCRIPTORS,
    FALLBACK_ORDER,
    build_descriptors,
)


class TestDefaultDescriptors:
    """Test the built-in provider table."""

    def test_fallback_order(self):
        """Should try lovable, then deepseek, then ollama."""
        assert FALLBACK_ORDER == (ProviderId.LOVABLE, ProviderId.DEEPSEEK, ProviderId.OLLAMA)

    def test_every_provider_has_a_descriptor(self):
        """Should describe every registered provider."""
        assert set(DEFAULT_DESCRIPTORS) == set(ProviderId)

    def test_ollama_needs_no_key(self):
        """Should mark Ollama as unauthenticated."""
        descriptor = DEFAULT_DESCRIPTORS[ProviderId.OLLAMA]

        assert descriptor.auth_style is AuthStyle.NONE
        assert descriptor.requires_api_key is False

    @pytest.mark.parametrize(
        ("provider", "task", "model"),
        [
            (ProviderId.LOVABLE, TaskType.FRAUD_DETECTION, "google/gemini-3-flash-preview"),
            (ProviderId.LOVABLE, TaskType.DOCUMENT_ANALYSIS, "google/gemini-2.5-flash"),
            (ProviderId.LOVABLE, TaskType.SCORING, "google/gemini-2.5-flash"),
            (ProviderId.LOVABLE, TaskType.GENERAL, "google/gemini-3-flash-preview"),
            (ProviderId.DEEPSEEK, TaskType.DOCUMENT_ANALYSIS, "deepseek-chat"),
            (ProviderId.OLLAMA, TaskType.SCORING, "deepseek-r1:8b"),
        ],
    )
    def test_task_models(self, provider, task, model):
        """Should map each task to its model per provider."""
        assert DEFAULT_DESCRIPTORS[provider].model_for_task(task) == model

    def test_unknown_task_uses_default_model(self):
        """Should fall back to the default model for unmapped task names."""
        descriptor = DEFAULT_DESCRIPTORS[ProviderId.LOVABLE]

        assert descriptor.model_for_task("translation") == descriptor.default_model
        assert descriptor.model_for_task(None) == descriptor.default_model

    def test_task_accepts_plain_string(self):
        """Should accept the task's string value."""
        descriptor = DEFAULT_DESCRIPTORS[ProviderId.LOVABLE]

        assert descriptor.model_for_task("scoring") == "google/gemini-2.5-flash"


class TestBuildDescriptors:
    """Test config overrides."""

    def test_no_overrides_keeps_defaults(self):
        """Should return the built-in descriptors unchanged."""
        descriptors = build_descriptors(ProviderConfig())

        assert descriptors == DEFAULT_DESCRIPTORS
        assert list(descriptors) == list(FALLBACK_ORDER)

    def test_base_url_override_strips_trailing_slash(self):
        """Should apply the base URL override without a trailing slash."""
        descriptors = build_descriptors(ProviderConfig(ollama_base_url="http://gpu:11434/api/"))

        assert descriptors[ProviderId.OLLAMA].base_url == "http://gpu:11434/api"

    def test_model_override_applies_to_unmapped_tasks(self):
        """Should change the default model but keep task-specific models."""
        descriptors = build_descriptors(ProviderConfig(lovable_model="google/gemini-2.5-pro"))
        lovable = descriptors[ProviderId.LOVABLE]

        assert lovable.model_for_task(TaskType.FRAUD_DETECTION) == "google/gemini-2.5-pro"
        assert lovable.model_for_task(TaskType.SCORING) == "google/gemini-2.5-flash"
