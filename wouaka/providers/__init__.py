"""AI provider routing layer.

Exports:
    Request/response types and provider identifiers
    Error classes for provider error handling
    ProviderConfig for configuration
    AIRouter and its factory functions
"""

from wouaka.providers.base import (
    AICompletionRequest,
    AICompletionResponse,
    AIMessage,
    ProviderDescriptor,
    ProviderId,
    TaskType,
    ToolCall,
    ToolDefinition,
)
from wouaka.providers.config import ProviderConfig
from wouaka.providers.errors import (
    AIRequestError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderResponseError,
    TransientError,
)
from wouaka.providers.factory import close_ai_router, get_ai_router, reset_ai_router
from wouaka.providers.router import AIRouter, ProviderStatus

__all__ = [
    # Types
    "AICompletionRequest",
    "AICompletionResponse",
    "AIMessage",
    "ProviderDescriptor",
    "ProviderId",
    "TaskType",
    "ToolCall",
    "ToolDefinition",
    # Config
    "ProviderConfig",
    # Errors
    "AIRequestError",
    "ProviderError",
    "ProviderNotConfiguredError",
    "ProviderResponseError",
    "TransientError",
    # Router
    "AIRouter",
    "ProviderStatus",
    "close_ai_router",
    "get_ai_router",
    "reset_ai_router",
]
