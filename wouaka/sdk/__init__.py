"""Wouaka partner API SDK.

Exports:
    WouakaClient and its configuration
    Error classes for typed error handling
    Webhook verification helpers
"""

from wouaka.sdk.backoff import calculate_backoff
from wouaka.sdk.client import WouakaClient
from wouaka.sdk.config import WouakaConfig
from wouaka.sdk.errors import (
    AuthenticationError,
    AuthorizationError,
    ConsentRequiredError,
    DataSourceUnavailableError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
    WouakaError,
    classify_http_error,
    classify_transport_error,
)
from wouaka.sdk.types import RateLimitInfo
from wouaka.sdk.webhooks import (
    parse_signature_header,
    verify_webhook,
    verify_webhook_signature,
)

__all__ = [
    # Client
    "WouakaClient",
    "WouakaConfig",
    "RateLimitInfo",
    "calculate_backoff",
    # Errors
    "ErrorKind",
    "WouakaError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "QuotaExceededError",
    "RateLimitError",
    "ConsentRequiredError",
    "DataSourceUnavailableError",
    "ServerError",
    "RequestTimeoutError",
    "NetworkError",
    "classify_http_error",
    "classify_transport_error",
    # Webhooks
    "parse_signature_header",
    "verify_webhook",
    "verify_webhook_signature",
]
