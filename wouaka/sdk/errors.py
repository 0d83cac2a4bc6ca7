"""Wouaka API error taxonomy.

Every failure surfaced by the SDK client is one of these classes. Callers
branch on ``kind`` (or ``code``), never on the message text, which is meant
for humans only.

Kinds and their HTTP mapping:
    400 -> ValidationError
    401 -> AuthenticationError
    402 -> QuotaExceededError
    403 -> AuthorizationError, or ConsentRequiredError (body code CONSENT_REQUIRED)
    404 -> NotFoundError
    429 -> RateLimitError
    503 -> ServerError, or DataSourceUnavailableError (body code DATA_SOURCE_UNAVAILABLE)
    5xx -> ServerError
    no response -> RequestTimeoutError / NetworkError
    anything else -> WouakaError with kind UNKNOWN
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

import httpx

__all__ = [
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
]


class ErrorKind(Enum):
    """Discriminant for the error taxonomy."""

    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    RATE_LIMIT = "rate_limit"
    CONSENT_REQUIRED = "consent_required"
    DATA_SOURCE_UNAVAILABLE = "data_source_unavailable"
    SERVER = "server"
    TIMEOUT = "timeout"
    NETWORK = "network"
    UNKNOWN = "unknown"


_RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.RATE_LIMIT,
        ErrorKind.DATA_SOURCE_UNAVAILABLE,
        ErrorKind.SERVER,
        ErrorKind.TIMEOUT,
        ErrorKind.NETWORK,
    }
)

_DEFAULT_MESSAGE = "An error occurred"


class WouakaError(Exception):
    """Base class for all SDK errors.

    Instantiated directly only for UNKNOWN errors (unmapped statuses, or a
    retry loop that ended without recording a failure).

    Attributes:
        kind: Error kind used for programmatic handling.
        message: Human-readable description.
        code: Stable machine-readable code (e.g., "RATE_LIMIT_EXCEEDED").
        status_code: HTTP status, if the server answered.
        details: Optional structured details from the error body.
        request_id: Server request ID (X-Request-Id) for correlation.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: int | None = None,
        details: Mapping[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = dict(details) if details is not None else None
        self.request_id = request_id

    @property
    def retryable(self) -> bool:
        """Whether the client may retry after this error."""
        return self.kind in _RETRYABLE_KINDS

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        return {
            "name": type(self).__name__,
            "kind": self.kind.value,
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": self.details,
            "request_id": self.request_id,
        }


class AuthenticationError(WouakaError):
    """Invalid, expired or missing API key (401)."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self,
        message: str = "Invalid or expired API key",
        details: Mapping[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, "AUTHENTICATION_ERROR", 401, details, request_id)


class AuthorizationError(WouakaError):
    """API key lacks the permission for this operation (403)."""

    kind = ErrorKind.AUTHORIZATION

    def __init__(
        self,
        message: str = "Insufficient permission for this operation",
        details: Mapping[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, "AUTHORIZATION_ERROR", 403, details, request_id)


class ValidationError(WouakaError):
    """Request payload rejected by the API (400).

    Attributes:
        field: Name of the offending field, when the API reports one.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: Mapping[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, "VALIDATION_ERROR", 400, details, request_id)
        self.field = field


class NotFoundError(WouakaError):
    """Resource not found (404)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str = "Resource not found",
        details: Mapping[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, "NOT_FOUND", 404, details, request_id)


class QuotaExceededError(WouakaError):
    """Plan quota exhausted (402)."""

    kind = ErrorKind.QUOTA_EXCEEDED

    def __init__(
        self,
        message: str = "Request quota exhausted, please upgrade your plan",
        details: Mapping[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, "QUOTA_EXCEEDED", 402, details, request_id)


class RateLimitError(WouakaError):
    """Too many requests (429).

    Attributes:
        retry_after_seconds: Server hint on when to retry, if provided.
        limit: Request limit of the current window.
        remaining: Requests remaining in the current window.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after_seconds: float | None = None,
        limit: int | None = None,
        remaining: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            "RATE_LIMIT_EXCEEDED",
            429,
            {"retry_after": retry_after_seconds, "limit": limit, "remaining": remaining},
            request_id,
        )
        self.retry_after_seconds = retry_after_seconds
        self.limit = limit
        self.remaining = remaining


class ConsentRequiredError(WouakaError):
    """Customer consent is missing for this operation (403 + CONSENT_REQUIRED)."""

    kind = ErrorKind.CONSENT_REQUIRED

    def __init__(
        self,
        message: str = "Customer consent is required for this operation",
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, "CONSENT_REQUIRED", 403, None, request_id)


class DataSourceUnavailableError(WouakaError):
    """An upstream data source is temporarily down (503 + DATA_SOURCE_UNAVAILABLE).

    Attributes:
        source: Name of the unavailable data source.
    """

    kind = ErrorKind.DATA_SOURCE_UNAVAILABLE

    def __init__(
        self,
        source: str,
        message: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Data source '{source}' is temporarily unavailable",
            "DATA_SOURCE_UNAVAILABLE",
            503,
            {"source": source},
            request_id,
        )
        self.source = source


class ServerError(WouakaError):
    """Server-side failure (5xx)."""

    kind = ErrorKind.SERVER

    def __init__(
        self,
        message: str = "Internal server error",
        request_id: str | None = None,
        details: Mapping[str, Any] | None = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message, "SERVER_ERROR", status_code, details, request_id)


class RequestTimeoutError(WouakaError):
    """The request did not complete before its deadline.

    Attributes:
        timeout_ms: The per-attempt deadline that expired.
    """

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        message: str = "The request timed out",
        timeout_ms: int | None = None,
    ) -> None:
        super().__init__(message, "TIMEOUT", 408, {"timeout_ms": timeout_ms})
        self.timeout_ms = timeout_ms


class NetworkError(WouakaError):
    """Connection-level failure; no response was received."""

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str = "Network connection error",
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(
            message,
            "NETWORK_ERROR",
            None,
            {"original_error": str(original_error) if original_error else None},
        )


def classify_http_error(
    status_code: int,
    body: Mapping[str, Any] | None = None,
    request_id: str | None = None,
    *,
    retry_after_seconds: float | None = None,
    limit: int | None = None,
    remaining: int | None = None,
) -> WouakaError:
    """Map an HTTP error response to a typed error.

    Args:
        status_code: HTTP status of the response.
        body: Parsed error body ``{code?, message?, details?}``; may be empty.
        request_id: Value of the X-Request-Id response header.
        retry_after_seconds: Retry-After hint (used for 429 only).
        limit: X-RateLimit-Limit value (used for 429 only).
        remaining: X-RateLimit-Remaining value (used for 429 only).

    Returns:
        A WouakaError subclass instance (does not raise).
    """
    body = body or {}
    message = body.get("message") or _DEFAULT_MESSAGE
    body_code = body.get("code")
    raw_details = body.get("details")
    details: dict[str, Any] | None = (
        dict(raw_details) if isinstance(raw_details, Mapping) else None
    )

    if status_code == 400:
        field = details.get("field") if details else None
        return ValidationError(message, field, details, request_id)
    if status_code == 401:
        return AuthenticationError(message, details, request_id)
    if status_code == 402:
        return QuotaExceededError(message, details, request_id)
    if status_code == 403:
        if body_code == "CONSENT_REQUIRED":
            return ConsentRequiredError(message, request_id)
        return AuthorizationError(message, details, request_id)
    if status_code == 404:
        return NotFoundError(message, details, request_id)
    if status_code == 429:
        return RateLimitError(message, retry_after_seconds, limit, remaining, request_id)
    if status_code == 503 and body_code == "DATA_SOURCE_UNAVAILABLE":
        source = (details or {}).get("source") or "unknown"
        return DataSourceUnavailableError(str(source), message, request_id)
    if status_code >= 500:
        return ServerError(message, request_id, details, status_code)

    return WouakaError(
        message, body_code or "UNKNOWN_ERROR", status_code, details, request_id
    )


def classify_transport_error(exc: BaseException, timeout_ms: int) -> WouakaError:
    """Map a failure that produced no HTTP response to a typed error.

    Deadline expiry and connection failures are told apart by exception type
    only.

    Args:
        exc: The exception raised while sending the request.
        timeout_ms: The per-attempt deadline in effect.

    Returns:
        RequestTimeoutError or NetworkError.
    """
    if isinstance(exc, TimeoutError | httpx.TimeoutException):
        return RequestTimeoutError(timeout_ms=timeout_ms)
    return NetworkError(original_error=exc)
