"""Wouaka API client.

Resilient request execution for the partner API: per-attempt deadline,
typed error classification, retry of transient failures with exponential
backoff, server-paced waits on 429, and a rate-limit snapshot refreshed from
every response.

Usage:
    async with WouakaClient(WouakaConfig(api_key="wk_live_...")) as wouaka:
        result = await wouaka.scores.calculate(
            {"phone_number": "+2250700000000", "full_name": "Kouassi Jean"}
        )
"""

import asyncio
import math
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx
import structlog

from wouaka import __version__
from wouaka.sdk.backoff import calculate_backoff
from wouaka.sdk.config import WouakaConfig
from wouaka.sdk.errors import (
    AuthenticationError,
    RateLimitError,
    WouakaError,
    classify_http_error,
    classify_transport_error,
)
from wouaka.sdk.resources import (
    ApiKeysAPI,
    IdentityAPI,
    KycAPI,
    PrecheckAPI,
    ScoresAPI,
    UsageAPI,
    WebhooksAPI,
)
from wouaka.sdk.types import RateLimitInfo, RetryContext

logger = structlog.get_logger()

SDK_LANGUAGE = "python"


def _parse_body(response: httpx.Response) -> Any:
    """Decode a JSON body, treating empty or malformed payloads as ``{}``."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


def _parse_retry_after(
    response: httpx.Response, body: Mapping[str, Any]
) -> float | None:
    """Extract a Retry-After hint in seconds from headers or error details."""
    raw = response.headers.get("Retry-After")
    if raw is None:
        details = body.get("details")
        if isinstance(details, Mapping):
            raw = details.get("retry_after")
    if raw is None:
        return None
    try:
        seconds = float(raw)
    except (TypeError, ValueError):
        return None
    return seconds if math.isfinite(seconds) and seconds > 0 else None


class WouakaClient:
    """Async client for the Wouaka credit-scoring and KYC API.

    Attributes:
        scores: Credit scoring endpoints.
        kyc: KYC verification endpoints.
        identity: Identity lookup endpoints.
        precheck: Eligibility precheck endpoint.
        webhooks: Webhook management endpoints.
        api_keys: API key management endpoints.
        usage: Usage and quota endpoints.
    """

    def __init__(
        self,
        config: WouakaConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration. ``api_key`` must be non-empty.
            http_client: Optional pre-built httpx client (tests, shared pools).
                When omitted the client creates and owns one.

        Raises:
            AuthenticationError: If no API key is configured.
        """
        if not config.api_key:
            raise AuthenticationError("An API key is required")

        self.config = config
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient()
        self._rate_limit_info: RateLimitInfo | None = None

        self.scores = ScoresAPI(self)
        self.kyc = KycAPI(self)
        self.identity = IdentityAPI(self)
        self.precheck = PrecheckAPI(self)
        self.webhooks = WebhooksAPI(self)
        self.api_keys = ApiKeysAPI(self)
        self.usage = UsageAPI(self)

    async def __aenter__(self) -> "WouakaClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    @property
    def rate_limit_info(self) -> RateLimitInfo | None:
        """Snapshot from the most recent response, or None before any response."""
        return self._rate_limit_info

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "X-SDK-Version": __version__,
            "X-SDK-Language": SDK_LANGUAGE,
        }

    async def _send(
        self,
        method: str,
        url: str,
        body: Any,
        params: Mapping[str, Any] | None,
        timeout_ms: int,
    ) -> httpx.Response:
        """Send one attempt under a hard deadline."""
        timeout_s = timeout_ms / 1000
        async with asyncio.timeout(timeout_s):
            return await self._http.request(
                method,
                url,
                headers=self._headers(),
                json=body,
                params=params,
                timeout=timeout_s,
            )

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        params: Mapping[str, Any] | None = None,
        timeout_ms: int | None = None,
        max_retries: int | None = None,
    ) -> Any:
        """Execute an API call with retries.

        Cancelling the awaiting task aborts the in-flight attempt and any
        pending backoff sleep.

        Args:
            method: HTTP method (e.g., "GET", "POST").
            path: Path below the base URL (e.g., "/v1/scores").
            body: JSON-serializable request body.
            params: Query parameters; None values are dropped.
            timeout_ms: Per-attempt deadline override.
            max_retries: Retry budget override.

        Returns:
            Parsed JSON body of the successful response ({} when empty).

        Raises:
            WouakaError: The terminal error for this call. Non-retryable kinds
                are raised on first occurrence; retryable kinds once the retry
                budget is spent.
        """
        url = f"{self.config.base_url}{path}"
        timeout_ms = timeout_ms if timeout_ms is not None else self.config.timeout_ms
        max_retries = (
            max_retries if max_retries is not None else self.config.max_retries
        )
        query = (
            {key: value for key, value in params.items() if value is not None}
            if params
            else None
        )
        context = RetryContext(max_attempts=max_retries + 1)

        for attempt in range(max_retries + 1):
            context.attempt = attempt
            try:
                return await self._attempt(method, url, body, query, timeout_ms)
            except WouakaError as error:
                context.last_error = error

                if not error.retryable:
                    logger.warning(
                        "sdk_request_failed",
                        method=method,
                        path=path,
                        attempt=attempt + 1,
                        code=error.code,
                        status_code=error.status_code,
                        request_id=error.request_id,
                    )
                    raise

                if attempt == max_retries:
                    break

                if isinstance(error, RateLimitError) and error.retry_after_seconds:
                    # Server-paced wait replaces exponential backoff.
                    delay_ms = round(error.retry_after_seconds * 1000)
                else:
                    delay_ms = calculate_backoff(attempt)

                logger.warning(
                    "sdk_request_retry",
                    method=method,
                    path=path,
                    attempt=attempt + 1,
                    max_attempts=context.max_attempts,
                    code=error.code,
                    request_id=error.request_id,
                    delay_ms=delay_ms,
                )
                await asyncio.sleep(delay_ms / 1000)

        if context.last_error is not None:
            logger.error(
                "sdk_request_exhausted",
                method=method,
                path=path,
                attempts=context.max_attempts,
                code=context.last_error.code,
            )
            raise context.last_error
        raise WouakaError("Unknown error", "UNKNOWN_ERROR")

    async def _attempt(
        self,
        method: str,
        url: str,
        body: Any,
        params: Mapping[str, Any] | None,
        timeout_ms: int,
    ) -> Any:
        """Run a single attempt.

        Returns:
            Parsed body of a 2xx response.

        Raises:
            WouakaError: Classified transport or HTTP failure.
        """
        try:
            response = await self._send(method, url, body, params, timeout_ms)
        except (TimeoutError, httpx.RequestError) as exc:
            raise classify_transport_error(exc, timeout_ms) from exc

        rate_limit = RateLimitInfo.from_headers(response.headers)
        self._rate_limit_info = rate_limit
        data = _parse_body(response)

        if response.is_success:
            return data

        error_body = data if isinstance(data, Mapping) else {}
        raise classify_http_error(
            response.status_code,
            error_body,
            response.headers.get("X-Request-Id"),
            retry_after_seconds=_parse_retry_after(response, error_body),
            limit=rate_limit.limit,
            remaining=rate_limit.remaining,
        )
