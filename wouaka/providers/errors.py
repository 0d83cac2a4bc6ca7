"""AI provider error taxonomy.

Adapters raise these; the router catches ProviderError and turns it into a
failed AICompletionResponse so the fallback chain can continue. Only
AIRequestError (bad caller input) ever reaches router callers as an exception.
"""

__all__ = [
    "AIRequestError",
    "ProviderError",
    "ProviderNotConfiguredError",
    "ProviderResponseError",
    "TransientError",
]


class AIRequestError(ValueError):
    """Caller supplied an unusable request (e.g., no messages)."""


class ProviderError(Exception):
    """Base class for all provider errors.

    Attributes:
        provider: Provider ID that raised the error, if known.
    """

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderNotConfiguredError(ProviderError):
    """Required credential (API key) is missing for the provider."""


class ProviderResponseError(ProviderError):
    """Provider answered with a non-2xx status or an unusable body.

    Attributes:
        status_code: HTTP status, None when the body was the problem.
        body: Raw response text (truncated by the adapter).
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, provider)
        self.status_code = status_code
        self.body = body


class TransientError(ProviderError):
    """Connection failure or timeout talking to the provider."""
