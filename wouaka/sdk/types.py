"""Value types shared by the SDK client."""

from collections.abc import Mapping
from dataclasses import dataclass

from wouaka.sdk.errors import WouakaError


def _header_int(headers: Mapping[str, str], name: str) -> int:
    try:
        return int(headers.get(name) or 0)
    except ValueError:
        return 0


@dataclass(frozen=True)
class RateLimitInfo:
    """Last-known server quota snapshot.

    Attributes:
        limit: Requests allowed in the current window.
        remaining: Requests left in the current window.
        reset: Epoch seconds when the window resets.
    """

    limit: int
    remaining: int
    reset: int

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitInfo":
        """Build a snapshot from X-RateLimit-* headers (absent or malformed -> 0)."""
        return cls(
            limit=_header_int(headers, "X-RateLimit-Limit"),
            remaining=_header_int(headers, "X-RateLimit-Remaining"),
            reset=_header_int(headers, "X-RateLimit-Reset"),
        )


@dataclass
class RetryContext:
    """Per-call retry bookkeeping; discarded when the call resolves."""

    max_attempts: int
    attempt: int = 0
    last_error: WouakaError | None = None
