"""SDK client configuration."""

import os
from dataclasses import dataclass
from typing import Literal

DEFAULT_BASE_URL = "https://api.wouaka-creditscore.com"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_MAX_RETRIES = 3


@dataclass(frozen=True)
class WouakaConfig:
    """Configuration for a WouakaClient.

    Attributes:
        api_key: Partner API key (wk_live_... or wk_test_...).
        environment: "production" or "sandbox".
        base_url: API root URL, without trailing slash.
        timeout_ms: Per-attempt deadline in milliseconds.
        max_retries: Retries after the first attempt (total calls = max_retries + 1).
    """

    api_key: str
    environment: Literal["production", "sandbox"] = "production"
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_retries: int = DEFAULT_MAX_RETRIES

    @classmethod
    def from_env(cls) -> "WouakaConfig":
        """Load configuration from WOUAKA_* environment variables.

        Returns:
            WouakaConfig with values from environment.
        """
        environment = os.getenv("WOUAKA_ENVIRONMENT", "production").lower()
        return cls(
            api_key=os.getenv("WOUAKA_API_KEY", ""),
            environment="sandbox" if environment == "sandbox" else "production",
            base_url=os.getenv("WOUAKA_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout_ms=int(os.getenv("WOUAKA_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))),
            max_retries=int(
                os.getenv("WOUAKA_MAX_RETRIES", str(DEFAULT_MAX_RETRIES))
            ),
        )
