"""Service configuration loaded from environment variables.

Uses pydantic-settings for validation and .env file support. Provider
credentials live in ProviderConfig (wouaka.providers.config); this module
covers the HTTP service itself.
"""

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    # 0.0.0.0 binds to all network interfaces (required for Docker containers)
    api_host: str = "0.0.0.0"  # nosec B104
    api_port: int = 8000

    # CORS
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    @model_validator(mode="after")
    def check_security(self) -> "Settings":
        """Reject configurations that are unsafe in any environment.

        Checks:
        - CORS must not use wildcard origin (incompatible with credentials)
        - Log level must be a standard level name
        """
        if "*" in self.allowed_origins:
            msg = (
                "ALLOWED_ORIGINS must not contain '*' (wildcard). "
                "The API allows credentials, which are incompatible with "
                "wildcard CORS origins."
            )
            raise ValueError(msg)

        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"LOG_LEVEL must be a standard level name. Got: {self.log_level}"
            raise ValueError(msg)

        return self


settings = Settings()
