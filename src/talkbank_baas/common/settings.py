"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TBBAAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    base_url: str = Field(
        default="https://baas.talkbank.io/api/v1/",
        description="Base URI of the partner API; request paths are appended to it",
    )
    partner_id: str | None = Field(
        default=None,
        description="Partner identifier embedded in the Authorization header",
    )
    token: str | None = Field(
        default=None,
        description="Shared secret used as the HMAC key",
    )

    # HTTP
    http_timeout: float = Field(
        default=30.0,
        description="Total HTTP request timeout in seconds",
    )
    tls_ca_cert: str | None = Field(
        default=None,
        description="Path to CA bundle for TLS verification",
    )
    tls_insecure: bool = Field(
        default=False,
        description="Disable TLS verification (not recommended)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached client settings."""
    return Settings()
