"""Application configuration using pydantic-settings.

Upstream identity services are optional: when no base URL is configured the
proxy endpoints answer with canned mock responses.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Moldova identity API
    # ======================
    moldova_base_url: str = Field(default="", description="Identity API base URL (empty = mock)")
    moldova_api_prefix: str = Field(default="/moldova/v2", description="Identity API path prefix")
    moldova_api_key: str = Field(default="", description="Identity API key (Bearer or x-api-key header)")

    # ======================
    # LV Auth
    # ======================
    lv_auth_base_url: str = Field(default="", description="LV Auth base URL (empty = mock)")
    lv_auth_api_key: str = Field(default="", description="LV Auth bearer token")
    lv_auth_register_path: str = Field(default="api/register", description="LV Auth register path")
    lv_auth_find_path: str = Field(default="api/find", description="LV Auth find path")
    lv_auth_delete_path: str = Field(default="api/delete", description="LV Auth delete path")
    mock_lv_auth: bool = Field(default=False, description="Force LV Auth mock responses")

    upstream_timeout: float = Field(default=15.0, description="Upstream request timeout in seconds")

    # ======================
    # Pricing
    # ======================
    pricing_jitter: bool = Field(
        default=True, description="Randomize fee models and FX margins once per session"
    )
    pricing_seed: Optional[int] = Field(
        default=None, description="Seed for pricing randomization (None = random)"
    )
    session_cookie_name: str = Field(default="remit_session", description="Session cookie name")
    max_sessions: int = Field(
        default=10_000, ge=1, description="Sessions kept in memory before the oldest is evicted"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def moldova_mock(self) -> bool:
        """Identity proxy answers with canned responses."""
        return not self.moldova_base_url.strip()

    @property
    def lv_auth_mock(self) -> bool:
        """LV Auth proxy answers with canned responses."""
        return self.mock_lv_auth or not self.lv_auth_base_url.strip()

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "moldova": {
                "base_url": self.moldova_base_url or "(mock)",
                "prefix": self.moldova_api_prefix,
                "api_key": "***" if self.moldova_api_key else "(not set)",
            },
            "lv_auth": {
                "base_url": self.lv_auth_base_url or "(mock)",
                "api_key": "***" if self.lv_auth_api_key else "(not set)",
                "mock": self.lv_auth_mock,
            },
            "pricing": {
                "jitter": self.pricing_jitter,
                "seeded": self.pricing_seed is not None,
            },
            "max_sessions": self.max_sessions,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
