"""Application configuration via pydantic-settings."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Umrah Tours Booking"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 4

    # Redis (rate limiting only)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    @computed_field
    @property
    def redis_url(self) -> str:
        """Redis connection URL."""
        auth = f":{self.redis_password}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Rate Limiting
    rate_limit_per_minute: int = 100

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    # Stripe
    stripe_secret_key: Optional[str] = None
    stripe_publishable_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None
    stripe_success_url: str = "http://localhost:3000/booking-success"
    stripe_cancel_url: str = "http://localhost:3000/booking-cancel"
    currency: str = "usd"

    # Inquiries are written as one JSON file each
    inquiries_dir: Path = Path("inquiries")

    # Pricing (amounts in cents)
    deposit_per_person: int = 75000
    card_fee_rate: Decimal = Decimal("0.029")
    card_fixed_fee: int = 30
    ach_fee_rate: Decimal = Decimal("0.008")
    ach_fee_cap: int = 500

    @computed_field
    @property
    def stripe_configured(self) -> bool:
        """Whether Stripe credentials are present."""
        return bool(self.stripe_secret_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
