"""Application configuration."""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Storefront settings loaded from environment variables."""

    # Foodies API
    api_base_url: str = "http://localhost:8080/api"
    http_timeout: Optional[float] = None  # None keeps the httpx default

    # Session
    token_file: Path = Path.home() / ".foodies" / "session.json"

    # Pricing
    tax_rate: float = 0.10
    shipping_fee: float = 10.0

    # Payment
    currency: str = "INR"
    merchant_name: str = "Golden Zaika"
    payment_description: str = "Food order payment"
    razorpay_key: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FOODIES_",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
