"""Application configuration via pydantic-settings."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class ProviderCredentials:
    """Credential set for one payment provider.

    ``required`` names the fields that must be non-blank before an adapter
    for the provider may be constructed.
    """

    provider: str
    base_url: str
    key: Optional[str] = None
    secret: Optional[str] = None
    merchant_id: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    required: tuple[str, ...] = ("key",)

    @property
    def is_configured(self) -> bool:
        return all((getattr(self, name) or "").strip() for name in self.required)

    @property
    def missing(self) -> list[str]:
        return [name for name in self.required if not (getattr(self, name) or "").strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront Payments"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 4

    # Remote payment backend (callable functions)
    backend_base_url: str = "http://localhost:5001/storefront/us-central1"
    backend_auth_token: Optional[str] = None
    backend_timeout_seconds: float = Field(default=15.0, gt=0)

    # bKash
    bkash_base_url: str = "https://tokenized.sandbox.bkash.com"
    bkash_app_key: Optional[str] = None
    bkash_app_secret: Optional[str] = None
    bkash_username: Optional[str] = None
    bkash_password: Optional[str] = None

    # Nagad
    nagad_base_url: str = "https://sandbox.mynagad.com"
    nagad_merchant_id: Optional[str] = None
    nagad_public_key: Optional[str] = None
    nagad_private_key: Optional[str] = None

    # SSLCommerz
    ssl_base_url: str = "https://sandbox.sslcommerz.com"
    ssl_store_id: Optional[str] = None
    ssl_store_password: Optional[str] = None

    # Callback navigation
    storefront_base_url: Optional[str] = None
    payment_success_path: str = "/order-success"
    payment_failure_path: str = "/cart"
    home_path: str = "/"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    def provider_credentials(self, provider: str) -> ProviderCredentials:
        """Build the credential set for ``provider`` (bkash, nagad or card)."""
        if provider == "bkash":
            return ProviderCredentials(
                provider="bkash",
                base_url=self.bkash_base_url,
                key=self.bkash_app_key,
                secret=self.bkash_app_secret,
                username=self.bkash_username,
                password=self.bkash_password,
                required=("key",),
            )
        if provider == "nagad":
            return ProviderCredentials(
                provider="nagad",
                base_url=self.nagad_base_url,
                key=self.nagad_public_key,
                secret=self.nagad_private_key,
                merchant_id=self.nagad_merchant_id,
                required=("merchant_id",),
            )
        if provider == "card":
            return ProviderCredentials(
                provider="card",
                base_url=self.ssl_base_url,
                secret=self.ssl_store_password,
                merchant_id=self.ssl_store_id,
                required=("merchant_id",),
            )
        raise KeyError(f"No credential set for provider '{provider}'")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
