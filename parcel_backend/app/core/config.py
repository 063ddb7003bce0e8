"""
Configuration settings for the Parcel Delivery Backend.

This module handles application configuration using Pydantic settings.
Database, payment gateway and identity provider credentials have no
defaults: a missing value fails validation at import and stops startup.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Parcel Delivery Backend"
    api_version: str = "v1"
    api_prefix: str = ""
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Database Configuration
    database_url: str
    db_echo: bool = False
    db_pool_size: int = 20
    db_max_overflow: int = 10

    # Payment Gateway Configuration
    payment_gateway_secret_key: str
    payment_gateway_url: str = "https://api.stripe.com"
    payment_currency: str = "usd"
    payment_method_types: List[str] = ["card"]
    payment_gateway_timeout: float = 10.0

    # Identity Provider Configuration
    identity_project_id: str
    identity_certs_url: str = (
        "https://www.googleapis.com/robot/v1/metadata/x509/"
        "securetoken@system.gserviceaccount.com"
    )
    identity_issuer: Optional[str] = None
    identity_algorithms: List[str] = ["RS256"]
    identity_signing_key: Optional[str] = None
    identity_certs_cache_key: str = "identity:certs"

    # Redis Configuration
    redis_url: str = "redis://localhost:6379/0"
    redis_decode_responses: bool = True

    @property
    def resolved_identity_issuer(self) -> str:
        """Issuer expected in ID tokens; defaults to the provider's per-project issuer."""
        return self.identity_issuer or f"https://securetoken.google.com/{self.identity_project_id}"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
