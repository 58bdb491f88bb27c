"""
Configuration management for the Product Catalog API.

Loads settings from .env via pydantic-settings.

Security notes:
    - validate_production_settings() enforces a JWT secret and strict CORS
      in production, and refuses to seed the demo dataset there.
"""
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── Database ────────────────────────────────────────────────────
    database_url: str = "sqlite:///./data/catalog.db"
    database_timeout_seconds: float = 5.0  # sqlite busy timeout

    # ── Application ─────────────────────────────────────────────────
    environment: str = "development"
    seed_demo_data: bool = True  # load demo users/products on empty DB

    # ── Auth (JWT) ──────────────────────────────────────────────────
    jwt_secret: str = ""
    jwt_issuer: str = "catalog-api"
    jwt_access_ttl_minutes: int = 60
    bcrypt_rounds: int = 12

    # ── Login rate limit ────────────────────────────────────────────
    login_rate_limit: int = 20
    login_rate_window_seconds: int = 60

    # ── Pagination ──────────────────────────────────────────────────
    default_page_size: int = 20
    max_page_size: int = 100

    # ── CORS ────────────────────────────────────────────────────────
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # allow unknown .env keys without crashing
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    def validate_production_settings(self):
        """
        Validate settings for production safety.

        Called during app startup.
        """
        if self.environment == "production":
            if not self.jwt_secret:
                raise ValueError(
                    "JWT_SECRET must be set in production. "
                    "It is used to sign access tokens."
                )
            if "*" in self.cors_origins:
                raise ValueError(
                    "CORS_ORIGINS must not contain '*' in production. "
                    "Set explicit allowed origins."
                )
            if self.seed_demo_data:
                raise ValueError(
                    "SEED_DEMO_DATA must be false in production. "
                    "The demo dataset ships well-known passwords."
                )
            logger.info("Production settings validated")
        else:
            warnings = []
            if not self.jwt_secret:
                warnings.append("JWT_SECRET not set (login will fail)")
            if self.seed_demo_data:
                warnings.append("SEED_DEMO_DATA=true (demo users enabled)")
            if "*" in self.cors_origins:
                warnings.append("CORS_ORIGINS contains '*' (open access)")
            for w in warnings:
                logger.warning(w)


# Global settings instance
settings = Settings()
