# backend/app/core/config.py
import logging
import os
from pathlib import Path
from typing import Optional, Set

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_PAGE_SIZE, LATEST_TUITIONS_LIMIT, MAX_PAGE_SIZE


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.info(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


NON_PROD_SITE_MODES: Set[str] = {"local", "dev", "development", "stg", "stage", "staging", "preview"}
PROD_SITE_MODES: Set[str] = {"prod", "production", "live"}


def _classify_site_mode(raw_site_mode: str | None) -> tuple[str, bool, bool]:
    """Return normalized site mode with production/non-prod classification."""

    normalized = (raw_site_mode or "").strip().lower()
    is_prod = normalized in PROD_SITE_MODES
    is_non_prod = normalized in NON_PROD_SITE_MODES
    return normalized, is_prod, is_non_prod


class Settings(BaseSettings):
    # Shared-secret token verification (local development and tests)
    secret_key: SecretStr = Field(
        default=SecretStr("dev-secret-key-not-for-production"),
        description="Secret key for HS256 identity tokens",
    )
    algorithm: str = "HS256"

    # Identity provider (RS256 ID tokens verified against a JWKS endpoint)
    identity_jwks_url: str = Field(
        default="",
        description="JWKS endpoint of the identity provider; empty selects shared-secret mode",
    )
    identity_audience: str = Field(
        default="", description="Expected 'aud' claim (e.g. the Firebase project id)"
    )
    identity_issuer: str = Field(
        default="",
        description="Expected 'iss' claim (e.g. https://securetoken.google.com/<project>)",
    )

    # Environment (derived from SITE_MODE)
    environment: str = (
        "production" if _classify_site_mode(os.getenv("SITE_MODE", "local"))[1] else "development"
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./tuitionhub.db",
        description="SQLAlchemy database URL",
    )
    db_pool_size: int = Field(default=5, ge=1)
    db_max_overflow: int = Field(default=10, ge=0)
    db_echo: bool = False
    auto_create_schema: bool = Field(
        default=True, description="Create missing tables during application startup"
    )
    reconcile_on_startup: bool = Field(
        default=True,
        description="Repair orders whose application was never approved when the app starts",
    )

    # HTTP
    port: int = Field(default=3000, description="Port the API server listens on")
    client_domain: str = Field(
        default="http://localhost:5173",
        description="Frontend origin used for CORS and checkout redirect URLs",
    )

    # Stripe Configuration
    stripe_secret_key: SecretStr = Field(
        default=SecretStr(""),
        description="Stripe secret key for backend API calls",
    )
    stripe_currency: str = Field(default="usd", description="Default currency for payments")

    # Listing defaults
    latest_tuitions_limit: int = Field(default=LATEST_TUITIONS_LIMIT, ge=1)
    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    # Use ConfigDict instead of Config class (Pydantic V2 style)
    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,  # allows SECRET_KEY to match secret_key
        extra="ignore",
    )

    @field_validator("client_domain")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def identity_provider_mode(self) -> bool:
        """True when tokens are verified against a remote JWKS endpoint."""
        return bool(self.identity_jwks_url.strip())

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key.get_secret_value())

    def is_sqlite(self, url: Optional[str] = None) -> bool:
        return (url or self.database_url).startswith("sqlite")


settings = Settings()
logger.info(
    "[CONFIG] environment=%s identity_mode=%s stripe_configured=%s",
    settings.environment,
    "provider" if settings.identity_provider_mode else "shared-secret",
    settings.stripe_configured,
)
