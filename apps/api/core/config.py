"""
Centralized configuration management with validation.

All environment variables are loaded and validated here.
This ensures consistent configuration across the application.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation."""

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Database Configuration
    # DATABASE_URL wins when set (tests use sqlite); otherwise built from POSTGRES_*.
    DATABASE_URL: Optional[str] = Field(default=None)
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: str = Field(default="postgres")
    POSTGRES_DB: str = Field(default="fitpath")
    POSTGRES_HOST: str = Field(default="postgres")
    POSTGRES_PORT: int = Field(default=5432)

    # Database Pool Configuration
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=10)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=3600)  # 1 hour

    # Redis Configuration
    REDIS_URL: str = Field(default="redis://redis:6379/0")
    CACHE_ENABLED: bool = Field(default=True)

    # JWT verification - REQUIRED
    # Tokens are issued by the identity provider and signed with this shared key.
    SECRET_KEY: str = Field(
        default=...,  # Required - no default
        description="JWT signing key shared with the identity provider (32+ chars). "
                    "Generate with: python -c \"import secrets; print(secrets.token_urlsafe(32))\""
    )
    JWT_ALGORITHM: str = Field(default="HS256")

    # API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    API_RELOAD: bool = Field(default=False)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")  # json or text

    # Paystack (payment verification only; capture happens in the client widget)
    PAYSTACK_SECRET_KEY: Optional[str] = Field(default=None)
    PAYSTACK_BASE_URL: str = Field(default="https://api.paystack.co")
    PAYSTACK_TIMEOUT_S: int = Field(default=15)
    DEFAULT_CURRENCY: str = Field(default="NGN")

    # Trial access window (days of a trial plan the user may open)
    TRIAL_ACCESS_DAYS: int = Field(default=3, ge=1, le=7)

    # Cache Configuration
    CACHE_TTL_DEFAULT: int = Field(default=300)  # 5 minutes
    CACHE_TTL_PROGRESS: int = Field(default=60)  # 1 minute

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # CORS - comma-separated list of allowed origins for production
    # e.g., "https://fitpath.ai,https://www.fitpath.ai"
    CORS_ORIGINS: Optional[str] = Field(default=None)

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:"
            f"{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:"
            f"{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )


# Global settings instance
settings = Settings()
