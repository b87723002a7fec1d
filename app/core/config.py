"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes external endpoints and credentials (messaging API, Google Sheet)
- OTP lifetime and store bounds
- Validates configuration on startup
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal, List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Messaging API (AiSensy campaign API)
    API_KEY: Optional[str] = Field(
        default=None,
        description="Messaging API key used for OTP delivery"
    )
    API_URL: Optional[str] = Field(
        default=None,
        description="Messaging API campaign endpoint"
    )
    OTP_CAMPAIGN_NAME: str = Field(
        default="OTP5",
        description="Campaign name carrying the OTP template"
    )

    # Spreadsheet ingest (Google Apps Script web app)
    GOOGLE_SHEET_URL: Optional[str] = Field(
        default=None,
        description="Spreadsheet ingest endpoint for form submissions"
    )

    # OTP
    OTP_TTL_MINUTES: int = Field(
        default=5,
        description="OTP validity in minutes"
    )
    OTP_SWEEP_INTERVAL_SECONDS: int = Field(
        default=60,
        description="Interval between expired-OTP sweeps (0 disables the sweeper)"
    )
    OTP_STORE_MAX_ENTRIES: int = Field(
        default=10000,
        description="Maximum number of pending OTPs kept in memory"
    )
    DEFAULT_COUNTRY_CODE: str = Field(
        default="91",
        description="Country code prefixed to numbers for delivery"
    )

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout for messaging and spreadsheet calls"
    )

    # Uploads
    MAX_UPLOAD_BYTES: int = Field(
        default=5 * 1024 * 1024,
        description="Maximum size of a single uploaded file"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    PORT: int = Field(
        default=10000,
        description="Port used when running the app module directly"
    )

    @field_validator("OTP_TTL_MINUTES", "OTP_STORE_MAX_ENTRIES")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """OTP lifetime and store size must be positive."""
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @field_validator("DEFAULT_COUNTRY_CODE")
    @classmethod
    def validate_country_code(cls, v: str) -> str:
        """Country code is digits only, without '+'."""
        v = v.strip().lstrip("+")
        if not v.isdigit():
            raise ValueError("DEFAULT_COUNTRY_CODE must contain digits only")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()


def missing_settings(config: Optional[Settings] = None) -> List[str]:
    """
    Returns the names of required external settings that are not set.
    """
    config = config or settings
    required = ("API_KEY", "API_URL", "GOOGLE_SHEET_URL")
    return [name for name in required if not getattr(config, name)]


def validate_settings(config: Optional[Settings] = None) -> List[str]:
    """
    Validates critical settings on application startup.

    Missing endpoints are fatal in production. Elsewhere they are returned
    so the caller can log them; requests that need them fail with
    ConfigurationError at first use.

    Raises:
        ValueError: In production, if any required setting is missing
    """
    config = config or settings
    missing = missing_settings(config)

    if missing and config.is_production:
        raise ValueError(f"Configuration validation failed: {', '.join(missing)} required")

    return missing
