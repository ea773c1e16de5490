"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables. The
routing defaults here seed every Router built by the container; a Router can
still override them through its setters during startup.

Usage:
    from versioned_api.core.config import settings

    vendor = settings.api_vendor
    if settings.is_development:
        ...
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from versioned_api.core.enums import Environment
from versioned_api.core.errors import ConfigurationError
from versioned_api.domain.value_objects.version_id import version_id


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (Starlette debug tracebacks)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="Versioned API",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Content negotiation
    api_vendor: str = Field(
        default="api",
        description="Vendor embedded in the media type (application/vnd.<vendor>.<version>+<format>)",
    )
    api_default_version: str = Field(
        default="v1",
        description="Version used when the Accept header names no registered version",
    )
    api_default_format: str = Field(
        default="json",
        description="Response format used when the Accept header names none we can render",
    )
    api_default_prefix: str | None = Field(
        default=None,
        description="Prefix applied to API groups that declare none",
    )
    api_default_domain: str | None = Field(
        default=None,
        description="Domain applied to API groups that declare none",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize and validate the log level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("api_vendor", "api_default_format")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """
        Media type tokens are compared case-insensitively; store them lowercase.

        Raises:
            ValueError: If the token is blank.
        """
        token = v.strip().lower()
        if not token:
            raise ValueError("must not be blank")
        return token

    @field_validator("api_default_version")
    @classmethod
    def validate_default_version(cls, v: str) -> str:
        """
        Reject version ids the registry would never accept.

        Raises:
            ValueError: If the id is empty or malformed.
        """
        try:
            return version_id(v)
        except ConfigurationError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("api_default_prefix", "api_default_domain")
    @classmethod
    def strip_blank(cls, v: str | None) -> str | None:
        """
        Strip surrounding slashes and whitespace; blank values mean "unset".
        """
        if v is None:
            return None
        cleaned = v.strip().strip("/")
        return cleaned or None

    @property
    def is_development(self) -> bool:
        """True if environment is DEVELOPMENT."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """True if environment is TESTING."""
        return self.environment == Environment.TESTING

    @property
    def is_ci(self) -> bool:
        """True if environment is CI."""
        return self.environment == Environment.CI

    @property
    def is_production(self) -> bool:
        """True if environment is PRODUCTION."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Settings loaded once per process.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
