"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: str = Field(
        ...,
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        ...,
        description="Supabase anon/public key"
    )

    # ===================
    # AI AUDIT
    # ===================
    anthropic_api_key: Optional[str] = Field(
        None,
        description="Anthropic API key for the narrative proposal audit"
    )
    audit_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model used for the narrative audit"
    )
    audit_max_tokens: int = Field(
        default=1024,
        ge=128,
        le=8192,
        description="Maximum tokens in the audit reply"
    )

    # ===================
    # IMPORT DEFAULTS
    # ===================
    import_return_days: int = Field(
        default=1,
        ge=1,
        le=30,
        description="Days from import until the follow-up (return) date"
    )
    import_reminder_days: int = Field(
        default=3,
        ge=0,
        le=60,
        description="Reminder days set on imported proposals"
    )
    preview_ttl_minutes: int = Field(
        default=30,
        ge=1,
        le=240,
        description="Minutes an import preview stays available for confirmation"
    )
    max_upload_mb: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Largest spreadsheet accepted for import"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def audit_configured(self) -> bool:
        """Check if the AI audit has credentials."""
        return bool(self.anthropic_api_key)

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
