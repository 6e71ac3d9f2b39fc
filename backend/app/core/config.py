"""Application configuration using pydantic-settings.

All environment variables should be accessed through the settings object
rather than using os.getenv() directly. Business settings that the manager
edits from the terminal (tax rate, receipt footer, standby minutes) are not
environment config: they live in local storage, see app.core.local_storage.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo
from typing import List, Literal, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Record store - defaults to relative path, override via env for a hosted database
    database_url: str = "sqlite:///./data/restaurant_pos.db"

    # Terminal-local key/value file (saved business settings, session id)
    local_storage_path: Optional[str] = "./data/local_storage.json"

    # Security
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 720  # one service shift

    # CORS - comma-separated origins or "*" for development only
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Orders are bucketed by local calendar day / hour in this zone
    timezone: str = "Africa/Accra"

    # Remote writes (optimistic update, background persistence)
    remote_write_workers: int = 4  # 0 = run writes inline
    remote_write_max_attempts: int = 3
    remote_write_backoff_seconds: float = 0.5

    # Text-completion assistant (menu copy, manager insights)
    text_completion_api_key: Optional[str] = None
    text_completion_model: str = "gemini-3-flash-preview"
    text_completion_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    text_completion_timeout_seconds: float = 15.0

    # Server
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Rate limiting
    rate_limit_enabled: bool = True
    login_rate_limit: str = "10/minute"

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        if v == "change-me-in-production" or len(v) < 32:
            import warnings
            warnings.warn(
                "SECRET_KEY should be set to a random value of at least 32 characters.",
                UserWarning,
                stacklevel=2,
            )
        return v

    @field_validator("remote_write_max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("remote_write_max_attempts must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Refuse to start in production mode with the default secret key."""
        if not self.debug and self.secret_key == "change-me-in-production":
            raise ValueError(
                "FATAL: Cannot start in production mode with default SECRET_KEY. "
                "Set a secure SECRET_KEY environment variable (minimum 32 characters)."
            )
        return self

    @property
    def tzinfo(self) -> ZoneInfo:
        """Local zone used for calendar-day and hour-of-day bucketing."""
        return ZoneInfo(self.timezone)

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
