"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./accounts.db")

    # JWT
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    # Session tokens stay valid until logout unless an expiry is configured
    jwt_expiration_minutes: int | None = Field(default=None)

    # Avatar uploads
    avatar_dir: str = Field(default="avatar")
    avatar_max_bytes: int = Field(default=1 * 1024 * 1024)
    avatar_extensions: list[str] = Field(default=["jpg", "png", "jpeg"])

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    # Browser origins allowed in development
    cors_allow_origins: list[str] = Field(default=["http://localhost:3000"])

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
