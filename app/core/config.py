"""Application configuration using pydantic-settings."""
import re

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = "local"
    app_name: str = "procurement-tracker-api"
    database_url: str = Field(
        ...,
        validation_alias=AliasChoices("DATABASE_URL", "database_url")
    )
    allowed_origins: str = "*"
    log_level: str = "INFO"
    db_echo: bool = Field(False, validation_alias=AliasChoices("DB_ECHO", "db_echo"))

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Normalize DATABASE_URL to the psycopg driver for PostgreSQL."""
        # Skip normalization for sqlite URLs
        if v.startswith("sqlite"):
            return v

        # Convert postgres:// to postgresql+psycopg://
        if v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql+psycopg://", 1)

        # Convert postgresql:// to postgresql+psycopg:// (if not already using psycopg)
        if v.startswith("postgresql://") and not v.startswith("postgresql+psycopg://"):
            v = v.replace("postgresql://", "postgresql+psycopg://", 1)

        if not v.startswith("postgresql+psycopg://"):
            raise ValueError("DATABASE_URL must start with postgresql://, postgresql+psycopg://, or sqlite")

        # Production deployments talk to a managed database over TLS
        if "sslmode=" not in v:
            separator = "&" if "?" in v else "?"
            v = f"{v}{separator}sslmode=prefer"
        elif not re.search(r"sslmode=(prefer|require|verify-ca|verify-full)", v):
            v = re.sub(r"sslmode=[^&]+", "sslmode=prefer", v)

        return v

    @property
    def allowed_origins_list(self) -> list[str]:
        """Get allowed origins as a list."""
        if self.allowed_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


settings = Settings()
