from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_prefix: str = Field(default="/api")
    api_title: str = Field(default="Portfolio Contact Relay")
    api_version: str = Field(default="1.0.0")
    # Empty means the per-environment default
    log_level: str = Field(default="")

    # Environment (production switches to JSON logs and hides the docs)
    environment: str = Field(default="development")

    # CORS
    cors_origins: Union[str, List[str]] = Field(default="http://localhost:3000")

    # Mail destination and SMTP transport
    to_email: Optional[str] = Field(default=None)
    smtp_host: Optional[str] = Field(default=None)
    # Kept as a string so a malformed value surfaces as a transport
    # configuration error instead of failing settings load.
    smtp_port: str = Field(default="587")
    smtp_user: Optional[str] = Field(default=None)
    smtp_pass: Optional[str] = Field(default=None)
    smtp_timeout: float = Field(default=20.0)

    # Rate Limiting (relay endpoint only, keyed by client IP)
    rate_limit_enabled: bool = Field(default=True)
    contact_rate_limit: str = Field(default="5/minute")

    # Sentry (optional, disabled if empty)
    sentry_dsn: str = Field(default="")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Handle comma-separated string
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("to_email", "smtp_host", "smtp_user", "smtp_pass", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
