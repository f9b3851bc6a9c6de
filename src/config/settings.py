"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.adapters.smtp.smtp import TransportConfig


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    # SMTP transport configuration
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587  # Submission port, STARTTLS
    smtp_timeout: float | None = None  # None = no client-side timeout
    smtp_verify_on_startup: bool = True  # Diagnostic probe, never fatal

    # Credentials - absence is logged at startup, surfaced as a send failure
    email_user: str | None = None
    email_password: str | None = None

    # Confirmation template
    template_escape_html: bool = False  # Insert registrant fields verbatim by default

    def transport_config(self) -> TransportConfig:
        """Build the immutable transport configuration for the email sender."""
        return TransportConfig(
            host=self.smtp_host,
            port=self.smtp_port,
            username=self.email_user,
            password=self.email_password,
            timeout=self.smtp_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
