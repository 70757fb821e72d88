"""Application configuration using pydantic-settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys (absence is reported when a recipe is requested, not at startup)
    gemini_api_key: Optional[str] = None

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    # HTTP Settings
    http_timeout: int = 30  # seconds

    # Gemini Settings
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # Sessions
    session_cookie_name: str = "recipe_session"
    max_sessions: int = 1000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def generate_content_url(self) -> str:
        """Full URL of the generateContent endpoint for the configured model."""
        return f"{self.gemini_base_url.rstrip('/')}/models/{self.gemini_model}:generateContent"


# Global settings instance
settings = Settings()
