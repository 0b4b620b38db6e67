"""
Pydantic settings for Context Chat.
Centralizes all environment variable configuration with validation.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Django
    django_secret_key: str = Field(
        default="django-insecure-dev-key-change-in-production",
        description="Django secret key",
    )
    django_debug: bool = Field(default=True, description="Debug mode")
    django_allowed_hosts: str = Field(
        default="localhost,127.0.0.1",
        description="Comma-separated allowed hosts",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # Supabase
    supabase_url: Optional[str] = Field(default=None, description="Supabase URL")
    supabase_anon_key: Optional[str] = Field(
        default=None, description="Supabase anon key for client-initiated access"
    )
    supabase_service_key: Optional[str] = Field(
        default=None, description="Supabase service role key for backend writes"
    )

    # Gemini (Google AI)
    google_api_key: Optional[str] = Field(default=None, description="Google API key for Gemini")
    chat_model: str = Field(default="gemini-2.0-flash", description="Completion model identifier")
    chat_temperature: float = Field(default=0.7, description="Temperature for chat replies")
    summary_temperature: float = Field(default=0.0, description="Temperature for summaries and key terms")
    completion_timeout_seconds: float = Field(default=60.0, description="Completion provider timeout")

    # Relay client
    api_url: str = Field(default="http://localhost:8000", description="Backend base URL used by the client")
    relay_timeout_seconds: float = Field(default=90.0, description="Client-side timeout for relay calls")

    # CORS
    cors_allowed_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        description="Comma-separated CORS allowed origins",
    )

    @property
    def allowed_hosts_list(self) -> List[str]:
        """Parse allowed hosts into a list."""
        return [h.strip() for h in self.django_allowed_hosts.split(",") if h.strip()]

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS allowed origins into a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
