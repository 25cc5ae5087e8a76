"""
Configuration management for DogAdopt AI.
Loads settings from environment variables and provides typed configuration access.
"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment: development, staging, production")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Supabase (record source)
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_key: str = Field(default="", description="Supabase anon/publishable key")
    supabase_api_schema: str = Field(
        default="dogadopt_api",
        description="Schema exposing the read-only API functions"
    )

    # OpenAI (optional remote chat augmentation)
    openai_api_key: str = Field(default="", description="OpenAI API key; empty disables remote chat")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI API base URL"
    )
    openai_model: str = Field(default="gpt-4", description="Chat completion model")
    openai_temperature: float = Field(
        default=0.7,
        description="Chat completion temperature (0.0-1.0)"
    )
    openai_max_tokens: int = Field(
        default=500,
        description="Maximum tokens for chat completions"
    )

    # API Settings
    api_timeout: int = Field(default=30, description="Outbound request timeout in seconds")

    # Browsing Settings
    dog_page_size: int = Field(default=10, description="Dogs per listing page")
    rescue_page_size: int = Field(default=12, description="Rescues per listing page")

    # Rescue Lookup Settings
    lookup_default_limit: int = Field(default=10, description="Default result limit for nearby rescue lookups")
    list_rescues_default_limit: int = Field(default=50, description="Default result limit for rescue listings")
    default_search_radius_km: float = Field(default=50, description="Default search radius in kilometres")

    # Chat Settings
    chat_preview_size: int = Field(default=5, description="Dogs shown per chat listing")
    chat_rescue_list_size: int = Field(default=8, description="Rescues shown in the chat rescue list")

    # Testing
    testing_mode: bool = Field(default=False, description="Enable testing mode")
    mock_apis: bool = Field(default=False, description="Use mock records instead of the record source")

    def remote_chat_enabled(self) -> bool:
        """Check if a remote chat credential is configured."""
        return bool(self.openai_api_key)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings


# Convenience access
settings = get_settings()
