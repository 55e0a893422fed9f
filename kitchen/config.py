"""
Application configuration using Pydantic settings.

All configurable values are loaded from environment variables with sensible defaults.
This centralizes configuration management and makes the application more flexible
across different environments (development, testing, production).
"""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import model_validator

# Get the directory containing this config file (kitchen/)
_PACKAGE_DIR = Path(__file__).parent.resolve()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App metadata
    app_name: str = "Kitchen API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # CORS - development defaults, override via CORS_ORIGINS env var for production
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Parser limits (bounds parse time, which is linear-ish in document size)
    max_recipe_bytes: int = 256 * 1024

    # Parse cache configuration
    parse_cache_enabled: bool = True
    parse_cache_ttl_hours: int = 24  # How long to keep parsed recipes
    parse_cache_max_entries: int = 512  # Oldest entry is evicted past this

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject limits that would make every document unparseable."""
        if self.max_recipe_bytes <= 0:
            raise ValueError("MAX_RECIPE_BYTES must be a positive number of bytes")
        if self.parse_cache_max_entries <= 0:
            raise ValueError("PARSE_CACHE_MAX_ENTRIES must be positive")
        return self

    model_config = SettingsConfigDict(
        env_file=_PACKAGE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


def get_settings(**overrides) -> Settings:
    """
    Factory function to create Settings instance.

    Useful for testing where you need to override specific values
    without modifying environment variables.

    Args:
        **overrides: Key-value pairs to override default settings

    Returns:
        Settings instance with overrides applied

    Example:
        test_settings = get_settings(debug=True, max_recipe_bytes=1024)
    """
    return Settings(**overrides)


# Global settings instance (lazy initialization for testability)
settings = get_settings()
