"""Configuration management for APT Search using Pydantic settings.

This module handles all configuration for the search client, loading from
environment variables and .env files with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main configuration settings for APT Search.

    Settings are loaded from environment variables and .env files.
    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Search API Configuration
    api_base_url: str = Field(
        default="http://localhost:8080",
        description="Base address of the search backend",
    )
    search_path: str = Field(
        default="/api/search",
        description="Path of the paginated search endpoint",
    )
    suggestions_path: str = Field(
        default="/api/suggestions",
        description="Path of the autocomplete suggestions endpoint",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Timeout for search API calls in seconds",
        ge=1,
        le=120,
    )

    # Controller Settings
    page_size: int = Field(
        default=10,
        description="Number of results requested per page",
        ge=1,
        le=100,
    )
    suggestion_min_length: int = Field(
        default=2,
        description="Minimum query length before suggestions are fetched",
        ge=1,
    )
    suggestion_debounce_ms: int = Field(
        default=300,
        description="Quiet period after the last edit before suggestions are fetched",
        ge=0,
        le=5000,
    )
    sanitize_snippets: bool = Field(
        default=True,
        description="Strip untrusted markup from result snippets before rendering",
    )

    # Application Settings
    apt_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level for the application",
    )
    apt_log_file: Path | None = Field(
        default=None,
        description="Optional file path to write logs (defaults to console only)",
    )
    apt_debug_mode: bool = Field(
        default=False,
        description="Enable debug mode with request timing",
    )

    @field_validator("apt_log_file", mode="before")
    @classmethod
    def expand_paths(cls, v: str | Path | None) -> Path | None:
        """Expand relative paths to absolute paths."""
        if v is None:
            return None
        path = Path(v)
        return path.expanduser().resolve()

    @field_validator("search_path", "suggestions_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        """Endpoint paths are always joined onto the base address."""
        return v if v.startswith("/") else f"/{v}"

    @property
    def api_base(self) -> str:
        """Get the base URL for the search API (without trailing slash)."""
        return self.api_base_url.rstrip("/")

    @property
    def search_url(self) -> str:
        """Get the full URL of the search endpoint."""
        return f"{self.api_base}{self.search_path}"

    @property
    def suggestions_url(self) -> str:
        """Get the full URL of the suggestions endpoint."""
        return f"{self.api_base}{self.suggestions_path}"

    @property
    def debounce_seconds(self) -> float:
        """Suggestion debounce window in seconds."""
        return self.suggestion_debounce_ms / 1000

    def model_dump_safe(self) -> dict[str, str]:
        """Dump settings as a dictionary with display-friendly values."""
        return {
            "api_base_url": self.api_base,
            "search_url": self.search_url,
            "suggestions_url": self.suggestions_url,
            "request_timeout": f"{self.request_timeout:g}s",
            "page_size": str(self.page_size),
            "suggestion_min_length": str(self.suggestion_min_length),
            "suggestion_debounce_ms": str(self.suggestion_debounce_ms),
            "sanitize_snippets": str(self.sanitize_snippets),
            "log_level": self.apt_log_level,
            "log_file": str(self.apt_log_file) if self.apt_log_file else "-",
        }


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Creates and caches the settings on first call.

    Returns:
        Settings: The global settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment/files.

    Useful for testing or when configuration changes at runtime.

    Returns:
        Settings: The newly loaded settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
