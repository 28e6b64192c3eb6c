"""Configuration management for URL shortener."""

import os
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

from urlshortener.common.url_builder import build_short_url
from urlshortener.database.sqlite import DATABASE_FILENAME


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    server_host: str = Field(
        default="localhost",
        description="Host to bind to"
    )

    server_port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes"
    )

    # URL shortener settings
    short_domain: str = Field(
        default="localhost:8080",
        description="host:port used when rendering short URLs"
    )

    short_code_length: int = Field(
        default=7,
        ge=4,
        le=12,
        description="Length of generated short codes"
    )

    max_collision_retries: int = Field(
        default=5,
        ge=1,
        description="Maximum short code attempts before giving up"
    )

    # Storage settings
    database_path: str = Field(
        default="./database",
        description="Directory containing the SQLite database file"
    )

    # Redis settings (optional)
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for caching resolved codes"
    )

    cache_ttl_seconds: int = Field(
        default=3600,
        ge=1,
        description="Cache TTL in seconds"
    )

    # Web settings
    templates_dir: str = Field(
        default="templates",
        description="Directory of HTML templates (static files under static/)"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def address(self) -> str:
        """Full server address for binding."""
        return f"{self.server_host}:{self.server_port}"

    @property
    def database_file(self) -> str:
        """Path of the SQLite database file."""
        return os.path.join(self.database_path, DATABASE_FILENAME)

    def short_url(self, short_code: str) -> str:
        """Build the short URL shown to users."""
        return build_short_url(short_code, self.short_domain)


def load_config() -> Config:
    """Load configuration from environment.

    Raises:
        pydantic.ValidationError: If a setting is invalid (e.g. SHORT_CODE_LENGTH)
    """
    return Config()
