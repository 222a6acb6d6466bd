# src/cbrate/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables (or a .env file) and are validated
on load. Every field has a default, so the service runs without any setup.

Files that USE this module:
- cbrate.app (builds the service and logging from settings)
- cbrate.adapters.providers.cbr (source URL, timeout, attempt count)
- cbrate.adapters.persistence.cache_store (cache directory and TTL)
- cbrate.application.rate_cache (cache key prefix)
- cbrate.application.exchange_service (timezone for "now")

Files that this module USES:
- cbrate.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from cbrate.shared.validators import (
    validate_cache_key,  # Cache prefix must be usable inside a key
    validate_timezone,  # Validate IANA timezone name
    validate_url,  # Validate rate source URL
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )
    
    # --- Rate source ---
    cbr_url: str = Field(
        default="http://www.cbr.ru/scripts/XML_daily.asp", alias="CBR_URL"
    )
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)
    fetch_attempts: int = Field(default=3, alias="FETCH_ATTEMPTS", ge=1, le=10)
    
    # --- Cache ---
    cache_backend: str = Field(default="memory", alias="CACHE_BACKEND")
    cache_dir: Path = Field(default=Path("./data/cache"), alias="CACHE_DIR")
    cache_prefix: str = Field(default="CbrDataService", alias="CACHE_PREFIX")
    cache_ttl_seconds: int = Field(default=0, alias="CACHE_TTL_SECONDS", ge=0)  # 0 = never expires
    
    # --- Dates ---
    timezone: str = Field(default="Europe/Moscow", alias="CBRATE_TIMEZONE")
    
    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="CBRATE_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")
    
    @field_validator("cbr_url")
    @classmethod
    def validate_cbr_url(cls, v: str) -> str:
        """Validate rate source URL."""
        if not validate_url(v):
            raise ValueError("CBR_URL must be an http(s) URL")
        return v
    
    @field_validator("cache_backend")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        """Validate cache backend name."""
        v = v.strip().lower()
        if v not in ("memory", "file"):
            raise ValueError("CACHE_BACKEND must be 'memory' or 'file'")
        return v
    
    @field_validator("cache_prefix")
    @classmethod
    def validate_cache_prefix(cls, v: str) -> str:
        """Validate cache key prefix."""
        if not validate_cache_key(v):
            raise ValueError("Invalid CACHE_PREFIX format")
        return v
    
    @field_validator("timezone")
    @classmethod
    def validate_tz(cls, v: str) -> str:
        """Validate timezone name."""
        if not validate_timezone(v):
            raise ValueError(f"Unknown timezone: {v}")
        return v
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        v = v.strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return v


# Global settings instance
settings = Settings()
