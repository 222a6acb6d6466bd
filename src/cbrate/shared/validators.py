# src/cbrate/shared/validators.py
"""
Input Validation Utilities - Configuration and Data Validation

This module provides validation functions for configuration values, cache
keys and user-supplied date strings. Every function returns a bool and
leaves raising to the caller.

Files that USE this module:
- cbrate.config.settings (uses validation functions in Settings field validators)
- cbrate.adapters.persistence.cache_store (validate_cache_key)
- cbrate.application.exchange_service (validate_iso_date)

Files that this module USES:
- None (pure utility functions)
"""
import re
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_CACHE_KEY = re.compile(r"^[A-Za-z0-9_.\-]+$")


def validate_url(url: str) -> bool:
    """
    Validate an HTTP(S) endpoint URL.
    
    Args:
        url: URL to validate
        
    Returns:
        True if valid, False otherwise
    """
    if not url:
        return False
    
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_cache_key(key: str, max_length: int = 200) -> bool:
    """
    Validate a cache key.
    
    Keys become file names in the file-backed store, so only letters,
    digits, underscores, dots and dashes are accepted.
    
    Args:
        key: Cache key to validate
        max_length: Maximum allowed length
        
    Returns:
        True if valid, False otherwise
    """
    if not key or not isinstance(key, str):
        return False
    if key in (".", ".."):
        return False
    
    return len(key) <= max_length and bool(_CACHE_KEY.fullmatch(key))


def validate_iso_date(value: str) -> bool:
    """Check that a string has the YYYY-MM-DD shape (calendar validity not checked)."""
    if not isinstance(value, str):
        return False
    return bool(_ISO_DATE.fullmatch(value))


def validate_timezone(name: str) -> bool:
    """
    Validate an IANA timezone name.
    
    Args:
        name: Timezone name (e.g. "Europe/Moscow")
        
    Returns:
        True if the zone database knows the name, False otherwise
    """
    if not name:
        return False
    
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
