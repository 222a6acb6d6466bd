# src/cbrate/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from cbrate.shared.validators import (
    validate_cache_key,
    validate_iso_date,
    validate_timezone,
    validate_url,
)
from cbrate.shared.logging_conf import setup_logging

__all__ = [
    "validate_url",
    "validate_cache_key",
    "validate_iso_date",
    "validate_timezone",
    "setup_logging",
]
