# src/cbrate/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains the currency catalog, domain models and errors.
No dependencies on infrastructure or external systems.
"""

from cbrate.domain.currency import Currency, all_codes, code_for
from cbrate.domain.models import ComparisonResult, CurrencyRate, RateSnapshot
from cbrate.domain.errors import (
    CacheUnavailable,
    CbrateError,
    DateInFuture,
    ExternalError,
    InternalError,
    InvalidCurrencyCode,
    InvalidDateFormat,
    RateNotFound,
    SourceDataInvalid,
    SourceUnavailable,
)

__all__ = [
    "Currency",
    "code_for",
    "all_codes",
    "CurrencyRate",
    "RateSnapshot",
    "ComparisonResult",
    "CbrateError",
    "ExternalError",
    "InternalError",
    "InvalidCurrencyCode",
    "InvalidDateFormat",
    "DateInFuture",
    "SourceUnavailable",
    "SourceDataInvalid",
    "CacheUnavailable",
    "RateNotFound",
]
