# src/cbrate/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

Two kinds of failures exist:
- ExternalError: the caller supplied bad input (currency code, date) and
  can correct it. Never retried.
- InternalError: the rate source, the cache store or the fetched data is
  unhealthy. The underlying cause is always chained.
"""


class CbrateError(Exception):
    """Base exception for all cbrate errors."""
    pass


class ExternalError(CbrateError):
    """Raised for caller-correctable input errors."""
    pass


class InternalError(CbrateError):
    """Raised when the system or one of its dependencies is unhealthy."""
    pass


class InvalidCurrencyCode(ExternalError):
    """Raised when a currency code is not in the supported catalog."""
    pass


class InvalidDateFormat(ExternalError):
    """Raised when a date is not a valid YYYY-MM-DD string."""
    pass


class DateInFuture(ExternalError):
    """Raised when a date is more than one day ahead of now."""
    pass


class SourceUnavailable(InternalError):
    """Raised when the rate source cannot be reached or keeps answering non-200."""
    pass


class SourceDataInvalid(InternalError):
    """Raised when the rate source returns an empty or malformed payload."""
    pass


class CacheUnavailable(InternalError):
    """Raised when the cache store rejects a key or a write."""
    pass


class RateNotFound(InternalError):
    """Raised when a snapshot has no rate for a requested currency."""
    pass
