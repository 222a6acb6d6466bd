# src/cbrate/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for remote rate sources.
All providers implement the RateSource interface.
"""

from cbrate.adapters.providers.base import RateSource
from cbrate.adapters.providers.cbr import CbrRateFetcher

__all__ = [
    "RateSource",
    "CbrRateFetcher",
]
