# src/cbrate/adapters/providers/base.py
"""
Base Provider Interface for Daily Rate Sources

This module defines the abstract base class for rate sources. A source
returns every rate it publishes for one calendar date.

Files that USE this module:
- cbrate.adapters.providers.cbr (CbrRateFetcher implements RateSource)
- cbrate.application.exchange_service (depends on RateSource only)

Files that this module USES:
- cbrate.domain.models (RateSnapshot)
"""
from abc import ABC, abstractmethod
from datetime import date

from cbrate.domain.models import RateSnapshot


class RateSource(ABC):
    @abstractmethod
    def fetch(self, trade_date: date) -> RateSnapshot:
        """Return the rates published for trade_date."""
        raise NotImplementedError
