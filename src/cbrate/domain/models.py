# src/cbrate/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains the value objects the service passes around:
- CurrencyRate: one quoted currency from the daily feed
- RateSnapshot: every rate published for one trade date (unit of caching)
- ComparisonResult: course on a date and its change versus the day before

Files that USE this module:
- cbrate.adapters.providers.cbr (builds RateSnapshot from the CBR payload)
- cbrate.application.* (cache gateway, calculator and service)
- cbrate.adapters.formatting.formatter (renders ComparisonResult)
- tests.* (tests build fixtures from these models)

Files that this module USES:
- cbrate.domain.currency (Currency catalog)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass  # Decorator for creating data classes
from datetime import date  # Trade dates are calendar dates
from decimal import Decimal  # Exact decimal arithmetic for rates
from typing import Any, Dict, Optional, Tuple  # Type hints

from cbrate.domain.currency import Currency, code_for

# Bumped whenever the cached JSON layout changes
SNAPSHOT_FORMAT_VERSION = 1


@dataclass(frozen=True)
class CurrencyRate:
    """
    Price of `nominal` units of `currency` in the local base currency.

    Attributes:
        currency: Quoted currency
        nominal: Number of units the value applies to (e.g. 100 JPY)
        value: Price of `nominal` units in RUB
    """
    currency: Currency
    nominal: int
    value: Decimal

    def __post_init__(self) -> None:
        if self.nominal <= 0:
            raise ValueError(f"Nominal must be positive for {self.currency}: {self.nominal}")
        if self.value <= 0:
            raise ValueError(f"Value must be positive for {self.currency}: {self.value}")

    @property
    def unit_rate(self) -> Decimal:
        """Price of a single unit in the local base currency."""
        return self.value / self.nominal


@dataclass(frozen=True)
class RateSnapshot:
    """
    All rates published for one trade date.

    Created once from a source response and never mutated afterwards.
    Currencies are unique within a snapshot.
    """
    trade_date: date
    rates: Tuple[CurrencyRate, ...]

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple
        object.__setattr__(self, "rates", tuple(self.rates))
        seen = set()
        for rate in self.rates:
            if rate.currency in seen:
                raise ValueError(f"Duplicate currency in snapshot: {rate.currency}")
            seen.add(rate.currency)

    def rate_for(self, currency: Currency) -> Optional[CurrencyRate]:
        for rate in self.rates:
            if rate.currency is currency:
                return rate
        return None

    def to_json(self) -> Dict[str, Any]:
        """
        Convert snapshot to a JSON-serializable dictionary.

        Decimal values are written as strings so no precision is lost.
        """
        return {
            "version": SNAPSHOT_FORMAT_VERSION,
            "trade_date": self.trade_date.isoformat(),
            "rates": [
                {
                    "currency": rate.currency.value,
                    "nominal": rate.nominal,
                    "value": str(rate.value),
                }
                for rate in self.rates
            ],
        }

    @staticmethod
    def from_json(data: Dict[str, Any]) -> "RateSnapshot":
        """
        Create RateSnapshot from a dictionary produced by to_json.

        Raises:
            ValueError: If the layout version is unknown or a field is invalid
            KeyError: If a required field is missing
        """
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot must be a JSON object, got {type(data).__name__}")
        version = data.get("version")
        if version != SNAPSHOT_FORMAT_VERSION:
            raise ValueError(f"Unsupported snapshot format version: {version!r}")
        return RateSnapshot(
            trade_date=date.fromisoformat(data["trade_date"]),
            rates=tuple(
                CurrencyRate(
                    currency=code_for(item["currency"]),
                    nominal=int(item["nominal"]),
                    value=Decimal(item["value"]),
                )
                for item in data["rates"]
            ),
        )


@dataclass(frozen=True)
class ComparisonResult:
    """
    Course of a target currency in a base currency with day-over-day change.

    Attributes:
        trade_date: Date the course applies to
        course: Units of base currency per one unit of target currency
        previous_trade_date: Date of the comparison course
        delta: course minus the previous day's course
    """
    trade_date: date
    course: Decimal
    previous_trade_date: date
    delta: Decimal
