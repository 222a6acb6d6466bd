# src/cbrate/application/course_calculator.py
"""
Course Calculator - Cross Rates via the Local Currency

Every CBR rate is the RUB price of `nominal` units of a currency, so the
course of any currency in any other is the ratio of their per-unit RUB prices.
No rounding happens here; callers choose display precision.

Files that USE this module:
- cbrate.application.exchange_service (course on two dates)
- tests.test_course_calculator (unit tests)

Files that this module USES:
- cbrate.domain (Currency, CurrencyRate, RateNotFound)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from cbrate.domain.currency import Currency
from cbrate.domain.errors import RateNotFound
from cbrate.domain.models import CurrencyRate

ONE = Decimal(1)


class CourseCalculator:
    def __init__(self, local_currency: Optional[Currency] = None):
        self.local_currency = local_currency or Currency.local()

    def calculate(self, target: Currency, base: Currency, rates: Iterable[CurrencyRate]) -> Decimal:
        """
        Price of one unit of target expressed in base.

        Args:
            target: Currency being priced
            base: Currency the price is expressed in
            rates: Rates of one snapshot

        Returns:
            target per-unit rate divided by base per-unit rate

        Raises:
            RateNotFound: If target or base (other than the local currency) has no rate
        """
        rates = tuple(rates)
        target_rate = self._unit_rate(target, rates)
        if base is self.local_currency:
            return target_rate
        return target_rate / self._unit_rate(base, rates)

    def _unit_rate(self, currency: Currency, rates: tuple) -> Decimal:
        if currency is self.local_currency:
            return ONE
        for rate in rates:
            if rate.currency is currency:
                return rate.unit_rate
        raise RateNotFound(f"No rate for {currency} in snapshot")
