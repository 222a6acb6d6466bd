# src/cbrate/application/exchange_service.py
"""
Exchange Service - Course on a Date with Day-over-Day Change

This module contains the core business logic of the service. It validates
user input, resolves the requested date, loads the snapshots for that date
and the day before through the cache, and compares the two courses.

User-input failures (bad currency code, bad date, date in the future) raise
ExternalError subclasses before any I/O happens. Failures of the source or
the cache propagate unchanged as InternalError subclasses.

Files that USE this module:
- cbrate.app (composition root and CLI)
- tests.test_exchange_service (unit and end-to-end tests)

Files that this module USES:
- cbrate.adapters.providers.base (RateSource interface)
- cbrate.application.rate_cache (RateCacheGateway)
- cbrate.application.course_calculator (CourseCalculator)
- cbrate.config (timezone for the default clock)
- cbrate.domain (catalog, models and errors)
- cbrate.shared.validators (validate_iso_date)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from datetime import date, datetime, time, timedelta  # Date arithmetic for previous day and future check
from typing import Callable, List, Optional  # Type hints
from zoneinfo import ZoneInfo  # Timezone of the rate source

from cbrate.adapters.providers.base import RateSource
from cbrate.application.course_calculator import CourseCalculator
from cbrate.application.rate_cache import RateCacheGateway
from cbrate.config import settings
from cbrate.domain.currency import all_codes, code_for
from cbrate.domain.errors import DateInFuture, InvalidDateFormat
from cbrate.domain.models import ComparisonResult, RateSnapshot
from cbrate.shared.validators import validate_iso_date

log = logging.getLogger(__name__)

# How far past "now" a requested date may lie
FUTURE_TOLERANCE = timedelta(days=1)


def source_now() -> datetime:
    """Current wall-clock time in the rate source's timezone, without tzinfo."""
    return datetime.now(ZoneInfo(settings.timezone)).replace(tzinfo=None)


def resolve_date(value: str, now: datetime) -> date:
    """
    Parse a YYYY-MM-DD string and reject dates too far in the future.

    Args:
        value: Requested date
        now: Current time (naive, source timezone)

    Returns:
        Requested calendar date (its midnight is what gets compared with now)

    Raises:
        InvalidDateFormat: If the string is not a real YYYY-MM-DD date
        DateInFuture: If its midnight is more than one day after now
    """
    if not validate_iso_date(value):
        raise InvalidDateFormat(
            f'Incorrect date value - {value}, allowed format is "YYYY-MM-DD"'
        )
    try:
        resolved = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidDateFormat(f"Incorrect date value - {value}: {e}") from e

    if datetime.combine(resolved, time.min) - now > FUTURE_TOLERANCE:
        raise DateInFuture(f"Incorrect date value - {value}, date is in future")
    return resolved


class ExchangeService:
    """
    Orchestrates catalog validation, date resolution, cached fetching and
    course calculation.
    """

    def __init__(
        self,
        source: RateSource,
        cache: RateCacheGateway,
        calculator: Optional[CourseCalculator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize exchange service.

        Args:
            source: Remote rate source (called on cache misses only)
            cache: Cache gateway for snapshots
            calculator: Course calculator (defaults to RUB pivot)
            clock: Returns "now" as naive datetime (defaults to source_now)
        """
        self.source = source
        self.cache = cache
        self.calculator = calculator or CourseCalculator()
        self.clock = clock or source_now

    def get_course_on_date(self, target_code: str, base_code: str, date_str: str) -> ComparisonResult:
        """
        Course of target in base on a date and its change versus the day before.

        Args:
            target_code: ISO code of the priced currency
            base_code: ISO code of the currency the price is expressed in
            date_str: Date in YYYY-MM-DD format

        Returns:
            ComparisonResult for the date and the previous calendar day

        Raises:
            ExternalError: Invalid code, invalid date or date in the future
            InternalError: Source, cache or data failure
        """
        target = code_for(target_code)
        base = code_for(base_code)
        trade_date = resolve_date(date_str, self.clock())

        current = self._snapshot_on(trade_date)
        previous = self._snapshot_on(current.trade_date - timedelta(days=1))

        course = self.calculator.calculate(target, base, current.rates)
        previous_course = self.calculator.calculate(target, base, previous.rates)
        delta = course - previous_course

        log.info(
            "Course %s/%s on %s: %s (%s vs %s)",
            target, base, current.trade_date.isoformat(), course,
            delta, previous.trade_date.isoformat(),
        )
        return ComparisonResult(
            trade_date=current.trade_date,
            course=course,
            previous_trade_date=previous.trade_date,
            delta=delta,
        )

    def get_currencies(self) -> List[str]:
        """Supported ISO codes, sorted."""
        return sorted(c.value for c in all_codes())

    def _snapshot_on(self, trade_date: date) -> RateSnapshot:
        return self.cache.get_or_fetch(trade_date, lambda: self.source.fetch(trade_date))
