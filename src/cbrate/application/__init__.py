# src/cbrate/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
No direct I/O dependencies - uses adapters through interfaces.
"""

from cbrate.application.course_calculator import CourseCalculator
from cbrate.application.rate_cache import RateCacheGateway
from cbrate.application.exchange_service import ExchangeService, resolve_date

__all__ = [
    "CourseCalculator",
    "RateCacheGateway",
    "ExchangeService",
    "resolve_date",
]
