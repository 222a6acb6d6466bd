# src/cbrate/app.py
"""
Application Entry Point - Service Wiring and Command Line

This module serves as the composition root for cbrate. It wires the CBR
fetcher, the cache store selected in settings, the cache gateway and the
calculator into an ExchangeService, and exposes a small command line:

    python -m cbrate USD RUB 2023-06-01
    python -m cbrate --list

Files that USE this module:
- cbrate.__main__ (module entry point)
- cbrate console script (pyproject.toml)

Files that this module USES:
- cbrate.shared.logging_conf (setup_logging for logging configuration)
- cbrate.config (settings for configuration management)
- cbrate.adapters.* (fetcher, cache stores, formatter)
- cbrate.application.* (gateway, calculator, service)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import argparse  # Command line parsing
import logging  # Standard library for logging messages and errors
import sys  # System-specific parameters and functions for exit codes
from typing import Optional, Sequence

from cbrate.adapters.formatting.formatter import format_comparison, format_currencies
from cbrate.adapters.persistence.cache_store import CacheStore, FileCacheStore, InMemoryCacheStore
from cbrate.adapters.providers.cbr import CbrRateFetcher
from cbrate.application.course_calculator import CourseCalculator
from cbrate.application.exchange_service import ExchangeService
from cbrate.application.rate_cache import RateCacheGateway
from cbrate.config import Settings, settings as default_settings
from cbrate.domain.errors import ExternalError, InternalError
from cbrate.shared.logging_conf import setup_logging

log = logging.getLogger(__name__)

EXIT_INTERNAL_ERROR = 1
EXIT_USER_ERROR = 2


def build_cache_store(config: Settings) -> CacheStore:
    """Create the cache store named by config.cache_backend."""
    if config.cache_backend == "file":
        return FileCacheStore(config.cache_dir, ttl_seconds=config.cache_ttl_seconds)
    return InMemoryCacheStore(ttl_seconds=config.cache_ttl_seconds)


def build_exchange_service(
    config: Optional[Settings] = None,
    store: Optional[CacheStore] = None,
) -> ExchangeService:
    """
    Wire an ExchangeService from settings.
    
    Args:
        config: Settings to use (defaults to the global settings)
        store: Optional cache store overriding config.cache_backend
        
    Returns:
        Ready-to-use ExchangeService
    """
    config = config or default_settings
    fetcher = CbrRateFetcher(
        base_url=config.cbr_url,
        timeout=config.http_timeout_seconds,
        attempts=config.fetch_attempts,
    )
    gateway = RateCacheGateway(store or build_cache_store(config), prefix=config.cache_prefix)
    return ExchangeService(source=fetcher, cache=gateway, calculator=CourseCalculator())


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cbrate",
        description="Course of one currency in another on a date, with change versus the day before.",
    )
    parser.add_argument("target", nargs="?", help="ISO code of the priced currency, e.g. USD")
    parser.add_argument("base", nargs="?", help="ISO code of the base currency, e.g. RUB")
    parser.add_argument("date", nargs="?", help="Date in YYYY-MM-DD format")
    parser.add_argument("--list", action="store_true", help="List supported currency codes")
    parser.add_argument("--decimals", type=_non_negative_int, default=4, help="Decimal places to print (default: 4)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the command line.
    
    Returns:
        Process exit code (0 ok, 1 internal error, 2 user error)
    """
    parser = _parser()
    args = parser.parse_args(argv)
    
    setup_logging(
        level=default_settings.log_level,
        log_file=default_settings.log_file,
        log_dir=default_settings.log_dir,
        log_stdout=default_settings.log_stdout,
        max_bytes=default_settings.log_max_bytes,
        backup_count=default_settings.log_backup_count,
    )
    
    service = build_exchange_service()
    
    if args.list:
        print(format_currencies(service.get_currencies()))
        return 0
    
    if not (args.target and args.base and args.date):
        parser.print_usage(sys.stderr)
        return EXIT_USER_ERROR
    
    try:
        result = service.get_course_on_date(args.target, args.base, args.date)
    except ExternalError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USER_ERROR
    except InternalError as e:
        log.error("Failed to get course: %s", e, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    
    print(format_comparison(args.target.strip().upper(), args.base.strip().upper(), result, args.decimals))
    return 0
