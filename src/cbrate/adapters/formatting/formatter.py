# src/cbrate/adapters/formatting/formatter.py
"""
Result Formatter - Text Presentation

This module renders service results as plain text for the command line.
Precision is decided here, never in the calculator.

Files that USE this module:
- cbrate.app (prints results)
- tests.test_formatter (unit tests)

Files that this module USES:
- cbrate.domain.models (ComparisonResult)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from cbrate.domain.models import ComparisonResult


def _direction(delta: Decimal) -> str:
    if delta > 0:
        return "▲"
    if delta < 0:
        return "▼"
    return "="


def format_comparison(target: str, base: str, result: ComparisonResult, decimals: int = 4) -> str:
    """
    Format a comparison result as two text lines.
    
    Args:
        target: Priced currency code
        base: Currency code the price is expressed in
        result: ComparisonResult to format
        decimals: Number of decimal places (default: 4)
        
    Returns:
        e.g. "USD/RUB on 2023-06-01: 90.0000\\n▲ +0.5000 vs 2023-05-31"
    """
    return (
        f"{target}/{base} on {result.trade_date.isoformat()}: {result.course:.{decimals}f}\n"
        f"{_direction(result.delta)} {result.delta:+.{decimals}f} "
        f"vs {result.previous_trade_date.isoformat()}"
    )


def format_currencies(codes: Iterable[str], per_line: int = 10) -> str:
    """Format currency codes as space-separated rows."""
    codes = list(codes)
    rows = [" ".join(codes[i:i + per_line]) for i in range(0, len(codes), per_line)]
    return "\n".join(rows)
