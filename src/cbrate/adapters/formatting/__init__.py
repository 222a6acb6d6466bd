# src/cbrate/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Formatting

This package contains plain text formatters for service results.
"""

from cbrate.adapters.formatting.formatter import format_comparison, format_currencies

__all__ = [
    "format_comparison",
    "format_currencies",
]
