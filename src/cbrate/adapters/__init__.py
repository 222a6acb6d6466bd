# src/cbrate/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (CBR rate source)
- Persistence (cache stores)
- Formatting (output)
"""

__all__ = []
