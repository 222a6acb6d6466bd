# src/cbrate/__init__.py
"""
cbrate - Daily CBR Exchange Rates

Fetches daily currency rates published by the Central Bank of Russia,
converts between any two supported currencies on a given date and reports
the change versus the previous day. Fetched rate sets are cached per date.
"""

__version__ = "1.0.0"
