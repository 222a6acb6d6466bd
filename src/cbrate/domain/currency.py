# src/cbrate/domain/currency.py
"""
Currency Catalog - Supported ISO Currency Codes

Closed catalog of the currencies quoted by the CBR daily rates feed plus the
local base currency (RUB) in which every other currency is quoted.

Files that USE this module:
- cbrate.domain.models (CurrencyRate holds a Currency)
- cbrate.adapters.providers.cbr (maps CharCode values onto the catalog)
- cbrate.application.course_calculator (pivot currency)
- cbrate.application.exchange_service (validates user input)

Files that this module USES:
- cbrate.domain.errors (InvalidCurrencyCode)
"""
from __future__ import annotations

from enum import Enum
from typing import FrozenSet

from cbrate.domain.errors import InvalidCurrencyCode


class Currency(str, Enum):
    """ISO 4217 codes known to the service."""

    RUB = "RUB"
    AED = "AED"
    AMD = "AMD"
    AUD = "AUD"
    AZN = "AZN"
    BDT = "BDT"
    BGN = "BGN"
    BHD = "BHD"
    BOB = "BOB"
    BRL = "BRL"
    BYN = "BYN"
    CAD = "CAD"
    CHF = "CHF"
    CNY = "CNY"
    CUP = "CUP"
    CZK = "CZK"
    DKK = "DKK"
    DZD = "DZD"
    EGP = "EGP"
    ETB = "ETB"
    EUR = "EUR"
    GBP = "GBP"
    GEL = "GEL"
    HKD = "HKD"
    HUF = "HUF"
    IDR = "IDR"
    INR = "INR"
    IRR = "IRR"
    JPY = "JPY"
    KGS = "KGS"
    KRW = "KRW"
    KZT = "KZT"
    MDL = "MDL"
    MMK = "MMK"
    MNT = "MNT"
    NGN = "NGN"
    NOK = "NOK"
    NZD = "NZD"
    OMR = "OMR"
    PLN = "PLN"
    QAR = "QAR"
    RON = "RON"
    RSD = "RSD"
    SAR = "SAR"
    SEK = "SEK"
    SGD = "SGD"
    THB = "THB"
    TJS = "TJS"
    TMT = "TMT"
    TRY = "TRY"
    UAH = "UAH"
    USD = "USD"
    UZS = "UZS"
    VND = "VND"
    XDR = "XDR"
    ZAR = "ZAR"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def local(cls) -> "Currency":
        """Currency in which the source quotes every other currency."""
        return cls.RUB


_CATALOG = {c.value: c for c in Currency}


def code_for(value: str) -> Currency:
    """
    Resolve a user- or source-supplied string to a catalog currency.

    Surrounding whitespace is ignored and the code is upper-cased before the
    lookup, so "usd" and " USD " both resolve to Currency.USD.

    Args:
        value: ISO char code

    Returns:
        Matching Currency member

    Raises:
        InvalidCurrencyCode: If the value is not a string or not in the catalog
    """
    if not isinstance(value, str):
        raise InvalidCurrencyCode(f"Incorrect ISO value - {value!r}")
    try:
        return _CATALOG[value.strip().upper()]
    except KeyError:
        raise InvalidCurrencyCode(f"Incorrect ISO value - {value}") from None


def all_codes() -> FrozenSet[Currency]:
    """Return every supported currency."""
    return frozenset(Currency)
