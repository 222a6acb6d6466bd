# src/cbrate/adapters/providers/cbr.py
"""
CBR Daily Rates Provider

This module implements the client for the Central Bank of Russia daily rates
endpoint (XML_daily.asp). One request returns the RUB price of every quoted
currency for the date given in the `date_req` query parameter:

    <ValCurs Date="01.06.2023" name="Foreign Currency Market">
      <Valute ID="R01235">
        <CharCode>USD</CharCode>
        <Nominal>1</Nominal>
        <Value>80,9631</Value>
      </Valute>
      ...
    </ValCurs>

Requests are retried a fixed number of times without backoff. Any non-200
answer is retried too; the last answer decides the outcome.

Files that USE this module:
- cbrate.app (build_exchange_service creates CbrRateFetcher)
- tests.test_cbr_fetcher (unit tests)

Files that this module USES:
- cbrate.config (settings for URL, timeout and attempt count)
- cbrate.domain (catalog, models and errors)
"""
from __future__ import annotations

import logging
import re
from datetime import date
from decimal import Decimal
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from cbrate.adapters.providers.base import RateSource
from cbrate.config import settings
from cbrate.domain.currency import code_for
from cbrate.domain.errors import InvalidCurrencyCode, SourceDataInvalid, SourceUnavailable
from cbrate.domain.models import CurrencyRate, RateSnapshot

log = logging.getLogger(__name__)

_CHAR_CODE = re.compile(r"[A-Z]{3}")


class CbrRateFetcher(RateSource):
    """
    Fetches the daily rate set published by CBR for one date.

    The HTTP session is injectable so callers can share connection pools or
    substitute a stub in tests.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        attempts: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize CBR provider.

        Args:
            base_url: Optional endpoint URL (defaults to settings.cbr_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            attempts: Optional attempt budget (defaults to settings.fetch_attempts)
            session: Optional requests session used as transport

        Raises:
            ValueError: If the timeout or the attempt budget is not positive
        """
        self.url = base_url or settings.cbr_url
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        self.attempts = attempts if attempts is not None else settings.fetch_attempts
        if self.attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.session = session or requests.Session()

    def fetch(self, trade_date: date) -> RateSnapshot:
        """
        Fetch all rates published for a date.

        Args:
            trade_date: Calendar date to request

        Returns:
            RateSnapshot dated trade_date

        Raises:
            SourceUnavailable: Transport failure on the last attempt or a final non-200 answer
            SourceDataInvalid: Empty or malformed payload
        """
        params = {"date_req": trade_date.strftime("%d/%m/%Y")}
        response = self._request(params)
        rates = self._parse(response.content, trade_date)
        try:
            snapshot = RateSnapshot(trade_date=trade_date, rates=tuple(rates))
        except ValueError as e:
            raise SourceDataInvalid(f"Invalid currency set from CBR: {e}") from e
        log.info("Fetched %d CBR rates for %s", len(snapshot.rates), trade_date.isoformat())
        return snapshot

    def _request(self, params: dict) -> requests.Response:
        """
        Send the request, retrying transport errors and non-200 answers.

        Returns:
            The 200 response
        """
        response = None
        for attempt in range(1, self.attempts + 1):
            try:
                log.debug("CBR request attempt %d/%d: %s %s", attempt, self.attempts, self.url, params)
                response = self.session.get(self.url, params=params, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                if attempt == self.attempts:
                    log.error("CBR request failed after %d attempts: %s", self.attempts, e)
                    raise SourceUnavailable(
                        f"CBR request failed after {self.attempts} attempts: {e}"
                    ) from e
                log.warning("CBR request attempt %d/%d failed: %s", attempt, self.attempts, e)
                continue

            if response.status_code == 200:
                break
            log.warning(
                "CBR answered %s on attempt %d/%d", response.status_code, attempt, self.attempts
            )

        if response.status_code != 200:
            log.error("CBR kept answering non-200, last code %s", response.status_code)
            raise SourceUnavailable(f"Non 200 response from CBR: code {response.status_code}")
        return response

    def _parse(self, content: bytes, trade_date: date) -> List[CurrencyRate]:
        """
        Parse the ValCurs XML document into currency rates.

        Currencies outside the catalog are skipped; anything malformed fails
        the whole payload.
        """
        if not content or not content.strip():
            raise SourceDataInvalid("Empty response from CBR")

        soup = BeautifulSoup(content, "xml")

        root = soup.find("ValCurs")
        published = root.get("Date") if root is not None else None
        if published and published != trade_date.strftime("%d.%m.%Y"):
            log.debug("CBR published rates dated %s for request %s", published, trade_date.isoformat())

        rates: List[CurrencyRate] = []
        for entry in soup.find_all("Valute"):
            rate = self._parse_entry(entry)
            if rate is not None:
                rates.append(rate)

        if not rates:
            raise SourceDataInvalid("Empty currency set from CBR")
        return rates

    @staticmethod
    def _field(entry, name: str) -> str:
        node = entry.find(name)
        if node is None or not node.get_text(strip=True):
            raise SourceDataInvalid(f"CBR entry {entry.get('ID', '?')} has no {name}")
        return node.get_text(strip=True)

    def _parse_entry(self, entry) -> Optional[CurrencyRate]:
        char_code = self._field(entry, "CharCode")
        if not _CHAR_CODE.fullmatch(char_code):
            raise SourceDataInvalid(f"Malformed currency code from CBR: {char_code!r}")
        try:
            currency = code_for(char_code)
        except InvalidCurrencyCode:
            log.warning("Skipping CBR currency outside catalog: %s", char_code)
            return None

        try:
            nominal = int(self._field(entry, "Nominal"))
            # CBR uses a comma as the decimal separator
            value = Decimal(self._field(entry, "Value").replace(",", "."))
            if not value.is_finite():
                raise ValueError(f"non-finite value {value}")
            return CurrencyRate(currency=currency, nominal=nominal, value=value)
        except (ValueError, ArithmeticError) as e:
            raise SourceDataInvalid(f"Malformed CBR rate for {char_code}: {e}") from e
