# tests/test_cbr_fetcher.py
"""
CBR Provider Tests - Unit Tests for the Daily Rates Fetcher

This module tests request building, the retry loop and parsing of the
ValCurs XML payload. HTTP is stubbed with a Mock session; no network access.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- cbrate.adapters.providers.cbr (CbrRateFetcher to test)
- unittest.mock (Mock for session and response stubs)
- requests (exception types raised by stubs)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from datetime import date  # Requested trade dates
from decimal import Decimal  # Expected rate values
from unittest.mock import Mock  # Mock objects for testing without real HTTP calls

import requests  # HTTP library (used for exception types)

from cbrate.adapters.providers.cbr import CbrRateFetcher  # Provider to test
from cbrate.domain.currency import Currency
from cbrate.domain.errors import SourceDataInvalid, SourceUnavailable

URL = "http://www.cbr.ru/scripts/XML_daily.asp"

VALID_XML = """<?xml version="1.0" encoding="windows-1251"?>
<ValCurs Date="01.06.2023" name="Foreign Currency Market">
<Valute ID="R01235"><NumCode>840</NumCode><CharCode>USD</CharCode><Nominal>1</Nominal><Name>Доллар США</Name><Value>90,0000</Value></Valute>
<Valute ID="R01239"><NumCode>978</NumCode><CharCode>EUR</CharCode><Nominal>1</Nominal><Name>Евро</Name><Value>97,5000</Value></Valute>
<Valute ID="R01820"><NumCode>392</NumCode><CharCode>JPY</CharCode><Nominal>100</Nominal><Name>Японских иен</Name><Value>57,1234</Value></Valute>
</ValCurs>
""".encode("windows-1251")


def _response(status_code=200, content=VALID_XML):
    resp = Mock()
    resp.status_code = status_code
    resp.content = content
    return resp


def _valcurs(*valutes: str) -> bytes:
    body = "".join(valutes)
    return f'<?xml version="1.0" encoding="utf-8"?><ValCurs Date="01.06.2023">{body}</ValCurs>'.encode("utf-8")


def _fetcher(session, attempts=3):
    return CbrRateFetcher(base_url=URL, timeout=5, attempts=attempts, session=session)


class TestInit:
    def test_defaults_from_settings(self):
        fetcher = CbrRateFetcher(session=Mock())
        assert fetcher.url == URL
        assert fetcher.timeout == 10
        assert fetcher.attempts == 3

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            CbrRateFetcher(attempts=0, session=Mock())

    @pytest.mark.parametrize("timeout", [0, -5])
    def test_rejects_non_positive_timeout(self, timeout):
        with pytest.raises(ValueError, match="timeout"):
            CbrRateFetcher(timeout=timeout, session=Mock())

    def test_explicit_timeout_reaches_session(self):
        session = Mock()
        session.get.return_value = Mock(status_code=200, content=b"")
        fetcher = CbrRateFetcher(base_url=URL, timeout=1, session=session)

        with pytest.raises(SourceDataInvalid):
            fetcher.fetch(date(2023, 6, 1))

        assert session.get.call_args.kwargs["timeout"] == 1


class TestRequest:
    def test_sends_date_in_day_month_year(self):
        session = Mock()
        session.get.return_value = _response()

        _fetcher(session).fetch(date(2023, 6, 1))

        session.get.assert_called_once_with(URL, params={"date_req": "01/06/2023"}, timeout=5)

    def test_succeeds_after_two_transport_failures(self):
        session = Mock()
        session.get.side_effect = [
            requests.exceptions.ConnectionError("reset"),
            requests.exceptions.Timeout("slow"),
            _response(),
        ]

        snapshot = _fetcher(session).fetch(date(2023, 6, 1))

        assert session.get.call_count == 3
        assert snapshot.rate_for(Currency.USD).value == Decimal("90.0000")

    def test_always_failing_transport_raises_after_three_attempts(self):
        session = Mock()
        session.get.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(SourceUnavailable, match="after 3 attempts") as exc_info:
            _fetcher(session).fetch(date(2023, 6, 1))

        assert session.get.call_count == 3
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_non_200_exhausts_attempts_then_fails(self):
        session = Mock()
        session.get.return_value = _response(status_code=503, content=b"")

        with pytest.raises(SourceUnavailable, match="Non 200 response from CBR: code 503"):
            _fetcher(session).fetch(date(2023, 6, 1))

        assert session.get.call_count == 3

    def test_non_200_then_success(self):
        session = Mock()
        session.get.side_effect = [_response(status_code=500, content=b""), _response()]

        snapshot = _fetcher(session).fetch(date(2023, 6, 1))

        assert session.get.call_count == 2
        assert len(snapshot.rates) == 3

    def test_stops_after_first_success(self):
        session = Mock()
        session.get.return_value = _response()

        _fetcher(session).fetch(date(2023, 6, 1))

        assert session.get.call_count == 1

    def test_custom_attempt_budget(self):
        session = Mock()
        session.get.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(SourceUnavailable):
            _fetcher(session, attempts=5).fetch(date(2023, 6, 1))

        assert session.get.call_count == 5


class TestParse:
    def test_parses_rates_with_comma_decimal_separator(self):
        session = Mock()
        session.get.return_value = _response()

        snapshot = _fetcher(session).fetch(date(2023, 6, 1))

        assert snapshot.trade_date == date(2023, 6, 1)
        assert [r.currency for r in snapshot.rates] == [Currency.USD, Currency.EUR, Currency.JPY]
        jpy = snapshot.rate_for(Currency.JPY)
        assert jpy.nominal == 100
        assert jpy.value == Decimal("57.1234")

    def test_trade_date_is_requested_date(self):
        session = Mock()
        session.get.return_value = _response()

        snapshot = _fetcher(session).fetch(date(2023, 6, 4))

        assert snapshot.trade_date == date(2023, 6, 4)

    def test_empty_body(self):
        session = Mock()
        session.get.return_value = _response(content=b"")

        with pytest.raises(SourceDataInvalid, match="Empty response from CBR"):
            _fetcher(session).fetch(date(2023, 6, 1))

    def test_empty_entry_list(self):
        session = Mock()
        session.get.return_value = _response(content=_valcurs())

        with pytest.raises(SourceDataInvalid, match="Empty currency set from CBR"):
            _fetcher(session).fetch(date(2023, 6, 1))

    def test_not_xml_yields_empty_set(self):
        session = Mock()
        session.get.return_value = _response(content=b"<html><body>Service unavailable</body></html>")

        with pytest.raises(SourceDataInvalid):
            _fetcher(session).fetch(date(2023, 6, 1))

    def test_malformed_currency_code(self):
        session = Mock()
        session.get.return_value = _response(content=_valcurs(
            "<Valute ID='R1'><CharCode>us$</CharCode><Nominal>1</Nominal><Value>90,00</Value></Valute>"
        ))

        with pytest.raises(SourceDataInvalid, match="Malformed currency code"):
            _fetcher(session).fetch(date(2023, 6, 1))

    def test_missing_char_code(self):
        session = Mock()
        session.get.return_value = _response(content=_valcurs(
            "<Valute ID='R1'><Nominal>1</Nominal><Value>90,00</Value></Valute>"
        ))

        with pytest.raises(SourceDataInvalid, match="has no CharCode"):
            _fetcher(session).fetch(date(2023, 6, 1))

    def test_currency_outside_catalog_is_skipped(self):
        session = Mock()
        session.get.return_value = _response(content=_valcurs(
            "<Valute ID='R1'><CharCode>USD</CharCode><Nominal>1</Nominal><Value>90,00</Value></Valute>",
            "<Valute ID='R2'><CharCode>XAU</CharCode><Nominal>1</Nominal><Value>5000,00</Value></Valute>",
        ))

        snapshot = _fetcher(session).fetch(date(2023, 6, 1))

        assert [r.currency for r in snapshot.rates] == [Currency.USD]

    @pytest.mark.parametrize("nominal,value", [("one", "90,00"), ("1", "ninety"), ("0", "90,00"), ("1", "-1,00")])
    def test_malformed_numbers(self, nominal, value):
        session = Mock()
        session.get.return_value = _response(content=_valcurs(
            f"<Valute ID='R1'><CharCode>USD</CharCode><Nominal>{nominal}</Nominal><Value>{value}</Value></Valute>"
        ))

        with pytest.raises(SourceDataInvalid, match="Malformed CBR rate for USD"):
            _fetcher(session).fetch(date(2023, 6, 1))

    def test_duplicate_currency(self):
        entry = "<Valute ID='R1'><CharCode>USD</CharCode><Nominal>1</Nominal><Value>90,00</Value></Valute>"
        session = Mock()
        session.get.return_value = _response(content=_valcurs(entry, entry))

        with pytest.raises(SourceDataInvalid, match="Duplicate currency"):
            _fetcher(session).fetch(date(2023, 6, 1))
