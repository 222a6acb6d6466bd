# tests/test_app.py
"""
Application Tests - Wiring and Command Line

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- cbrate.app (build_exchange_service, build_cache_store, main)
- unittest.mock (patch for the service factory)
- pytest (testing framework, capsys and tmp_path fixtures)
"""
import pytest  # Testing framework for writing and running tests

from datetime import date  # Trade dates for stub results
from decimal import Decimal  # Course values for stub results
from unittest.mock import Mock, patch  # Patching service construction

from cbrate import app
from cbrate.adapters.persistence.cache_store import FileCacheStore, InMemoryCacheStore
from cbrate.adapters.providers.cbr import CbrRateFetcher
from cbrate.config.settings import Settings
from cbrate.domain.errors import InvalidCurrencyCode, SourceUnavailable
from cbrate.domain.models import ComparisonResult


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("cbrate.app.setup_logging"):
        yield


class TestWiring:
    def test_memory_backend(self):
        assert isinstance(app.build_cache_store(Settings(_env_file=None)), InMemoryCacheStore)

    def test_file_backend(self, tmp_path):
        config = Settings(_env_file=None, cache_backend="file", cache_dir=tmp_path / "cache")
        store = app.build_cache_store(config)
        assert isinstance(store, FileCacheStore)
        assert store.directory == tmp_path / "cache"

    def test_build_exchange_service(self):
        config = Settings(_env_file=None, fetch_attempts=2, cache_prefix="custom")
        service = app.build_exchange_service(config)
        assert isinstance(service.source, CbrRateFetcher)
        assert service.source.attempts == 2
        assert service.cache.prefix == "custom"


class TestMain:
    @patch("cbrate.app.build_exchange_service")
    def test_prints_comparison(self, mock_build, capsys):
        service = Mock()
        service.get_course_on_date.return_value = ComparisonResult(
            date(2023, 6, 1), Decimal("90.00"), date(2023, 5, 31), Decimal("0.50")
        )
        mock_build.return_value = service

        assert app.main(["usd", "RUB", "2023-06-01"]) == 0

        service.get_course_on_date.assert_called_once_with("usd", "RUB", "2023-06-01")
        assert "USD/RUB on 2023-06-01: 90.0000" in capsys.readouterr().out

    @patch("cbrate.app.build_exchange_service")
    def test_list(self, mock_build, capsys):
        mock_build.return_value.get_currencies.return_value = ["EUR", "RUB", "USD"]

        assert app.main(["--list"]) == 0
        assert capsys.readouterr().out.strip() == "EUR RUB USD"

    @patch("cbrate.app.build_exchange_service")
    def test_user_error_exit_code(self, mock_build, capsys):
        mock_build.return_value.get_course_on_date.side_effect = InvalidCurrencyCode("Incorrect ISO value - XXX")

        assert app.main(["XXX", "RUB", "2023-06-01"]) == app.EXIT_USER_ERROR
        assert "Incorrect ISO value - XXX" in capsys.readouterr().err

    @patch("cbrate.app.build_exchange_service")
    def test_internal_error_exit_code(self, mock_build):
        mock_build.return_value.get_course_on_date.side_effect = SourceUnavailable("down")

        assert app.main(["USD", "RUB", "2023-06-01"]) == app.EXIT_INTERNAL_ERROR

    @patch("cbrate.app.build_exchange_service")
    def test_missing_arguments(self, mock_build):
        assert app.main(["USD"]) == app.EXIT_USER_ERROR

    @pytest.mark.parametrize("value", ["-1", "two"])
    @patch("cbrate.app.build_exchange_service")
    def test_rejects_bad_decimals(self, mock_build, value, capsys):
        with pytest.raises(SystemExit) as exc_info:
            app.main(["USD", "RUB", "2023-06-01", "--decimals", value])

        assert exc_info.value.code == 2
        assert "--decimals" in capsys.readouterr().err
        mock_build.return_value.get_course_on_date.assert_not_called()

    @patch("cbrate.app.build_exchange_service")
    def test_zero_decimals(self, mock_build, capsys):
        mock_build.return_value.get_course_on_date.return_value = ComparisonResult(
            date(2023, 6, 1), Decimal("90.00"), date(2023, 5, 31), Decimal("0.50")
        )

        assert app.main(["USD", "RUB", "2023-06-01", "--decimals", "0"]) == 0
        assert "USD/RUB on 2023-06-01: 90\n" in capsys.readouterr().out
