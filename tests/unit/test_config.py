"""
Unit tests for settings and logging setup.

Tests cover:
- PSX_* environment overrides
- Database URL derivation from the data directory
- Charge schedule built from settings
- Logging levels
"""

import logging
from decimal import Decimal

import pytest

from psx_portfolio.config.logging_config import setup_logging
from psx_portfolio.config.settings import Settings, get_settings, reset_settings, set_settings
from psx_portfolio.domain.models import InvestedAmountPolicy
from psx_portfolio.services import ChargeSchedule, DEFAULT_SCHEDULE


@pytest.fixture(autouse=True)
def fresh_settings():
    loggers = [logging.getLogger("psx_portfolio"), logging.getLogger("sqlalchemy.engine")]
    levels = [lg.level for lg in loggers]
    reset_settings()
    yield
    reset_settings()
    for lg, level in zip(loggers, levels):
        lg.setLevel(level)


class TestSettings:
    """Tests for Settings."""

    def test_defaults_match_default_schedule(self):
        assert ChargeSchedule.from_settings(Settings()) == DEFAULT_SCHEDULE
        assert Settings().invested_amount_policy == InvestedAmountPolicy.RETAIN

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PSX_INVESTED_AMOUNT_POLICY", "REDUCE")
        monkeypatch.setenv("PSX_COMMISSION_THRESHOLD", "50")
        monkeypatch.setenv("PSX_MAX_PAGE_SIZE", "100")

        settings = get_settings()

        assert settings.invested_amount_policy == InvestedAmountPolicy.REDUCE
        assert settings.max_page_size == 100
        assert ChargeSchedule.from_settings(settings).commission_threshold == Decimal("50")

    def test_database_url_derived_from_data_dir(self, tmp_path):
        settings = Settings(data_dir=tmp_path / "ledger")

        assert settings.get_database_url() == f"sqlite:///{tmp_path / 'ledger' / 'portfolio.db'}"
        assert (tmp_path / "ledger").is_dir()

    def test_explicit_database_url_wins(self, tmp_path):
        settings = Settings(data_dir=tmp_path, database_url="sqlite:///:memory:")
        assert settings.get_database_url() == "sqlite:///:memory:"

    def test_set_settings_replaces_instance(self):
        custom = Settings(log_level="DEBUG")
        set_settings(custom)
        assert get_settings() is custom


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_from_settings(self):
        set_settings(Settings(log_level="warning"))

        setup_logging()

        assert logging.getLogger("psx_portfolio").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_debug_enables_sql_logging(self):
        setup_logging("debug")

        assert logging.getLogger("psx_portfolio").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
