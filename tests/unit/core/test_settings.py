"""
Unit Tests for application settings
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from erp_core.config.settings import Settings, get_settings, reset_settings

SETTINGS_ENV = (
    "DEFAULT_CURRENCY",
    "DEFAULT_TAX_RATE",
    "DEFAULT_PAYMENT_TERMS",
    "DEFAULT_CREDIT_LIMIT",
    "LARGE_ORDER_THRESHOLD",
    "MAX_CATEGORY_DEPTH",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
    "ENVIRONMENT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestSettings:
    """Defaults, environment overrides and validation."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.DEFAULT_CURRENCY == "USD"
        assert settings.DEFAULT_TAX_RATE == Decimal("0")
        assert settings.DEFAULT_PAYMENT_TERMS == "NET30"
        assert settings.LARGE_ORDER_THRESHOLD == Decimal("10000")
        assert settings.MAX_CATEGORY_DEPTH == 5
        assert settings.LOG_LEVEL == "INFO"
        assert not settings.is_production

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("DEFAULT_TAX_RATE", "7.5")
        clean_env.setenv("LARGE_ORDER_THRESHOLD", "2500")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.DEFAULT_TAX_RATE == Decimal("7.5")
        assert settings.LARGE_ORDER_THRESHOLD == Decimal("2500")
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.is_production

    def test_payment_terms_are_normalized(self, clean_env):
        assert Settings(_env_file=None, DEFAULT_PAYMENT_TERMS="net45").DEFAULT_PAYMENT_TERMS == "NET45"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("DEFAULT_CURRENCY", "usd"),
            ("DEFAULT_CURRENCY", "US"),
            ("DEFAULT_TAX_RATE", "101"),
            ("DEFAULT_PAYMENT_TERMS", "COD"),
            ("LOG_LEVEL", "VERBOSE"),
            ("LOG_FORMAT", "xml"),
            ("DEFAULT_CREDIT_LIMIT", "-1"),
            ("MAX_CATEGORY_DEPTH", 0),
        ],
    )
    def test_invalid_values_are_rejected(self, clean_env, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_get_settings_is_cached_until_reset(self, clean_env):
        first = get_settings()

        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first
