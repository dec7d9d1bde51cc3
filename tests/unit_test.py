"""Unit tests that do not require a running API or external services."""
from decimal import Decimal

from app.config import settings


def test_settings_load():
    """Settings load from environment (e.g. CI env vars)."""
    assert settings.API_V1_PREFIX == "/api/v1"
    assert settings.APP_NAME == "CarePoint HMS Backend"


def test_environment_flag():
    """Environment flags reflect ENVIRONMENT value."""
    assert settings.ENVIRONMENT.lower() in ("development", "test", "production")
    assert settings.is_development == (settings.ENVIRONMENT.lower() == "development")
    assert settings.is_production == (settings.ENVIRONMENT.lower() == "production")


def test_ledger_settings():
    assert Decimal(settings.CURRENCY_QUANTUM) == Decimal("0.01")
    assert settings.CODE_RANDOM_LENGTH > 0
    assert settings.BILL_SEARCH_LIMIT == 50
