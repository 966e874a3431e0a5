from decimal import Decimal

import pytest

from chatter_earnings.config import DEFAULT_SETTINGS, WELCOME_PRICE_POINTS, load_settings


def test_defaults_when_environment_is_empty():
    s = load_settings({})
    assert s == DEFAULT_SETTINGS
    assert s.business_timezone == "America/New_York"
    assert s.source_timezone is None
    assert s.welcome_prices == WELCOME_PRICE_POINTS
    assert s.default_currency == "$"


def test_overrides_from_environment():
    s = load_settings(
        {
            "CHATTER_EARNINGS_TIMEZONE": "Europe/London",
            "CHATTER_EARNINGS_SOURCE_TIMEZONE": "UTC",
            "CHATTER_EARNINGS_WELCOME_PRICES": "$10, 9.99,",
            "CHATTER_EARNINGS_DEFAULT_CURRENCY": "€",
        }
    )
    assert s.business_timezone == "Europe/London"
    assert s.source_timezone == "UTC"
    assert s.welcome_prices == frozenset({Decimal("10"), Decimal("9.99")})
    assert s.default_currency == "€"


def test_blank_values_keep_defaults():
    assert load_settings({"CHATTER_EARNINGS_TIMEZONE": "  "}) == DEFAULT_SETTINGS


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CHATTER_EARNINGS_SOURCE_TIMEZONE", "UTC")
    assert load_settings().source_timezone == "UTC"


@pytest.mark.parametrize(
    "name, value",
    [
        ("CHATTER_EARNINGS_TIMEZONE", "Mars/Olympus_Mons"),
        ("CHATTER_EARNINGS_SOURCE_TIMEZONE", "Nowhere/Else"),
        ("CHATTER_EARNINGS_WELCOME_PRICES", "15,abc"),
        ("CHATTER_EARNINGS_WELCOME_PRICES", "-5"),
        ("CHATTER_EARNINGS_DEFAULT_CURRENCY", "¥"),
        ("CHATTER_EARNINGS_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_name_the_variable(name, value):
    with pytest.raises(ValueError, match=name):
        load_settings({name: value})


def test_log_level_is_normalized():
    assert DEFAULT_SETTINGS.log_level == "INFO"
    assert load_settings({"CHATTER_EARNINGS_LOG_LEVEL": " debug "}).log_level == "DEBUG"
