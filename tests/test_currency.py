from decimal import Decimal

import pytest

from chatter_earnings.currency import (
    detect_currency,
    format_amount,
    has_numeric_token,
    is_whole_amount,
    parse_currency,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$14.99", Decimal("14.99")),
        ("£1,234.50", Decimal("1234.50")),
        ("€ 3", Decimal("3")),
        ("  $ 1 000.25 ", Decimal("1000.25")),
        ("12abc", Decimal("12")),
    ],
)
def test_parse_currency_strips_symbols_and_separators(raw, expected):
    assert parse_currency(raw) == expected


@pytest.mark.parametrize("raw", ["", "$", "abc", "--", None])
def test_parse_currency_returns_zero_instead_of_raising(raw):
    assert parse_currency(raw) == 0


def test_detect_currency_uses_first_symbol_in_batch():
    text = "no symbols here\nOct 8, 2025 1:00 pm £5.00 £4.00 Tip from A\n€3 later"
    assert detect_currency(text) == "£"


def test_detect_currency_falls_back_to_default():
    assert detect_currency("Oct 8, 2025 1:00 pm 5.00 4.00 Tip") == "$"
    assert detect_currency("", default="€") == "€"


def test_has_numeric_token():
    assert has_numeric_token("$5")
    assert has_numeric_token("ref 12")
    assert not has_numeric_token("just a wrapped description")
    assert not has_numeric_token("-----")


def test_is_whole_amount():
    assert is_whole_amount(Decimal("25"))
    assert is_whole_amount(Decimal("25.00"))
    assert not is_whole_amount(Decimal("11.99"))
    assert not is_whole_amount(Decimal("50.01"))


def test_format_amount_two_decimals_half_up():
    assert format_amount(Decimal("14.995"), "$") == "$15.00"
    assert format_amount(Decimal("3"), "€") == "€3.00"


def test_amounts_too_long_to_round_to_cents_read_as_zero():
    assert parse_currency("$" + "1" * 26) == Decimal("1" * 26)
    assert parse_currency("$" + "1" * 27) == 0
    assert parse_currency("1" * 30 + ".50") == 0
