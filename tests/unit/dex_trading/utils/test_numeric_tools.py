from decimal import Decimal

import pytest

from dex_trading.utils.numeric_tools import as_decimal, count_fraction_digits, is_numeric_input, parse_decimal_input, round_for_display


def test_as_decimal_avoids_float_noise():
    assert as_decimal(0.1) == Decimal("0.1")
    assert as_decimal(Decimal("2")) == Decimal("2")


@pytest.mark.parametrize("text", ["", "1", "12.", ".5", "12.50", "007"])
def test_numeric_input_accepted(text):
    assert is_numeric_input(text)


@pytest.mark.parametrize("text", ["-1", "1e5", "1.2.3", "abc", " 1", "."])
def test_non_numeric_input_rejected(text):
    assert not is_numeric_input(text)


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "NaN", "Infinity", True])
def test_parse_decimal_input_returns_none(value):
    assert parse_decimal_input(value) is None


def test_parse_decimal_input_parses_numbers():
    assert parse_decimal_input(" 1.50 ") == Decimal("1.5")
    assert parse_decimal_input(3) == Decimal("3")
    assert parse_decimal_input("12.") == Decimal("12")


@pytest.mark.parametrize(
    "value, digits",
    [("1.234", 3), ("1.230", 2), ("100", 0), ("0", 0), ("0.0001", 4), ("1E-3", 3)],
)
def test_count_fraction_digits(value, digits):
    assert count_fraction_digits(Decimal(value)) == digits


def test_count_fraction_digits_rejects_nan():
    with pytest.raises(ValueError):
        count_fraction_digits(Decimal("NaN"))


def test_round_for_display():
    assert round_for_display(Decimal("1.23456")) == Decimal("1.2346")
    assert str(round_for_display(Decimal("68"))) == "68.0000"
