from __future__ import annotations

from decimal import Decimal

import pytest

from dex_trading.domain.order.order_enums import OrderMode, OrderSide
from dex_trading.domain.order.order_request import OrderRequest
from dex_trading.validation.order_validator import ValidationContext, create_validation_context, validate
from tests.helpers.helper_market import create_lsh_lsk_market

# Constants
CONTEXT = ValidationContext(
    effective_balance=Decimal("100"),
    min_order_amount=Decimal("1"),
    price_decimal_precision=2,
    source_asset_symbol="LSH",
)


def market_request(amount) -> OrderRequest:
    return OrderRequest(OrderSide.ASK, OrderMode.MARKET, amount=amount)


def limit_request(amount, price) -> OrderRequest:
    return OrderRequest(OrderSide.ASK, OrderMode.LIMIT, amount=amount, price=price)


# region Amount


@pytest.mark.parametrize("amount", ["", "abc", None, "1.2.3"])
def test_non_numeric_amount_fails(amount):
    result = validate(market_request(amount), CONTEXT)
    assert not result.ok
    assert result.field_errors["amount"] == "The order amount must be a number."


def test_amount_above_balance_fails():
    result = validate(market_request("100.01"), CONTEXT)
    assert not result.ok
    assert result.field_errors["amount"] == "Insufficient balance!"


def test_amount_equal_to_balance_passes():
    assert validate(market_request("100"), CONTEXT).ok


def test_market_amount_below_minimum_fails():
    result = validate(market_request("0.5"), CONTEXT)
    assert not result.ok
    assert result.field_errors["amount"] == "The specified amount was less than the minimum order amount allowed by this DEX market which is 1 LSH."


def test_limit_amount_below_minimum_passes():
    result = validate(limit_request("0.5", "1.23"), CONTEXT)
    assert result.ok
    assert result.field_errors == {}


def test_balance_wins_over_minimum():
    context = ValidationContext(effective_balance=Decimal("0.2"), min_order_amount=Decimal("1"), source_asset_symbol="LSH")
    result = validate(market_request("0.5"), context)
    assert result.field_errors["amount"] == "Insufficient balance!"


# endregion

# region Price


def test_market_order_ignores_price():
    request = OrderRequest(OrderSide.ASK, OrderMode.MARKET, amount="5", price="not a number")
    assert validate(request, CONTEXT).ok


@pytest.mark.parametrize("price", ["", None, "x"])
def test_non_numeric_price_fails(price):
    result = validate(limit_request("5", price), CONTEXT)
    assert result.field_errors["price"] == "The order price must be a number."
    assert "amount" not in result.field_errors


def test_zero_price_fails():
    result = validate(limit_request("5", "0"), CONTEXT)
    assert result.field_errors["price"] == "The order price cannot be 0."


def test_negative_price_fails():
    result = validate(limit_request("5", Decimal("-1")), CONTEXT)
    assert result.field_errors["price"] == "The order price must be greater than 0."


def test_price_with_too_many_decimals_fails():
    result = validate(limit_request("5", "1.234"), CONTEXT)
    assert not result.ok
    assert "2 decimal places" in result.field_errors["price"]
    assert result.field_errors["price"] == "The order price for this DEX market cannot have more than 2 decimal places."


@pytest.mark.parametrize("price", ["1.23", "1.230", "1", "100"])
def test_price_within_precision_passes(price):
    assert validate(limit_request("5", price), CONTEXT).ok


def test_precision_message_is_singular_for_one_digit():
    context = ValidationContext(effective_balance=Decimal("100"), price_decimal_precision=1)
    result = validate(limit_request("5", "1.23"), context)
    assert result.field_errors["price"] == "The order price for this DEX market cannot have more than 1 decimal place."


def test_precision_none_allows_any_digits():
    context = ValidationContext(effective_balance=Decimal("100"))
    assert validate(limit_request("5", "1.123456789"), context).ok


def test_amount_and_price_fail_independently():
    result = validate(limit_request("", "0"), CONTEXT)
    assert not result.ok
    assert result.error_for("amount") == "The order amount must be a number."
    assert result.error_for("price") == "The order price cannot be 0."


# endregion

# region Context


def test_context_for_ask_uses_base_asset():
    market = create_lsh_lsk_market()

    # 12.3456789 LSH rounds to 12.35, minus 0.1 base fee
    context = create_validation_context(market, OrderSide.ASK, 1234567890)

    assert context.effective_balance == Decimal("12.25")
    assert context.min_order_amount == Decimal("1")
    assert context.price_decimal_precision == 4
    assert context.source_asset_symbol == "LSH"


def test_context_for_bid_uses_quote_asset():
    market = create_lsh_lsk_market()

    context = create_validation_context(market, OrderSide.BID, "1000000000")

    assert context.effective_balance == Decimal("9.9")
    assert context.min_order_amount == Decimal("0.5")
    assert context.source_asset_symbol == "LSK"


def test_minimum_message_from_market_context():
    market = create_lsh_lsk_market()
    context = create_validation_context(market, OrderSide.BID, "1000000000")

    result = validate(OrderRequest(OrderSide.BID, OrderMode.MARKET, amount="0.25"), context)

    assert result.field_errors["amount"] == "The specified amount was less than the minimum order amount allowed by this DEX market which is 0.5 LSK."


# endregion
