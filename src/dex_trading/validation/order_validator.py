from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP

from dex_trading.domain.market import Market
from dex_trading.domain.order.order_enums import OrderMode, OrderSide
from dex_trading.domain.order.order_request import OrderRequest
from dex_trading.utils.numeric_tools import DecimalLike, as_decimal, count_fraction_digits

logger = logging.getLogger(__name__)

AMOUNT_FIELD = "amount"
PRICE_FIELD = "price"

# Wallet balances are shown and checked with 2 fractional digits
BALANCE_QUANTUM = Decimal("0.01")


@dataclass(frozen=True)
class ValidationContext:
    """Market constraints an order is checked against.

    Attributes:
        effective_balance: Balance of the source asset net of the base fee, in whole units.
        min_order_amount: Smallest market order the DEX accepts, in whole source-asset units.
        price_decimal_precision: Max fractional digits of a limit price; None means unlimited.
        source_asset_symbol: Display symbol of the source asset, used in messages.
    """

    effective_balance: Decimal
    min_order_amount: Decimal = Decimal("0")
    price_decimal_precision: int | None = None
    source_asset_symbol: str = ""


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation attempt. $field_errors maps field name to message."""

    ok: bool
    field_errors: dict[str, str] = field(default_factory=dict)

    def error_for(self, field_name: str) -> str | None:
        return self.field_errors.get(field_name)


# region Main


def validate(request: OrderRequest, context: ValidationContext) -> ValidationResult:
    """Check $request against $context.

    Amount and price are checked independently; within each field the first failing rule wins.

    Amount:
        1. must be a number
        2. must not exceed the effective balance
        3. market mode only: must not be below the minimum order amount
    Price (limit mode only):
        1. must be a number
        2. must not be 0
        3. must be positive
        4. must not have more fractional digits than the market allows

    Returns:
        `ValidationResult` with `ok=True` only when no field has an error. Never raises for
        business conditions such as insufficient balance.
    """
    errors: dict[str, str] = {}

    amount_error = _check_amount(request, context)
    if amount_error is not None:
        errors[AMOUNT_FIELD] = amount_error

    if request.mode is OrderMode.LIMIT:
        price_error = _check_price(request, context)
        if price_error is not None:
            errors[PRICE_FIELD] = price_error

    if errors:
        logger.debug(f"Order validation failed for {request.side.value} {request.mode.value} order: {errors}")
    return ValidationResult(ok=not errors, field_errors=errors)


def create_validation_context(market: Market, side: OrderSide, balance_in_units: DecimalLike) -> ValidationContext:
    """Derive the `ValidationContext` for an order on $side of $market.

    Args:
        market: Market the order is placed on.
        side: Side of the order; decides which asset is given up.
        balance_in_units: Wallet balance of the source asset in its smallest units.

    Returns:
        Context with the balance rounded to 2 decimals and reduced by the market's base fee.
    """
    source = market.source_asset(side)
    balance = source.from_units(as_decimal(balance_in_units)).quantize(BALANCE_QUANTUM, rounding=ROUND_HALF_UP)

    return ValidationContext(
        effective_balance=balance - market.base_fee(source),
        min_order_amount=market.min_order_amount(source),
        price_decimal_precision=market.price_decimal_precision,
        source_asset_symbol=source.display_symbol,
    )


# endregion

# region Rules


def _check_amount(request: OrderRequest, context: ValidationContext) -> str | None:
    amount = request.parsed_amount
    if amount is None:
        return "The order amount must be a number."

    if amount > context.effective_balance:
        return "Insufficient balance!"

    if request.mode is OrderMode.MARKET and amount < context.min_order_amount:
        return f"The specified amount was less than the minimum order amount allowed by this DEX market which is {context.min_order_amount.normalize():f} {context.source_asset_symbol}."

    return None


def _check_price(request: OrderRequest, context: ValidationContext) -> str | None:
    price = request.parsed_price
    if price is None:
        return "The order price must be a number."

    if price == 0:
        return "The order price cannot be 0."

    if price < 0:
        return "The order price must be greater than 0."

    precision = context.price_decimal_precision
    if precision is not None and count_fraction_digits(price) > precision:
        plural = "" if precision == 1 else "s"
        return f"The order price for this DEX market cannot have more than {precision} decimal place{plural}."

    return None


# endregion
