from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dex_trading.domain.order.order_enums import OrderMode, OrderSide
from dex_trading.utils.numeric_tools import DecimalLike, parse_decimal_input


@dataclass(frozen=True)
class OrderRequest:
    """An order as the user entered it, before validation.

    $amount and $price keep the raw input (text from the form, or a number) so that validation can
    report non-numeric values. $amount is in source-asset units: base for ASK, quote for BID.
    $price is only meaningful in LIMIT mode.
    """

    side: OrderSide
    mode: OrderMode
    amount: DecimalLike | None
    price: DecimalLike | None = None

    @property
    def is_market_order(self) -> bool:
        return self.mode is OrderMode.MARKET

    @property
    def parsed_amount(self) -> Decimal | None:
        """Return $amount as Decimal, or None if it is not a number."""
        return parse_decimal_input(self.amount)

    @property
    def parsed_price(self) -> Decimal | None:
        """Return $price as Decimal, or None if it is missing or not a number."""
        return parse_decimal_input(self.price)
