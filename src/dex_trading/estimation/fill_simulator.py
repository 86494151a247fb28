from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_DOWN, localcontext
from typing import Sequence

from dex_trading.domain.market import Market
from dex_trading.domain.market_data.order_book.order_book import CounterOrder, OrderBook
from dex_trading.domain.order.order_enums import MatchStatus, OrderSide
from dex_trading.domain.order.order_request import OrderRequest
from dex_trading.utils.numeric_tools import DecimalLike, as_decimal, round_for_display

logger = logging.getLogger(__name__)

# Significant digits used while accumulating fills; wide enough for 18-decimal assets at large sizes
ACCUMULATION_PRECISION = 34

ZERO = Decimal("0")


@dataclass(frozen=True)
class FillEstimate:
    """Expected result of an order against the current book.

    Attributes:
        estimated_returns: Amount of $asset_exchanged the trader can expect to receive.
        amount_yet_to_be_sold: Unmatched part of the order in source-asset units ($asset_exchanged_against).
            Never negative; zero exactly when $status is FULL_MATCH.
        status: FULL_MATCH, PARTIAL_MATCH or NO_MATCH.
        asset_exchanged: Display symbol of the asset received.
        asset_exchanged_against: Display symbol of the asset given up.
    """

    estimated_returns: Decimal
    amount_yet_to_be_sold: Decimal
    status: MatchStatus
    asset_exchanged: str = ""
    asset_exchanged_against: str = ""

    def rounded(self, quantum: Decimal = Decimal("0.0001")) -> FillEstimate:
        """Return a copy with amounts rounded for display. Never feed the result back into estimation."""
        return replace(
            self,
            estimated_returns=round_for_display(self.estimated_returns, quantum),
            amount_yet_to_be_sold=round_for_display(self.amount_yet_to_be_sold, quantum),
        )


# region Main


def estimate(
    amount: DecimalLike,
    price: DecimalLike | None,
    counter_orders: Sequence[CounterOrder],
    is_market_order: bool,
    side: OrderSide,
    *,
    asset_exchanged: str = "",
    asset_exchanged_against: str = "",
    quantum: Decimal | None = None,
) -> FillEstimate:
    """Estimate what an order receives by walking $counter_orders best-first.

    This is a greedy, single-pass walk over one snapshot. It does not model queue position or
    fees, and it does not match anything: the DEX matches remotely.

    Units:
        - ASK (seller): $amount is in base units. Each level fills `min(remaining, size)` base units
          and yields `fill * price` quote units.
        - BID (buyer): $amount is in quote units. Each level can absorb `size * price` quote units
          and yields `fill / price` base units.

    Limit mode stops at the first level whose price is no longer acceptable. A seller accepts bids
    at or above $price; a buyer accepts asks at or below $price. Both bounds are inclusive. A limit
    order without a price accepts nothing. Market mode walks the whole book.

    Args:
        amount: Amount of the source asset to give up.
        price: Limit price (quote per base); ignored in market mode.
        counter_orders: Opposing levels, best-first (bids for ASK, asks for BID).
        is_market_order: True for market mode, False for limit mode.
        side: Side of the order being estimated.
        asset_exchanged: Display symbol of the asset received, copied into the result.
        asset_exchanged_against: Display symbol of the asset given up, copied into the result.
        quantum: Optional smallest unit of the received asset; each level's contribution is
            truncated to it so the estimate never promises fractions the chain cannot pay.

    Returns:
        `FillEstimate` with unrounded amounts.
    """
    amount = as_decimal(amount)
    limit_price = None if price is None else as_decimal(price)

    def result(returns: Decimal, remaining: Decimal, status: MatchStatus) -> FillEstimate:
        return FillEstimate(
            estimated_returns=returns,
            amount_yet_to_be_sold=remaining,
            status=status,
            asset_exchanged=asset_exchanged,
            asset_exchanged_against=asset_exchanged_against,
        )

    # Return early if there is nothing to fill or no depth
    if amount <= 0 or not counter_orders:
        return result(ZERO, max(amount, ZERO), MatchStatus.NO_MATCH)

    is_seller = side is OrderSide.ASK

    def is_price_acceptable(level: CounterOrder) -> bool:
        if is_market_order:
            return True
        if limit_price is None:
            return False
        return level.price >= limit_price if is_seller else level.price <= limit_price

    remaining = amount
    proceeds = ZERO

    with localcontext() as ctx:
        ctx.prec = ACCUMULATION_PRECISION

        # Iterate over levels from best to worst
        for level in counter_orders:
            # Stop once the full $amount is matched
            if remaining == 0:
                break

            # Levels are sorted, so the first unacceptable price ends the walk
            if not is_price_acceptable(level):
                break

            if is_seller:
                fill = min(remaining, level.remaining_size)
                contribution = fill * level.price
            else:
                fill = min(remaining, level.quote_value)
                contribution = fill / level.price

            if quantum is not None:
                contribution = contribution.quantize(quantum, rounding=ROUND_DOWN)

            proceeds += contribution
            remaining -= fill

    if remaining == 0:
        status = MatchStatus.FULL_MATCH
    elif proceeds == 0 and remaining == amount:
        status = MatchStatus.NO_MATCH
    else:
        status = MatchStatus.PARTIAL_MATCH

    return result(proceeds, remaining, status)


def estimate_best_returns_for_seller(
    amount: DecimalLike,
    price: DecimalLike | None,
    bids: Sequence[CounterOrder],
    is_market_order: bool,
) -> FillEstimate:
    """Estimate quote proceeds of selling $amount base units into $bids."""
    return estimate(amount, price, bids, is_market_order, OrderSide.ASK)


def estimate_best_returns_for_buyer(
    amount: DecimalLike,
    price: DecimalLike | None,
    asks: Sequence[CounterOrder],
    is_market_order: bool,
) -> FillEstimate:
    """Estimate base proceeds of spending $amount quote units against $asks."""
    return estimate(amount, price, asks, is_market_order, OrderSide.BID)


def estimate_returns(order_book: OrderBook, request: OrderRequest, market: Market) -> FillEstimate:
    """Estimate $request against $order_book the way the order form shows it while the user types.

    Raw input that is not a number is treated leniently: an unparseable amount estimates as 0
    and an unparseable price as no price. Asset symbols come from $market.
    """
    amount = request.parsed_amount
    if amount is None:
        amount = ZERO

    target = market.target_asset(request.side)
    source = market.source_asset(request.side)

    estimate_result = estimate(
        amount,
        request.parsed_price,
        order_book.counter_orders_for(request.side),
        request.is_market_order,
        request.side,
        asset_exchanged=target.display_symbol,
        asset_exchanged_against=source.display_symbol,
        quantum=target.smallest_unit,
    )
    logger.debug(f"Estimated {request.side.value} {request.mode.value} order of {amount} {source.display_symbol} on market '{market.name}': {estimate_result.status.name}")
    return estimate_result


# endregion
