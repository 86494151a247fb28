from __future__ import annotations

from decimal import Decimal

import pytest

from dex_trading.domain.market_data.order_book.order_book import CounterOrder, OrderBook
from dex_trading.domain.order.order_enums import MatchStatus, OrderMode, OrderSide
from dex_trading.domain.order.order_request import OrderRequest
from dex_trading.estimation.fill_simulator import (
    estimate,
    estimate_best_returns_for_buyer,
    estimate_best_returns_for_seller,
    estimate_returns,
)
from tests.helpers.helper_market import create_lsh_lsk_market

BIDS = (CounterOrder(Decimal("10"), Decimal("5")), CounterOrder(Decimal("9"), Decimal("10")))
ASKS = (CounterOrder(Decimal("2"), Decimal("10")), CounterOrder(Decimal("4"), Decimal("5")))


class TestSellerEstimate:
    """Seller gives up base units and walks bids highest first."""

    def test_limit_order_walks_two_levels(self):
        """Selling 7 at limit 9 takes 5@10 and 2@9 -> 68."""
        result = estimate_best_returns_for_seller(Decimal("7"), Decimal("9"), BIDS, is_market_order=False)
        assert result.estimated_returns == Decimal("68")
        assert result.amount_yet_to_be_sold == Decimal("0")
        assert result.status is MatchStatus.FULL_MATCH

    def test_amount_within_best_level(self):
        result = estimate_best_returns_for_seller(Decimal("3"), None, BIDS, is_market_order=True)
        assert result.estimated_returns == Decimal("3") * Decimal("10")
        assert result.status is MatchStatus.FULL_MATCH

    def test_amount_beyond_depth_is_partial(self):
        """Selling 20 into 15 units of depth leaves 5 unsold."""
        result = estimate_best_returns_for_seller(Decimal("20"), None, BIDS, is_market_order=True)
        assert result.estimated_returns == Decimal("140")
        assert result.amount_yet_to_be_sold == Decimal("5")
        assert result.status is MatchStatus.PARTIAL_MATCH

    def test_limit_price_stops_walk(self):
        result = estimate_best_returns_for_seller(Decimal("7"), Decimal("9.5"), BIDS, is_market_order=False)
        assert result.estimated_returns == Decimal("50")
        assert result.amount_yet_to_be_sold == Decimal("2")
        assert result.status is MatchStatus.PARTIAL_MATCH

    def test_limit_price_above_best_bid_is_no_match(self):
        result = estimate_best_returns_for_seller(Decimal("7"), Decimal("11"), BIDS, is_market_order=False)
        assert result.estimated_returns == Decimal("0")
        assert result.amount_yet_to_be_sold == Decimal("7")
        assert result.status is MatchStatus.NO_MATCH

    def test_limit_boundary_is_inclusive(self):
        result = estimate_best_returns_for_seller(Decimal("5"), Decimal("10"), BIDS, is_market_order=False)
        assert result.estimated_returns == Decimal("50")
        assert result.status is MatchStatus.FULL_MATCH

    def test_market_order_ignores_price(self):
        result = estimate_best_returns_for_seller(Decimal("7"), Decimal("1000"), BIDS, is_market_order=True)
        assert result.estimated_returns == Decimal("68")
        assert result.status is MatchStatus.FULL_MATCH


class TestBuyerEstimate:
    """Buyer gives up quote units and walks asks lowest first."""

    def test_amount_within_best_level(self):
        """Spending 10 quote at 2 buys 5 base."""
        result = estimate_best_returns_for_buyer(Decimal("10"), None, ASKS, is_market_order=True)
        assert result.estimated_returns == Decimal("10") / Decimal("2")
        assert result.amount_yet_to_be_sold == Decimal("0")
        assert result.status is MatchStatus.FULL_MATCH

    def test_consumes_level_value_in_quote_units(self):
        """First level absorbs 20 quote (10 base); the next 10 quote buy 2.5 base at 4."""
        result = estimate_best_returns_for_buyer(Decimal("30"), None, ASKS, is_market_order=True)
        assert result.estimated_returns == Decimal("12.5")
        assert result.status is MatchStatus.FULL_MATCH

    def test_amount_beyond_depth_is_partial(self):
        """Total ask depth is worth 40 quote; spending 50 leaves 10 quote."""
        result = estimate_best_returns_for_buyer(Decimal("50"), None, ASKS, is_market_order=True)
        assert result.estimated_returns == Decimal("15")
        assert result.amount_yet_to_be_sold == Decimal("10")
        assert result.status is MatchStatus.PARTIAL_MATCH

    def test_limit_boundary_is_inclusive(self):
        result = estimate_best_returns_for_buyer(Decimal("30"), Decimal("2"), ASKS, is_market_order=False)
        assert result.estimated_returns == Decimal("10")
        assert result.amount_yet_to_be_sold == Decimal("10")
        assert result.status is MatchStatus.PARTIAL_MATCH

    def test_limit_below_best_ask_is_no_match(self):
        result = estimate_best_returns_for_buyer(Decimal("30"), Decimal("1.5"), ASKS, is_market_order=False)
        assert result.estimated_returns == Decimal("0")
        assert result.amount_yet_to_be_sold == Decimal("30")
        assert result.status is MatchStatus.NO_MATCH

    def test_empty_asks_is_no_match(self):
        result = estimate_best_returns_for_buyer(Decimal("3"), None, (), is_market_order=True)
        assert result.status is MatchStatus.NO_MATCH
        assert result.estimated_returns == Decimal("0")
        assert result.amount_yet_to_be_sold == Decimal("3")

    def test_quantum_truncates_contribution(self):
        asks = (CounterOrder(Decimal("3"), Decimal("10")),)
        result = estimate(Decimal("1"), None, asks, True, OrderSide.BID, quantum=Decimal("0.00000001"))
        assert result.estimated_returns == Decimal("0.33333333")
        assert result.status is MatchStatus.FULL_MATCH


class TestEdgeCases:
    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-2")])
    def test_non_positive_amount_is_no_match(self, amount):
        result = estimate(amount, None, BIDS, True, OrderSide.ASK)
        assert result.status is MatchStatus.NO_MATCH
        assert result.estimated_returns == Decimal("0")
        assert result.amount_yet_to_be_sold == Decimal("0")

    def test_limit_order_without_price_matches_nothing(self):
        result = estimate(Decimal("7"), None, BIDS, False, OrderSide.ASK)
        assert result.status is MatchStatus.NO_MATCH
        assert result.amount_yet_to_be_sold == Decimal("7")

    def test_accepts_decimal_like_inputs(self):
        result = estimate("7", 9, BIDS, False, OrderSide.ASK)
        assert result.estimated_returns == Decimal("68")

    def test_is_idempotent(self):
        asks = (CounterOrder(Decimal("3"), Decimal("10")), CounterOrder(Decimal("7"), Decimal("1")))
        first = estimate(Decimal("35"), None, asks, True, OrderSide.BID)
        second = estimate(Decimal("35"), None, asks, True, OrderSide.BID)
        assert first == second

    def test_remaining_is_zero_only_for_full_match(self):
        for amount in ("1", "5", "15", "16", "100"):
            result = estimate(amount, None, BIDS, True, OrderSide.ASK)
            assert (result.amount_yet_to_be_sold == 0) == (result.status is MatchStatus.FULL_MATCH)
            assert result.amount_yet_to_be_sold >= 0

    def test_rounded_is_for_display_only(self):
        asks = (CounterOrder(Decimal("3"), Decimal("10")),)
        result = estimate(Decimal("1"), None, asks, True, OrderSide.BID)
        assert result.rounded().estimated_returns == Decimal("0.3333")
        assert result.estimated_returns != Decimal("0.3333")


class TestEstimateReturns:
    def test_seller_receives_quote_asset(self):
        book = OrderBook(bids=BIDS, asks=ASKS)
        request = OrderRequest(OrderSide.ASK, OrderMode.LIMIT, amount="7", price="9")

        result = estimate_returns(book, request, create_lsh_lsk_market())

        assert result.estimated_returns == Decimal("68")
        assert result.asset_exchanged == "LSK"
        assert result.asset_exchanged_against == "LSH"

    def test_buyer_receives_base_asset(self):
        book = OrderBook(bids=BIDS, asks=ASKS)
        request = OrderRequest(OrderSide.BID, OrderMode.MARKET, amount="10")

        result = estimate_returns(book, request, create_lsh_lsk_market())

        assert result.estimated_returns == Decimal("5")
        assert result.asset_exchanged == "LSH"
        assert result.asset_exchanged_against == "LSK"

    def test_non_numeric_amount_estimates_as_zero(self):
        book = OrderBook(bids=BIDS, asks=ASKS)
        request = OrderRequest(OrderSide.ASK, OrderMode.MARKET, amount="")

        result = estimate_returns(book, request, create_lsh_lsk_market())

        assert result.status is MatchStatus.NO_MATCH
        assert result.amount_yet_to_be_sold == Decimal("0")
