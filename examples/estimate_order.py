from __future__ import annotations

import logging

import pandas as pd

from dex_trading.domain.market_data.order_book.order_book_view import normalize, normalize_dataframe
from dex_trading.domain.market_registry import MarketRegistry
from dex_trading.domain.order.order_enums import OrderMode, OrderSide
from dex_trading.domain.order.order_request import OrderRequest
from dex_trading.estimation.estimate_breakdown import format_estimate_breakdown
from dex_trading.estimation.fill_simulator import estimate_returns
from dex_trading.validation.order_validator import create_validation_context, validate

logger = logging.getLogger(__name__)

CONFIGURATION = {
    "assets": {
        "lsh": {"unitValue": 100000000, "apiUrl": "https://lsh.example.net"},
        "lsk": {"unitValue": 100000000, "apiUrl": "https://lsk.example.net"},
    },
    "markets": {
        "lsh/lsk": {
            "marketOptions": {
                "priceDecimalPrecision": 4,
                "chains": {
                    "lsh": {"minOrderAmount": 100000000, "exchangeFeeBase": 10000000, "walletAddress": "11111111111111111111H"},
                    "lsk": {"minOrderAmount": 50000000, "exchangeFeeBase": 10000000, "walletAddress": "22222222222222222222L"},
                },
            },
        },
    },
}

# Raw snapshot as the feed delivers it: unsorted, prices and sizes as strings
RAW_BOOK = {
    "bids": [{"price": "9", "amount": "4"}, {"price": "10", "amount": "5"}, {"price": "9", "amount": "6"}],
    "asks": [{"price": "12", "amount": "5"}, {"price": "11", "amount": "2"}],
}


def run() -> None:
    registry = MarketRegistry.from_config(CONFIGURATION)
    market = registry.get_market("lsh/lsk")
    order_book = normalize(RAW_BOOK)
    logger.info(f"Order book: {order_book}")

    requests = [
        OrderRequest(OrderSide.ASK, OrderMode.MARKET, amount="7"),
        OrderRequest(OrderSide.ASK, OrderMode.LIMIT, amount="12", price="10"),
        OrderRequest(OrderSide.BID, OrderMode.MARKET, amount="100"),
        OrderRequest(OrderSide.BID, OrderMode.LIMIT, amount="10", price="11.00001"),
    ]
    for request in requests:
        # 50 LSH / 50 LSK wallet balance
        context = create_validation_context(market, request.side, 5_000_000_000)
        result = validate(request, context)
        if not result.ok:
            logger.info(f"{request.side.value} {request.mode.value} {request.amount}: rejected {result.field_errors}")
            continue

        estimate = estimate_returns(order_book, request, market)
        logger.info(f"{request.side.value} {request.mode.value} {request.amount}: {format_estimate_breakdown(estimate, request.mode)}")

    # The same book built from a DataFrame, e.g. one loaded from a CSV dump of the feed
    df = pd.DataFrame(
        {
            "side": ["bid", "bid", "bid", "ask", "ask"],
            "price": ["9", "10", "9", "12", "11"],
            "amount": ["4", "5", "6", "5", "2"],
        }
    )
    logger.info(f"Book from DataFrame matches: {normalize_dataframe(df) == order_book}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
