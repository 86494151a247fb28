"""Order book snapshots and normalization of raw feed data."""

from dex_trading.domain.market_data.order_book.order_book import CounterOrder, OrderBook
from dex_trading.domain.market_data.order_book.order_book_view import MalformedBookError, normalize, normalize_dataframe

__all__ = ["CounterOrder", "OrderBook", "MalformedBookError", "normalize", "normalize_dataframe"]
