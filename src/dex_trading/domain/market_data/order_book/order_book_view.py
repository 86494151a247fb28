from __future__ import annotations

# Normalizes raw order book snapshots (from the DEX feed or a pandas DataFrame) into a sorted,
# merged, read-only `OrderBook` that the fill simulator can walk best-first.

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

import pandas as pd

from dex_trading.domain.market_data.order_book.order_book import CounterOrder, OrderBook

logger = logging.getLogger(__name__)

# Keys under which raw entries may carry their size; the first present key wins
SIZE_KEYS = ("amount", "size")


class MalformedBookError(Exception):
    """Raised when a raw order book snapshot cannot be used for estimation.

    Callers must treat the book as unusable for that tick: skip estimation and show a no-data state.
    """

    def __init__(self, side_name: str, index: int | None, reason: str):
        self.side_name = side_name
        self.index = index
        self.reason = reason

        location = f"${side_name}[{index}]" if index is not None else f"${side_name}"
        super().__init__(f"Malformed order book: {location} {reason}")


# region Main


def normalize(raw_book: Mapping[str, Any]) -> OrderBook:
    """Build an `OrderBook` from a raw snapshot mapping.

    Entries may be unsorted and may repeat a price. Entries with the same price are merged into one
    `CounterOrder` with summed size. Bids are sorted highest price first, asks lowest price first.

    Args:
        raw_book: Mapping with optional keys "bids" and "asks", each an iterable of mappings with
            "price" and "amount" ("size" is accepted instead of "amount"). A missing side is empty.

    Returns:
        Normalized `OrderBook`.

    Raises:
        MalformedBookError: If $raw_book is not a mapping, or any entry has a missing, non-numeric,
            non-finite or non-positive price or size.
    """
    # Raise: the snapshot itself must be a mapping
    if not isinstance(raw_book, Mapping):
        raise MalformedBookError("raw_book", None, f"is not a mapping (got type '{type(raw_book).__name__}')")

    # A missing or null side is an empty side; any other value must be a collection
    bids = _normalize_side("bids", _side_entries(raw_book, "bids"), descending=True)
    asks = _normalize_side("asks", _side_entries(raw_book, "asks"), descending=False)

    logger.debug(f"Normalized order book with {len(bids)} bid level(s) and {len(asks)} ask level(s)")
    return OrderBook(bids=bids, asks=asks)


def normalize_dataframe(df: pd.DataFrame) -> OrderBook:
    """Build an `OrderBook` from a pandas DataFrame with one row per resting order.

    Required columns: side ("bid" or "ask"), price, amount. Values are converted to `Decimal`
    via `str(...)` so float columns do not leak binary noise into the book.

    Raises:
        MalformedBookError: If columns are missing, a side label is unknown, or any row fails the
            same checks as `normalize`.
    """
    # Raise: $df must be a pandas DataFrame
    if not isinstance(df, pd.DataFrame):
        raise MalformedBookError("df", None, f"is not a pandas DataFrame (got type '{type(df).__name__}')")

    # Raise: required columns must be present
    missing = sorted({"side", "price", "amount"} - set(df.columns))
    if missing:
        raise MalformedBookError("df", None, f"is missing required column(s): {', '.join(missing)}")

    sides = df["side"].astype(str).str.strip().str.lower()
    unknown = sorted(set(sides) - {"bid", "ask"})
    if unknown:
        raise MalformedBookError("df.side", None, f"contains unknown side label(s): {', '.join(unknown)}")

    raw_book: dict[str, list[dict[str, Any]]] = {"bids": [], "asks": []}
    for side, price, amount in zip(sides, df["price"], df["amount"]):
        raw_book["bids" if side == "bid" else "asks"].append({"price": price, "amount": amount})

    return normalize(raw_book)


# endregion

# region Utilities


def _side_entries(raw_book: Mapping[str, Any], side_name: str) -> Any:
    entries = raw_book.get(side_name)
    return () if entries is None else entries


def _normalize_side(side_name: str, entries: Iterable[Any], descending: bool) -> list[CounterOrder]:
    # Raise: each side must be a collection of entries, not a scalar or a single mapping
    if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Iterable):
        raise MalformedBookError(side_name, None, f"is not a collection of entries (got type '{type(entries).__name__}')")

    size_by_price: dict[Decimal, Decimal] = {}
    for i, entry in enumerate(entries):
        price, size = _parse_entry(side_name, i, entry)
        size_by_price[price] = size_by_price.get(price, Decimal("0")) + size

    prices = sorted(size_by_price, reverse=descending)
    return [CounterOrder(price=p, remaining_size=size_by_price[p]) for p in prices]


def _parse_entry(side_name: str, index: int, entry: Any) -> tuple[Decimal, Decimal]:
    # Raise: entry must be a mapping
    if not isinstance(entry, Mapping):
        raise MalformedBookError(side_name, index, f"is not a mapping (got type '{type(entry).__name__}')")

    size_key = next((k for k in SIZE_KEYS if k in entry), None)
    if size_key is None:
        raise MalformedBookError(side_name, index, "has no 'amount' or 'size'")
    if "price" not in entry:
        raise MalformedBookError(side_name, index, "has no 'price'")

    price = _parse_positive(side_name, index, "price", entry["price"])
    size = _parse_positive(side_name, index, size_key, entry[size_key])
    return price, size


def _parse_positive(side_name: str, index: int, field: str, value: Any) -> Decimal:
    # Raise: booleans and None are not numbers even though `Decimal` accepts some of them
    if value is None or isinstance(value, bool):
        raise MalformedBookError(side_name, index, f"has non-numeric {field} ('{value}')")

    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise MalformedBookError(side_name, index, f"has non-numeric {field} ('{value}')") from None

    # Raise: finiteness and positivity
    if not result.is_finite():
        raise MalformedBookError(side_name, index, f"has non-finite {field} ('{value}')")
    if result <= 0:
        raise MalformedBookError(side_name, index, f"has non-positive {field} ('{value}')")
    return result


# endregion
