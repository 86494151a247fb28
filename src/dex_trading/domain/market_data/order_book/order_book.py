from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple, Sequence

from dex_trading.domain.order.order_enums import OrderSide


class CounterOrder(NamedTuple):
    """Resting order on one side of the book, merged per price.

    Attributes:
        price: Price in quote-asset units per 1 base-asset unit; always > 0.
        remaining_size: Unfilled size in base-asset units; always > 0.
    """

    price: Decimal
    remaining_size: Decimal

    @property
    def quote_value(self) -> Decimal:
        """Value of the whole level in quote-asset units (`price * remaining_size`)."""
        return self.price * self.remaining_size


class OrderBook:
    """Read-only snapshot of the order book of one market.

    Ordering:
        - Bids are best-first: highest price first.
        - Asks are best-first: lowest price first.
        - The class does not reorder data. Build snapshots through `normalize` (see
          `order_book_view`), which sorts, merges and validates raw feed data.

    Args:
        bids: Bid counter orders, best-first.
        asks: Ask counter orders, best-first.

    Properties:
        bids: Bid ladder as immutable tuple, best-first.
        asks: Ask ladder as immutable tuple, best-first.
        best_bid: First bid or None if empty.
        best_ask: First ask or None if empty.
        spread: Price delta (best_ask - best_bid), or None if one side is missing.
        is_empty: True if both sides are empty.
    """

    __slots__ = ("_bids", "_asks")

    # region Init

    def __init__(
        self,
        bids: Sequence[CounterOrder] = (),
        asks: Sequence[CounterOrder] = (),
    ) -> None:
        # Store as immutable tuples so a snapshot cannot change under an estimation
        self._bids: tuple[CounterOrder, ...] = tuple(bids)
        self._asks: tuple[CounterOrder, ...] = tuple(asks)

    # endregion

    # region Main

    def counter_orders_for(self, side: OrderSide) -> tuple[CounterOrder, ...]:
        """Return the resting orders an order on $side trades against, best-first.

        An ASK (seller) trades against bids; a BID (buyer) trades against asks.
        """
        return self._bids if side is OrderSide.ASK else self._asks

    # endregion

    # region Properties

    @property
    def bids(self) -> tuple[CounterOrder, ...]:
        """Bid levels as CounterOrder(price, remaining_size), best-first."""
        return self._bids

    @property
    def asks(self) -> tuple[CounterOrder, ...]:
        """Ask levels as CounterOrder(price, remaining_size), best-first."""
        return self._asks

    @property
    def best_bid(self) -> CounterOrder | None:
        """Best bid or `None` if there are no bids."""
        return self._bids[0] if self._bids else None

    @property
    def best_ask(self) -> CounterOrder | None:
        """Best ask or `None` if there are no asks."""
        return self._asks[0] if self._asks else None

    @property
    def spread(self) -> Decimal | None:
        """Return best-ask minus best-bid, or `None` if one side is missing."""
        if not self._bids or not self._asks:
            return None
        return self._asks[0].price - self._bids[0].price

    @property
    def total_bid_size(self) -> Decimal:
        """Sum of all bid sizes in base-asset units."""
        return sum((level.remaining_size for level in self._bids), Decimal("0"))

    @property
    def total_ask_size(self) -> Decimal:
        """Sum of all ask sizes in base-asset units."""
        return sum((level.remaining_size for level in self._asks), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        """Return `True` if both sides are empty."""
        return not self._bids and not self._asks

    # endregion

    # region Magic

    def __eq__(self, other) -> bool:
        if not isinstance(other, OrderBook):
            return False
        return self.bids == other.bids and self.asks == other.asks

    def __hash__(self) -> int:
        return hash((self.bids, self.asks))

    def __str__(self) -> str:
        best_bid_price = self.best_bid.price if self.best_bid else None
        best_ask_price = self.best_ask.price if self.best_ask else None
        return f"{self.__class__.__name__}(best_bid={best_bid_price}, best_ask={best_ask_price}, bid_levels={len(self._bids)}, ask_levels={len(self._asks)})"

    # endregion
