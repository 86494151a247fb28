from __future__ import annotations

from enum import Enum


class OrderSide(Enum):
    """Represents the side of an order on a two-asset market.

    BID spends the quote asset to buy the base asset.
    ASK sells the base asset for the quote asset.
    """

    BID = "bid"
    ASK = "ask"

    @property
    def other_side(self) -> OrderSide:
        """Return the opposite side, whose resting orders this side trades against."""
        return OrderSide.ASK if self is OrderSide.BID else OrderSide.BID

    @classmethod
    def from_str(cls, value: str) -> OrderSide:
        """Parse "bid"/"ask" (case-insensitive) into an `OrderSide`."""
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(f"Cannot call `OrderSide.from_str` because $value ('{value}') is not 'bid' or 'ask'") from None


class OrderMode(Enum):
    """Represents how an order executes."""

    MARKET = "market"  # Execute immediately against available depth; unmatched remainder is refunded
    LIMIT = "limit"  # Execute only at the limit price or better; unmatched remainder stays pending

    @property
    def other_mode(self) -> OrderMode:
        return OrderMode.LIMIT if self is OrderMode.MARKET else OrderMode.MARKET


class MatchStatus(Enum):
    """Expected outcome of matching an order against the current book."""

    FULL_MATCH = "FULL_MATCH"  # Entire requested amount matched
    PARTIAL_MATCH = "PARTIAL_MATCH"  # Some amount could not be matched within depth or price limit
    NO_MATCH = "NO_MATCH"  # No liquidity, or price entirely unreachable
