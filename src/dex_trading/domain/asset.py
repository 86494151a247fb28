from __future__ import annotations

from decimal import Decimal

from dex_trading.utils.numeric_tools import DecimalLike, as_decimal


class Asset:
    """Represents one chain asset traded on the DEX.

    Attributes:
        symbol (str): Lower-case chain identifier (e.g., "lsk", "lsh").
        unit_value (Decimal): Number of smallest indivisible units in 1 whole asset (e.g., 10**8).
        api_url (str | None): Base URL of the chain's API node used to broadcast transactions.
    """

    __slots__ = ("_symbol", "_unit_value", "_api_url")

    def __init__(self, symbol: str, unit_value: DecimalLike, api_url: str | None = None) -> None:
        """Initialize an Asset.

        Raises:
            ValueError: If $symbol is empty or $unit_value is not a positive finite number.
        """
        # Raise: $symbol must be a non-empty string
        if not isinstance(symbol, str) or not symbol.strip():
            raise ValueError(f"Cannot call `Asset.__init__` because $symbol must be a non-empty string, but provided value is: '{symbol}'")

        self._symbol = symbol.strip().lower()
        self._unit_value = as_decimal(unit_value)
        self._api_url = api_url.rstrip("/") if api_url else None

        # Raise: $unit_value defines the smallest unit, so it must be a positive finite number
        if not self._unit_value.is_finite() or self._unit_value <= 0:
            raise ValueError(f"Cannot call `Asset.__init__` because $unit_value ('{self._unit_value}') is not a positive finite number")

    @property
    def symbol(self) -> str:
        """Get the lower-case chain identifier."""
        return self._symbol

    @property
    def display_symbol(self) -> str:
        """Get the symbol as shown to users (upper-case)."""
        return self._symbol.upper()

    @property
    def unit_value(self) -> Decimal:
        """Get the number of smallest units in 1 whole asset."""
        return self._unit_value

    @property
    def api_url(self) -> str | None:
        """Get the API URL used to broadcast transactions, or None if not configured."""
        return self._api_url

    @property
    def smallest_unit(self) -> Decimal:
        """Get the smallest indivisible amount as a whole-asset Decimal (e.g., 0.00000001)."""
        return Decimal(1) / self._unit_value

    def to_units(self, amount: DecimalLike) -> Decimal:
        """Convert a whole-asset $amount to smallest units (e.g., LSK to beddows)."""
        return as_decimal(amount) * self._unit_value

    def from_units(self, units: DecimalLike) -> Decimal:
        """Convert $units of the smallest denomination to a whole-asset amount."""
        return as_decimal(units) / self._unit_value

    def __str__(self) -> str:
        return self.display_symbol

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(symbol={self._symbol}, unit_value={self._unit_value}, api_url={self._api_url})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Asset):
            return False
        return self._symbol == other._symbol and self._unit_value == other._unit_value and self._api_url == other._api_url

    def __hash__(self) -> int:
        return hash((self._symbol, self._unit_value, self._api_url))
