from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal, NamedTuple

from dex_trading.domain.asset import Asset
from dex_trading.domain.order.order_enums import OrderSide
from dex_trading.utils.numeric_tools import as_decimal

AssetRole = Literal["base", "quote"]


class SideMapping(NamedTuple):
    """Which active asset an order side gives up (source) and which it receives (target)."""

    source: AssetRole
    target: AssetRole


# ASK sells base for quote; BID spends quote to buy base
SIDE_MAPPING: dict[OrderSide, SideMapping] = {
    OrderSide.ASK: SideMapping(source="base", target="quote"),
    OrderSide.BID: SideMapping(source="quote", target="base"),
}


@dataclass(frozen=True)
class MarketChainOptions:
    """Per-chain options of a DEX market. Amounts are in the chain's smallest units."""

    min_order_amount: Decimal = Decimal("0")
    exchange_fee_base: Decimal = Decimal("0")
    wallet_address: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MarketChainOptions:
        return cls(
            min_order_amount=as_decimal(data.get("minOrderAmount", 0)),
            exchange_fee_base=as_decimal(data.get("exchangeFeeBase", 0)),
            wallet_address=data.get("walletAddress"),
        )


class Market:
    """A two-asset DEX market.

    Active assets are ordered `(base, quote)`. Prices are quoted as quote-asset units per 1 base-asset unit.

    Attributes:
        name (str): Market identifier (e.g., "lsh/lsk").
        base_asset (Asset): Asset sold by asks and bought by bids.
        quote_asset (Asset): Asset prices are expressed in.
        price_decimal_precision (int | None): Max fractional digits of a limit price; None means unlimited.
        chains (dict[str, MarketChainOptions]): Options keyed by chain symbol.
    """

    __slots__ = ("_name", "_base_asset", "_quote_asset", "_price_decimal_precision", "_chains")

    def __init__(
        self,
        name: str,
        base_asset: Asset,
        quote_asset: Asset,
        price_decimal_precision: int | None = None,
        chains: Mapping[str, MarketChainOptions] | None = None,
    ) -> None:
        """Initialize a Market.

        Raises:
            ValueError: If $name is empty, both assets are the same, or $price_decimal_precision is negative.
            TypeError: If assets are not `Asset` or $price_decimal_precision is not int.
        """
        # Raise: $name must be a non-empty string
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Cannot call `Market.__init__` because $name must be a non-empty string, but provided value is: '{name}'")

        # Raise: assets must be typed to keep unit conversions explicit
        if not isinstance(base_asset, Asset) or not isinstance(quote_asset, Asset):
            raise TypeError("Cannot call `Market.__init__` because $base_asset and $quote_asset must be Asset instances")

        # Raise: a market needs two different assets
        if base_asset.symbol == quote_asset.symbol:
            raise ValueError(f"Cannot call `Market.__init__` because $base_asset and $quote_asset are the same ('{base_asset.symbol}')")

        # Raise: precision is a digit count
        if price_decimal_precision is not None:
            if isinstance(price_decimal_precision, bool) or not isinstance(price_decimal_precision, int):
                raise TypeError(f"Cannot call `Market.__init__` because $price_decimal_precision is not int (got type '{type(price_decimal_precision).__name__}')")
            if price_decimal_precision < 0:
                raise ValueError(f"Cannot call `Market.__init__` because $price_decimal_precision ({price_decimal_precision}) < 0")

        self._name = name.strip()
        self._base_asset = base_asset
        self._quote_asset = quote_asset
        self._price_decimal_precision = price_decimal_precision
        self._chains: dict[str, MarketChainOptions] = {k.lower(): v for k, v in (chains or {}).items()}

    # region Properties

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_asset(self) -> Asset:
        return self._base_asset

    @property
    def quote_asset(self) -> Asset:
        return self._quote_asset

    @property
    def active_assets(self) -> tuple[Asset, Asset]:
        """Return `(base, quote)`."""
        return self._base_asset, self._quote_asset

    @property
    def price_decimal_precision(self) -> int | None:
        return self._price_decimal_precision

    @property
    def chains(self) -> dict[str, MarketChainOptions]:
        return dict(self._chains)

    # endregion

    # region Side resolution

    def asset_by_role(self, role: AssetRole) -> Asset:
        """Return the base or quote asset for $role."""
        if role == "base":
            return self._base_asset
        if role == "quote":
            return self._quote_asset
        raise ValueError(f"Cannot call `asset_by_role` because $role ('{role}') is not 'base' or 'quote'")

    def source_asset(self, side: OrderSide, side_mapping: Mapping[OrderSide, SideMapping] = SIDE_MAPPING) -> Asset:
        """Return the asset an order on $side gives up."""
        return self.asset_by_role(side_mapping[side].source)

    def target_asset(self, side: OrderSide, side_mapping: Mapping[OrderSide, SideMapping] = SIDE_MAPPING) -> Asset:
        """Return the asset an order on $side receives."""
        return self.asset_by_role(side_mapping[side].target)

    def chain_options(self, symbol: str) -> MarketChainOptions | None:
        """Return the options of chain $symbol, or None if the market does not configure it."""
        return self._chains.get(symbol.lower())

    # endregion

    # region Amounts

    def min_order_amount(self, asset: Asset) -> Decimal:
        """Return the minimum order amount in whole units of $asset (0 when not configured)."""
        options = self.chain_options(asset.symbol)
        return asset.from_units(options.min_order_amount) if options else Decimal("0")

    def base_fee(self, asset: Asset) -> Decimal:
        """Return the exchange base fee charged on $asset in whole units (0 when not configured)."""
        options = self.chain_options(asset.symbol)
        return asset.from_units(options.exchange_fee_base) if options else Decimal("0")

    # endregion

    # region Config

    @classmethod
    def from_config(cls, name: str, market_config: Mapping[str, Any], assets: Mapping[str, Asset]) -> Market:
        """Build a Market from one entry of the app's `markets` configuration.

        Expected shape::

            {
                "assets": ["lsh", "lsk"],              # (base, quote); defaults to the order of chains
                "marketOptions": {
                    "priceDecimalPrecision": 4,
                    "chains": {
                        "lsh": {"minOrderAmount": 100000000, "exchangeFeeBase": 10000000, "walletAddress": "..."},
                        "lsk": {...},
                    },
                },
            }

        Raises:
            ValueError: If the market does not name exactly two assets, or an asset is not in $assets.
        """
        options = market_config.get("marketOptions") or {}
        raw_chains = options.get("chains") or {}
        chains = {symbol.lower(): MarketChainOptions.from_dict(data) for symbol, data in raw_chains.items()}

        symbols = [s.lower() for s in (market_config.get("assets") or list(raw_chains))]
        # Raise: a market is always a pair
        if len(symbols) != 2:
            raise ValueError(f"Cannot call `Market.from_config` because market '{name}' must define exactly 2 assets (got {symbols})")

        missing = [s for s in symbols if s not in assets]
        # Raise: assets must be configured before markets reference them
        if missing:
            raise ValueError(f"Cannot call `Market.from_config` because market '{name}' references unknown asset(s): {', '.join(missing)}")

        # Whole-number floats such as 4.0 count as int
        precision = options.get("priceDecimalPrecision")
        if isinstance(precision, float) and precision.is_integer():
            precision = int(precision)

        return cls(
            name=name,
            base_asset=assets[symbols[0]],
            quote_asset=assets[symbols[1]],
            price_decimal_precision=precision,
            chains=chains,
        )

    # endregion

    def __str__(self) -> str:
        return f"{self._base_asset.display_symbol}/{self._quote_asset.display_symbol}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name}, base_asset={self._base_asset.symbol}, quote_asset={self._quote_asset.symbol}, price_decimal_precision={self._price_decimal_precision})"

