from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from bidict import bidict

from dex_trading.domain.asset import Asset
from dex_trading.domain.market import Market

logger = logging.getLogger(__name__)


class MarketRegistry:
    """Named collection of configured assets and markets.

    Markets are kept in a bi-directional mapping, so callers can look a market up by name and
    also find the name under which a given `Market` instance was registered.
    """

    def __init__(self) -> None:
        self._assets_by_symbol: dict[str, Asset] = {}
        self._markets_by_name_bidict: bidict[str, Market] = bidict()

    # region Assets

    def add_asset(self, asset: Asset) -> None:
        """Register $asset under its symbol.

        Raises:
            ValueError: If an asset with the same symbol is already registered.
        """
        # Raise: symbols identify chains, so they must be unique
        if asset.symbol in self._assets_by_symbol:
            raise ValueError(f"Cannot call `add_asset` because Asset with $symbol ('{asset.symbol}') is already added to this MarketRegistry")

        self._assets_by_symbol[asset.symbol] = asset
        logger.debug(f"MarketRegistry added Asset '{asset.symbol}'")

    def get_asset(self, symbol: str) -> Asset:
        """Return the asset registered under $symbol.

        Raises:
            KeyError: If no such asset is registered.
        """
        try:
            return self._assets_by_symbol[symbol.lower()]
        except KeyError:
            raise KeyError(f"Cannot call `get_asset` because $symbol ('{symbol}') is not added to this MarketRegistry") from None

    @property
    def assets(self) -> dict[str, Asset]:
        return dict(self._assets_by_symbol)

    # endregion

    # region Markets

    def add_market(self, market: Market) -> None:
        """Register $market under its name.

        Raises:
            ValueError: If the name or the instance is already registered.
        """
        # Raise: names must be unique
        if market.name in self._markets_by_name_bidict:
            raise ValueError(f"Cannot call `add_market` because Market named ('{market.name}') is already added to this MarketRegistry. Choose a different name.")

        # Raise: one instance can only have one name
        if market in self._markets_by_name_bidict.inverse:
            raise ValueError(f"Cannot call `add_market` because this Market instance is already added under name '{self._markets_by_name_bidict.inverse[market]}'")

        self._markets_by_name_bidict[market.name] = market
        logger.debug(f"MarketRegistry added Market named '{market.name}' ({market})")

    def remove_market(self, name: str) -> None:
        """Remove the market registered under $name.

        Raises:
            KeyError: If no such market is registered.
        """
        if name not in self._markets_by_name_bidict:
            raise KeyError(f"Cannot call `remove_market` because Market named ('{name}') is not added to this MarketRegistry")

        del self._markets_by_name_bidict[name]
        logger.debug(f"Removed Market named '{name}'")

    def get_market(self, name: str) -> Market:
        """Return the market registered under $name.

        Raises:
            KeyError: If no such market is registered.
        """
        try:
            return self._markets_by_name_bidict[name]
        except KeyError:
            raise KeyError(f"Cannot call `get_market` because Market named ('{name}') is not added to this MarketRegistry") from None

    def get_market_name(self, market: Market) -> str:
        """Return the name $market is registered under.

        Raises:
            KeyError: If $market is not registered.
        """
        try:
            return self._markets_by_name_bidict.inverse[market]
        except KeyError:
            raise KeyError(f"Cannot call `get_market_name` because Market ({market}) is not added to this MarketRegistry") from None

    def list_market_names(self) -> list[str]:
        return list(self._markets_by_name_bidict.keys())

    @property
    def markets(self) -> bidict[str, Market]:
        """Bi-directional mapping from market name to Market."""
        return self._markets_by_name_bidict

    # endregion

    # region Config

    @classmethod
    def from_config(cls, configuration: Mapping[str, Any]) -> MarketRegistry:
        """Build a registry from the app's configuration mapping.

        Expected shape::

            {
                "assets": {"lsk": {"unitValue": 100000000, "apiUrl": "https://..."}, ...},
                "markets": {"lsh/lsk": {...see `Market.from_config`...}, ...},
            }
        """
        registry = cls()
        for symbol, asset_config in (configuration.get("assets") or {}).items():
            registry.add_asset(Asset(symbol, asset_config.get("unitValue", 1), asset_config.get("apiUrl")))

        for name, market_config in (configuration.get("markets") or {}).items():
            registry.add_market(Market.from_config(name, market_config, registry.assets))

        logger.info(f"Loaded {len(registry._assets_by_symbol)} asset(s) and {len(registry._markets_by_name_bidict)} market(s) from configuration")
        return registry

    # endregion
