from __future__ import annotations

import logging
from collections.abc import Mapping

from dex_trading.domain.market import SIDE_MAPPING, Market, SideMapping
from dex_trading.domain.order.order_enums import OrderMode, OrderSide
from dex_trading.domain.order.order_intent import OrderIntent
from dex_trading.domain.order.order_request import OrderRequest
from dex_trading.domain.wallet import WalletKey

logger: logging.Logger = logging.getLogger(__name__)


class UnresolvedMarketError(Exception):
    """Raised when an order cannot be turned into an intent because market or wallet data is missing,
    or its amount or limit price is not positive.

    Fatal to the submission attempt: nothing may be broadcast.
    """

    def __init__(self, market_name: str, side: OrderSide, missing: list[str]):
        self.market_name = market_name
        self.side = side
        self.missing = missing
        super().__init__(f"Cannot resolve {side.value} order on market '{market_name}'; missing: {', '.join(missing)}")


class OrderIntentBuilder:
    """Turns a validated `OrderRequest` into an `OrderIntent` for one market and one set of wallet keys.

    Source and target assets come from a side-keyed lookup table (`SIDE_MAPPING` by default):
    an ASK sends the base asset and is paid in the quote asset, a BID the other way around.
    Everything the broadcast needs is resolved up front; if anything is missing, `build` raises
    `UnresolvedMarketError` instead of producing a partial intent.

    Example:
        builder = OrderIntentBuilder(market, keys)
        intent = builder.build(OrderRequest(OrderSide.ASK, OrderMode.LIMIT, "7", "9"))
    """

    def __init__(self, market: Market, keys: Mapping[str, WalletKey]):
        self._market = market
        self._keys = {symbol.lower(): key for symbol, key in keys.items()}

    @property
    def market(self) -> Market:
        return self._market

    def can_trade(self) -> bool:
        """Return True if the user has a key on both chains of the market."""
        return all(asset.symbol in self._keys for asset in self._market.active_assets)

    def build(self, request: OrderRequest, side_mapping: Mapping[OrderSide, SideMapping] = SIDE_MAPPING) -> OrderIntent:
        """Resolve $request into an `OrderIntent`.

        The request should already have passed validation. Besides the side mapping, wallet keys, DEX
        addresses and the broadcast URL, this method checks that the amount and any limit price
        are positive numbers.

        Raises:
            UnresolvedMarketError: If the side is not mapped, the amount or limit price is not a positive number,
                or any address, passphrase or API URL is missing.
        """
        missing: list[str] = []

        # Raise: without a side mapping nothing else can be resolved
        if request.side not in side_mapping:
            raise UnresolvedMarketError(self._market.name, request.side, [f"side mapping for '{request.side.value}'"])

        source = self._market.source_asset(request.side, side_mapping)
        target = self._market.target_asset(request.side, side_mapping)

        chain_options = self._market.chain_options(source.symbol)
        dex_address = chain_options.wallet_address if chain_options else None
        if not dex_address:
            missing.append(f"DEX wallet address on '{source.symbol}'")

        destination_key = self._keys.get(target.symbol)
        destination_address = destination_key.address if destination_key else None
        if not destination_address:
            missing.append(f"wallet address on '{target.symbol}'")

        source_key = self._keys.get(source.symbol)
        if source_key is None or not source_key.passphrase:
            missing.append(f"passphrase on '{source.symbol}'")

        if not source.api_url:
            missing.append(f"API URL of '{source.symbol}'")

        amount = request.parsed_amount
        if amount is None:
            missing.append("numeric amount")
        elif amount <= 0:
            missing.append(f"positive amount (got {amount})")

        price = None
        if request.mode is OrderMode.LIMIT:
            price = request.parsed_price
            if price is None:
                missing.append("numeric limit price")
            elif price <= 0:
                missing.append(f"positive limit price (got {price})")

        # Raise: a partial intent must never reach the broadcast step
        if missing:
            logger.warning(f"Cannot build {request.side.value} {request.mode.value} intent on market '{self._market.name}'; missing: {', '.join(missing)}")
            raise UnresolvedMarketError(self._market.name, request.side, missing)

        intent = OrderIntent(
            side=request.side,
            mode=request.mode,
            amount=amount,
            price=price,
            source_asset=source.display_symbol,
            target_asset=target.display_symbol,
            source_chain=source.symbol,
            target_chain=target.symbol,
            dex_address=dex_address,
            destination_address=destination_address,
            broadcast_url=source.api_url,
        )
        logger.debug(f"Built {intent.side.value} {intent.mode.value} intent: {intent.amount} {intent.source_asset} -> {intent.target_asset}")
        return intent
