from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN
from typing import Any

from dex_trading.domain.order.order_enums import OrderMode, OrderSide
from dex_trading.utils.numeric_tools import DecimalLike, as_decimal


@dataclass(frozen=True)
class OrderIntent:
    """Canonical, validated order handed to the transaction-construction collaborator.

    The intent holds everything needed to build the transfer to the DEX wallet, except the signing
    secret: the collaborator signs with the user's key on $source_chain.

    Attributes:
        side: BID or ASK.
        mode: MARKET or LIMIT.
        amount: Amount of $source_asset to transfer, in whole units.
        price: Limit price in quote units per base unit; None for MARKET.
        source_asset: Display symbol of the asset given up.
        target_asset: Display symbol of the asset received.
        source_chain: Chain identifier the transfer is sent on.
        target_chain: Chain identifier the proceeds are paid out on.
        dex_address: DEX wallet address on $source_chain (transfer recipient).
        destination_address: User's address on $target_chain (payout recipient).
        broadcast_url: API URL of $source_chain used to broadcast the transfer.
    """

    side: OrderSide
    mode: OrderMode
    amount: Decimal
    price: Decimal | None
    source_asset: str
    target_asset: str
    source_chain: str
    target_chain: str
    dex_address: str
    destination_address: str
    broadcast_url: str

    def amount_in_units(self, unit_value: DecimalLike) -> Decimal:
        """Return $amount in the source chain's smallest units, truncated to a whole unit."""
        return (self.amount * as_decimal(unit_value)).to_integral_value(rounding=ROUND_DOWN)

    def to_transfer_data(self) -> str:
        """Return the transfer's data field the DEX parses to route the order.

        Market: "<target_chain>,market,<destination_address>"
        Limit: "<target_chain>,limit,<price>,<destination_address>"
        """
        if self.mode is OrderMode.LIMIT:
            return f"{self.target_chain},limit,{self.price},{self.destination_address}"
        return f"{self.target_chain},market,{self.destination_address}"

    def to_order_record(self, tx_id: str, sender_id: str, amount_in_units: DecimalLike) -> dict[str, Any]:
        """Return the pending-order record shown in the user's order list after a broadcast.

        Bids are tracked by quote value ($value/$valueRemaining), asks by base size ($size/$sizeRemaining).
        """
        units = as_decimal(amount_in_units)
        record: dict[str, Any] = {
            "id": tx_id,
            "type": self.mode.value,
            "side": self.side.value,
            "senderId": sender_id,
            "recipientId": self.dex_address,
            "sourceChain": self.source_chain,
            "targetChain": self.target_chain,
        }
        if self.side is OrderSide.BID:
            record["value"] = units
            record["valueRemaining"] = units
        else:
            record["size"] = units
            record["sizeRemaining"] = units
        if self.price is not None:
            record["price"] = self.price
        return record
