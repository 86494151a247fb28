"""Order-related domain objects: sides, modes, match status, requests and intents."""

from dex_trading.domain.order.order_enums import OrderSide, OrderMode, MatchStatus
from dex_trading.domain.order.order_request import OrderRequest
from dex_trading.domain.order.order_intent import OrderIntent

__all__ = [
    "OrderSide",
    "OrderMode",
    "MatchStatus",
    "OrderRequest",
    "OrderIntent",
]
