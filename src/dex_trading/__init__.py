__version__ = "0.1.0"

from dex_trading.domain.market_data.order_book.order_book_view import MalformedBookError, normalize
from dex_trading.estimation.fill_simulator import FillEstimate, estimate, estimate_returns
from dex_trading.validation.order_validator import ValidationContext, ValidationResult, validate
from dex_trading.platform.order_intent_builder import OrderIntentBuilder, UnresolvedMarketError

__all__ = [
    "MalformedBookError",
    "normalize",
    "FillEstimate",
    "estimate",
    "estimate_returns",
    "ValidationContext",
    "ValidationResult",
    "validate",
    "OrderIntentBuilder",
    "UnresolvedMarketError",
]
