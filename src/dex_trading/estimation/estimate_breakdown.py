from __future__ import annotations

from enum import Enum

from dex_trading.domain.order.order_enums import MatchStatus, OrderMode
from dex_trading.estimation.fill_simulator import FillEstimate
from dex_trading.utils.numeric_tools import round_for_display


class EstimateOutcome(Enum):
    """What happens to the unmatched part of an order."""

    REFUND = "refund"  # Market order: unmatched tokens go back to the wallet
    PENDING = "pending"  # Limit order: unmatched part rests in the book until matched


def estimate_outcome(estimate: FillEstimate, mode: OrderMode) -> EstimateOutcome | None:
    """Return the outcome of the unmatched remainder, or None if nothing remains."""
    if estimate.status is not MatchStatus.PARTIAL_MATCH and estimate.amount_yet_to_be_sold <= 0:
        return None
    return EstimateOutcome.REFUND if mode is OrderMode.MARKET else EstimateOutcome.PENDING


def format_estimate_breakdown(estimate: FillEstimate, mode: OrderMode) -> str:
    """Return the one-line estimate shown under the order form.

    Examples:
        "68.0000 LSK"
        "50.0000 LSK + 2.0000 LSH (refund)"
        "0.0000 LSH + 3.0000 LSK (pending)"
    """
    text = f"{round_for_display(estimate.estimated_returns)} {estimate.asset_exchanged}"

    outcome = estimate_outcome(estimate, mode)
    if outcome is not None:
        text += f" + {round_for_display(estimate.amount_yet_to_be_sold)} {estimate.asset_exchanged_against} ({outcome.value})"
    return text
