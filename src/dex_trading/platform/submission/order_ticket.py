from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dex_trading.domain.market import Market
from dex_trading.domain.market_data.order_book.order_book import OrderBook
from dex_trading.domain.market_data.order_book.order_book_view import MalformedBookError, normalize
from dex_trading.domain.order.order_enums import OrderMode, OrderSide
from dex_trading.domain.order.order_request import OrderRequest
from dex_trading.domain.wallet import WalletKey
from dex_trading.estimation.fill_simulator import FillEstimate, estimate_returns
from dex_trading.platform.order_intent_builder import OrderIntentBuilder
from dex_trading.platform.submission.order_submitter import OrderSubmitter, SubmissionResult
from dex_trading.platform.submission.submission_state import SubmissionAction, SubmissionState, create_submission_state_machine
from dex_trading.utils.numeric_tools import DecimalLike, is_numeric_input
from dex_trading.validation.order_validator import ValidationResult, create_validation_context, validate

logger = logging.getLogger(__name__)


class OrderTicket:
    """State of one buy or sell form: the values being typed, the estimate and the submission slot.

    The ticket only keeps input values, the last validation errors and the submission state.
    Estimation, validation and intent building are delegated to the pure functions of this package.

    Submission flow:
        1. clear previous errors
        2. validate against the market and the current balance
        3. build an `OrderIntent` (raises `UnresolvedMarketError` when keys or config are missing)
        4. hand the intent to the `OrderSubmitter` exactly once
        5. on success, reset amount and price

    While a submission is in flight, further submissions are ignored.

    `submit` is synchronous: it returns only after the submitter has answered. SUBMITTING is
    therefore observable only from code the submitter calls back into (a re-entrant `submit`),
    and `is_submitting` is False again by the time `submit` returns. An async caller that needs a
    live in-flight flag must track its own task.
    """

    def __init__(
        self,
        side: OrderSide,
        market: Market,
        keys: Mapping[str, WalletKey],
        submitter: OrderSubmitter,
    ) -> None:
        self._side = side
        self._market = market
        self._builder = OrderIntentBuilder(market, keys)
        self._submitter = submitter

        # Form values as typed
        self._mode = OrderMode.MARKET
        self._amount: DecimalLike = "0"
        self._price: DecimalLike = "0"

        # Internal state
        self._errors: dict[str, str] = {}
        self._state_machine = create_submission_state_machine()

    # region Properties

    @property
    def side(self) -> OrderSide:
        return self._side

    @property
    def mode(self) -> OrderMode:
        return self._mode

    @property
    def amount(self) -> DecimalLike:
        return self._amount

    @property
    def price(self) -> DecimalLike:
        return self._price

    @property
    def errors(self) -> dict[str, str]:
        """Field errors of the last failed validation; empty after a mode switch or a new submission."""
        return dict(self._errors)

    @property
    def is_submitting(self) -> bool:
        return self._state_machine.current_state is SubmissionState.SUBMITTING

    @property
    def can_trade(self) -> bool:
        """True if the user has keys on both chains of the market."""
        return self._builder.can_trade()

    # endregion

    # region Input

    def set_amount(self, text: str) -> bool:
        """Set the amount if $text looks like a number (or is empty). Returns True if accepted."""
        if not is_numeric_input(text):
            return False
        self._amount = text
        return True

    def set_price(self, text: str) -> bool:
        """Set the limit price if $text looks like a number (or is empty). Returns True if accepted."""
        if not is_numeric_input(text):
            return False
        self._price = text
        return True

    def switch_mode(self) -> OrderMode:
        """Toggle between market and limit mode; clears errors."""
        self._errors = {}
        self._mode = self._mode.other_mode
        return self._mode

    def clear_values(self) -> None:
        self._amount = "0"
        self._price = "0"

    def to_request(self) -> OrderRequest:
        """Return the current form values as an `OrderRequest`."""
        price = self._price if self._mode is OrderMode.LIMIT else None
        return OrderRequest(side=self._side, mode=self._mode, amount=self._amount, price=price)

    # endregion

    # region Estimate

    def estimate(self, raw_book: Mapping[str, Any] | OrderBook) -> FillEstimate | None:
        """Estimate the current form values against $raw_book.

        Returns None when the raw book is malformed; the caller shows a no-data state for that tick.
        """
        if isinstance(raw_book, OrderBook):
            order_book = raw_book
        else:
            try:
                order_book = normalize(raw_book)
            except MalformedBookError as e:
                logger.warning(f"Skipping estimate for {self._side.value} ticket on market '{self._market.name}': {e}")
                return None

        return estimate_returns(order_book, self.to_request(), self._market)

    # endregion

    # region Submit

    def submit(self, balance_in_units: DecimalLike) -> SubmissionResult | None:
        """Validate, build and submit the current order.

        Args:
            balance_in_units: Wallet balance of the source asset in its smallest units.

        Returns:
            The submitter's `SubmissionResult`, or None if nothing was submitted (a submission is
            already in flight, validation failed, or the amount is not positive).

        Raises:
            UnresolvedMarketError: If market configuration or wallet keys are incomplete.
        """
        # Guard: one in-flight submission per ticket
        if not self._state_machine.can_execute_action(SubmissionAction.SUBMIT):
            logger.warning(f"Ignoring submit on {self._side.value} ticket for market '{self._market.name}' because a submission is already in flight")
            return None

        self._errors = {}
        request = self.to_request()
        context = create_validation_context(self._market, self._side, balance_in_units)
        validation: ValidationResult = validate(request, context)
        if not validation.ok:
            self._errors = dict(validation.field_errors)
            return None

        if request.parsed_amount <= 0:
            logger.debug(f"Not submitting {self._side.value} order on market '{self._market.name}' because $amount ({request.parsed_amount}) <= 0")
            return None

        intent = self._builder.build(request)

        self._state_machine.execute_action(SubmissionAction.SUBMIT)
        logger.info(f"Submitting {intent.side.value} {intent.mode.value} order: {intent.amount} {intent.source_asset} -> {intent.target_asset} on market '{self._market.name}'")
        try:
            result = self._submitter.submit(intent)
        except Exception as e:
            self._state_machine.execute_action(SubmissionAction.FAIL)
            logger.error(f"Error in `submit` for {intent.side.value} {intent.mode.value} order on market '{self._market.name}': {e}")
            raise

        if result.succeeded:
            self._state_machine.execute_action(SubmissionAction.SUCCEED)
            self.clear_values()
            logger.info(f"Submitted {intent.side.value} {intent.mode.value} order on market '{self._market.name}'")
        else:
            self._state_machine.execute_action(SubmissionAction.FAIL)
            logger.warning(f"Failed to post {intent.mode.value} order on market '{self._market.name}': {result.failure.message}")

        return result

    # endregion
