"""Submitter protocol for handing order intents to the transaction collaborator.

The collaborator builds, signs and broadcasts the transfer for an `OrderIntent`. It is called
exactly once per submission; this package never retries. A failed broadcast comes back as a
`SubmissionResult` carrying a `SubmissionFailure` with the submitted intent, so the caller can do
its own retry or refund bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from dex_trading.domain.order.order_intent import OrderIntent


@dataclass(frozen=True)
class SubmissionFailure:
    """Structured failure of one submission.

    Attributes:
        message: Human-readable reason.
        intent: The intent that was being submitted.
        response: Optional raw response from the broadcast endpoint.
    """

    message: str
    intent: OrderIntent
    response: Any = None


@dataclass(frozen=True)
class SubmissionResult:
    """Result of handing an intent to an `OrderSubmitter`.

    Attributes:
        intent: The submitted intent.
        order_record: Pending-order record to show in the order list on success.
        failure: Set when the submission failed.
    """

    intent: OrderIntent
    order_record: dict[str, Any] = field(default_factory=dict)
    failure: SubmissionFailure | None = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, intent: OrderIntent, message: str, response: Any = None) -> SubmissionResult:
        return cls(intent=intent, failure=SubmissionFailure(message=message, intent=intent, response=response))


@runtime_checkable
class OrderSubmitter(Protocol):
    """Protocol for the transaction-construction-and-broadcast collaborator."""

    def submit(self, intent: OrderIntent) -> SubmissionResult:
        """Build, sign and broadcast the transfer for $intent.

        Implementations must not raise for broadcast failures; they return
        `SubmissionResult.failed(...)` instead.
        """
        ...
