from __future__ import annotations

from dex_trading.utils.state_machine import State, Action, StateMachine


class SubmissionState(State):
    """States of one order form's submission slot."""

    IDLE = "IDLE"  # Ready to accept a submission
    SUBMITTING = "SUBMITTING"  # A submission is in flight; resubmission is disabled


class SubmissionAction(Action):
    """Actions on a submission slot."""

    SUBMIT = "SUBMIT"  # Hand an intent to the submitter
    SUCCEED = "SUCCEED"  # Submitter reported success
    FAIL = "FAIL"  # Submitter reported failure, or raised


def create_submission_state_machine() -> StateMachine[SubmissionState, SubmissionAction]:
    """Create the state machine that allows at most one in-flight submission per form."""
    transitions = {
        (SubmissionState.IDLE, SubmissionAction.SUBMIT): SubmissionState.SUBMITTING,
        (SubmissionState.SUBMITTING, SubmissionAction.SUCCEED): SubmissionState.IDLE,
        (SubmissionState.SUBMITTING, SubmissionAction.FAIL): SubmissionState.IDLE,
    }

    return StateMachine(SubmissionState.IDLE, transitions)
