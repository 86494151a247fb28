from __future__ import annotations

from enum import Enum
from typing import TypeVar, Generic


class State(Enum):
    """Base class for states of a `StateMachine`. Subclass it to define concrete states."""

    pass


class Action(Enum):
    """Base class for actions of a `StateMachine`. Subclass it to define concrete actions."""

    pass


S = TypeVar("S", bound=State)
A = TypeVar("A", bound=Action)


class StateMachine(Generic[S, A]):
    """Small table-driven state machine.

    Transitions are given as a dictionary mapping `(from_state, action)` to the target state.
    Any pair missing from the table is an invalid transition.

    Example:
        ```python
        class SlotState(State):
            IDLE = "IDLE"
            BUSY = "BUSY"

        class SlotAction(Action):
            START = "START"
            FINISH = "FINISH"

        sm = StateMachine(SlotState.IDLE, {
            (SlotState.IDLE, SlotAction.START): SlotState.BUSY,
            (SlotState.BUSY, SlotAction.FINISH): SlotState.IDLE,
        })
        sm.execute_action(SlotAction.START)  # state is BUSY
        sm.can_execute_action(SlotAction.START)  # False until FINISH
        ```
    """

    def __init__(self, initial_state: S, transitions: dict[tuple[S, A], S]):
        """Initialize the state machine.

        Args:
            initial_state: State the machine starts in.
            transitions: Mapping of `(from_state, action)` to target state.

        Raises:
            ValueError: If $transitions is empty.
        """
        if not transitions:
            raise ValueError("$transitions cannot be empty. At least one transition must be defined.")

        self._initial_state = initial_state
        self._current_state = initial_state
        self._transitions = dict(transitions)

    @property
    def current_state(self) -> S:
        """Get the current state of the machine."""
        return self._current_state

    def can_execute_action(self, action: A) -> bool:
        """Return True if $action is allowed from the current state."""
        return (self._current_state, action) in self._transitions

    def list_valid_actions(self) -> list[A]:
        """Return all actions allowed from the current state."""
        return [action for (state, action) in self._transitions.keys() if state == self._current_state]

    def execute_action(self, action: A) -> S:
        """Apply $action and return the new state.

        Raises:
            ValueError: If $action is not valid from the current state.
        """
        key = (self._current_state, action)

        if key not in self._transitions:
            valid_actions = [a.value for a in self.list_valid_actions()]
            raise ValueError(
                f"Invalid $action '{action.value}' from $_current_state '{self._current_state.value}'. Valid actions are: {valid_actions}",
            )

        self._current_state = self._transitions[key]
        return self._current_state

    def reset(self) -> None:
        """Return the machine to its initial state."""
        self._current_state = self._initial_state
