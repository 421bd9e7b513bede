"""Per-action state machine guarding the connect and generate flows."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, TypeVar

from .errors import BusyError

T = TypeVar("T")


class ActionState(str, Enum):
    IDLE = "idle"
    BUSY = "busy"
    SUCCESS = "success"
    ERROR = "error"


class ActionEvent(str, Enum):
    START = "start"
    SUCCEED = "succeed"
    FAIL = "fail"
    SETTLE = "settle"


_TRANSITIONS: Dict[Tuple[ActionState, ActionEvent], ActionState] = {
    (ActionState.IDLE, ActionEvent.START): ActionState.BUSY,
    (ActionState.BUSY, ActionEvent.SUCCEED): ActionState.SUCCESS,
    (ActionState.BUSY, ActionEvent.FAIL): ActionState.ERROR,
    (ActionState.SUCCESS, ActionEvent.SETTLE): ActionState.IDLE,
    (ActionState.ERROR, ActionEvent.SETTLE): ActionState.IDLE,
}


def transition(state: ActionState, event: ActionEvent) -> ActionState:
    """Return the state reached from ``state`` on ``event``.

    Starting a busy action raises :class:`BusyError`; every other undefined
    pair raises ``ValueError``.
    """
    if state is ActionState.BUSY and event is ActionEvent.START:
        raise BusyError("Action is already in progress")
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise ValueError(f"No transition from {state.value} on {event.value}") from None


class ActionMachine:
    """Drives one affordance through Idle -> Busy -> Success|Error -> Idle.

    Overlapping calls are rejected rather than queued.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._state = ActionState.IDLE
        self._last_outcome: Optional[ActionState] = None
        self._lock = threading.Lock()

    @property
    def state(self) -> ActionState:
        return self._state

    @property
    def last_outcome(self) -> Optional[ActionState]:
        return self._last_outcome

    def run(self, func: Callable[[], T]) -> T:
        with self._lock:
            try:
                self._state = transition(self._state, ActionEvent.START)
            except BusyError:
                raise BusyError(f"{self.name.capitalize()} is already in progress") from None
        try:
            result = func()
        except BaseException:
            self._finish(ActionEvent.FAIL)
            raise
        self._finish(ActionEvent.SUCCEED)
        return result

    def _finish(self, event: ActionEvent) -> None:
        with self._lock:
            outcome = transition(self._state, event)
            self._last_outcome = outcome
            self._state = transition(outcome, ActionEvent.SETTLE)


__all__ = ["ActionEvent", "ActionMachine", "ActionState", "transition"]
