"""Tests for the per-action state machine."""

from __future__ import annotations

import threading

import pytest

from readmegen.errors import BusyError
from readmegen.state import ActionEvent, ActionMachine, ActionState, transition


def test_transition_table() -> None:
    assert transition(ActionState.IDLE, ActionEvent.START) is ActionState.BUSY
    assert transition(ActionState.BUSY, ActionEvent.SUCCEED) is ActionState.SUCCESS
    assert transition(ActionState.BUSY, ActionEvent.FAIL) is ActionState.ERROR
    assert transition(ActionState.SUCCESS, ActionEvent.SETTLE) is ActionState.IDLE
    assert transition(ActionState.ERROR, ActionEvent.SETTLE) is ActionState.IDLE


def test_starting_busy_action_is_rejected() -> None:
    with pytest.raises(BusyError):
        transition(ActionState.BUSY, ActionEvent.START)


def test_undefined_transition_is_value_error() -> None:
    with pytest.raises(ValueError):
        transition(ActionState.IDLE, ActionEvent.SUCCEED)


def test_machine_returns_to_idle_after_success_and_failure() -> None:
    machine = ActionMachine("connect")

    assert machine.run(lambda: 42) == 42
    assert machine.state is ActionState.IDLE
    assert machine.last_outcome is ActionState.SUCCESS

    def boom() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        machine.run(boom)
    assert machine.state is ActionState.IDLE
    assert machine.last_outcome is ActionState.ERROR


def test_machine_rejects_reentry_while_busy() -> None:
    machine = ActionMachine("generate")
    started = threading.Event()
    release = threading.Event()
    errors: list[BaseException] = []

    def slow() -> str:
        started.set()
        release.wait(timeout=5)
        return "done"

    worker = threading.Thread(target=machine.run, args=(slow,))
    worker.start()
    assert started.wait(timeout=5)
    try:
        assert machine.state is ActionState.BUSY
        try:
            machine.run(lambda: "second")
        except BusyError as exc:
            errors.append(exc)
    finally:
        release.set()
        worker.join(timeout=5)

    assert len(errors) == 1
    assert "Generate is already in progress" in str(errors[0])
    assert machine.state is ActionState.IDLE
