"""
Session State Tests

To run:
    pytest tests/core/test_session_state.py -v
"""

import dataclasses

import pytest

from core.session import SessionState
from core.terminal import TerminalState


@pytest.mark.unit
def test_initial_state():
    state = SessionState()

    assert state.cycle == 0
    assert state.terminal is TerminalState.UNKNOWN
    assert state.is_baseline


@pytest.mark.unit
def test_next_cycle_increments_and_keeps_terminal():
    state = SessionState(cycle=4, terminal=TerminalState.ATTACHED)

    advanced = state.next_cycle()

    assert advanced.cycle == 5
    assert advanced.terminal is TerminalState.ATTACHED
    assert state.cycle == 4  # original untouched


@pytest.mark.unit
def test_with_terminal_records_observation():
    state = SessionState().next_cycle().with_terminal(TerminalState.DETACHED)

    assert state.cycle == 1
    assert state.terminal is TerminalState.DETACHED
    assert not state.is_baseline


@pytest.mark.unit
def test_state_is_immutable():
    state = SessionState()

    with pytest.raises(dataclasses.FrozenInstanceError):
        state.cycle = 10
